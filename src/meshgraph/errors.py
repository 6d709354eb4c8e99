"""Error kinds raised while building graphs and running analyses."""


class MeshGraphError(Exception):
    """Base class for recoverable MeshGraph failures."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class MissingLocation(MeshGraphError):
    """An observation references a node without a usable position."""

    def __init__(self, node_id: int):
        super().__init__(f"Node {node_id} has no resolvable position")
        self.node_id = node_id


class EmptyGraph(MeshGraphError):
    """An analysis was invoked on a graph with no nodes."""

    def __init__(self, analysis: str = "analysis"):
        super().__init__(f"Cannot run {analysis} on an empty graph")


class Disconnected(MeshGraphError):
    """An analysis that needs a connected graph received a disconnected one."""

    def __init__(self, analysis: str = "analysis", components: int = 0):
        super().__init__(
            f"Cannot run {analysis} on a disconnected graph "
            f"({components} components)"
        )
        self.components = components


class AnalysisFailed(MeshGraphError):
    """Generic algorithm-internal failure."""
