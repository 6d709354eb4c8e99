"""
Analysis engine.

One ingestion cycle: telemetry snapshot -> Graph -> five independent
analyses -> a freshly populated AlgoStore. The new (graph, store) pair
replaces the previous one in a single reference swap, so readers never
see a half-filled store.
"""

import time
from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Sequence

from .algorithms.articulation import articulation_points
from .algorithms.diffusion import diffusion_centrality
from .algorithms.mincut import min_cut
from .algorithms.prediction import Predictor, TrendPredictor
from .algorithms.similarity import SimilarityMetric, WeightedJaccard, most_similar
from .config import EngineConfig
from .errors import MeshGraphError
from .graph.builder import GraphBuilder
from .graph.core import Graph
from .graph.temporal import SnapshotHistory
from .graph.weights import NormalizedBlend
from .logging import get_logger
from .store.algo_store import AlgoStore
from .store.results import AnalysisResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class EngineState:
    """The current snapshot and its analysis cache."""
    graph: Graph
    store: AlgoStore
    timestamp: float


def _attempt(name: str, fn: Callable):
    """Run one analysis; return (payload, None) or (None, reason)."""
    try:
        return fn(), None
    except MeshGraphError as e:
        logger.warning("%s failed: %s", name, e.reason)
        return None, e.reason
    except Exception as e:
        logger.exception("%s raised unexpectedly", name)
        return None, f"{name} failed: {e}"


def run_analyses(
    graph: Graph,
    history: Sequence[Graph],
    store: AlgoStore,
    config: Optional[EngineConfig] = None,
    predictor: Optional[Predictor] = None,
    metric: Optional[SimilarityMetric] = None,
) -> AlgoStore:
    """
    Populate every slot of ``store`` from ``graph``.

    ``history`` holds earlier snapshots (oldest first) and excludes
    ``graph``. Graph-valued analyses that fail leave their slot Empty,
    since their setters only record Success.
    """
    config = config or EngineConfig()
    predictor = predictor or TrendPredictor(config.prediction)
    metric = metric or WeightedJaccard()

    for name, fn, setter in (
        ("Articulation points", lambda: articulation_points(graph), store.set_aps),
        ("Minimum cut", lambda: min_cut(graph, strict=config.strict_mincut), store.set_mincut),
        (
            "Diffusion centrality",
            lambda: diffusion_centrality(graph, config.diffusion),
            store.set_diff_cent,
        ),
    ):
        payload, reason = _attempt(name, fn)
        if reason is None:
            setter(AnalysisResult.success(payload))
        else:
            setter(AnalysisResult.error(reason))

    predicted, _ = _attempt(
        "Predicted state", lambda: predictor.predict([*history, graph])
    )
    if predicted is not None:
        store.set_pred_state(predicted)

    if not history:
        logger.debug("No earlier snapshots yet; most similar timeline left empty")
        return store

    similar, _ = _attempt(
        "Most similar timeline", lambda: most_similar(graph, history, metric)
    )
    if similar is not None:
        store.set_most_sim_t(similar)

    return store


class AnalysisEngine:
    """
    Ingests telemetry snapshots and keeps the current analysis cache.

    Not thread-safe for concurrent ingest() calls; readers may call
    ``state`` from other threads at any time.
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        predictor: Optional[Predictor] = None,
        metric: Optional[SimilarityMetric] = None,
    ):
        self.config = config or EngineConfig()
        self.builder = GraphBuilder(
            weight_fn=NormalizedBlend(self.config.weights),
            prefer_smaller=self.config.prefer_smaller,
        )
        self.predictor = predictor or TrendPredictor(self.config.prediction)
        self.metric = metric or WeightedJaccard()
        self.history = SnapshotHistory(max_snapshots=self.config.max_history)
        self._state: Optional[EngineState] = None

    @property
    def state(self) -> Optional[EngineState]:
        return self._state

    @property
    def current_graph(self) -> Optional[Graph]:
        state = self._state
        return state.graph if state else None

    @property
    def store(self) -> Optional[AlgoStore]:
        state = self._state
        return state.store if state else None

    def ingest(
        self,
        observations: Mapping[tuple[int, int], tuple[float, int]],
        positions: Mapping[int, object],
        timestamp: Optional[float] = None,
        label: str = "",
    ) -> EngineState:
        """
        Run one ingestion cycle.

        Raises MissingLocation without touching the current state when a
        node lacks a position.
        """
        graph = self.builder.build(observations, positions)
        ts = time.time() if timestamp is None else timestamp

        store = run_analyses(
            graph,
            self.history.graphs(),
            AlgoStore(),
            self.config,
            predictor=self.predictor,
            metric=self.metric,
        )

        state = EngineState(graph=graph, store=store, timestamp=ts)
        self._state = state
        self.history.add_snapshot(graph, timestamp=ts, label=label)

        logger.info(
            "Ingested snapshot: %d nodes, %d edges (%d in history)",
            graph.get_order(), graph.get_size(), len(self.history),
        )
        return state
