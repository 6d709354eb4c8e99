"""
Per-snapshot cache of analysis results.

One AlgoStore belongs to one Graph snapshot. Slots are never invalidated
automatically; a new snapshot gets a fresh store. The store has no
locking, so publish it to readers only after it is fully populated.
"""

from ..graph.core import Graph
from .results import AnalysisResult


class AlgoStore:
    """Five independent analysis slots, all starting Empty."""

    def __init__(self):
        self.aps: AnalysisResult = AnalysisResult.empty()
        self.mincut: AnalysisResult = AnalysisResult.empty()
        self.diff_cent: AnalysisResult = AnalysisResult.empty()
        self.most_sim_t: AnalysisResult = AnalysisResult.empty()
        self.pred_state: AnalysisResult = AnalysisResult.empty()

    def get_aps(self) -> AnalysisResult:
        return self.aps

    def get_mincut(self) -> AnalysisResult:
        return self.mincut

    def get_diff_cent(self) -> AnalysisResult:
        return self.diff_cent

    def get_most_sim_t(self) -> AnalysisResult:
        return self.most_sim_t

    def get_pred_state(self) -> AnalysisResult:
        return self.pred_state

    def set_aps(self, aps: AnalysisResult) -> None:
        self.aps = aps

    def set_mincut(self, mincut: AnalysisResult) -> None:
        self.mincut = mincut

    def set_diff_cent(self, diff_cent: AnalysisResult) -> None:
        self.diff_cent = diff_cent

    # Graph-valued slots only ever record Success through their setters

    def set_most_sim_t(self, most_sim_t: Graph) -> None:
        self.most_sim_t = AnalysisResult.success(most_sim_t)

    def set_pred_state(self, pred_state: Graph) -> None:
        self.pred_state = AnalysisResult.success(pred_state)

    def snapshot(self) -> dict[str, AnalysisResult]:
        """All slots keyed by analysis name."""
        return {
            "articulation_points": self.aps,
            "min_cut": self.mincut,
            "diffusion_centrality": self.diff_cent,
            "most_similar_timeline": self.most_sim_t,
            "predicted_state": self.pred_state,
        }
