"""
Ranker: ERC list in, RCD hierarchy out, under a fixed ranking bias.
"""

from __future__ import annotations
from typing import Optional

from ..contracts.hierarchy import Hierarchy
from .ranking_bias import RankingBias, RankingBiasAllHigh
from .rcd import Rcd


class Ranker:
    """Derives hierarchies from ranking information."""

    def __init__(self, ranking_bias: Optional[RankingBias] = None):
        self._bias = ranking_bias or RankingBiasAllHigh()

    @property
    def ranking_bias(self) -> RankingBias:
        return self._bias

    def run(self, ercs, label: str = "RCD") -> Rcd:
        return Rcd(ercs, label=label, ranking_bias=self._bias)

    def get_hierarchy(self, ercs) -> Hierarchy:
        return self.run(ercs).hierarchy
