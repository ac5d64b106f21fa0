"""
Harmonic Bound Filter

Removes candidates that are collectively harmonically bound: candidates
that cannot be optimal under any total ranking of the constraints.
"""

from __future__ import annotations
from typing import List, Optional

from ..contracts.erc_list import ErcList
from .ranker import Ranker


class HarmonicBoundFilter:
    """
    A candidate is a contender iff the winner-loser pairs of that
    candidate against all of its competitors are consistent.
    """

    def __init__(self, ranker: Optional[Ranker] = None):
        self._ranker = ranker or Ranker()

    def is_contender(self, candidate, competition) -> bool:
        ercs = ErcList.new_from_competition(
            candidate, competition, rcd_factory=self._ranker.run
        )
        return ercs.is_consistent()

    def remove_collectively_bound(self, competition) -> List:
        """The contenders of ``competition``, in competition order."""
        return [c for c in competition if self.is_contender(c, competition)]
