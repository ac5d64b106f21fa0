"""
Loser Selector

Finds an informative loser for a winner: a competitor that the current
ranking information does not already rule out.
"""

from __future__ import annotations
from typing import Optional

from .codes import HarmonyCode
from .comparers import Comparer, CompareCtie


class LoserSelector:
    """Picks the first competitor the comparer rates SECOND or TIE."""

    def __init__(self, comparer: Optional[Comparer] = None):
        self._comparer = comparer or CompareCtie()

    def select_loser(self, winner, competition, ranking_info):
        for candidate in competition:
            code = self._comparer.more_harmonic(winner, candidate, ranking_info)
            if code is HarmonyCode.SECOND or code is HarmonyCode.TIE:
                return candidate
        return None
