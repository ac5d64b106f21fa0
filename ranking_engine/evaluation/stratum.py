"""
Stratum Comparers

Compare two candidates on a single stratum of a hierarchy.

POOL vs CTIE:
=============
- Pool sums the violations over the stratum; the smaller total wins
- Ctie (conflicts tie) looks at each constraint on its own; constraints
  pulling in opposite directions produce CONFLICT
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Sequence

from ..contracts.constraint import Constraint
from .codes import ErcEvaluation, HarmonyCode


class StratumComparer(ABC):
    """Compares two candidates on one stratum."""

    @abstractmethod
    def more_harmonic(self, first, second, stratum: Sequence[Constraint]) -> HarmonyCode:
        pass


class CompareStratumPool(StratumComparer):
    """Pooled comparison: summed violation counts."""

    def more_harmonic(self, first, second, stratum: Sequence[Constraint]) -> HarmonyCode:
        first_total = sum(first.get_viols(con) for con in stratum)
        second_total = sum(second.get_viols(con) for con in stratum)
        if first_total < second_total:
            return HarmonyCode.FIRST
        if second_total < first_total:
            return HarmonyCode.SECOND
        return HarmonyCode.TIE


class CompareStratumCtie(StratumComparer):
    """Conflicts-tie comparison."""

    def more_harmonic(self, first, second, stratum: Sequence[Constraint]) -> HarmonyCode:
        prefer_first = prefer_second = False
        for con in stratum:
            first_v = first.get_viols(con)
            second_v = second.get_viols(con)
            if first_v < second_v:
                prefer_first = True
            elif first_v > second_v:
                prefer_second = True
        if prefer_first and prefer_second:
            return HarmonyCode.CONFLICT
        if prefer_first:
            return HarmonyCode.FIRST
        if prefer_second:
            return HarmonyCode.SECOND
        return HarmonyCode.TIE

    def evaluate_erc(self, erc, stratum: Sequence[Constraint]) -> ErcEvaluation:
        """Which side of ``erc`` the stratum prefers."""
        prefer_w = any(erc.is_w(con) for con in stratum)
        prefer_l = any(erc.is_l(con) for con in stratum)
        if prefer_w and prefer_l:
            return ErcEvaluation.CONFLICT
        if prefer_w:
            return ErcEvaluation.WINNER
        if prefer_l:
            return ErcEvaluation.LOSER
        return ErcEvaluation.IDENT_VIOLATIONS
