"""
Candidate Comparers
===================

Decide which of two candidates is more harmonic.

COMPARER FAMILY:
================
- ComparePool: hierarchy-based, pooled strata
- CompareCtie: hierarchy-based, conflicts tie
- CompareConsistency: evidence-based; asks whether the second candidate
  could beat the first without contradicting the ranking information

Every comparer reports IDENT_VIOLATIONS for candidates with identical
violation profiles before looking at any ranking.

Hierarchy-based comparers take ranking information (an ERC list) in
more_harmonic() and turn it into a hierarchy through their Ranker.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from ..contracts.base import InvariantViolation, ErrorCode
from ..contracts.erc import WinLosePair
from ..contracts.erc_list import ErcList
from ..contracts.hierarchy import Hierarchy
from ..core.ranker import Ranker
from .codes import HarmonyCode
from .stratum import CompareStratumCtie, CompareStratumPool, StratumComparer


class Comparer(ABC):
    """Compares two candidates against ranking information."""

    @abstractmethod
    def more_harmonic(self, first, second, ranking_info) -> HarmonyCode:
        pass


class HierarchyComparer(Comparer):
    """Comparer that works stratum by stratum down a hierarchy."""

    def __init__(
        self,
        ranker: Optional[Ranker] = None,
        stratum_comparer: Optional[StratumComparer] = None
    ):
        self._ranker = ranker or Ranker()
        self._stratum_comparer = stratum_comparer or self.default_stratum_comparer()

    @abstractmethod
    def default_stratum_comparer(self) -> StratumComparer:
        pass

    @abstractmethod
    def more_harmonic_on_hierarchy(self, first, second, hierarchy: Hierarchy) -> HarmonyCode:
        pass

    def more_harmonic(self, first, second, ranking_info) -> HarmonyCode:
        if first.ident_viols(second):
            return HarmonyCode.IDENT_VIOLATIONS
        # ranked over the candidates' constraints, even for empty evidence
        ercs = ErcList(first.constraint_list).add_all(ranking_info)
        hierarchy = self._ranker.get_hierarchy(ercs)
        return self.more_harmonic_on_hierarchy(first, second, hierarchy)


class ComparePool(HierarchyComparer):
    """The first stratum that discriminates decides; otherwise TIE."""

    def default_stratum_comparer(self) -> StratumComparer:
        return CompareStratumPool()

    def more_harmonic_on_hierarchy(self, first, second, hierarchy: Hierarchy) -> HarmonyCode:
        if first.ident_viols(second):
            return HarmonyCode.IDENT_VIOLATIONS
        for stratum in hierarchy:
            code = self._stratum_comparer.more_harmonic(first, second, stratum)
            if code is not HarmonyCode.TIE:
                return code
        return HarmonyCode.TIE


class CompareCtie(HierarchyComparer):
    """
    Conflicts-tie comparison down a hierarchy.

    Candidates with different violation profiles must differ on some
    stratum of a full hierarchy, so running off the bottom is an
    invariant violation. A conflict on the deciding stratum is reported
    as a tie.
    """

    def default_stratum_comparer(self) -> StratumComparer:
        return CompareStratumCtie()

    def compare_on_hierarchy(self, first, second, hierarchy: Hierarchy) -> HarmonyCode:
        """FIRST, SECOND or CONFLICT from the highest non-tying stratum."""
        for stratum in hierarchy:
            code = self._stratum_comparer.more_harmonic(first, second, stratum)
            if code is not HarmonyCode.TIE:
                return code
        raise InvariantViolation(
            "Non-identical candidates tie on every stratum",
            (("first", str(first.output)), ("second", str(second.output))),
            code=ErrorCode.EXHAUSTED_HIERARCHY
        )

    def more_harmonic_on_hierarchy(self, first, second, hierarchy: Hierarchy) -> HarmonyCode:
        if first.ident_viols(second):
            return HarmonyCode.IDENT_VIOLATIONS
        code = self.compare_on_hierarchy(first, second, hierarchy)
        if code is HarmonyCode.CONFLICT:
            return HarmonyCode.TIE
        return code


class CompareConsistency(Comparer):
    """
    SECOND if the pair (second beats first) is consistent with the
    ranking information, FIRST otherwise.
    """

    def more_harmonic(self, first, second, ranking_info) -> HarmonyCode:
        if first.ident_viols(second):
            return HarmonyCode.IDENT_VIOLATIONS
        ercs = ErcList(first.constraint_list).add_all(ranking_info)
        ercs.add(WinLosePair(second, first))
        if ercs.is_consistent():
            return HarmonyCode.SECOND
        return HarmonyCode.FIRST
