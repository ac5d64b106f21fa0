"""
Eval: the optimal candidates of a competition under a hierarchy.
"""

from __future__ import annotations
from typing import List, Optional

from ..contracts.hierarchy import Hierarchy
from .codes import HarmonyCode
from .comparers import ComparePool, HierarchyComparer


class Eval:
    """
    Incremental fold over a competition.

    Each candidate is compared with every current optimum. It is kept
    unless some optimum beats it, and it evicts every optimum it beats.
    Ties, conflicts and identical profiles leave both sides in place.
    """

    def __init__(self, comparer: Optional[HierarchyComparer] = None):
        self._comparer = comparer or ComparePool()

    def find_optima(self, competition, hierarchy: Hierarchy) -> List:
        optima: List = []
        for cand in competition:
            keep = True
            beaten = set()
            for opt in optima:
                code = self._comparer.more_harmonic_on_hierarchy(opt, cand, hierarchy)
                if code is HarmonyCode.FIRST:
                    keep = False
                elif code is HarmonyCode.SECOND:
                    beaten.add(id(opt))
            optima = [opt for opt in optima if id(opt) not in beaten]
            if keep:
                optima.append(cand)
        return optima
