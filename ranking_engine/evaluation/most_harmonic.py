"""
Most Harmonic Candidates
========================

Conflicts-tie evaluation of a whole competition, stratum by stratum.

On each stratum the surviving candidates are filtered down to the most
harmonic ones. Candidates that conflict on a stratum (each preferred by
a different constraint) both survive; if any survivor was part of a
conflict, evaluation stops there and the result is flagged as an
unresolved conflict.

Harmonic bounding is checked across the whole profile before the
stratum comparison, so a bounded candidate never survives by conflict.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..contracts.constraint import Constraint
from ..contracts.hierarchy import Hierarchy
from .codes import HarmonyCode
from .stratum import CompareStratumCtie


class Preferred(Enum):
    """Pairwise outcome used by MostHarmonic."""
    P1 = "p1"
    P2 = "p2"
    TIE = "tie"
    CONFLICT = "conflict"


_PREFERRED = {
    HarmonyCode.FIRST: Preferred.P1,
    HarmonyCode.SECOND: Preferred.P2,
    HarmonyCode.TIE: Preferred.TIE,
    HarmonyCode.CONFLICT: Preferred.CONFLICT,
}


class MostHarmonic:
    """The most harmonic candidates of a competition under a hierarchy."""

    STRATUM_COMPARER = CompareStratumCtie()

    def __init__(
        self,
        competition,
        hierarchy: Hierarchy,
        stratum_comparer: Optional[CompareStratumCtie] = None
    ):
        self.competition = competition
        self.hierarchy = hierarchy
        self._stratum_comparer = stratum_comparer or self.STRATUM_COMPARER
        self._winners, self._conflict = self._most_harmonic_on_hierarchy(
            list(competition), hierarchy
        )

    @property
    def winners(self) -> List:
        return list(self._winners)

    def unresolved_conflict(self) -> bool:
        return self._conflict

    # -------------------------------------------------------------------------
    # Pairwise comparison
    # -------------------------------------------------------------------------

    @classmethod
    def compare_on_stratum(cls, cand1, cand2, stratum: Sequence[Constraint]) -> Preferred:
        return _PREFERRED[cls.STRATUM_COMPARER.more_harmonic(cand1, cand2, stratum)]

    @classmethod
    def compare_on_hierarchy(cls, cand1, cand2, hierarchy: Hierarchy) -> Preferred:
        for stratum in hierarchy:
            code = cls.compare_on_stratum(cand1, cand2, stratum)
            if code is not Preferred.TIE:
                return code
        return Preferred.TIE

    @classmethod
    def more_harmonic(cls, cand1, cand2, hierarchy: Hierarchy) -> bool:
        return cls.compare_on_hierarchy(cand1, cand2, hierarchy) is Preferred.P1

    # -------------------------------------------------------------------------
    # Filtering
    # -------------------------------------------------------------------------

    def _most_harmonic_on_stratum(self, cands: List, stratum) -> Tuple[List, bool]:
        survivors: List = []
        conflicted = set()
        for cand in cands:
            keep = True
            beaten = set()
            for curr in survivors:
                if curr.harmonically_bounds(cand):
                    code = Preferred.P2
                elif cand.harmonically_bounds(curr):
                    code = Preferred.P1
                else:
                    code = _PREFERRED[self._stratum_comparer.more_harmonic(cand, curr, stratum)]
                if code is Preferred.P2:
                    keep = False
                elif code is Preferred.P1:
                    beaten.add(id(curr))
                elif code is Preferred.CONFLICT:
                    conflicted.add(id(cand))
                    conflicted.add(id(curr))
            survivors = [c for c in survivors if id(c) not in beaten]
            if keep:
                survivors.append(cand)
        conflict = any(id(c) in conflicted for c in survivors)
        return survivors, conflict

    def _most_harmonic_on_hierarchy(self, cands: List, hierarchy: Hierarchy) -> Tuple[List, bool]:
        conflict = False
        for stratum in hierarchy:
            cands, conflict = self._most_harmonic_on_stratum(cands, stratum)
            if conflict:
                break
        return cands, conflict

    def __iter__(self):
        return iter(self._winners)

    def __len__(self) -> int:
        return len(self._winners)

    def __getitem__(self, position: int):
        return self._winners[position]
