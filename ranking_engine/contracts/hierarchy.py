"""
Hierarchy Contract

A stratified constraint hierarchy: an ordered list of strata, highest
first, each stratum a set of mutually unranked constraints.
"""

from __future__ import annotations
from typing import Dict, Iterable, Iterator, List, Tuple

from .base import StructuralError, ErrorCode
from .constraint import Constraint


Stratum = Tuple[Constraint, ...]


class Hierarchy:
    """Ordered strata; a constraint appears in at most one stratum."""

    def __init__(self, strata: Iterable[Iterable[Constraint]] = ()):
        self._strata: List[Stratum] = []
        self._placed: Dict[Constraint, int] = {}
        for stratum in strata:
            self.add_stratum(stratum)

    def add_stratum(self, stratum: Iterable[Constraint]) -> Hierarchy:
        stratum = tuple(stratum)
        for con in stratum:
            if con in self._placed:
                raise StructuralError(
                    f"Constraint {con.name} is already ranked in stratum {self._placed[con] + 1}",
                    code=ErrorCode.DUPLICATE_RANKING
                )
        if len(set(stratum)) != len(stratum):
            raise StructuralError(
                "Stratum lists a constraint more than once",
                code=ErrorCode.DUPLICATE_RANKING
            )
        position = len(self._strata)
        for con in stratum:
            self._placed[con] = position
        self._strata.append(stratum)
        return self

    def constraints(self) -> List[Constraint]:
        """All ranked constraints, highest stratum first."""
        return [con for stratum in self._strata for con in stratum]

    def stratum_index(self, con: Constraint) -> int:
        """Zero-based stratum of ``con``; -1 if it is not ranked."""
        return self._placed.get(con, -1)

    def ranks_above(self, higher: Constraint, lower: Constraint) -> bool:
        """True if ``higher`` sits in a strictly higher stratum than ``lower``."""
        hi = self.stratum_index(higher)
        lo = self.stratum_index(lower)
        return hi >= 0 and lo >= 0 and hi < lo

    def copy(self) -> Hierarchy:
        return Hierarchy(self._strata)

    def __iter__(self) -> Iterator[Stratum]:
        return iter(self._strata)

    def __len__(self) -> int:
        return len(self._strata)

    def __getitem__(self, position: int) -> Stratum:
        return self._strata[position]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Hierarchy):
            return NotImplemented
        return [frozenset(s) for s in self._strata] == [frozenset(s) for s in other._strata]

    def __hash__(self) -> int:
        return hash(tuple(frozenset(s) for s in self._strata))

    def __repr__(self) -> str:
        return f"Hierarchy({[[c.name for c in s] for s in self._strata]})"

    def __str__(self) -> str:
        return " ".join(
            "[" + " ".join(str(c) for c in stratum) + "]" for stratum in self._strata
        )
