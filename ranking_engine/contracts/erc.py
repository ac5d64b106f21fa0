"""
ERC Contracts

Elementary Ranking Conditions and winner-loser pairs.

An ERC assigns each constraint of a system one of three preferences:
W (favours the winner), L (favours the loser) or e (no preference).
Preferences are held as two boolean numpy masks indexed through the
system's ConstraintList.

INVARIANTS:
===========
- No constraint is ever both W and L
- Equality is by W-set and L-set only; labels are ignored
- A WinLosePair is frozen once its preferences are derived
"""

from __future__ import annotations
import re
from enum import Enum
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .base import (
    ConstraintMismatchError, FrozenErcError, InputMismatchError,
    StructuralError, ErrorCode
)
from .constraint import Constraint, ConstraintList


class Preference(Enum):
    """Per-constraint preference of an ERC."""
    W = "W"
    L = "L"
    E = "e"

    @staticmethod
    def parse(token: str) -> Preference:
        """Parse "W", "L", "e"/"E" or an empty cell."""
        text = (token or "").strip()
        if text in ("W", "w"):
            return Preference.W
        if text in ("L", "l"):
            return Preference.L
        if text in ("", "e", "E"):
            return Preference.E
        raise StructuralError(
            f"Invalid ERC preference {token!r}",
            code=ErrorCode.INVALID_PREFERENCE
        )


_NUMBERED_LABEL = re.compile(r"^\d+\.")


# =============================================================================
# ERC
# =============================================================================

class Erc:
    """
    An Elementary Ranking Condition over a fixed constraint list.

    All constraints start out with no preference.
    """

    def __init__(self, constraints: Iterable[Constraint], label: str = ""):
        self._constraints = ConstraintList.coerce(constraints)
        self.label = label
        size = len(self._constraints)
        self._w = np.zeros(size, dtype=bool)
        self._l = np.zeros(size, dtype=bool)
        self._frozen = False

    @classmethod
    def from_preferences(
        cls,
        constraints: Iterable[Constraint],
        preferences: Sequence[str],
        label: str = ""
    ) -> Erc:
        """Build an ERC from one preference token per constraint."""
        erc = cls(constraints, label)
        if len(preferences) != len(erc._constraints):
            raise ConstraintMismatchError(
                f"Expected {len(erc._constraints)} preferences, got {len(preferences)}"
            )
        for con, token in zip(erc._constraints, preferences):
            erc.set_preference(con, Preference.parse(token))
        return erc

    @property
    def constraint_list(self) -> ConstraintList:
        return self._constraints

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def is_w(self, con: Constraint) -> bool:
        return bool(self._w[self._constraints.index_of(con)])

    def is_l(self, con: Constraint) -> bool:
        return bool(self._l[self._constraints.index_of(con)])

    def is_e(self, con: Constraint) -> bool:
        idx = self._constraints.index_of(con)
        return not (self._w[idx] or self._l[idx])

    def preference(self, con: Constraint) -> Preference:
        idx = self._constraints.index_of(con)
        if self._w[idx]:
            return Preference.W
        if self._l[idx]:
            return Preference.L
        return Preference.E

    @property
    def w_cons(self) -> FrozenSet[Constraint]:
        return frozenset(self._constraints[i] for i in np.flatnonzero(self._w))

    @property
    def l_cons(self) -> FrozenSet[Constraint]:
        return frozenset(self._constraints[i] for i in np.flatnonzero(self._l))

    @property
    def w_mask(self) -> np.ndarray:
        return self._w.copy()

    @property
    def l_mask(self) -> np.ndarray:
        return self._l.copy()

    def masks_over(self, constraints: ConstraintList) -> Tuple[np.ndarray, np.ndarray]:
        """
        W and L masks re-aligned to ``constraints``.

        ``constraints`` must hold the same members as this ERC's list.
        """
        if constraints is self._constraints or constraints == self._constraints:
            return self._w.copy(), self._l.copy()
        if not self._constraints.same_members(constraints):
            raise ConstraintMismatchError(
                "ERC constraint list does not match",
                (("erc", self.label or ""),)
            )
        order = [self._constraints.index_of(con) for con in constraints]
        return self._w[order], self._l[order]

    def triv_valid(self) -> bool:
        """True if there is no L: satisfied by every ranking."""
        return not self._l.any()

    def triv_invalid(self) -> bool:
        """True if there is at least one L and no W: satisfied by no ranking."""
        return bool(self._l.any()) and not self._w.any()

    # -------------------------------------------------------------------------
    # Mutators
    # -------------------------------------------------------------------------

    def set_w(self, con: Constraint) -> None:
        self.set_preference(con, Preference.W)

    def set_l(self, con: Constraint) -> None:
        self.set_preference(con, Preference.L)

    def set_e(self, con: Constraint) -> None:
        self.set_preference(con, Preference.E)

    def set_preference(self, con: Constraint, pref: Preference) -> None:
        if self._frozen:
            raise FrozenErcError(
                f"Cannot change the preference of {con.name} on a frozen ERC",
                (("erc", self.label or ""),)
            )
        idx = self._constraints.index_of(con)
        self._w[idx] = pref is Preference.W
        self._l[idx] = pref is Preference.L

    # -------------------------------------------------------------------------
    # Conjunctive expansion
    # -------------------------------------------------------------------------

    def conjunctive_expansion(self) -> List[Erc]:
        """
        Split into ERCs with at most one L each.

        Every result keeps all of the W's and exactly one of the L's. An
        ERC with no L expands to a copy of itself.
        """
        l_idx = np.flatnonzero(self._l)
        if l_idx.size == 0:
            return [self.copy()]
        expansion = []
        for idx in l_idx:
            part = Erc(self._constraints, self.label)
            part._w = self._w.copy()
            part._l[idx] = True
            expansion.append(part)
        return expansion

    @staticmethod
    def conj_expand_list(ercs: Iterable[Erc]) -> List[Erc]:
        expanded: List[Erc] = []
        for erc in ercs:
            expanded.extend(erc.conjunctive_expansion())
        return expanded

    # -------------------------------------------------------------------------
    # Copying / identity
    # -------------------------------------------------------------------------

    def copy(self) -> Erc:
        """Independent, unfrozen copy with the same label."""
        dup = Erc(self._constraints, self.label)
        dup._w = self._w.copy()
        dup._l = self._l.copy()
        return dup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Erc):
            return NotImplemented
        return self.w_cons == other.w_cons and self.l_cons == other.l_cons

    def __hash__(self) -> int:
        return hash((self.w_cons, self.l_cons))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label!r}, {self._pref_string()})"

    def _pref_string(self) -> str:
        return " ".join(
            f"{con.name}:{self.preference(con).value}" for con in self._constraints
        )

    def __str__(self) -> str:
        return f"{self.label} {self._pref_string()}"


# =============================================================================
# WINNER-LOSER PAIR
# =============================================================================

class WinLosePair(Erc):
    """
    ERC derived from a winner and a loser sharing one input.

    W where the winner has fewer violations, L where it has more, e on
    ties. The preferences are frozen once derived.
    """

    def __init__(self, winner, loser, label: Optional[str] = None):
        if winner.input != loser.input:
            raise InputMismatchError(
                "Winner and loser must have the same input",
                (("winner", str(winner.input)), ("loser", str(loser.input)))
            )
        super().__init__(winner.constraint_list, label or _pair_label(winner, loser))
        self.winner = winner
        self.loser = loser
        win_v = winner.violation_vector(self._constraints)
        lose_v = loser.violation_vector(self._constraints)
        self._w = win_v < lose_v
        self._l = win_v > lose_v
        self._frozen = True

    def __str__(self) -> str:
        return f"{self.label} {self.winner.output} > {self.loser.output}: {self._pref_string()}"


def _pair_label(winner, loser) -> str:
    loser_label = loser.label or ""
    match = _NUMBERED_LABEL.match(loser_label)
    if match is None:
        return "NoLabel"
    return f"{winner.label}>{loser_label[match.end():]}"
