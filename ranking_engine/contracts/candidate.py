"""
Candidate Contracts

Candidates, competitions and competition lists as consumed from GEN.

A candidate is an (input, output) pair with one violation count per
constraint of its system. Inputs and outputs are opaque to the engine;
only equality is ever asked of them.

BOUNDARY ENFORCEMENT:
=====================
- Violation counts come from outside (set directly, or through the
  constraints' evaluators); the engine never invents them
- Reading an unassigned count is a structural error, not a zero
- The optimality flag is only meaningful for externally labelled data
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

import numpy as np

from .base import (
    InputMismatchError, MergeCandidateError, StructuralError,
    UnassignedViolationError, ErrorCode
)
from .constraint import Constraint, ConstraintList


class OptStatus(Enum):
    """Externally asserted optimality status of a candidate."""
    ASSERTED = "Y"
    DENIED = "N"
    OPTIONAL = "optional"

    @staticmethod
    def standardize(value: Any) -> OptStatus:
        """
        Map loose labels onto a status.

        True and strings starting with y/Y are ASSERTED, strings starting
        with n/N are DENIED, everything else is OPTIONAL.
        """
        if isinstance(value, OptStatus):
            return value
        if value is True:
            return OptStatus.ASSERTED
        if isinstance(value, str) and value[:1] in ("y", "Y"):
            return OptStatus.ASSERTED
        if isinstance(value, str) and value[:1] in ("n", "N"):
            return OptStatus.DENIED
        return OptStatus.OPTIONAL


# =============================================================================
# CANDIDATE
# =============================================================================

class Candidate:
    """
    An (input, output) pair with a violation count per constraint.

    Counts may be partially unassigned until the caller assigns them.
    Equality is by input and output only.
    """

    def __init__(
        self,
        input: Any,
        output: Any,
        constraints: Iterable[Constraint],
        optimal: Any = None,
        label: Optional[str] = None,
        remark: Optional[str] = None,
        violations: Optional[Mapping[Constraint, int]] = None
    ):
        self.input = input
        self.output = output
        self.label = label
        self.remark = remark
        self._constraints = ConstraintList.coerce(constraints)
        self._opt = OptStatus.standardize(optimal)
        self._violations: Dict[Constraint, int] = {}
        self._merge_candidates: List[Candidate] = []
        for con, count in (violations or {}).items():
            self.set_viols(con, count)

    @property
    def constraint_list(self) -> ConstraintList:
        return self._constraints

    # -------------------------------------------------------------------------
    # Violations
    # -------------------------------------------------------------------------

    def set_viols(self, con: Constraint, count: int) -> int:
        """Set the number of violations of ``con``. Returns the count."""
        self._constraints.index_of(con)
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count < 0:
            raise StructuralError(
                f"Violation count for {con.name} must be a non-negative integer, not {count!r}",
                code=ErrorCode.INVALID_VIOLATION_COUNT
            )
        self._violations[con] = int(count)
        return int(count)

    def get_viols(self, con: Constraint) -> int:
        try:
            return self._violations[con]
        except KeyError:
            raise UnassignedViolationError(
                f"No violation count assigned for {con.name}",
                (("candidate", self._describe()),)
            ) from None

    def has_viols(self, con: Constraint) -> bool:
        return con in self._violations

    def assign_violations(self) -> Candidate:
        """Fill in every count from the constraints' own evaluators."""
        for con in self._constraints:
            try:
                count = con.evaluate(self)
            except StructuralError as exc:
                raise exc.with_context("candidate", self.label or self.output) from exc
            self.set_viols(con, count)
        return self

    def violation_vector(self, constraints: Optional[Iterable[Constraint]] = None) -> np.ndarray:
        """Violation counts as an int array aligned to ``constraints``."""
        cons = self._constraints if constraints is None else ConstraintList.coerce(constraints)
        return np.fromiter(
            (self.get_viols(con) for con in cons), dtype=np.int64, count=len(cons)
        )

    def ident_viols(self, other: Candidate) -> bool:
        """True if ``other`` has an identical violation profile."""
        return all(
            self.get_viols(con) == other.get_viols(con)
            for con in self._constraints
        )

    def harmonically_bounds(self, other: Candidate) -> bool:
        """
        True if this candidate is better than ``other`` on at least one
        constraint and worse on none.
        """
        mine = self.violation_vector()
        theirs = other.violation_vector(self._constraints)
        return bool(np.any(mine < theirs) and not np.any(mine > theirs))

    # -------------------------------------------------------------------------
    # Optimality status
    # -------------------------------------------------------------------------

    @property
    def opt_status(self) -> OptStatus:
        return self._opt

    def is_opt(self) -> bool:
        return self._opt is OptStatus.ASSERTED

    def is_opt_optional(self) -> bool:
        return self._opt is OptStatus.OPTIONAL

    def is_opt_denied(self) -> bool:
        return self._opt is OptStatus.DENIED

    def assert_opt(self) -> None:
        self._opt = OptStatus.ASSERTED

    def deny_opt(self) -> None:
        self._opt = OptStatus.DENIED

    def option_opt(self) -> None:
        self._opt = OptStatus.OPTIONAL

    # -------------------------------------------------------------------------
    # Merging
    # -------------------------------------------------------------------------

    @property
    def merged(self) -> bool:
        return bool(self._merge_candidates)

    @property
    def merge_candidates(self) -> List[Candidate]:
        return list(self._merge_candidates)

    def add_merge_candidate(self, other: Candidate) -> None:
        """
        Fold ``other`` into this candidate.

        Only candidates with an identical violation profile and an
        identical optimality status can be merged.
        """
        if not self.ident_viols(other):
            raise MergeCandidateError("Merge candidates must have identical violations")
        if other.opt_status is not self._opt:
            raise MergeCandidateError("Merge candidates must have identical opt status")
        self._merge_candidates.append(other)
        self.remark = "MERGED"

    def merged_outputs_str(self) -> str:
        outputs = [str(self.output)] + [str(c.output) for c in self._merge_candidates]
        return " MER ".join(outputs)

    # -------------------------------------------------------------------------
    # Copying / identity
    # -------------------------------------------------------------------------

    def copy(self) -> Candidate:
        """Copy with independent violations, opt status and merge list."""
        dup = Candidate(
            self.input, self.output, self._constraints,
            optimal=self._opt, label=self.label, remark=self.remark
        )
        dup._violations = dict(self._violations)
        dup._merge_candidates = list(self._merge_candidates)
        return dup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Candidate):
            return NotImplemented
        return self.input == other.input and self.output == other.output

    def __hash__(self) -> int:
        return hash((self.input, self.output))

    def _describe(self) -> str:
        return f"{self.input} --> {self.output}"

    def __repr__(self) -> str:
        return f"Candidate({self.label!r}, {self.input!r}, {self.output!r})"

    def __str__(self) -> str:
        label_s = f"{self.label}: " if self.label else ""
        opt_s = "Y" if self.is_opt() else "N"
        viols = " ".join(
            f"{con}:{self._violations.get(con, '?')}" for con in self._constraints
        )
        remark_s = f"  {self.remark}" if self.remark else ""
        merge_s = "".join(f"\n --> {c.output}" for c in self._merge_candidates)
        return f"{label_s}{self._describe()} opt:{opt_s}  {viols}{remark_s}{merge_s}"


# =============================================================================
# COMPETITIONS
# =============================================================================

class Competition:
    """Ordered candidates that share one input."""

    def __init__(self, candidates: Iterable[Candidate] = ()):
        self._candidates: List[Candidate] = []
        for cand in candidates:
            self.add(cand)

    def add(self, candidate: Candidate) -> Competition:
        if self._candidates and candidate.input != self._candidates[0].input:
            raise InputMismatchError(
                "Candidates of a competition must share one input",
                (("expected", str(self._candidates[0].input)),
                 ("found", str(candidate.input)))
            )
        self._candidates.append(candidate)
        return self

    @property
    def input(self) -> Any:
        return self._candidates[0].input if self._candidates else None

    @property
    def constraint_list(self) -> ConstraintList:
        if not self._candidates:
            return ConstraintList()
        return self._candidates[0].constraint_list

    def has_optima(self) -> bool:
        return any(c.is_opt() for c in self._candidates)

    def optima(self) -> List[Candidate]:
        return [c for c in self._candidates if c.is_opt()]

    def copy(self) -> Competition:
        """Independent container holding the same candidate objects."""
        return Competition(self._candidates)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self._candidates)

    def __len__(self) -> int:
        return len(self._candidates)

    def __getitem__(self, position: int) -> Candidate:
        return self._candidates[position]

    def __str__(self) -> str:
        return "".join(f"{c}\n" for c in self._candidates)


class CompetitionList:
    """The competitions making up one dataset."""

    def __init__(self, competitions: Iterable[Competition] = (), label: str = ""):
        self._competitions: List[Competition] = list(competitions)
        self.label = label

    @classmethod
    def coerce(cls, competitions: Iterable[Iterable[Candidate]]) -> CompetitionList:
        """Wrap plain sequences of candidates; existing lists pass through."""
        if isinstance(competitions, CompetitionList) and all(
            isinstance(comp, Competition) for comp in competitions
        ):
            return competitions
        return cls(
            (comp if isinstance(comp, Competition) else Competition(comp) for comp in competitions),
            label=getattr(competitions, "label", "")
        )

    def append(self, competition: Competition) -> None:
        self._competitions.append(competition)

    @property
    def constraint_list(self) -> ConstraintList:
        if not self._competitions:
            return ConstraintList()
        return self._competitions[0].constraint_list

    def __iter__(self) -> Iterator[Competition]:
        return iter(self._competitions)

    def __len__(self) -> int:
        return len(self._competitions)

    def __getitem__(self, position: int) -> Competition:
        return self._competitions[position]
