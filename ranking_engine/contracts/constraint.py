"""
Constraint Contracts

Immutable OT constraints and the per-system constraint arena.

IDENTITY RULES:
===============
- A constraint is identified by its NAME only
- short_id, kind and evaluator never take part in equality or hashing
- Constraints are created once at grammar-system bootstrap and
  shared by reference; they are never mutated

ARENA:
======
ConstraintList fixes an order over the constraints of one system and
gives every constraint a stable integer index. ERCs and candidates index
their preference masks and violation vectors through it.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple, Union

from .base import (
    ConstraintKindError, ConstraintMismatchError, MissingEvaluatorError,
    StructuralError, ErrorCode
)


class ConstraintKind(Enum):
    """The two kinds of OT constraint."""
    MARKEDNESS = "markedness"
    FAITHFULNESS = "faithfulness"


MARK = ConstraintKind.MARKEDNESS
FAITH = ConstraintKind.FAITHFULNESS


# =============================================================================
# CONSTRAINT
# =============================================================================

@dataclass(frozen=True)
class Constraint:
    """
    Immutable OT constraint.

    The evaluator is an externally supplied violation-counting function
    taking a candidate and returning a non-negative integer.
    """
    name: str
    short_id: str = field(default="", compare=False)
    kind: ConstraintKind = field(default=ConstraintKind.MARKEDNESS, compare=False)
    evaluator: Optional[Callable[[Any], int]] = field(
        default=None, compare=False, repr=False
    )

    def __post_init__(self):
        if not self.name or not isinstance(self.name, str):
            raise StructuralError("Constraint name must be a non-empty string")
        object.__setattr__(self, 'short_id', str(self.short_id))
        object.__setattr__(self, 'kind', _coerce_kind(self.kind))

    @property
    def is_markedness(self) -> bool:
        return self.kind is ConstraintKind.MARKEDNESS

    @property
    def is_faithfulness(self) -> bool:
        return self.kind is ConstraintKind.FAITHFULNESS

    def evaluate(self, candidate: Any) -> int:
        """Return the number of times ``candidate`` violates this constraint."""
        if self.evaluator is None:
            raise MissingEvaluatorError(
                f"Constraint {self.name} has no violation evaluator"
            )
        count = self.evaluator(candidate)
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            raise StructuralError(
                f"Constraint {self.name} returned invalid violation count {count!r}",
                code=ErrorCode.INVALID_VIOLATION_COUNT
            )
        return count

    def __str__(self) -> str:
        return f"{self.short_id}:{self.name}"


def _coerce_kind(kind: Union[ConstraintKind, str]) -> ConstraintKind:
    if isinstance(kind, ConstraintKind):
        return kind
    if isinstance(kind, str):
        try:
            return ConstraintKind(kind.lower())
        except ValueError:
            pass
    raise ConstraintKindError(
        f"Constraint kind must be markedness or faithfulness, not {kind!r}"
    )


# =============================================================================
# CONSTRAINT ARENA
# =============================================================================

class ConstraintList:
    """
    Ordered, immutable list of the constraints of one system.

    Every constraint gets a stable integer index. Two lists are the same
    list when they hold the same constraints in the same order;
    same_members() is the order-insensitive check used when ERCs are
    pooled together.
    """

    __slots__ = ('_constraints', '_index')

    def __init__(self, constraints: Iterable[Constraint] = ()):
        self._constraints: Tuple[Constraint, ...] = tuple(constraints)
        index: Dict[Constraint, int] = {}
        for position, con in enumerate(self._constraints):
            if not isinstance(con, Constraint):
                raise StructuralError(f"Not a constraint: {con!r}")
            if con in index:
                raise StructuralError(
                    f"Duplicate constraint {con.name}",
                    code=ErrorCode.DUPLICATE_CONSTRAINT
                )
            index[con] = position
        self._index = index

    @classmethod
    def coerce(cls, constraints: Union[ConstraintList, Iterable[Constraint], None]) -> ConstraintList:
        """Wrap an iterable of constraints; existing lists pass through."""
        if isinstance(constraints, ConstraintList):
            return constraints
        if constraints is None:
            return cls()
        return cls(constraints)

    def index_of(self, con: Constraint) -> int:
        try:
            return self._index[con]
        except KeyError:
            raise ConstraintMismatchError(
                f"Constraint {con} is not in the constraint list"
            ) from None

    def by_name(self, name: str) -> Constraint:
        for con in self._constraints:
            if con.name == name:
                return con
        raise ConstraintMismatchError(f"No constraint named {name}")

    def same_members(self, other: Iterable[Constraint]) -> bool:
        """True if ``other`` has the same size and the same constraints."""
        other = ConstraintList.coerce(other)
        if other is self:
            return True
        if len(other) != len(self):
            return False
        return all(con in self._index for con in other)

    def markedness(self) -> Tuple[Constraint, ...]:
        return tuple(c for c in self._constraints if c.is_markedness)

    def faithfulness(self) -> Tuple[Constraint, ...]:
        return tuple(c for c in self._constraints if c.is_faithfulness)

    def __contains__(self, con: object) -> bool:
        return con in self._index

    def __iter__(self) -> Iterator[Constraint]:
        return iter(self._constraints)

    def __len__(self) -> int:
        return len(self._constraints)

    def __getitem__(self, position: int) -> Constraint:
        return self._constraints[position]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ConstraintList):
            return self._constraints == other._constraints
        if isinstance(other, (list, tuple)):
            return self._constraints == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._constraints)

    def __repr__(self) -> str:
        return f"ConstraintList({[c.name for c in self._constraints]})"

    def __str__(self) -> str:
        return " ".join(str(c) for c in self._constraints)
