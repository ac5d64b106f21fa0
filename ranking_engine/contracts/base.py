"""
Base Contracts and Shared Error Types

Foundational error vocabulary used across all layers of the ranking engine.

ERROR TAXONOMY:
===============
1. Structural / contract errors
   - Caller error: mismatched constraint sets, mismatched inputs,
     unknown constraint kinds, missing violation evaluators
   - Raised immediately, never coerced, never recovered locally
2. Domain outcomes
   - RCD inconsistency, empty contender sets, ties and conflicts
   - NOT errors: returned as ordinary values
3. Invariant violations
   - Reached only through internal bugs or violated preconditions
   - Raised loudly as InvariantViolation (an AssertionError)
"""

from __future__ import annotations
from enum import Enum, auto
from typing import Optional, Tuple


# =============================================================================
# ERROR CODES (Explicit, never silent)
# =============================================================================

class ErrorCode(Enum):
    """
    Explicit error codes for deterministic error handling.
    Every failure state of the engine is enumerated here.
    """
    # Constraint errors
    INVALID_CONSTRAINT = auto()
    INVALID_CONSTRAINT_KIND = auto()
    MISSING_EVALUATOR = auto()
    INVALID_VIOLATION_COUNT = auto()
    DUPLICATE_CONSTRAINT = auto()

    # Candidate errors
    UNASSIGNED_VIOLATION = auto()
    INPUT_MISMATCH = auto()
    MERGE_MISMATCH = auto()
    UNKNOWN_CANDIDATE = auto()

    # ERC errors
    CONSTRAINT_MISMATCH = auto()
    FROZEN_ERC = auto()
    INVALID_PREFERENCE = auto()

    # Hierarchy errors
    DUPLICATE_RANKING = auto()

    # Configuration errors
    INVALID_CONFIG = auto()

    # Internal invariants
    INVALID_RANKING_CHOICE = auto()
    EXHAUSTED_HIERARCHY = auto()


# =============================================================================
# EXCEPTIONS
# =============================================================================

class EngineError(Exception):
    """
    Root of all engine exceptions.

    Carries an ErrorCode and an immutable tuple of (key, value) context
    pairs alongside the human-readable message. Subclasses fix their code
    through DEFAULT_CODE.
    """
    DEFAULT_CODE: Optional[ErrorCode] = None

    def __init__(
        self,
        message: str,
        context: Tuple[Tuple[str, str], ...] = (),
        code: Optional[ErrorCode] = None
    ):
        super().__init__(message)
        self.code = code or self.DEFAULT_CODE
        self.message = message
        self.context = tuple(context)

    def with_context(self, key: str, value: str) -> EngineError:
        """Return a new error of the same class with additional context."""
        return type(self)(
            self.message,
            self.context + ((key, str(value)),),
            code=self.code
        )

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context)
        return f"{self.message} ({details})"


class StructuralError(EngineError, ValueError):
    """Caller violated a data contract. Fatal, never retried."""
    DEFAULT_CODE = ErrorCode.INVALID_CONSTRAINT


class ConstraintMismatchError(StructuralError):
    """An ERC or candidate does not share the expected constraint set."""
    DEFAULT_CODE = ErrorCode.CONSTRAINT_MISMATCH


class InputMismatchError(StructuralError):
    """Two candidates expected to share an input do not."""
    DEFAULT_CODE = ErrorCode.INPUT_MISMATCH


class ConstraintKindError(StructuralError):
    """A constraint was given a kind other than markedness or faithfulness."""
    DEFAULT_CODE = ErrorCode.INVALID_CONSTRAINT_KIND


class MissingEvaluatorError(StructuralError):
    """A constraint with no violation function was asked to evaluate."""
    DEFAULT_CODE = ErrorCode.MISSING_EVALUATOR


class UnassignedViolationError(StructuralError):
    """A violation count was read before it was assigned."""
    DEFAULT_CODE = ErrorCode.UNASSIGNED_VIOLATION


class MergeCandidateError(StructuralError):
    """Candidates with different violation profiles or opt status were merged."""
    DEFAULT_CODE = ErrorCode.MERGE_MISMATCH


class FrozenErcError(StructuralError):
    """A derived (winner-loser) ERC was mutated after construction."""
    DEFAULT_CODE = ErrorCode.FROZEN_ERC


class InvariantViolation(EngineError, AssertionError):
    """
    Internal invariant broken.

    Signals a bug or a violated precondition the engine cannot recover
    from (e.g. comparing candidates already known to be identical).
    """
    DEFAULT_CODE = ErrorCode.EXHAUSTED_HIERARCHY
