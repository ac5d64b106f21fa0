"""
Comparison result codes.
"""

from enum import Enum


class HarmonyCode(Enum):
    """Outcome of comparing two candidates."""
    FIRST = "first"
    SECOND = "second"
    TIE = "tie"
    CONFLICT = "conflict"
    IDENT_VIOLATIONS = "ident_violations"


class ErcEvaluation(Enum):
    """Outcome of evaluating an ERC on one stratum."""
    WINNER = "winner"
    LOSER = "loser"
    CONFLICT = "conflict"
    IDENT_VIOLATIONS = "ident_violations"
