"""
Contracts Package

Data model of the ranking engine. Leaf layer: no ranking algorithms live
here, and nothing here imports from core, typology or evaluation at
module load time.
"""

from .base import (
    ErrorCode, EngineError, StructuralError, ConstraintMismatchError,
    InputMismatchError, ConstraintKindError, MissingEvaluatorError,
    UnassignedViolationError, MergeCandidateError, FrozenErcError,
    InvariantViolation
)
from .constraint import ConstraintKind, Constraint, ConstraintList, MARK, FAITH
from .candidate import OptStatus, Candidate, Competition, CompetitionList
from .erc import Preference, Erc, WinLosePair
from .erc_list import ErcList
from .comparative_tableau import ComparativeTableau
from .hierarchy import Hierarchy
from .conversion import arrays_to_erc_list

__all__ = [
    'ErrorCode', 'EngineError', 'StructuralError', 'ConstraintMismatchError',
    'InputMismatchError', 'ConstraintKindError', 'MissingEvaluatorError',
    'UnassignedViolationError', 'MergeCandidateError', 'FrozenErcError',
    'InvariantViolation',
    'ConstraintKind', 'Constraint', 'ConstraintList', 'MARK', 'FAITH',
    'OptStatus', 'Candidate', 'Competition', 'CompetitionList',
    'Preference', 'Erc', 'WinLosePair',
    'ErcList', 'ComparativeTableau', 'Hierarchy',
    'arrays_to_erc_list',
]
