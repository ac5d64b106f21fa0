"""
OT Ranking Engine

Constraint ranking and consistency for Optimality Theory: ERCs,
Recursive Constraint Demotion, factorial typology and candidate
evaluation.

ARCHITECTURE:
=============
contracts/   data model (constraints, candidates, ERCs, hierarchies)
core/        RCD, ranking biases, ranker, harmonic-bound filter
typology/    factorial typology
evaluation/  comparers, Eval, MostHarmonic, loser selection
learning/    MRCD
engine.py    RankingEngine facade
"""

from .contracts import (
    ErrorCode, EngineError, StructuralError, InvariantViolation,
    ConstraintKind, Constraint, ConstraintList, MARK, FAITH,
    OptStatus, Candidate, Competition, CompetitionList,
    Preference, Erc, WinLosePair, ErcList, ComparativeTableau, Hierarchy,
    arrays_to_erc_list
)
from .core import (
    Rcd, Ranker, HarmonicBoundFilter, RankingBias, RankingBiasAllHigh,
    RankingBiasOneAtATime, RankingBiasSomeLow, FaithLow, MarkLow
)
from .typology import FactorialTypology
from .evaluation import (
    HarmonyCode, ErcEvaluation, CompareStratumPool, CompareStratumCtie,
    ComparePool, CompareCtie, CompareConsistency, Eval, MostHarmonic,
    LoserSelector
)
from .learning import Mrcd
from .config import EngineConfig
from .engine import RankingEngine
from .logging_utils import configure_logging

__version__ = "0.1.0"

__all__ = [
    'ErrorCode', 'EngineError', 'StructuralError', 'InvariantViolation',
    'ConstraintKind', 'Constraint', 'ConstraintList', 'MARK', 'FAITH',
    'OptStatus', 'Candidate', 'Competition', 'CompetitionList',
    'Preference', 'Erc', 'WinLosePair', 'ErcList', 'ComparativeTableau',
    'Hierarchy', 'arrays_to_erc_list',
    'Rcd', 'Ranker', 'HarmonicBoundFilter', 'RankingBias', 'RankingBiasAllHigh',
    'RankingBiasOneAtATime', 'RankingBiasSomeLow', 'FaithLow', 'MarkLow',
    'FactorialTypology',
    'HarmonyCode', 'ErcEvaluation', 'CompareStratumPool', 'CompareStratumCtie',
    'ComparePool', 'CompareCtie', 'CompareConsistency', 'Eval', 'MostHarmonic',
    'LoserSelector',
    'Mrcd', 'EngineConfig', 'RankingEngine', 'configure_logging',
]
