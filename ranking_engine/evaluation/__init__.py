"""
Evaluation Package

Candidate comparison and optimisation: stratum comparers, hierarchy
comparers, Eval, MostHarmonic and loser selection.
"""

from .codes import HarmonyCode, ErcEvaluation
from .stratum import StratumComparer, CompareStratumPool, CompareStratumCtie
from .comparers import (
    Comparer, HierarchyComparer, ComparePool, CompareCtie, CompareConsistency
)
from .eval import Eval
from .most_harmonic import MostHarmonic, Preferred
from .loser_selector import LoserSelector

__all__ = [
    'HarmonyCode', 'ErcEvaluation',
    'StratumComparer', 'CompareStratumPool', 'CompareStratumCtie',
    'Comparer', 'HierarchyComparer', 'ComparePool', 'CompareCtie',
    'CompareConsistency',
    'Eval', 'MostHarmonic', 'Preferred', 'LoserSelector',
]
