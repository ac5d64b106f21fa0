"""
Core Package

Ranking and consistency algorithms: RCD, ranking biases, the ranker and
harmonic-bound filtering.
"""

from .ranking_bias import (
    RankingBias, RankingBiasAllHigh, RankingBiasOneAtATime,
    RankingBiasSomeLow, LowClass, FaithLow, MarkLow
)
from .rcd import Rcd
from .ranker import Ranker
from .harmonic_bound_filter import HarmonicBoundFilter

__all__ = [
    'RankingBias', 'RankingBiasAllHigh', 'RankingBiasOneAtATime',
    'RankingBiasSomeLow', 'LowClass', 'FaithLow', 'MarkLow',
    'Rcd', 'Ranker', 'HarmonicBoundFilter',
]
