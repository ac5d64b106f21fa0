"""
Engine Configuration

Selects the pluggable parts of the engine: the ranking bias used by RCD
and the comparer used for evaluation and loser selection.

ENVIRONMENT OVERRIDES:
======================
- OTRANK_RANKING_BIAS: all_high | one_at_a_time | faith_low | mark_low
- OTRANK_COMPARER: pool | ctie | consistency
- OTRANK_LOG_LEVEL: standard logging level name
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Optional

from .contracts.base import StructuralError, ErrorCode
from .core.ranker import Ranker
from .core.ranking_bias import (
    RankingBias, RankingBiasAllHigh, RankingBiasOneAtATime,
    RankingBiasSomeLow, FaithLow, MarkLow
)
from .evaluation.comparers import (
    Comparer, CompareConsistency, CompareCtie, ComparePool, HierarchyComparer
)


RANKING_BIASES = ("all_high", "one_at_a_time", "faith_low", "mark_low")
COMPARERS = ("pool", "ctie", "consistency")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for RankingEngine."""
    ranking_bias: str = "all_high"
    comparer: str = "pool"
    log_level: str = "WARNING"

    def __post_init__(self):
        if self.ranking_bias not in RANKING_BIASES:
            raise StructuralError(
                f"Unknown ranking bias {self.ranking_bias!r}",
                (("allowed", ", ".join(RANKING_BIASES)),),
                code=ErrorCode.INVALID_CONFIG
            )
        if self.comparer not in COMPARERS:
            raise StructuralError(
                f"Unknown comparer {self.comparer!r}",
                (("allowed", ", ".join(COMPARERS)),),
                code=ErrorCode.INVALID_CONFIG
            )
        object.__setattr__(self, 'log_level', str(self.log_level).upper())
        if self.log_level not in LOG_LEVELS:
            raise StructuralError(
                f"Unknown log level {self.log_level!r}",
                code=ErrorCode.INVALID_CONFIG
            )

    @classmethod
    def from_env(cls, base: Optional[EngineConfig] = None) -> EngineConfig:
        """Config from OTRANK_* environment variables, falling back to ``base``."""
        base = base or cls()
        return cls(
            ranking_bias=os.environ.get("OTRANK_RANKING_BIAS", base.ranking_bias).strip().lower(),
            comparer=os.environ.get("OTRANK_COMPARER", base.comparer).strip().lower(),
            log_level=os.environ.get("OTRANK_LOG_LEVEL", base.log_level).strip(),
        )

    # -------------------------------------------------------------------------
    # Factories
    # -------------------------------------------------------------------------

    def build_ranking_bias(self) -> RankingBias:
        if self.ranking_bias == "one_at_a_time":
            return RankingBiasOneAtATime()
        if self.ranking_bias == "faith_low":
            return RankingBiasSomeLow(FaithLow())
        if self.ranking_bias == "mark_low":
            return RankingBiasSomeLow(MarkLow())
        return RankingBiasAllHigh()

    def build_ranker(self) -> Ranker:
        return Ranker(self.build_ranking_bias())

    def build_comparer(self) -> Comparer:
        if self.comparer == "consistency":
            return CompareConsistency()
        if self.comparer == "ctie":
            return CompareCtie(self.build_ranker())
        return ComparePool(self.build_ranker())

    def build_hierarchy_comparer(self) -> HierarchyComparer:
        """Hierarchy-based comparer for Eval; consistency falls back to pool."""
        if self.comparer == "ctie":
            return CompareCtie(self.build_ranker())
        return ComparePool(self.build_ranker())
