"""
Ranking Biases

Strategies deciding which of the currently rankable constraints RCD
places in the next stratum.

CONTRACT:
=========
choose_cons_to_rank(rankable, rcd) must return a non-empty subset of
``rankable``. Rcd treats anything else as an internal invariant
violation.

Available biases:
- RankingBiasAllHigh: every rankable constraint, as high as possible
- RankingBiasOneAtATime: only the first rankable constraint
- RankingBiasSomeLow: keeps one class of constraints as low as possible
  (FaithLow / MarkLow)
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Sequence

from ..contracts.constraint import Constraint


class RankingBias(ABC):
    """Abstract stratum-selection strategy for RCD."""

    @abstractmethod
    def choose_cons_to_rank(self, rankable: Sequence[Constraint], rcd) -> List[Constraint]:
        """Pick the constraints for the next stratum."""
        pass


class RankingBiasAllHigh(RankingBias):
    """Rank every rankable constraint immediately."""

    def choose_cons_to_rank(self, rankable: Sequence[Constraint], rcd) -> List[Constraint]:
        return list(rankable)


class RankingBiasOneAtATime(RankingBias):
    """Rank a single constraint per stratum, in constraint-list order."""

    def choose_cons_to_rank(self, rankable: Sequence[Constraint], rcd) -> List[Constraint]:
        return list(rankable[:1])


# =============================================================================
# LOW-RANKING BIASES
# =============================================================================

class LowClass(ABC):
    """Membership test for the class of constraints to keep low."""

    @abstractmethod
    def __contains__(self, con: Constraint) -> bool:
        pass


class FaithLow(LowClass):
    """Faithfulness constraints are ranked as low as possible."""

    def __contains__(self, con: Constraint) -> bool:
        return con.is_faithfulness


class MarkLow(LowClass):
    """Markedness constraints are ranked as low as possible."""

    def __contains__(self, con: Constraint) -> bool:
        return con.is_markedness


class RankingBiasSomeLow(RankingBias):
    """
    Rank the high class as soon as possible, the low class as late as
    possible.

    When only low constraints are rankable, the bias prefers an active
    low constraint (one with a W in some unexplained ERC) whose ranking
    frees up the most high constraints further down the cascade. If none
    frees any, all active low constraints are ranked together. If none
    is active, all rankable low constraints are ranked.
    """

    def __init__(self, low_class: LowClass):
        self._low_class = low_class

    def is_low(self, con: Constraint) -> bool:
        return con in self._low_class

    def choose_cons_to_rank(self, rankable: Sequence[Constraint], rcd) -> List[Constraint]:
        high = [con for con in rankable if not self.is_low(con)]
        if high:
            return high
        low = list(rankable)
        unexplained = rcd.unexplained_ercs
        low_active = [con for con in low if any(erc.is_w(con) for erc in unexplained)]
        if not low_active:
            return low
        return self._max_freed_high(low_active, rcd.unranked, unexplained)

    def _max_freed_high(self, low_active, unranked, unexplained) -> List[Constraint]:
        best_con, best_count = low_active[0], -1
        for con in low_active:
            count = self.count_freed_high(con, unranked, unexplained)
            if count > best_count:
                best_con, best_count = con, count
        if best_count == 0:
            return list(low_active)
        return [best_con]

    def count_freed_high(self, target: Constraint, unranked, unexplained) -> int:
        """
        Number of high constraints that become rankable, over the whole
        high-only cascade, once ``target`` is ranked.
        """
        from .rcd import Rcd

        stratum = [target]
        remaining = [con for con in unranked if con != target]
        ercs = list(unexplained)
        total = 0
        while stratum:
            ercs = [erc for erc in ercs if not Rcd.explained(erc, stratum)]
            stratum = [
                con for con in remaining
                if not self.is_low(con) and Rcd.rankable(con, ercs)
            ]
            remaining = [con for con in remaining if con not in stratum]
            total += len(stratum)
        return total
