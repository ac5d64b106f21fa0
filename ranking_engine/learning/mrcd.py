"""
Multi-Recursive Constraint Demotion
===================================

Error-driven learning of ranking information from observed winners.

LOOP:
=====
For each winner, ask the loser selector for an informative loser under
the current evidence. Every loser found becomes a winner-loser pair in
the evidence, and the winner is asked again until it yields no loser.
Passes over the winners repeat until a full pass adds nothing.

Learning stops early as soon as the evidence becomes inconsistent. The
evidence passed in is copied, never mutated.
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Sequence, Tuple

from ..contracts.erc import WinLosePair
from ..contracts.erc_list import ErcList

logger = logging.getLogger(__name__)


class Mrcd:
    """
    One MRCD run.

    Args:
        winners: (winner, competition) pairs; each competition supplies
            the potential losers of its winner
        erc_list: prior ranking evidence
        selector: object with select_loser(winner, competition, ercs)
    """

    def __init__(self, winners: Iterable[Tuple], erc_list: ErcList, selector):
        self._winners: List[Tuple] = list(winners)
        self._erc_list = erc_list.copy()
        self._selector = selector
        self._added_pairs: List[WinLosePair] = []
        self._any_change = self._run()

    @property
    def erc_list(self) -> ErcList:
        return self._erc_list

    @property
    def added_pairs(self) -> List[WinLosePair]:
        return list(self._added_pairs)

    @property
    def any_change(self) -> bool:
        return self._any_change

    def is_consistent(self) -> bool:
        return self._erc_list.is_consistent()

    def _run(self) -> bool:
        any_change = False
        changed = True
        passes = 0
        while changed and self.is_consistent():
            changed = False
            passes += 1
            for winner, competition in self._winners:
                added = self._run_single(winner, competition)
                if added:
                    changed = any_change = True
                    self._added_pairs.extend(added)
                if not self.is_consistent():
                    break
        logger.debug(
            "MRCD: %d pass(es), %d pair(s) added, %s",
            passes, len(self._added_pairs),
            "consistent" if self.is_consistent() else "inconsistent"
        )
        return any_change

    def _run_single(self, winner, competition) -> Sequence[WinLosePair]:
        added = []
        loser = self._selector.select_loser(winner, competition, self._erc_list)
        while loser is not None:
            pair = WinLosePair(winner, loser, label=str(winner.input))
            added.append(pair)
            self._erc_list.add(pair)
            if not self.is_consistent():
                break
            loser = self._selector.select_loser(winner, competition, self._erc_list)
        return added
