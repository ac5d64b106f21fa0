"""
Comparative Tableau

An ERC list made up of winner-loser pairs, built from competitions whose
winners are asserted optimal. A language of a factorial typology is one
of these.

The winners of every added competition are recorded, so a competition
with a single candidate still contributes its winner even though it adds
no pairs.
"""

from __future__ import annotations
from typing import List

from .erc import WinLosePair
from .erc_list import ErcList


class ComparativeTableau(ErcList):
    """Winner-loser pairs collected from competitions."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._winners: List = []

    def add_competition(self, competition) -> ComparativeTableau:
        """One pair for every (asserted-optimal winner, other candidate)."""
        for winner in competition.optima():
            if not any(w is winner for w in self._winners):
                self._winners.append(winner)
            for cand in competition:
                if cand is winner:
                    continue
                self.add(WinLosePair(winner, cand))
        return self

    def add_competition_list(self, competitions) -> ComparativeTableau:
        for competition in competitions:
            self.add_competition(competition)
        return self

    def copy(self) -> ComparativeTableau:
        copied = super().copy()
        copied._winners = list(self._winners)
        return copied

    def winners(self) -> List:
        """Optimal candidates of the added competitions, in insertion order."""
        return list(self._winners)
