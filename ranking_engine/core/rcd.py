"""
Recursive Constraint Demotion
=============================

Builds a stratified hierarchy consistent with a list of ERCs, or proves
that none exists.

ALGORITHM:
==========
1. A constraint is rankable when it prefers no loser (has no L) in any
   still-unexplained ERC
2. The ranking bias picks a non-empty subset of the rankable constraints
   to form the next stratum
3. Every unexplained ERC with a W on a newly ranked constraint becomes
   explained
4. Repeat until nothing is rankable

The ERC set is consistent exactly when every constraint gets ranked.
Otherwise the unranked constraints and unexplained ERCs are the residue.

Inconsistency is an outcome, not an error: Rcd never raises on it.
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np

from ..contracts.base import InvariantViolation, ErrorCode
from ..contracts.constraint import Constraint, ConstraintList
from ..contracts.erc import Erc
from ..contracts.erc_list import ErcList
from ..contracts.hierarchy import Hierarchy
from .ranking_bias import RankingBias, RankingBiasAllHigh

logger = logging.getLogger(__name__)


class Rcd:
    """
    One run of Recursive Constraint Demotion over an ERC list.

    The run happens at construction; afterwards the object is a read-only
    record of the result. The bias sees the in-progress state through
    ``unranked`` and ``unexplained_ercs`` while choosing each stratum.
    """

    def __init__(
        self,
        erc_list: Iterable[Erc],
        label: str = "RCD",
        ranking_bias: Optional[RankingBias] = None
    ):
        self._ercs: List[Erc] = list(erc_list)
        self.label = label
        self._constraints = _constraint_list_of(erc_list, self._ercs)
        self._bias = ranking_bias or RankingBiasAllHigh()

        cons_count = len(self._constraints)
        self._w = np.zeros((len(self._ercs), cons_count), dtype=bool)
        self._l = np.zeros((len(self._ercs), cons_count), dtype=bool)
        for row, erc in enumerate(self._ercs):
            self._w[row], self._l[row] = erc.masks_over(self._constraints)

        self._ranked = Hierarchy()
        self._unranked_mask = np.ones(cons_count, dtype=bool)
        self._unexplained_mask = np.ones(len(self._ercs), dtype=bool)
        self._explained: List[List[Erc]] = []
        self._run()

    # -------------------------------------------------------------------------
    # Algorithm
    # -------------------------------------------------------------------------

    def _rankable_mask(self) -> np.ndarray:
        blocked = self._l[self._unexplained_mask].any(axis=0)
        return self._unranked_mask & ~blocked

    def _run(self) -> None:
        rankable_mask = self._rankable_mask()
        while rankable_mask.any():
            rankable = [self._constraints[i] for i in np.flatnonzero(rankable_mask)]
            stratum = self._choose(rankable)

            stratum_mask = np.zeros(len(self._constraints), dtype=bool)
            for con in stratum:
                stratum_mask[self._constraints.index_of(con)] = True
            self._ranked.add_stratum(stratum)
            self._unranked_mask &= ~stratum_mask

            newly = self._unexplained_mask & self._w[:, stratum_mask].any(axis=1)
            self._explained.append([self._ercs[i] for i in np.flatnonzero(newly)])
            self._unexplained_mask &= ~newly

            logger.debug(
                "%s: stratum %d %s explains %d ERC(s), %d unexplained",
                self.label, len(self._ranked), [c.name for c in stratum],
                int(newly.sum()), int(self._unexplained_mask.sum())
            )
            rankable_mask = self._rankable_mask()

        logger.debug(
            "%s: %s with %d strata, %d unranked constraint(s)",
            self.label, "consistent" if self.is_consistent() else "inconsistent",
            len(self._ranked), int(self._unranked_mask.sum())
        )

    def _choose(self, rankable: List[Constraint]) -> List[Constraint]:
        chosen = list(self._bias.choose_cons_to_rank(rankable, self))
        if not chosen:
            raise InvariantViolation(
                "Ranking bias chose an empty stratum",
                (("bias", type(self._bias).__name__),),
                code=ErrorCode.INVALID_RANKING_CHOICE
            )
        allowed = set(rankable)
        for con in chosen:
            if con not in allowed:
                raise InvariantViolation(
                    f"Ranking bias chose non-rankable constraint {con.name}",
                    (("bias", type(self._bias).__name__),),
                    code=ErrorCode.INVALID_RANKING_CHOICE
                )
        return chosen

    # -------------------------------------------------------------------------
    # Results
    # -------------------------------------------------------------------------

    @property
    def constraint_list(self) -> ConstraintList:
        return self._constraints

    def is_consistent(self) -> bool:
        return not self._unranked_mask.any()

    @property
    def ranked(self) -> Hierarchy:
        return self._ranked.copy()

    @property
    def unranked(self) -> List[Constraint]:
        return [self._constraints[i] for i in np.flatnonzero(self._unranked_mask)]

    @property
    def explained_ercs(self) -> List[List[Erc]]:
        """Explained ERCs grouped by the stratum that explained them."""
        return [list(group) for group in self._explained]

    @property
    def unexplained_ercs(self) -> List[Erc]:
        return [self._ercs[i] for i in np.flatnonzero(self._unexplained_mask)]

    @property
    def hierarchy(self) -> Hierarchy:
        """The ranked strata, plus any unranked constraints as a bottom stratum."""
        hierarchy = self._ranked.copy()
        unranked = self.unranked
        if unranked:
            hierarchy.add_stratum(unranked)
        return hierarchy

    def erc_list(self) -> ErcList:
        return ErcList(self._constraints).add_all(self._ercs)

    # -------------------------------------------------------------------------
    # Static helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def rankable(con: Constraint, ercs: Iterable[Erc]) -> bool:
        """True if no ERC in ``ercs`` has an L on ``con``."""
        return not any(erc.is_l(con) for erc in ercs)

    @staticmethod
    def explained(erc: Erc, stratum: Sequence[Constraint]) -> bool:
        """True if ``erc`` has a W on some constraint of ``stratum``."""
        return any(erc.is_w(con) for con in stratum)

    def __str__(self) -> str:
        return f"{self.label}: {self.hierarchy}"


def _constraint_list_of(erc_list, ercs: List[Erc]) -> ConstraintList:
    constraints = getattr(erc_list, "constraint_list", None)
    if isinstance(constraints, ConstraintList) and (len(constraints) or not ercs):
        return constraints
    if ercs:
        return ercs[0].constraint_list
    return ConstraintList()
