"""
Factorial Typology
==================

Enumerates every language (combination of one winner per competition)
that some ranking of the constraints can produce.

PHASES:
=======
A. Contender filtering
   - Every candidate of every competition is checked for collective
     harmonic bounding; bound candidates can never win and are dropped
   - Competitions with externally asserted optima keep those optima
     fixed: every other candidate is denied optimality
   - Contenders with identical violation profiles are merged into one
B. Language enumeration
   - Languages are grown one competition at a time
   - A partial language is extended by each contender of the next
     competition and kept only while its winner-loser pairs stay
     consistent
   - Surviving languages are labelled L1, L2, ... in discovery order

The input competition list and its candidates are never mutated.
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional

from ..contracts.base import StructuralError, ErrorCode
from ..contracts.candidate import Candidate, Competition, CompetitionList
from ..contracts.comparative_tableau import ComparativeTableau
from ..core.harmonic_bound_filter import HarmonicBoundFilter
from ..core.ranker import Ranker

logger = logging.getLogger(__name__)


class FactorialTypology:
    """Factorial typology of a competition list."""

    def __init__(self, competition_list: Iterable, ranker: Optional[Ranker] = None):
        self._competitions = CompetitionList.coerce(competition_list)
        self._constraints = self._competitions.constraint_list
        self._ranker = ranker or Ranker()
        self._filter = HarmonicBoundFilter(self._ranker)
        self._hb_flags: Dict[int, bool] = {}
        self._contenders: List[List[Candidate]] = []
        self._languages: Optional[List[ComparativeTableau]] = None
        self._check_harmonic_boundedness()

    # -------------------------------------------------------------------------
    # Phase A: contenders
    # -------------------------------------------------------------------------

    def _check_harmonic_boundedness(self) -> None:
        for position, comp in enumerate(self._competitions):
            contenders = []
            for cand in comp:
                bound = not self._filter.is_contender(cand, comp)
                self._hb_flags[id(cand)] = bound
                if not bound:
                    contenders.append(cand)
            self._contenders.append(contenders)
            logger.debug(
                "competition %d (%s): %d of %d candidates are contenders",
                position + 1, comp.input, len(contenders), len(comp)
            )

    @property
    def competition_list(self) -> CompetitionList:
        return self._competitions

    def is_harmonically_bound(self, candidate: Candidate) -> bool:
        """True if ``candidate`` can never be optimal in its competition."""
        try:
            return self._hb_flags[id(candidate)]
        except KeyError:
            raise StructuralError(
                f"Candidate {candidate!r} is not part of this typology",
                code=ErrorCode.UNKNOWN_CANDIDATE
            ) from None

    def contenders(self, position: int) -> List[Candidate]:
        return list(self._contenders[position])

    def non_hb_competition_list(self) -> CompetitionList:
        """Copy of the competition list holding only the contenders."""
        return CompetitionList(
            (Competition(contenders) for contenders in self._contenders),
            label=self._competitions.label
        )

    def _prepared_competitions(self) -> List[List[Candidate]]:
        prepared = []
        for contenders in self._contenders:
            if any(c.is_opt() for c in contenders):
                contenders = [c.copy() for c in contenders]
                for cand in contenders:
                    if not cand.is_opt():
                        cand.deny_opt()
            prepared.append(_merge_identical(contenders))
        return prepared

    # -------------------------------------------------------------------------
    # Phase B: languages
    # -------------------------------------------------------------------------

    def factorial_typology(self) -> List[ComparativeTableau]:
        """The languages of the typology, computed once."""
        if self._languages is None:
            self._languages = self._enumerate()
        return list(self._languages)

    def _enumerate(self) -> List[ComparativeTableau]:
        languages = [ComparativeTableau(self._constraints, rcd_factory=self._ranker.run)]
        for position, contenders in enumerate(self._prepared_competitions()):
            extended = []
            for lang in languages:
                for winner in contenders:
                    if winner.is_opt_denied():
                        continue
                    lang_new = lang.copy()
                    lang_new.add_competition(self.winner_competition(winner, contenders))
                    if lang_new.is_consistent():
                        extended.append(lang_new)
            languages = extended
            logger.debug(
                "after competition %d: %d partial language(s)", position + 1, len(languages)
            )
        for number, lang in enumerate(languages, start=1):
            lang.label = f"L{number}"
        return languages

    @staticmethod
    def winner_competition(winner: Candidate, competition) -> Competition:
        """
        Copy of ``competition`` with a copy of ``winner`` asserted optimal
        and copies of the others marked optional.
        """
        new_winner = winner.copy()
        new_winner.assert_opt()
        new_comp = Competition([new_winner])
        for cand in competition:
            if cand == winner:
                continue
            loser = cand.copy()
            loser.option_opt()
            new_comp.add(loser)
        return new_comp


def _merge_identical(contenders: List[Candidate]) -> List[Candidate]:
    merged: List[Candidate] = []
    for cand in contenders:
        for position, rep in enumerate(merged):
            if rep.opt_status is cand.opt_status and rep.ident_viols(cand):
                if not rep.merged:
                    rep = merged[position] = rep.copy()
                rep.add_merge_candidate(cand)
                break
        else:
            merged.append(cand)
    return merged
