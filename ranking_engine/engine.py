"""
Engine Orchestration Module

Single entry point over the ranking engine's layers.

LAYER FLOW:
===========
1. Contracts: constraints, candidates, competitions, ERCs
2. Core: RCD under the configured ranking bias; harmonic-bound filtering
3. Typology: languages of a competition list
4. Evaluation: optima, most-harmonic sets and loser selection
5. Learning: MRCD over observed winners

The engine holds no state between calls beyond its configured
components.
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

from .config import EngineConfig
from .contracts.candidate import Competition
from .contracts.comparative_tableau import ComparativeTableau
from .contracts.erc_list import ErcList
from .contracts.hierarchy import Hierarchy
from .core.harmonic_bound_filter import HarmonicBoundFilter
from .core.rcd import Rcd
from .evaluation.eval import Eval
from .evaluation.loser_selector import LoserSelector
from .evaluation.most_harmonic import MostHarmonic
from .learning.mrcd import Mrcd
from .logging_utils import configure_logging
from .typology.factorial_typology import FactorialTypology

logger = logging.getLogger(__name__)


class RankingEngine:
    """
    Facade over RCD, typology, evaluation and learning.

    Components are built once from the config and shared by every call.
    """

    def __init__(self, config: Optional[EngineConfig] = None, configure_logs: bool = False):
        self._config = config or EngineConfig()
        if configure_logs:
            configure_logging(self._config.log_level)
        self._ranker = self._config.build_ranker()
        self._comparer = self._config.build_comparer()
        self._filter = HarmonicBoundFilter(self._ranker)
        self._eval = Eval(self._config.build_hierarchy_comparer())
        self._selector = LoserSelector(self._comparer)

    @property
    def config(self) -> EngineConfig:
        return self._config

    # =========================================================================
    # RANKING
    # =========================================================================

    def rank(self, ercs: Iterable, label: str = "RCD") -> Rcd:
        rcd = self._ranker.run(ercs, label=label)
        logger.info(
            "%s: %s, %d strata",
            label, "consistent" if rcd.is_consistent() else "inconsistent",
            len(rcd.hierarchy)
        )
        return rcd

    def is_consistent(self, ercs: Iterable) -> bool:
        return self._ranker.run(ercs).is_consistent()

    def hierarchy(self, ercs: Iterable) -> Hierarchy:
        return self._ranker.get_hierarchy(ercs)

    # =========================================================================
    # TYPOLOGY
    # =========================================================================

    def contenders(self, competition: Competition) -> List:
        return self._filter.remove_collectively_bound(competition)

    def typology(self, competition_list: Iterable) -> List[ComparativeTableau]:
        ft = FactorialTypology(competition_list, self._ranker)
        languages = ft.factorial_typology()
        logger.info(
            "typology of %d competition(s): %d language(s)",
            len(ft.competition_list), len(languages)
        )
        return languages

    # =========================================================================
    # EVALUATION
    # =========================================================================

    def find_optima(self, competition: Competition, hierarchy: Hierarchy) -> List:
        return self._eval.find_optima(competition, hierarchy)

    def most_harmonic(self, competition: Competition, hierarchy: Hierarchy) -> MostHarmonic:
        return MostHarmonic(competition, hierarchy)

    def select_loser(self, winner, competition: Competition, ranking_info: ErcList):
        return self._selector.select_loser(winner, competition, ranking_info)

    # =========================================================================
    # LEARNING
    # =========================================================================

    def learn(self, winners: Iterable[Tuple], ercs: ErcList) -> Mrcd:
        mrcd = Mrcd(winners, ercs, self._selector)
        logger.info(
            "MRCD added %d pair(s), %s",
            len(mrcd.added_pairs), "consistent" if mrcd.is_consistent() else "inconsistent"
        )
        return mrcd
