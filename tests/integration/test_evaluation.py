"""
Evaluation Tests

Comparers, Eval, MostHarmonic and loser selection on hand-built
candidates over C1 (M), C2 (M), C3 (F).
"""

import pytest

from ranking_engine.contracts import (
    Competition, ErcList, Hierarchy, InvariantViolation, WinLosePair
)
from ranking_engine.evaluation import (
    CompareConsistency, CompareCtie, ComparePool, CompareStratumCtie,
    CompareStratumPool, ErcEvaluation, Eval, HarmonyCode, LoserSelector,
    MostHarmonic, Preferred
)

from .fixtures import C1, C2, C3, CONSTRAINTS, candidate


@pytest.fixture
def a():
    return candidate("i", "a", (0, 1, 0))


@pytest.fixture
def b():
    return candidate("i", "b", (1, 0, 0))


@pytest.fixture
def c():
    return candidate("i", "c", (1, 1, 0))


@pytest.fixture
def a_twin():
    return candidate("i", "a'", (0, 1, 0))


TOTAL = Hierarchy([[C1], [C2], [C3]])
POOLED = Hierarchy([[C1, C2], [C3]])


# =============================================================================
# STRATUM COMPARERS
# =============================================================================

class TestStratumComparers:

    def test_pool_sums_violations(self, a, c):
        comparer = CompareStratumPool()
        assert comparer.more_harmonic(a, c, [C1, C2]) == HarmonyCode.FIRST
        assert comparer.more_harmonic(c, a, [C1, C2]) == HarmonyCode.SECOND
        assert comparer.more_harmonic(a, c, [C2, C3]) == HarmonyCode.TIE

    def test_ctie_reports_conflict(self, a, b):
        comparer = CompareStratumCtie()
        assert comparer.more_harmonic(a, b, [C1, C2]) == HarmonyCode.CONFLICT
        assert comparer.more_harmonic(a, b, [C1]) == HarmonyCode.FIRST
        assert comparer.more_harmonic(a, b, [C3]) == HarmonyCode.TIE

    def test_ctie_evaluate_erc(self, a, b):
        erc = WinLosePair(a, b)
        comparer = CompareStratumCtie()

        assert comparer.evaluate_erc(erc, [C1]) == ErcEvaluation.WINNER
        assert comparer.evaluate_erc(erc, [C2]) == ErcEvaluation.LOSER
        assert comparer.evaluate_erc(erc, [C1, C2]) == ErcEvaluation.CONFLICT
        assert comparer.evaluate_erc(erc, [C3]) == ErcEvaluation.IDENT_VIOLATIONS


# =============================================================================
# HIERARCHY COMPARERS
# =============================================================================

class TestHierarchyComparers:

    @pytest.mark.parametrize("comparer", [ComparePool(), CompareCtie(), CompareConsistency()])
    def test_identical_profiles(self, comparer, a, a_twin):
        """Every comparer reports identical profiles before ranking."""
        ercs = ErcList(CONSTRAINTS)
        assert comparer.more_harmonic(a, a_twin, ercs) == HarmonyCode.IDENT_VIOLATIONS

    def test_pool_first_discriminating_stratum(self, a, b):
        pool = ComparePool()
        assert pool.more_harmonic_on_hierarchy(a, b, TOTAL) == HarmonyCode.FIRST
        assert pool.more_harmonic_on_hierarchy(a, b, POOLED) == HarmonyCode.TIE

    def test_ctie_conflict_is_tie(self, a, b):
        ctie = CompareCtie()
        assert ctie.compare_on_hierarchy(a, b, POOLED) == HarmonyCode.CONFLICT
        assert ctie.more_harmonic_on_hierarchy(a, b, POOLED) == HarmonyCode.TIE
        assert ctie.more_harmonic_on_hierarchy(b, a, TOTAL) == HarmonyCode.SECOND

    def test_ctie_exhausted_hierarchy_raises(self, a, b):
        with pytest.raises(InvariantViolation):
            CompareCtie().compare_on_hierarchy(a, b, Hierarchy([[C3]]))

    def test_more_harmonic_uses_ranking_information(self, a, b):
        """Evidence that a beats b ranks C1 above C2."""
        info = ErcList(CONSTRAINTS).add(WinLosePair(a, b))
        assert ComparePool().more_harmonic(a, b, info) == HarmonyCode.FIRST
        assert CompareCtie().more_harmonic(b, a, info) == HarmonyCode.SECOND

    def test_empty_evidence_ranks_everything_together(self, a, b):
        empty = ErcList()
        assert CompareCtie().more_harmonic(a, b, empty) == HarmonyCode.TIE
        assert ComparePool().more_harmonic(a, b, empty) == HarmonyCode.TIE


class TestCompareConsistency:

    def test_second_when_reverse_pair_is_consistent(self, a, b):
        info = ErcList(CONSTRAINTS).add(WinLosePair(a, b))
        comparer = CompareConsistency()

        assert comparer.more_harmonic(a, b, info) == HarmonyCode.FIRST
        assert comparer.more_harmonic(b, a, info) == HarmonyCode.SECOND

    def test_evidence_not_mutated(self, a, b):
        info = ErcList(CONSTRAINTS).add(WinLosePair(a, b))
        CompareConsistency().more_harmonic(a, b, info)
        assert len(info) == 1


# =============================================================================
# EVAL
# =============================================================================

class TestEval:

    def test_single_optimum(self, a, b, c):
        assert Eval().find_optima(Competition([a, b, c]), TOTAL) == [a]

    def test_ties_are_retained(self, a, b, c):
        assert Eval(ComparePool()).find_optima(Competition([a, b, c]), POOLED) == [a, b]

    def test_identical_profiles_retained(self, a, a_twin, b):
        optima = Eval().find_optima(Competition([a, b, a_twin]), TOTAL)
        assert optima == [a, a_twin]

    def test_later_candidate_evicts_optimum(self, a, b, c):
        assert Eval().find_optima(Competition([c, b, a]), TOTAL) == [a]

    def test_ctie_conflicts_retained(self, a, b):
        optima = Eval(CompareCtie()).find_optima(Competition([a, b]), POOLED)
        assert optima == [a, b]

    def test_idempotent(self, a, b, c):
        evaluator = Eval()
        comp = Competition([a, b, c])
        assert evaluator.find_optima(comp, POOLED) == evaluator.find_optima(comp, POOLED)

    @pytest.mark.parametrize("comparer", [ComparePool(), CompareCtie()])
    def test_optima_alone_are_their_own_optima(self, comparer, a, a_twin, b, c):
        evaluator = Eval(comparer)
        optima = evaluator.find_optima(Competition([a, b, c, a_twin]), POOLED)
        assert evaluator.find_optima(Competition(optima), POOLED) == optima


# =============================================================================
# MOST HARMONIC
# =============================================================================

class TestMostHarmonic:

    def test_total_order_has_single_winner(self, a, b, c):
        mh = MostHarmonic(Competition([a, b, c]), TOTAL)
        assert mh.winners == [a]
        assert not mh.unresolved_conflict()

    def test_conflict_halts_and_is_flagged(self, a, b, c):
        mh = MostHarmonic(Competition([a, b, c]), POOLED)
        assert list(mh) == [a, b]
        assert mh.unresolved_conflict()

    def test_compare_on_hierarchy(self, a, b):
        assert MostHarmonic.compare_on_hierarchy(a, b, TOTAL) is Preferred.P1
        assert MostHarmonic.compare_on_hierarchy(a, b, POOLED) is Preferred.CONFLICT
        assert MostHarmonic.more_harmonic(a, b, TOTAL)
        assert not MostHarmonic.more_harmonic(b, a, TOTAL)

    def test_compare_on_stratum_follows_ctie_codes(self, a, b):
        assert MostHarmonic.compare_on_stratum(a, b, [C1]) is Preferred.P1
        assert MostHarmonic.compare_on_stratum(a, b, [C2]) is Preferred.P2
        assert MostHarmonic.compare_on_stratum(a, b, [C1, C2]) is Preferred.CONFLICT
        assert MostHarmonic.compare_on_stratum(a, b, [C3]) is Preferred.TIE

    def test_injected_stratum_comparer(self, a, b, c):
        class CountingCtie(CompareStratumCtie):
            def __init__(self):
                self.calls = 0

            def more_harmonic(self, first, second, stratum):
                self.calls += 1
                return super().more_harmonic(first, second, stratum)

        counting = CountingCtie()
        mh = MostHarmonic(Competition([a, b, c]), TOTAL, stratum_comparer=counting)
        assert mh.winners == [a]
        assert counting.calls > 0


# =============================================================================
# LOSER SELECTION
# =============================================================================

class TestLoserSelector:

    def test_selects_tied_competitor(self, a, b, c):
        selector = LoserSelector(CompareCtie())
        loser = selector.select_loser(a, Competition([a, b, c]), ErcList(CONSTRAINTS))
        assert loser is b

    def test_none_when_winner_already_wins(self, a, b, c):
        info = ErcList(CONSTRAINTS).add(WinLosePair(a, b))
        selector = LoserSelector(CompareCtie())
        assert selector.select_loser(a, Competition([a, b, c]), info) is None

    def test_pool_selector(self, a, b, c):
        selector = LoserSelector(ComparePool())
        assert selector.select_loser(a, Competition([a, b, c]), ErcList(CONSTRAINTS)) is b
