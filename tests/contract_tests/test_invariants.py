"""
Property Tests for Ranking Contracts
Verifies ERC, RCD, typology and evaluation invariants on generated data.
"""

from hypothesis import given, settings, strategies as st
from hypothesis.strategies import composite

from ranking_engine.contracts import (
    Candidate, Competition, CompetitionList, Constraint, ConstraintList,
    Erc, ErcList, FAITH, MARK, Preference, WinLosePair
)
from ranking_engine.core import (
    Rcd, RankingBiasOneAtATime, RankingBiasSomeLow, FaithLow, MarkLow
)
from ranking_engine.evaluation import CompareCtie, ComparePool, Eval, HarmonyCode
from ranking_engine.typology import FactorialTypology

# =============================================================================
# STRATEGIES (Generators)
# =============================================================================

@composite
def constraint_lists(draw, min_size=1, max_size=5):
    """Generates constraint lists with mixed kinds."""
    size = draw(st.integers(min_value=min_size, max_value=max_size))
    kinds = draw(st.lists(st.sampled_from([MARK, FAITH]), min_size=size, max_size=size))
    return ConstraintList(
        Constraint(f"C{i}", str(i), kind) for i, kind in enumerate(kinds, start=1)
    )


@composite
def ercs_over(draw, constraints):
    """Generates one ERC over the given constraints."""
    prefs = draw(st.lists(
        st.sampled_from(["W", "L", "e"]), min_size=len(constraints), max_size=len(constraints)
    ))
    return Erc.from_preferences(constraints, prefs)


@composite
def erc_lists(draw, max_ercs=6):
    """Generates ERC lists sharing one constraint list."""
    constraints = draw(constraint_lists())
    ercs = draw(st.lists(ercs_over(constraints), max_size=max_ercs))
    return ErcList(constraints).add_all(ercs)


@composite
def competitions(draw, constraints, input="in", min_size=2, max_size=4):
    """Generates a competition with distinct outputs and small violation counts."""
    size = draw(st.integers(min_value=min_size, max_value=max_size))
    cands = []
    for position in range(size):
        viols = draw(st.lists(
            st.integers(min_value=0, max_value=2),
            min_size=len(constraints), max_size=len(constraints)
        ))
        cands.append(Candidate(
            input, f"{input}-o{position}", constraints,
            label=f"{position + 1}.o{position}",
            violations=dict(zip(constraints, viols))
        ))
    return Competition(cands)


@composite
def competition_lists(draw):
    constraints = draw(constraint_lists(min_size=2, max_size=3))
    count = draw(st.integers(min_value=1, max_value=3))
    comps = [draw(competitions(constraints, input=f"i{n}", max_size=3)) for n in range(count)]
    return CompetitionList(comps)


def satisfies(erc, hierarchy):
    """The highest stratum with a non-e preference on ``erc`` prefers the winner only."""
    for stratum in hierarchy:
        has_w = any(erc.is_w(c) for c in stratum)
        has_l = any(erc.is_l(c) for c in stratum)
        if has_w or has_l:
            return has_w and not has_l
    return not erc.l_cons


# =============================================================================
# ERC PROPERTIES
# =============================================================================

@given(constraint_lists(), st.data())
def test_erc_masks_stay_disjoint(constraints, data):
    """No constraint is ever both W and L, whatever the mutation sequence."""
    erc = Erc(constraints)
    moves = data.draw(st.lists(
        st.tuples(st.sampled_from(list(constraints)), st.sampled_from(list(Preference))),
        max_size=12
    ))
    for con, pref in moves:
        erc.set_preference(con, pref)
        assert not (erc.w_mask & erc.l_mask).any()
    assert not (erc.w_cons & erc.l_cons)


@given(constraint_lists(), st.data())
def test_win_lose_pair_derivation(constraints, data):
    """W iff the winner violates less, L iff more."""
    comp = data.draw(competitions(constraints, min_size=2, max_size=2))
    winner, loser = comp[0], comp[1]
    pair = WinLosePair(winner, loser)
    for con in constraints:
        assert pair.is_w(con) == (winner.get_viols(con) < loser.get_viols(con))
        assert pair.is_l(con) == (winner.get_viols(con) > loser.get_viols(con))


# =============================================================================
# RCD PROPERTIES
# =============================================================================

@given(erc_lists())
def test_rcd_consistency_matches_residue(ercs):
    """Consistent iff nothing is left unranked; the hierarchy covers every constraint."""
    rcd = Rcd(ercs)
    assert rcd.is_consistent() == (rcd.unranked == [])
    assert sorted(c.name for c in rcd.hierarchy.constraints()) == \
        sorted(c.name for c in ercs.constraint_list)
    if rcd.is_consistent():
        # only ERCs with no preference at all stay unexplained
        assert all(not e.w_cons and not e.l_cons for e in rcd.unexplained_ercs)
        explained = sum(len(group) for group in rcd.explained_ercs)
        assert explained + len(rcd.unexplained_ercs) == len(ercs)


@given(erc_lists())
def test_rcd_hierarchy_satisfies_every_erc(ercs):
    """Under the hierarchy of a consistent run every ERC favours its winner."""
    rcd = Rcd(ercs)
    if not rcd.is_consistent():
        return
    for erc in ercs:
        assert satisfies(erc, rcd.hierarchy)


@given(erc_lists())
def test_consistency_is_monotone(ercs):
    """Adding ERCs never turns an inconsistent set consistent."""
    full = Rcd(ercs).is_consistent()
    for cut in range(len(ercs) + 1):
        prefix = ErcList(ercs.constraint_list).add_all(list(ercs)[:cut])
        if not Rcd(prefix).is_consistent():
            assert not full


@given(erc_lists())
def test_consistency_independent_of_bias(ercs):
    """Every ranking bias reaches the same verdict."""
    verdict = Rcd(ercs).is_consistent()
    for bias in (RankingBiasOneAtATime(), RankingBiasSomeLow(FaithLow()),
                 RankingBiasSomeLow(MarkLow())):
        assert Rcd(ercs, ranking_bias=bias).is_consistent() == verdict


@given(erc_lists())
def test_faith_low_strata_never_mix_kinds(ercs):
    """With faith-low, no ranked stratum mixes faithfulness and markedness."""
    rcd = Rcd(ercs, ranking_bias=RankingBiasSomeLow(FaithLow()))
    for stratum in rcd.ranked:
        kinds = {c.is_faithfulness for c in stratum}
        assert len(kinds) == 1


# =============================================================================
# EVALUATION PROPERTIES
# =============================================================================

@settings(deadline=None)
@given(constraint_lists(min_size=2, max_size=4), st.data())
def test_rcd_winner_round_trip(constraints, data):
    """Pool and Ctie both prefer every winner of a consistent pair list."""
    comp = data.draw(competitions(constraints, min_size=2, max_size=4))
    winner = comp[0]
    ercs = ErcList.new_from_competition(winner, comp)
    rcd = Rcd(ercs)
    if not rcd.is_consistent():
        return
    hierarchy = rcd.hierarchy
    for loser in list(comp)[1:]:
        if winner.ident_viols(loser):
            continue
        assert ComparePool().more_harmonic_on_hierarchy(winner, loser, hierarchy) == HarmonyCode.FIRST
        assert CompareCtie().more_harmonic_on_hierarchy(winner, loser, hierarchy) == HarmonyCode.FIRST


@settings(deadline=None)
@given(constraint_lists(min_size=2, max_size=4), st.data())
def test_eval_is_idempotent(constraints, data):
    """Same inputs, same optima; optima are a non-empty subset of the competition."""
    comp = data.draw(competitions(constraints))
    ercs = data.draw(st.lists(ercs_over(constraints), max_size=3))
    hierarchy = Rcd(ErcList(constraints).add_all(ercs)).hierarchy
    evaluator = Eval(ComparePool())

    first = evaluator.find_optima(comp, hierarchy)
    second = evaluator.find_optima(comp, hierarchy)
    assert first == second
    assert first
    assert all(any(opt is c for c in comp) for opt in first)


@settings(deadline=None)
@given(constraint_lists(min_size=2, max_size=4), st.data())
def test_optima_are_stable(constraints, data):
    """Evaluating a competition of optima alone returns those optima unchanged."""
    comp = data.draw(competitions(constraints))
    ercs = data.draw(st.lists(ercs_over(constraints), max_size=3))
    hierarchy = Rcd(ErcList(constraints).add_all(ercs)).hierarchy
    for comparer in (ComparePool(), CompareCtie()):
        evaluator = Eval(comparer)
        optima = evaluator.find_optima(comp, hierarchy)
        again = evaluator.find_optima(Competition(optima), hierarchy)
        assert len(again) == len(optima)
        assert all(x is y for x, y in zip(again, optima))


# =============================================================================
# TYPOLOGY PROPERTIES
# =============================================================================

@settings(deadline=None, max_examples=40)
@given(competition_lists())
def test_typology_languages_are_consistent(comp_list):
    """Every language is consistent and picks at most one winner per competition."""
    ft = FactorialTypology(comp_list)
    languages = ft.factorial_typology()
    assert languages
    for lang in languages:
        assert lang.is_consistent()
        assert len({w.input for w in lang.winners()}) <= len(comp_list)
    assert [lang.label for lang in languages] == [f"L{n}" for n in range(1, len(languages) + 1)]
