"""
Ranking Fixtures

Explicit, hand-checked data for ranking tests.

RULES:
======
1. All fixtures are EXPLICIT, not random
2. Constraint names encode kind and position: M1, F2, M3, ...
3. Every fixture documents the outcome it is built to produce
"""

from __future__ import annotations
from typing import Dict, Iterable, Optional, Sequence, Tuple

from ranking_engine.contracts import (
    Candidate, Competition, CompetitionList, Constraint, ConstraintList,
    Erc, ErcList, FAITH, MARK
)


# =============================================================================
# ERC SHORTHAND
# =============================================================================

def constraints_for(kinds: str) -> ConstraintList:
    """'MFM' -> [M1 (markedness), F2 (faithfulness), M3 (markedness)]."""
    cons = []
    for position, kind in enumerate(kinds, start=1):
        kind = kind.upper()
        cons.append(Constraint(f"{kind}{position}", str(position), MARK if kind == "M" else FAITH))
    return ConstraintList(cons)


def quick_erc(tokens: Sequence[str], label: str = "", constraints: Optional[ConstraintList] = None) -> Erc:
    """
    Build an ERC from kind+preference tokens.

    ["MW", "FL", "Me"] is W on M1, L on F2, e on M3.
    """
    if constraints is None:
        constraints = constraints_for("".join(t[0] for t in tokens))
    return Erc.from_preferences(constraints, [t[1:] for t in tokens], label)


def quick_erc_list(rows: Iterable[Sequence[str]]) -> ErcList:
    """ERC list over one shared constraint list built from the first row."""
    rows = list(rows)
    constraints = constraints_for("".join(t[0] for t in rows[0]))
    ercs = ErcList(constraints)
    for number, row in enumerate(rows, start=1):
        ercs.add(quick_erc(row, f"E{number}", constraints))
    return ercs


# =============================================================================
# CANDIDATES
# =============================================================================

C1 = Constraint("C1", "1", MARK)
C2 = Constraint("C2", "2", MARK)
C3 = Constraint("C3", "3", FAITH)
CONSTRAINTS = ConstraintList([C1, C2, C3])


def candidate(
    input: str,
    output: str,
    viols: Sequence[int],
    label: Optional[str] = None,
    optimal=None,
    constraints: ConstraintList = CONSTRAINTS
) -> Candidate:
    """Candidate with one count per constraint, in list order."""
    return Candidate(
        input, output, constraints, optimal=optimal, label=label,
        violations=dict(zip(constraints, viols))
    )


def two_competition_typology() -> Tuple[CompetitionList, Dict[str, Candidate]]:
    """
    Two competitions over C1, C2, C3.

    i1: a1 (0,1,0) needs C1 >> C2; b1 (1,0,0) needs C2 >> C1;
        c1 (1,1,0) is harmonically bound by both.
    i2: a2 (1,0,0) needs C2 or C3 >> C1; b2 (0,1,1) needs C1 >> C2, C3.

    b1 with b2 is the only inconsistent combination, so the typology
    has exactly three languages: (a1, a2), (a1, b2), (b1, a2).
    """
    cands = {
        "a1": candidate("i1", "a1", (0, 1, 0), label="1.a1"),
        "b1": candidate("i1", "b1", (1, 0, 0), label="2.b1"),
        "c1": candidate("i1", "c1", (1, 1, 0), label="3.c1"),
        "a2": candidate("i2", "a2", (1, 0, 0), label="1.a2"),
        "b2": candidate("i2", "b2", (0, 1, 1), label="2.b2"),
    }
    comp1 = Competition([cands["a1"], cands["b1"], cands["c1"]])
    comp2 = Competition([cands["a2"], cands["b2"]])
    return CompetitionList([comp1, comp2], label="fixture"), cands
