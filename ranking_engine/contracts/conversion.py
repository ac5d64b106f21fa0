"""
Array to ERC list conversion.

Turns a plain table (a header row plus one row per ERC) into an ErcList.
"""

from __future__ import annotations
from typing import Sequence

from .base import StructuralError, ErrorCode
from .constraint import Constraint, ConstraintList, MARK
from .erc import Erc
from .erc_list import ErcList


def arrays_to_erc_list(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> ErcList:
    """
    Build an ErcList from a header row and preference rows.

    The first header cell names the label column; the rest are constraint
    names, each turned into a markedness constraint. Every row holds a
    label followed by one "W", "L", "e" or empty cell per constraint.
    """
    if len(headers) < 1:
        raise StructuralError("Header row needs a label column", code=ErrorCode.INVALID_CONSTRAINT)
    constraints = ConstraintList(
        Constraint(name, str(position), MARK)
        for position, name in enumerate(headers[1:], start=1)
    )
    ercs = ErcList(constraints)
    for row in rows:
        if len(row) != len(headers):
            raise StructuralError(
                f"Row {row[0] if row else '?'} has {len(row)} cells, expected {len(headers)}",
                code=ErrorCode.INVALID_PREFERENCE
            )
        ercs.add(Erc.from_preferences(constraints, list(row[1:]), label=row[0]))
    return ercs
