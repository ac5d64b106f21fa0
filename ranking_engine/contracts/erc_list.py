"""
ERC List Contract

Ordered collection of ERCs sharing one constraint list, with a lazily
computed and cached consistency verdict.

CACHE RULES:
============
- The verdict is computed by RCD on first request
- Any mutation of the list discards the cached run
- The ERCs themselves are shared, never copied
"""

from __future__ import annotations
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, TYPE_CHECKING

from .base import ConstraintMismatchError
from .constraint import Constraint, ConstraintList
from .erc import Erc, WinLosePair

if TYPE_CHECKING:
    from ..core.rcd import Rcd


class ErcList:
    """
    Ordered ERCs over one constraint list.

    The constraint list is given at construction or adopted from the
    first ERC added.
    """

    def __init__(
        self,
        constraints: Optional[Iterable[Constraint]] = None,
        label: str = "",
        rcd_factory: Optional[Callable[[ErcList], Rcd]] = None
    ):
        self._constraints: Optional[ConstraintList] = None
        if constraints is not None:
            coerced = ConstraintList.coerce(constraints)
            # an empty list is adopted from the first ERC like None
            if len(coerced):
                self._constraints = coerced
        self.label = label
        self._ercs: List[Erc] = []
        self._rcd_factory = rcd_factory
        self._rcd: Optional[Rcd] = None

    @property
    def constraint_list(self) -> ConstraintList:
        if self._constraints is None:
            return ConstraintList()
        return self._constraints

    def add(self, erc: Erc) -> ErcList:
        if self._constraints is None:
            self._constraints = erc.constraint_list
        elif not self._constraints.same_members(erc.constraint_list):
            raise ConstraintMismatchError(
                "ERC does not share the constraint list of the ERC list",
                (("erc", erc.label or ""), ("list", self.label or ""))
            )
        self._ercs.append(erc)
        self._rcd = None
        return self

    def add_all(self, ercs: Iterable[Erc]) -> ErcList:
        for erc in ercs:
            self.add(erc)
        return self

    def find_all(self, predicate: Callable[[Erc], bool]) -> ErcList:
        return self._derived(e for e in self._ercs if predicate(e))

    def reject(self, predicate: Callable[[Erc], bool]) -> ErcList:
        return self._derived(e for e in self._ercs if not predicate(e))

    def partition(self, predicate: Callable[[Erc], bool]) -> Tuple[ErcList, ErcList]:
        """Split into (satisfying, not satisfying), both in list order."""
        return self.find_all(predicate), self.reject(predicate)

    def _derived(self, ercs: Iterable[Erc]) -> ErcList:
        derived = type(self)(self._constraints, self.label, self._rcd_factory)
        derived._ercs = list(ercs)
        return derived

    def copy(self) -> ErcList:
        """Independent container holding the same ERC objects."""
        return self._derived(self._ercs)

    # -------------------------------------------------------------------------
    # Consistency
    # -------------------------------------------------------------------------

    def rcd(self) -> Rcd:
        """The RCD run over the current contents, computed once per state."""
        if self._rcd is None:
            factory = self._rcd_factory
            if factory is None:
                from ..core.rcd import Rcd
                factory = Rcd
            self._rcd = factory(self)
        return self._rcd

    def is_consistent(self) -> bool:
        return self.rcd().is_consistent()

    # -------------------------------------------------------------------------
    # Construction from candidates
    # -------------------------------------------------------------------------

    @classmethod
    def new_from_competition(cls, winner, competition, **kwargs) -> ErcList:
        """Winner-loser pairs of ``winner`` against every other candidate."""
        ercs = cls(winner.constraint_list, **kwargs)
        for cand in competition:
            if cand is winner or cand == winner:
                continue
            ercs.add(WinLosePair(winner, cand))
        return ercs

    def __iter__(self) -> Iterator[Erc]:
        return iter(self._ercs)

    def __len__(self) -> int:
        return len(self._ercs)

    def __getitem__(self, position: int) -> Erc:
        return self._ercs[position]

    def __str__(self) -> str:
        return "\n".join(str(e) for e in self._ercs)
