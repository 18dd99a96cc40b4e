"""Epoch-tagged indices and scope lifetimes for graph views."""

from __future__ import annotations

import itertools
from dataclasses import dataclass

from dagindex._errors import GraphScopeError

_epochs = itertools.count(1)


def next_epoch() -> int:
    """Allocate a fresh epoch number for a newly numbered index space."""
    return next(_epochs)


class Index(int):
    """A vertex position in one specific graph view.

    Behaves as a plain ``int`` (comparison, hashing, list indexing) but
    remembers the epoch of the view that issued it, so a view can reject
    indices coming from a different construction.

    Arithmetic on an Index yields a plain ``int``.
    """

    epoch: int

    def __new__(cls, value: int, epoch: int) -> Index:
        obj = super().__new__(cls, value)
        obj.epoch = epoch
        return obj

    def __repr__(self) -> str:
        return f"Index({int(self)}, epoch={self.epoch})"

    def __reduce__(self) -> tuple[type[Index], tuple[int, int]]:
        return (Index, (int(self), self.epoch))


@dataclass(slots=True)
class GraphScope:
    """Lifetime flag shared by a view and every view derived from it.

    A scope is open from construction until `close` is called, typically
    when the ``with`` block of `graph_scope` exits.
    """

    label: str = "graph"
    is_open: bool = True

    def close(self) -> None:
        self.is_open = False

    def ensure_open(self) -> None:
        """Raise GraphScopeError if the scope has been closed."""
        if not self.is_open:
            msg = f"The {self.label} view was used outside of the scope that created it"
            raise GraphScopeError(msg)
