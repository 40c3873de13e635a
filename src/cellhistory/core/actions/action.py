"""Base class shared by every reversible action.

An action is one recorded operation. It knows how to redo itself (``apply``)
and undo itself (``revert``); the history stack decides when to call which,
and guarantees each is called once per transition.

Construction must capture whatever ``revert`` needs (the previous value, the
inverse patch) because the cell may have moved on by the time it is undone.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class UndoAction(ABC):
    """
    A reversible operation against zero or one cell.

    Attributes
    ----------
    msg : Any
        Human-readable label (any JSON-safe value).
    store : Any | None
        Non-owning reference to the mutated cell, or None for actions that
        touch no cell directly.
    patch : Any
        Variant-specific change data.
    seq_nbr : int | None
        Sequence number; assigned by the history stack when pushed.
    """

    __slots__ = ("msg", "store", "patch", "seq_nbr")

    def __init__(self, msg: Any, store: Any | None = None, patch: Any = None) -> None:
        self.msg = msg
        self.store = store
        self.patch = patch
        self.seq_nbr: int | None = None

    @abstractmethod
    def apply(self) -> None:
        """Perform (or redo) the change."""

    @abstractmethod
    def revert(self) -> None:
        """Undo the change."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(msg={self.msg!r}, seq_nbr={self.seq_nbr!r})"


def require_store(store: Any | None, variant: str) -> Any:
    """Return ``store`` or raise if a cell-bound action was built without one."""
    if store is None:
        raise TypeError(f"{variant} requires a cell to act on")
    return store


__all__ = ["UndoAction", "require_store"]
