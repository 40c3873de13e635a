"""Set action: replace a cell's whole value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .action import UndoAction, require_store


@dataclass(frozen=True, slots=True)
class SetPatch:
    """The value written on apply and the value restored on revert."""

    value: Any
    previous: Any


class SetAction(UndoAction):
    """
    Writes ``value`` to the cell on apply and the previous value on revert.

    The previous value is read from the cell when the action is constructed,
    so build the action *before* writing the new value (the builders in
    :mod:`cellhistory.core.history.builders` do this for you). It is never
    re-read afterwards.
    """

    __slots__ = ()

    def __init__(self, msg: Any, store: Any, value: Any) -> None:
        store = require_store(store, "SetAction")
        super().__init__(msg, store, SetPatch(value=value, previous=store.get()))

    def apply(self) -> None:
        self.store.set(self.patch.value)

    def revert(self) -> None:
        self.store.set(self.patch.previous)


__all__ = ["SetAction", "SetPatch"]
