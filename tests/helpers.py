"""Shared test doubles."""

from __future__ import annotations

from typing import Any

from cellhistory.core.actions import UndoAction


class RecordingAction(UndoAction):
    """Action that appends ``("apply"|"revert", name)`` to a shared log."""

    def __init__(self, name: str, log: list[tuple[str, str]]) -> None:
        super().__init__(name)
        self.log = log

    def apply(self) -> None:
        self.log.append(("apply", self.msg))

    def revert(self) -> None:
        self.log.append(("revert", self.msg))


class FooAction(UndoAction):
    """Action class with no snapshot tag."""

    def __init__(self, store: Any = None) -> None:
        super().__init__("Unknown Action", store)

    def apply(self) -> None:
        pass

    def revert(self) -> None:
        pass
