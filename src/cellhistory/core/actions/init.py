"""Init action: the fixed first entry of every history."""

from __future__ import annotations

from typing import Any

from .action import UndoAction


class InitAction(UndoAction):
    """Marks the starting point of a history; applying or reverting does nothing."""

    __slots__ = ()

    def __init__(self, msg: Any) -> None:
        super().__init__(msg)

    def apply(self) -> None:
        pass

    def revert(self) -> None:
        pass


__all__ = ["InitAction"]
