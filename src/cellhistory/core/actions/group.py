"""Group action: several actions undone and redone as one step."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

from .action import UndoAction


class GroupAction(UndoAction):
    """
    Ordered collection of child actions.

    Children are applied in insertion order and reverted in reverse order.
    ``patch`` is the child list itself; the order is preserved through
    snapshots. A group exposes the same ``push`` as the history stack, so any
    builder can record into a group instead of a stack.
    """

    __slots__ = ()

    def __init__(self, msg: Any, actions: Iterable[UndoAction] | None = None) -> None:
        super().__init__(msg, None, list(actions or []))

    @property
    def actions(self) -> list[UndoAction]:
        return self.patch  # type: ignore[no-any-return]

    def push(self, action: UndoAction) -> None:
        """Append ``action`` as the last child."""
        self.patch.append(action)

    def apply(self) -> None:
        for action in self.patch:
            action.apply()

    def revert(self) -> None:
        for action in reversed(self.patch):
            action.revert()

    def __iter__(self) -> Iterator[UndoAction]:
        return iter(self.patch)

    def __len__(self) -> int:
        return len(self.patch)


__all__ = ["GroupAction"]
