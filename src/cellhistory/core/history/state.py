"""
Immutable view of a history published to observers.

The stack's state is fully described by ``(actions, index, ticker)``.
``can_undo``, ``can_redo`` and ``selected_action`` are derived from those
three and are computed here rather than stored.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..actions import UndoAction


@dataclass(frozen=True, slots=True)
class HistoryState:
    """
    Snapshot of a :class:`HistoryStack` at one moment.

    Attributes
    ----------
    actions : tuple[UndoAction, ...]
        Recorded actions; the first is always the Init action.
    index : int
        Position of the current action.
    ticker : int
        Counter bumped on every state change; observers can compare tickers
        to tell two otherwise identical states apart.
    """

    actions: tuple[UndoAction, ...]
    index: int
    ticker: int

    @property
    def can_undo(self) -> bool:
        return self.index > 0

    @property
    def can_redo(self) -> bool:
        return self.index < len(self.actions) - 1

    @property
    def selected_action(self) -> UndoAction:
        """The action at ``index`` (the most recently applied one)."""
        return self.actions[self.index]


__all__ = ["HistoryState"]
