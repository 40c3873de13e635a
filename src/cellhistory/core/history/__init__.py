"""History stack, its published state and the recording helpers."""

from __future__ import annotations

from .builders import ActionTarget, group, mutate_cell, set_cell, update_cell
from .stack import HistoryObserver, HistoryStack
from .state import HistoryState

__all__ = [
    "ActionTarget",
    "HistoryObserver",
    "HistoryStack",
    "HistoryState",
    "group",
    "mutate_cell",
    "set_cell",
    "update_cell",
]
