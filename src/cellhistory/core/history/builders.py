"""
Helpers that perform a change on a cell and record it in one call.

Each helper builds the action *before* touching the cell (so the previous
value is captured), applies it, and pushes it to ``target``. ``target`` can
be a :class:`HistoryStack` or a :class:`GroupAction`; both expose ``push``.

Example
-------
>>> stack = HistoryStack("start")
>>> count = WritableCell(0)
>>> _ = set_cell(stack, "increment", count, 1)
>>> with group(stack, "reset") as g:
...     _ = set_cell(g, "zero", count, 0)
>>> stack.undo(); count.get()
1
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any, Protocol

from ..actions import GroupAction, MutateAction, SetAction, UndoAction
from ..patches import MutatePatch, PatchApplier, PatchOp, apply_patches


class ActionTarget(Protocol):
    """Anything actions can be recorded into."""

    def push(self, action: UndoAction) -> None: ...


def set_cell(target: ActionTarget, msg: Any, cell: Any, value: Any) -> SetAction:
    """Write ``value`` to ``cell`` and record it as a set action."""
    action = SetAction(msg, cell, value)
    action.apply()
    target.push(action)
    return action


def update_cell(
    target: ActionTarget, msg: Any, cell: Any, fn: Callable[[Any], Any]
) -> SetAction:
    """Write ``fn(current_value)`` to ``cell`` and record it as a set action."""
    return set_cell(target, msg, cell, fn(cell.get()))


def mutate_cell(
    target: ActionTarget,
    msg: Any,
    cell: Any,
    patches: Sequence[PatchOp],
    inverse_patches: Sequence[PatchOp],
    applier: PatchApplier = apply_patches,
) -> MutateAction:
    """Apply ``patches`` to ``cell`` and record the pair as a mutate action."""
    patch = MutatePatch(
        patches=[dict(op) for op in patches],
        inverse_patches=[dict(op) for op in inverse_patches],
    )
    action = MutateAction(msg, cell, patch, applier)
    action.apply()
    target.push(action)
    return action


@contextmanager
def group(target: ActionTarget, msg: Any) -> Iterator[GroupAction]:
    """
    Collect everything recorded inside the block into one group action.

    The group is pushed to ``target`` when the block exits normally and holds
    at least one child. If the block raises, the children recorded so far are
    reverted (last first) and the exception propagates; nothing is pushed.
    """
    action = GroupAction(msg)
    try:
        yield action
    except BaseException:
        action.revert()
        raise
    if len(action):
        target.push(action)


__all__ = ["ActionTarget", "group", "mutate_cell", "set_cell", "update_cell"]
