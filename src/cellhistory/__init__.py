"""cellhistory: undo/redo history over independently updatable cells.

Public entry points are re-exported here::

    from cellhistory import HistoryStack, WritableCell, set_cell
"""

from __future__ import annotations

from cellhistory.core.actions import (
    GroupAction,
    InitAction,
    MutateAction,
    SetAction,
    UndoAction,
)
from cellhistory.core.cells import Cell, CellRegistry, WritableCell
from cellhistory.core.errors import (
    CellHistoryError,
    InvalidSnapshotIndexError,
    MissingStoreIdError,
    PatchApplyError,
    SnapshotError,
    UnknownActionTypeError,
    UnknownActionVariantError,
    UnresolvedStoreIdError,
)
from cellhistory.core.history import (
    HistoryStack,
    HistoryState,
    group,
    mutate_cell,
    set_cell,
    update_cell,
)
from cellhistory.core.patches import MutatePatch, apply_patches
from cellhistory.core.snapshot import HistorySnapshot, SnapshotRecord

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Cell",
    "CellHistoryError",
    "CellRegistry",
    "GroupAction",
    "HistorySnapshot",
    "HistoryStack",
    "HistoryState",
    "InitAction",
    "InvalidSnapshotIndexError",
    "MissingStoreIdError",
    "MutateAction",
    "MutatePatch",
    "PatchApplyError",
    "SetAction",
    "SnapshotError",
    "SnapshotRecord",
    "UndoAction",
    "UnknownActionTypeError",
    "UnknownActionVariantError",
    "UnresolvedStoreIdError",
    "WritableCell",
    "apply_patches",
    "group",
    "mutate_cell",
    "set_cell",
    "update_cell",
]
