"""Exception hierarchy for the history engine.

Every failure here is structural (a snapshot that does not match the live
cells, or an action the codec does not know), so none of them is retried.
Snapshot save/load is all-or-nothing: an error aborts the whole call and no
partial result is returned.
"""

from __future__ import annotations

from typing import Any


class CellHistoryError(Exception):
    """Base class for all engine errors."""


class SnapshotError(CellHistoryError):
    """Base class for errors raised while encoding or decoding a snapshot."""


class MissingStoreIdError(SnapshotError):
    """A set/mutate action has no resolvable store identity.

    Raised on encode when the action's cell is not registered, and on decode
    when the record carries no ``storeId``.
    """

    def __init__(self, msg: Any, action_type: str) -> None:
        self.msg = msg
        self.action_type = action_type
        super().__init__(f"missing store id for {action_type} action {msg!r}")


class UnresolvedStoreIdError(SnapshotError):
    """A record names a ``storeId`` that is absent from the id→cell map."""

    def __init__(self, store_id: str) -> None:
        self.store_id = store_id
        super().__init__(f"no cell registered for store id {store_id!r}")


class UnknownActionTypeError(SnapshotError):
    """A record's ``type`` tag is outside the known set."""

    def __init__(self, tag: str) -> None:
        self.tag = tag
        super().__init__(f"unknown action type {tag!r}")


class UnknownActionVariantError(SnapshotError):
    """An action instance has no entry in the tag table."""

    def __init__(self, action: object) -> None:
        self.action = action
        super().__init__(f"no snapshot tag for action class {type(action).__name__}")


class InvalidSnapshotIndexError(SnapshotError):
    """A snapshot's ``index`` does not point into its action list."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(f"snapshot index {index} out of range for {length} actions")


class PatchApplyError(CellHistoryError):
    """The patch collaborator could not apply a forward or inverse patch."""


__all__ = [
    "CellHistoryError",
    "SnapshotError",
    "MissingStoreIdError",
    "UnresolvedStoreIdError",
    "UnknownActionTypeError",
    "UnknownActionVariantError",
    "InvalidSnapshotIndexError",
    "PatchApplyError",
]
