"""
Snapshot codec: actions <-> plain records.

Encoding walks a list of actions and turns each one into a record, replacing
its cell with the id found in a :class:`CellRegistry`. Decoding walks records
and rebuilds actions against the cells registered under those ids.

The table :data:`ACTION_CODECS` is the single place that knows every variant:
its tag, whether it needs a cell, and how its payload is written and read.
Adding a variant means adding one entry here.

Both directions are all-or-nothing. Any error aborts the whole call and
nothing partial is returned.
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from ..actions import GroupAction, InitAction, MutateAction, SetAction, UndoAction
from ..cells import CellRegistry
from ..errors import (
    MissingStoreIdError,
    SnapshotError,
    UnknownActionTypeError,
    UnknownActionVariantError,
    UnresolvedStoreIdError,
)
from ..patches import MutatePatch
from ..settings import get_logger
from .records import SnapshotRecord

logger = get_logger(__name__)

RawRecord = Mapping[str, Any] | SnapshotRecord
CellsArg = CellRegistry | Mapping[Any, Any]


@dataclass(frozen=True, slots=True)
class ActionCodec:
    """How one action variant is written to and read from a record."""

    tag: str
    action_type: type[UndoAction]
    needs_store: bool
    encode_data: Callable[[Any, CellRegistry], Any] | None
    decode: Callable[[SnapshotRecord, Any, CellRegistry], UndoAction]


def _decode_group(record: SnapshotRecord, _store: Any, registry: CellRegistry) -> UndoAction:
    children = record.data if record.data is not None else []
    if not isinstance(children, list):
        raise SnapshotError(f"group {record.msg!r} data must be a list of records")
    return GroupAction(record.msg, [_decode_record(child, registry) for child in children])


ACTION_CODECS: tuple[ActionCodec, ...] = (
    ActionCodec(
        tag="init",
        action_type=InitAction,
        needs_store=False,
        encode_data=None,
        decode=lambda record, _store, _registry: InitAction(record.msg),
    ),
    ActionCodec(
        tag="group",
        action_type=GroupAction,
        needs_store=False,
        encode_data=lambda action, registry: [_encode_action(a, registry) for a in action.patch],
        decode=_decode_group,
    ),
    ActionCodec(
        tag="set",
        action_type=SetAction,
        needs_store=True,
        encode_data=lambda action, _registry: copy.deepcopy(action.patch.value),
        decode=lambda record, store, _registry: SetAction(
            record.msg, store, copy.deepcopy(record.data)
        ),
    ),
    ActionCodec(
        tag="mutate",
        action_type=MutateAction,
        needs_store=True,
        encode_data=lambda action, _registry: action.patch.to_data(),
        decode=lambda record, store, _registry: MutateAction(
            record.msg, store, MutatePatch.from_data(record.data)
        ),
    ),
)

_BY_TYPE: dict[type[UndoAction], ActionCodec] = {c.action_type: c for c in ACTION_CODECS}
_BY_TAG: dict[str, ActionCodec] = {c.tag: c for c in ACTION_CODECS}

# Variant -> tag, exposed for callers that only need the name
ACTION_TAGS: dict[type[UndoAction], str] = {c.action_type: c.tag for c in ACTION_CODECS}


def action_tag(action: UndoAction) -> str:
    """
    Return the snapshot tag of ``action``.

    Matching is on the exact class; a subclass of a known variant is not
    silently written under its parent's tag.

    Raises
    ------
    UnknownActionVariantError
        If the action's class has no entry in the tag table.
    """
    codec = _BY_TYPE.get(type(action))
    if codec is None:
        raise UnknownActionVariantError(action)
    return codec.tag


def _encode_action(action: UndoAction, registry: CellRegistry) -> dict[str, Any]:
    codec = _BY_TYPE.get(type(action))
    if codec is None:
        raise UnknownActionVariantError(action)

    record: dict[str, Any] = {"type": codec.tag}
    if codec.needs_store or action.store is not None:
        store_id = registry.id_of(action.store) if action.store is not None else None
        if store_id is None:
            raise MissingStoreIdError(action.msg, codec.tag)
        record["storeId"] = store_id
    record["msg"] = action.msg
    if codec.encode_data is not None:
        record["data"] = codec.encode_data(action, registry)
    return record


def _decode_record(raw: RawRecord, registry: CellRegistry) -> UndoAction:
    record = raw if isinstance(raw, SnapshotRecord) else SnapshotRecord.model_validate(raw)

    codec = _BY_TAG.get(record.type)
    if codec is None:
        raise UnknownActionTypeError(record.type)

    store = None
    if codec.needs_store:
        if not record.store_id:
            raise MissingStoreIdError(record.msg, codec.tag)
        store = registry.cell_for(record.store_id)
        if store is None:
            raise UnresolvedStoreIdError(record.store_id)
    return codec.decode(record, store, registry)


def encode_actions(actions: Sequence[UndoAction], cells: CellsArg) -> list[dict[str, Any]]:
    """
    Encode ``actions`` into a list of plain records.

    Parameters
    ----------
    actions : Sequence[UndoAction]
        Actions in history order.
    cells : CellRegistry | Mapping
        Registry (or mapping accepted by :meth:`CellRegistry.coerce`) that
        names every cell the actions reference.

    Raises
    ------
    MissingStoreIdError
        If an action references a cell with no registered id.
    UnknownActionVariantError
        If an action's class is not in the tag table.
    """
    registry = CellRegistry.coerce(cells)
    try:
        return [_encode_action(action, registry) for action in actions]
    except SnapshotError as exc:
        logger.warning("Snapshot encode failed: %s", exc)
        raise


def decode_actions(records: Sequence[RawRecord], cells: CellsArg) -> list[UndoAction]:
    """
    Decode plain records back into actions bound to live cells.

    Set actions capture their previous value from the cell as it is now,
    exactly as if they had just been constructed. Patch payloads are not
    validated; a malformed one fails later when the action is applied.

    Raises
    ------
    MissingStoreIdError
        If a set/mutate record has no ``storeId``.
    UnresolvedStoreIdError
        If a ``storeId`` is not registered.
    UnknownActionTypeError
        If a record's ``type`` is not a known tag.
    pydantic.ValidationError
        If a record lacks ``type`` or ``msg``.
    """
    registry = CellRegistry.coerce(cells)
    try:
        return [_decode_record(record, registry) for record in records]
    except SnapshotError as exc:
        logger.warning("Snapshot decode failed: %s", exc)
        raise


__all__ = [
    "ACTION_CODECS",
    "ACTION_TAGS",
    "ActionCodec",
    "action_tag",
    "decode_actions",
    "encode_actions",
]
