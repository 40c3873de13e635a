"""Unit tests for the snapshot codec (tag table, encode, decode)."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from cellhistory.core.actions import GroupAction, InitAction, MutateAction, SetAction, UndoAction
from cellhistory.core.cells import CellRegistry, WritableCell
from cellhistory.core.errors import (
    MissingStoreIdError,
    PatchApplyError,
    SnapshotError,
    UnknownActionTypeError,
    UnknownActionVariantError,
    UnresolvedStoreIdError,
)
from cellhistory.core.patches import MutatePatch
from cellhistory.core.snapshot.codec import (
    ACTION_CODECS,
    ACTION_TAGS,
    action_tag,
    decode_actions,
    encode_actions,
)

from .helpers import FooAction

MUTATE_DATA: dict[str, Any] = {
    "patches": [{"op": "replace", "path": ["value"], "value": 1}],
    "inversePatches": [{"op": "replace", "path": ["value"], "value": 0}],
}


# ------------------------------- tag table ----------------------------------


@pytest.mark.parametrize(  # type: ignore[misc]
    ("action", "tag"),
    [
        (InitAction("InitAction"), "init"),
        (GroupAction("GroupAction"), "group"),
        (SetAction("SetAction", WritableCell(0), 1), "set"),
        (MutateAction("MutateAction", WritableCell({}), MutatePatch()), "mutate"),
    ],
)
def test_action_tag(action: UndoAction, tag: str) -> None:
    """Every variant has exactly one tag."""
    assert action_tag(action) == tag


def test_tag_table_is_total_and_unique() -> None:
    """Tags and variants are in one-to-one correspondence."""
    assert set(ACTION_TAGS.values()) == {"init", "group", "set", "mutate"}
    assert len({c.tag for c in ACTION_CODECS}) == len(ACTION_CODECS) == len(ACTION_TAGS)


def test_action_tag_unknown_variant_raises() -> None:
    """An action class outside the table is rejected, not tagged `None`."""
    with pytest.raises(UnknownActionVariantError):
        action_tag(FooAction())


def test_subclass_of_known_variant_is_not_tagged_as_parent() -> None:
    """Lookup is on the exact class."""

    class LoudSet(SetAction):
        pass

    with pytest.raises(UnknownActionVariantError):
        action_tag(LoudSet("x", WritableCell(0), 1))


# -------------------------------- decode ------------------------------------


def test_decode_init_action() -> None:
    """An init record needs no cells."""
    actions = decode_actions([{"type": "init", "msg": "InitAction"}], {})
    assert len(actions) == 1
    assert isinstance(actions[0], InitAction)
    assert actions[0].store is None
    assert actions[0].msg == "InitAction"
    actions[0].apply()
    actions[0].revert()


def test_decode_group_action() -> None:
    """Group children are decoded and bound to their cells."""
    saved = {
        "type": "group",
        "msg": "GroupAction",
        "data": [{"type": "set", "storeId": "store1", "msg": "SetAction", "data": 1}],
    }
    store1 = WritableCell(0)
    actions = decode_actions([saved], {"store1": store1})

    assert len(actions) == 1
    group = actions[0]
    assert isinstance(group, GroupAction)
    assert group.store is None and group.msg == "GroupAction"
    assert isinstance(group.actions[0], SetAction)

    group.apply()
    assert store1.get() == 1
    group.revert()
    assert store1.get() == 0


def test_decode_set_action() -> None:
    """A set record is bound to the registered cell."""
    store1 = WritableCell(0)
    actions = decode_actions(
        [{"type": "set", "storeId": "store1", "msg": "SetAction", "data": 1}],
        CellRegistry({"store1": store1}),
    )
    action = actions[0]
    assert isinstance(action, SetAction)
    assert action.store is store1
    assert action.msg == "SetAction"

    action.apply()
    assert store1.get() == 1
    action.revert()
    assert store1.get() == 0


def test_decode_mutate_action() -> None:
    """A mutate record carries its forward and inverse patches."""
    store1: WritableCell[Any] = WritableCell({"value": 0})
    actions = decode_actions(
        [{"type": "mutate", "storeId": "store1", "msg": "MutateAction", "data": MUTATE_DATA}],
        {"store1": store1},
    )
    action = actions[0]
    assert isinstance(action, MutateAction)
    assert action.store is store1

    action.apply()
    assert store1.get() == {"value": 1}
    action.revert()
    assert store1.get() == {"value": 0}


@pytest.mark.parametrize("tag", ["set", "mutate"])  # type: ignore[misc]
def test_decode_without_store_id_raises(tag: str) -> None:
    """Set and mutate records must name their cell."""
    record = {"type": tag, "msg": "no store", "data": MUTATE_DATA if tag == "mutate" else 1}
    with pytest.raises(MissingStoreIdError):
        decode_actions([record], {"store1": WritableCell(0)})


def test_decode_unregistered_store_id_raises() -> None:
    """A store id with no live cell is a distinct error."""
    record = {"type": "set", "storeId": "ghost", "msg": "SetAction", "data": 1}
    with pytest.raises(UnresolvedStoreIdError) as excinfo:
        decode_actions([record], {"store1": WritableCell(0)})
    assert excinfo.value.store_id == "ghost"


def test_decode_unknown_type_raises() -> None:
    """A tag outside the table is rejected."""
    record = {"type": "foo", "storeId": "store1", "msg": "FooAction"}
    with pytest.raises(UnknownActionTypeError) as excinfo:
        decode_actions([record], {"store1": WritableCell(0)})
    assert excinfo.value.tag == "foo"


def test_decode_error_inside_group_aborts_everything() -> None:
    """A bad nested record fails the whole call."""
    records = [
        {"type": "init", "msg": "start"},
        {"type": "group", "msg": "g", "data": [{"type": "set", "msg": "no id", "data": 1}]},
    ]
    with pytest.raises(MissingStoreIdError):
        decode_actions(records, {})


def test_decode_group_with_non_list_data_raises() -> None:
    """Group payloads must be record lists."""
    with pytest.raises(SnapshotError):
        decode_actions([{"type": "group", "msg": "g", "data": {"not": "a list"}}], {})


def test_decode_record_without_msg_fails_validation() -> None:
    """Records are validated for their required keys."""
    with pytest.raises(ValidationError):
        decode_actions([{"type": "init"}], {})


def test_decode_does_not_validate_patch_payload() -> None:
    """Malformed mutate data only fails once the action is applied."""
    record = {
        "type": "mutate",
        "storeId": "s",
        "msg": "broken",
        "data": {"patches": [{"path": ["x"]}], "inversePatches": []},
    }
    (action,) = decode_actions([record], {"s": WritableCell({"x": 0})})
    with pytest.raises(PatchApplyError):
        action.apply()


@pytest.mark.parametrize(  # type: ignore[misc]
    "record",
    [
        {"type": "mutate", "storeId": "s", "msg": "no data"},
        {"type": "mutate", "storeId": "s", "msg": "text", "data": "garbage"},
        {"type": "mutate", "storeId": "s", "msg": "null", "data": {"patches": None}},
        {
            "type": "mutate",
            "storeId": "s",
            "msg": "misspelled",
            "data": {"patch": [], "inversePatch": []},
        },
    ],
)
def test_decode_malformed_mutate_payload_fails_on_apply_and_revert(
    record: dict[str, Any],
) -> None:
    """A badly shaped mutate payload decodes, then refuses to run either way."""
    cell: WritableCell[Any] = WritableCell({"x": 0})
    (action,) = decode_actions([record], {"s": cell})
    with pytest.raises(PatchApplyError):
        action.apply()
    with pytest.raises(PatchApplyError):
        action.revert()
    assert cell.get() == {"x": 0}
    # re-encoding keeps the payload as it was received
    (saved,) = encode_actions([action], {"s": cell})
    assert saved.get("data") == record.get("data")


# -------------------------------- encode ------------------------------------


def test_encode_init_action() -> None:
    """Init records carry only type and msg."""
    assert encode_actions([InitAction("InitAction")], {}) == [
        {"type": "init", "msg": "InitAction"}
    ]


def test_encode_group_action() -> None:
    """Group children are nested in `data`."""
    store1 = WritableCell(0)
    group = GroupAction("GroupAction")
    group.push(SetAction("SetAction", store1, 1))

    assert encode_actions([group], {store1: "store1"}) == [
        {
            "type": "group",
            "msg": "GroupAction",
            "data": [{"type": "set", "msg": "SetAction", "storeId": "store1", "data": 1}],
        }
    ]


def test_encode_set_action() -> None:
    """Set records carry the value being written."""
    store1 = WritableCell(0)
    saved = encode_actions([SetAction("SetAction", store1, 1)], {"store1": store1})
    assert saved == [{"type": "set", "storeId": "store1", "msg": "SetAction", "data": 1}]


def test_encode_set_action_copies_the_value() -> None:
    """Later in-place edits of the value do not leak into saved records."""
    store1: WritableCell[Any] = WritableCell([])
    value = ["a"]
    saved = encode_actions([SetAction("add", store1, value)], {"store1": store1})
    value.append("b")
    assert saved[0]["data"] == ["a"]


def test_encode_mutate_action() -> None:
    """Mutate records carry both patch lists under their wire keys."""
    store1: WritableCell[Any] = WritableCell({"value": 0})
    patch = MutatePatch.from_data(MUTATE_DATA)
    saved = encode_actions([MutateAction("MutateAction", store1, patch)], {store1: "store1"})
    assert saved == [
        {"type": "mutate", "storeId": "store1", "msg": "MutateAction", "data": MUTATE_DATA}
    ]


def test_encode_missing_store_id_raises() -> None:
    """A cell that is not registered cannot be named."""
    with pytest.raises(MissingStoreIdError):
        encode_actions([SetAction("SetAction", WritableCell(0), 1)], {})


def test_encode_resolves_cells_by_identity() -> None:
    """Two cells with equal values keep their own ids."""
    a, b = WritableCell(0), WritableCell(0)
    saved = encode_actions([SetAction("to b", b, 1)], {"a": a, "b": b})
    assert saved[0]["storeId"] == "b"


def test_encode_unknown_variant_raises() -> None:
    """The encoder never emits a record with an undefined type."""
    with pytest.raises(UnknownActionVariantError):
        encode_actions([InitAction("ok"), FooAction()], {})
