"""Unit tests for the default patch applier and the patch pair container."""

from __future__ import annotations

from typing import Any

import pytest

from cellhistory.core.errors import PatchApplyError
from cellhistory.core.patches import MutatePatch, apply_patches


def test_apply_replace_with_list_path() -> None:
    """A list path addresses nested dict keys and list indices."""
    value = {"items": [{"done": False}, {"done": False}]}
    out = apply_patches(value, [{"op": "replace", "path": ["items", 1, "done"], "value": True}])
    assert out == {"items": [{"done": False}, {"done": True}]}


def test_apply_does_not_mutate_input() -> None:
    """The cell's old value must stay intact for its subscribers."""
    value: dict[str, Any] = {"tags": ["a"]}
    out = apply_patches(value, [{"op": "add", "path": ["tags", "-"], "value": "b"}])
    assert out == {"tags": ["a", "b"]}
    assert value == {"tags": ["a"]}


def test_apply_escapes_special_characters_in_keys() -> None:
    """Keys containing '/' or '~' are escaped when building the pointer."""
    value = {"a/b": 1, "c~d": 2}
    out = apply_patches(
        value,
        [
            {"op": "replace", "path": ["a/b"], "value": 10},
            {"op": "remove", "path": ["c~d"]},
        ],
    )
    assert out == {"a/b": 10}


def test_apply_accepts_pointer_strings() -> None:
    """A JSON pointer string path is passed through unchanged."""
    assert apply_patches({"x": 1}, [{"op": "replace", "path": "/x", "value": 2}]) == {"x": 2}


def test_apply_whole_value_replacement() -> None:
    """An empty path replaces the whole value."""
    assert apply_patches({"x": 1}, [{"op": "replace", "path": [], "value": [1, 2]}]) == [1, 2]


@pytest.mark.parametrize(  # type: ignore[misc]
    "patches",
    [
        [{"path": ["x"], "value": 1}],
        [{"op": "remove", "path": ["missing"]}],
        [{"op": "frobnicate", "path": ["x"]}],
        [None],
        [1],
        ["ab"],
        None,
    ],
)
def test_apply_malformed_raises_patch_apply_error(patches: Any) -> None:
    """Bad operations surface as `PatchApplyError`."""
    with pytest.raises(PatchApplyError):
        apply_patches({"x": 0}, patches)


def test_mutate_patch_wire_form() -> None:
    """`to_data`/`from_data` use the camelCase wire keys."""
    fwd = [{"op": "replace", "path": ["value"], "value": 1}]
    inv = [{"op": "replace", "path": ["value"], "value": 0}]
    patch = MutatePatch(patches=fwd, inverse_patches=inv)
    data = patch.to_data()
    assert data == {"patches": fwd, "inversePatches": inv}
    assert MutatePatch.from_data(data) == patch
    assert MutatePatch.from_data(patch) is patch


@pytest.mark.parametrize(  # type: ignore[misc]
    "data",
    [
        None,
        "garbage",
        {"patches": None, "inversePatches": []},
        {"patch": [], "inversePatches": []},
    ],
)
def test_mutate_patch_keeps_malformed_payload(data: Any) -> None:
    """A badly shaped payload is kept verbatim and refuses to be applied."""
    patch = MutatePatch.from_data(data)
    assert not patch.valid
    assert patch.to_data() == data
    with pytest.raises(PatchApplyError):
        patch.check()


def test_well_formed_mutate_patch_passes_check() -> None:
    patch = MutatePatch.from_data({"patches": [], "inversePatches": []})
    assert patch.valid
    patch.check()
