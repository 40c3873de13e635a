"""
Patch capability for mutate actions.

The engine never computes diffs. Callers hand it a forward patch list and the
inverse list that undoes it, and the engine only stores and routes them. This
module defines:

- :class:`MutatePatch`: the ``{patches, inversePatches}`` pair carried by a
  mutate action and written verbatim into snapshots.
- :data:`PatchApplier`: the ``(value, patches) -> new_value`` callable a
  mutate action uses to move a cell's value.
- :func:`apply_patches`: the default applier, backed by ``jsonpatch``.

Patch format
------------
Each operation is a mapping ``{"op", "path", "value"?}``. ``path`` is a list
of keys and list indices (``["items", 0, "done"]``); a JSON pointer string is
also accepted and passed through unchanged. Supported ops are those of
RFC 6902 (``add``, ``remove``, ``replace``, ``move``, ``copy``, ``test``).
"""

from __future__ import annotations

import copy
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

import jsonpatch
import jsonpointer

from .errors import PatchApplyError

PatchOp = Mapping[str, Any]
PatchApplier = Callable[[Any, Sequence[PatchOp]], Any]


@dataclass(frozen=True, slots=True)
class MutatePatch:
    """
    Forward and inverse patch lists for one mutation.

    Attributes
    ----------
    patches : list[dict[str, Any]]
        Operations that move the cell from its old value to its new value.
    inverse_patches : list[dict[str, Any]]
        Operations that move it back.
    raw : Any
        The snapshot payload as received, kept when it is not a well-formed
        ``{patches, inversePatches}`` mapping. ``None`` for well-formed pairs.
    valid : bool
        False when the pair was decoded from a malformed payload; the patch
        lists are then empty and must not be applied.
    """

    patches: list[dict[str, Any]] = field(default_factory=list)
    inverse_patches: list[dict[str, Any]] = field(default_factory=list)
    raw: Any = None
    valid: bool = True

    def check(self) -> None:
        """Raise :class:`PatchApplyError` if the pair came from a malformed payload."""
        if not self.valid:
            raise PatchApplyError(f"malformed mutate payload: {self.raw!r}")

    def to_data(self) -> dict[str, Any]:
        """Return the snapshot payload (camelCase keys, as on the wire)."""
        if not self.valid:
            return copy.deepcopy(self.raw)
        return {
            "patches": copy.deepcopy(self.patches),
            "inversePatches": copy.deepcopy(self.inverse_patches),
        }

    @classmethod
    def from_data(cls, data: Any) -> MutatePatch:
        """
        Rebuild a patch pair from a snapshot payload.

        Only the shape is checked: both keys must be present and hold lists.
        Anything else yields an invalid pair that keeps ``data`` verbatim,
        so the failure surfaces as :class:`PatchApplyError` on apply/revert
        and a re-saved snapshot carries the payload unchanged. The
        operations themselves are not validated here.
        """
        if isinstance(data, MutatePatch):
            return data
        if isinstance(data, Mapping):
            patches = data.get("patches")
            inverse = data.get("inversePatches")
            if isinstance(patches, (list, tuple)) and isinstance(inverse, (list, tuple)):
                return cls(patches=list(patches), inverse_patches=list(inverse))
        return cls(raw=copy.deepcopy(data), valid=False)


def _to_pointer(path: Any) -> str:
    """Convert a list path to an RFC 6901 pointer; strings pass through."""
    if isinstance(path, str):
        return path
    return jsonpointer.JsonPointer.from_parts([str(p) for p in path]).path


def apply_patches(value: Any, patches: Sequence[PatchOp]) -> Any:
    """
    Return a new value with ``patches`` applied to ``value``.

    ``value`` itself is left untouched so a cell's previous value is never
    mutated behind its subscribers' backs.

    Raises
    ------
    PatchApplyError
        If an operation is malformed or does not fit ``value``.
    """
    try:
        ops: list[dict[str, Any]] = []
        for op in patches:
            converted = dict(op)
            if "path" in converted:
                converted["path"] = _to_pointer(converted["path"])
            if "from" in converted:
                converted["from"] = _to_pointer(converted["from"])
            ops.append(converted)
        return jsonpatch.apply_patch(value, ops, in_place=False)
    except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as exc:
        raise PatchApplyError(f"failed to apply patch: {exc}") from exc
    except (TypeError, ValueError, KeyError, AttributeError) as exc:
        # Non-mapping operations, or operation mappings jsonpatch cannot read
        raise PatchApplyError(f"malformed patch operation: {exc!r}") from exc


__all__ = ["MutatePatch", "PatchApplier", "PatchOp", "apply_patches"]
