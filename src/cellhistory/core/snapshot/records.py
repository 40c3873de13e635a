"""
Wire models for history snapshots.

A snapshot is the portable form of a history: every live cell reference is
replaced by the string id it was registered under. The shape is::

    {"actions": [SnapshotRecord, ...], "index": int}

    SnapshotRecord = {"type": "init" | "group" | "set" | "mutate",
                      "storeId"?: str, "msg": Any, "data"?: Any}

``storeId`` is present only for set/mutate records and ``data`` is absent for
init records. For a group, ``data`` is the nested list of child records.

Notes
-----
- ``type`` is kept as a plain ``str`` rather than a ``Literal`` so that an
  unknown tag reaches the codec and fails with ``UnknownActionTypeError``
  instead of a generic validation error.
- Records are stored as plain dicts inside :class:`HistorySnapshot`; the
  codec validates each one through :class:`SnapshotRecord` when decoding.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ActionTag = Literal["init", "group", "set", "mutate"]


class SnapshotRecord(BaseModel):
    """One serialized action."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    type: str = Field(description="Action tag, e.g. 'set'")
    store_id: str | None = Field(
        default=None, alias="storeId", description="Id of the mutated cell"
    )
    msg: Any = Field(description="Human-readable label of the action")
    data: Any = Field(default=None, description="Variant payload")


class HistorySnapshot(BaseModel):
    """Serialized history: the action records plus the current position."""

    actions: list[dict[str, Any]] = Field(default_factory=list)
    index: int = Field(description="Position of the current action in `actions`")

    def to_dict(self) -> dict[str, Any]:
        """Return the snapshot as plain JSON-safe data."""
        return self.model_dump()

    def to_json(self, indent: int | None = None) -> str:
        """Serialize the snapshot to a JSON string."""
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, text: str | bytes) -> HistorySnapshot:
        """Parse and validate a snapshot from JSON text."""
        return cls.model_validate_json(text)


__all__ = ["ActionTag", "SnapshotRecord", "HistorySnapshot"]
