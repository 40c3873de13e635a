"""Snapshot wire models and the action codec."""

from __future__ import annotations

from .codec import ACTION_TAGS, action_tag, decode_actions, encode_actions
from .records import HistorySnapshot, SnapshotRecord

__all__ = [
    "ACTION_TAGS",
    "HistorySnapshot",
    "SnapshotRecord",
    "action_tag",
    "decode_actions",
    "encode_actions",
]
