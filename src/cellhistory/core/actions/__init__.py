"""Reversible action variants: init, group, set and mutate."""

from __future__ import annotations

from .action import UndoAction
from .group import GroupAction
from .init import InitAction
from .mutate import MutateAction
from .set import SetAction, SetPatch

__all__ = [
    "UndoAction",
    "InitAction",
    "GroupAction",
    "SetAction",
    "SetPatch",
    "MutateAction",
]
