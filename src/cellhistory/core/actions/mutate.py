"""Mutate action: apply a structural patch to a cell's value."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..patches import MutatePatch, PatchApplier, apply_patches
from .action import UndoAction, require_store


class MutateAction(UndoAction):
    """
    Moves a cell's value with a pre-computed forward/inverse patch pair.

    Both directions patch the cell's *current* value, so apply and revert
    must alternate; the history stack guarantees that.
    """

    __slots__ = ("applier",)

    def __init__(
        self,
        msg: Any,
        store: Any,
        patch: MutatePatch | Mapping[str, Any],
        applier: PatchApplier = apply_patches,
    ) -> None:
        super().__init__(msg, require_store(store, "MutateAction"), MutatePatch.from_data(patch))
        self.applier = applier

    def apply(self) -> None:
        self.patch.check()
        self.store.set(self.applier(self.store.get(), self.patch.patches))

    def revert(self) -> None:
        self.patch.check()
        self.store.set(self.applier(self.store.get(), self.patch.inverse_patches))


__all__ = ["MutateAction"]
