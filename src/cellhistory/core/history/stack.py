"""
Linear undo/redo history over reversible actions.

Data model
----------
A :class:`HistoryStack` owns three pieces of state:

- ``actions``: recorded actions, never empty; ``actions[0]`` is an Init
  action created with the stack.
- ``index``: position of the current action (``0 <= index < len(actions)``).
- ``ticker``: strictly increasing counter. ``push`` uses it to mint sequence
  numbers, and every undo/redo/goto bumps it so observers can tell states
  apart.

Pushing after an undo discards the redo branch; the history never forks.

Observers
---------
``subscribe(callback)`` delivers a :class:`HistoryState` immediately and then
once per logical operation (``push``, ``undo``, ``redo``, ``goto``,
``clear``, ``load_snapshot``). A multi-step ``goto`` notifies once. Calls
that leave the state untouched (undo at the start, redo at the end, goto to
an unknown sequence number) do not notify.

Everything is synchronous; each call runs to completion before returning.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from ..actions import InitAction, UndoAction
from ..cells import CellRegistry
from ..errors import InvalidSnapshotIndexError
from ..settings import get_logger, load_settings
from ..snapshot.codec import decode_actions, encode_actions
from ..snapshot.records import HistorySnapshot
from .state import HistoryState

logger = get_logger(__name__)

HistoryObserver = Callable[[HistoryState], None]


class HistoryStack:
    """
    Undo/redo engine with snapshot save and load.

    Parameters
    ----------
    init_msg : Any | None
        Label of the Init action. Defaults to ``settings.init_msg``.
    """

    __slots__ = ("_init_msg", "_actions", "_index", "_ticker", "_observers")

    def __init__(self, init_msg: Any | None = None) -> None:
        self._init_msg: Any = init_msg if init_msg is not None else load_settings().init_msg
        self._actions: list[UndoAction] = []
        self._index: int = 0
        self._ticker: int = 0
        self._observers: list[HistoryObserver] = []
        self._reset()

    def _reset(self) -> None:
        init = InitAction(self._init_msg)
        init.seq_nbr = 0
        self._actions = [init]
        self._index = 0
        self._ticker = 0

    # ------------------------------- Read API -------------------------------

    @property
    def actions(self) -> tuple[UndoAction, ...]:
        return tuple(self._actions)

    @property
    def index(self) -> int:
        return self._index

    @property
    def ticker(self) -> int:
        return self._ticker

    @property
    def can_undo(self) -> bool:
        return self._index > 0

    @property
    def can_redo(self) -> bool:
        return self._index < len(self._actions) - 1

    @property
    def selected_action(self) -> UndoAction:
        return self._actions[self._index]

    @property
    def state(self) -> HistoryState:
        """Current immutable view of the stack."""
        return HistoryState(actions=tuple(self._actions), index=self._index, ticker=self._ticker)

    def __len__(self) -> int:
        return len(self._actions)

    # ----------------------------- Observer API -----------------------------

    def subscribe(self, callback: HistoryObserver) -> Callable[[], None]:
        """
        Register ``callback`` and call it once with the current state.

        Returns
        -------
        Callable[[], None]
            Function that removes the subscription.
        """
        self._observers.append(callback)
        callback(self.state)

        def unsubscribe() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _notify(self) -> None:
        state = self.state
        for callback in list(self._observers):
            callback(state)

    # ------------------------------ History API -----------------------------

    def push(self, action: UndoAction) -> None:
        """
        Record ``action`` as the new current action.

        The action is assumed to be applied already; ``push`` only does the
        bookkeeping. Anything after the current position is discarded.
        """
        self._ticker += 1
        action.seq_nbr = self._ticker
        dropped = len(self._actions) - self._index - 1
        del self._actions[self._index + 1 :]
        self._actions.append(action)
        self._index = len(self._actions) - 1
        logger.debug("push %r (dropped %d redo entries)", action, dropped)
        self._notify()

    def undo(self) -> None:
        """Revert the current action and step back one position."""
        if self._index <= 0:
            return
        self._actions[self._index].revert()
        self._index -= 1
        self._ticker += 1
        logger.debug("undo -> index %d", self._index)
        self._notify()

    def redo(self) -> None:
        """Step forward one position and apply the action found there."""
        if self._index >= len(self._actions) - 1:
            return
        self._index += 1
        self._actions[self._index].apply()
        self._ticker += 1
        logger.debug("redo -> index %d", self._index)
        self._notify()

    def goto(self, seq_nbr: int) -> None:
        """
        Move to the action carrying ``seq_nbr``, one step at a time.

        Moving back reverts the current action and then steps; moving forward
        steps and then applies. Unknown sequence numbers are ignored.
        """
        target = next(
            (i for i, action in enumerate(self._actions) if action.seq_nbr == seq_nbr),
            None,
        )
        if target is None:
            logger.debug("goto %r: no such sequence number", seq_nbr)
            return

        step = 1 if target > self._index else -1
        while self._index != target:
            if step < 0:
                self._actions[self._index].revert()
            else:
                self._actions[self._index + 1].apply()
            self._index += step

        self._ticker += 1
        logger.debug("goto %r -> index %d", seq_nbr, self._index)
        self._notify()

    def clear(self) -> None:
        """Drop all history and start over from a single Init action."""
        self._reset()
        logger.debug("clear")
        self._notify()

    # ----------------------------- Snapshot API -----------------------------

    def create_snapshot(self, cells: CellRegistry | Mapping[Any, Any]) -> HistorySnapshot:
        """
        Serialize the whole history.

        Parameters
        ----------
        cells : CellRegistry | Mapping
            Names for every cell referenced by the history; see
            :meth:`CellRegistry.coerce` for the accepted shapes.
        """
        snapshot = HistorySnapshot(
            actions=encode_actions(self._actions, cells),
            index=self._index,
        )
        logger.info(
            "Created snapshot of %d actions at index %d", len(snapshot.actions), snapshot.index
        )
        return snapshot

    def load_snapshot(
        self,
        snapshot: HistorySnapshot | Mapping[str, Any],
        cells: CellRegistry | Mapping[Any, Any],
    ) -> None:
        """
        Replace this history with the one described by ``snapshot``.

        Nothing is applied or reverted: the cells are expected to already
        hold the values matching ``snapshot.index``. Sequence numbers are
        reassigned from 0 in order. The stack is left untouched if decoding
        fails.

        Raises
        ------
        InvalidSnapshotIndexError
            If ``index`` is out of range and index validation is enabled
            (``CELLHISTORY_VALIDATE_INDEX``), or the snapshot has no actions.
        """
        if not isinstance(snapshot, HistorySnapshot):
            snapshot = HistorySnapshot.model_validate(snapshot)

        actions = decode_actions(snapshot.actions, cells)
        if not actions:
            raise InvalidSnapshotIndexError(snapshot.index, 0)
        if load_settings().validate_snapshot_index and not 0 <= snapshot.index < len(actions):
            logger.warning("Rejected snapshot index %d (%d actions)", snapshot.index, len(actions))
            raise InvalidSnapshotIndexError(snapshot.index, len(actions))

        for ticker, action in enumerate(actions):
            action.seq_nbr = ticker
        self._actions = actions
        self._index = snapshot.index
        self._ticker = len(actions)
        logger.info("Loaded snapshot of %d actions at index %d", len(actions), self._index)
        self._notify()


__all__ = ["HistoryStack", "HistoryObserver"]
