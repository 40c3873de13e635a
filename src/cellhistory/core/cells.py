"""
Reactive cells and the id registry used to serialize references to them.

A *cell* is a mutable container holding one current value. Cells belong to
the host application; the engine only reads and writes them while applying or
reverting actions. Anything that satisfies :class:`Cell` can be used, and
:class:`WritableCell` is a small default implementation.

Snapshots cannot hold live references, so every cell an action touches must
be known under a string id. :class:`CellRegistry` keeps that mapping in both
directions and matches cells by identity, never by equality: two distinct
cells holding equal values must still resolve to distinct ids.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

T = TypeVar("T")

Subscriber = Callable[[Any], None]
Unsubscriber = Callable[[], None]


@runtime_checkable
class Cell(Protocol):
    """Capability the engine needs from a host cell."""

    def get(self) -> Any: ...

    def set(self, value: Any) -> None: ...

    def subscribe(self, callback: Subscriber) -> Unsubscriber: ...


class WritableCell(Generic[T]):
    """
    Default in-process cell.

    ``subscribe`` calls the callback immediately with the current value and
    again after every ``set``; it returns a zero-argument unsubscribe function.
    """

    __slots__ = ("_value", "_subscribers")

    def __init__(self, value: T) -> None:
        self._value: T = value
        self._subscribers: list[Callable[[T], None]] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        # Copy: a subscriber may unsubscribe while being notified
        for callback in list(self._subscribers):
            callback(value)

    def update(self, fn: Callable[[T], T]) -> None:
        """Set the cell to ``fn(current_value)``."""
        self.set(fn(self._value))

    def subscribe(self, callback: Callable[[T], None]) -> Unsubscriber:
        self._subscribers.append(callback)
        callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        return f"WritableCell({self._value!r})"


class CellRegistry:
    """
    Bidirectional ``store_id <-> cell`` mapping keyed by cell identity.

    Attributes
    ----------
    _cells : dict[str, Cell]
        Forward lookup used when loading a snapshot.
    _ids : dict[int, str]
        Reverse lookup keyed by ``id(cell)``, used when saving one.
    """

    __slots__ = ("_cells", "_ids")

    def __init__(self, cells: Mapping[str, Any] | None = None) -> None:
        self._cells: dict[str, Any] = {}
        self._ids: dict[int, str] = {}
        for store_id, cell in (cells or {}).items():
            self.register(store_id, cell)

    @classmethod
    def coerce(cls, cells: CellRegistry | Mapping[Any, Any]) -> CellRegistry:
        """
        Build a registry from whatever the caller passed in.

        Accepts an existing registry (returned as-is), an ``id -> cell``
        mapping, or a ``cell -> id`` mapping. The direction is decided by the
        keys: a mapping whose keys are all strings is read as ``id -> cell``.
        """
        if isinstance(cells, CellRegistry):
            return cells
        if all(isinstance(key, str) for key in cells):
            return cls(cells)
        registry = cls()
        for cell, store_id in cells.items():
            registry.register(store_id, cell)
        return registry

    def register(self, store_id: str, cell: Any) -> None:
        """
        Record ``cell`` under ``store_id``.

        Raises
        ------
        ValueError
            If ``store_id`` is already bound to a different cell, or ``cell``
            is already registered under a different id.
        """
        bound = self._cells.get(store_id)
        if bound is not None and bound is not cell:
            raise ValueError(f"store id {store_id!r} is already bound to another cell")
        existing_id = self._ids.get(id(cell))
        if existing_id is not None and existing_id != store_id:
            raise ValueError(f"cell is already registered as {existing_id!r}")
        self._cells[store_id] = cell
        self._ids[id(cell)] = store_id

    def id_of(self, cell: Any) -> str | None:
        """Return the id ``cell`` was registered under, or None."""
        return self._ids.get(id(cell))

    def cell_for(self, store_id: str) -> Any | None:
        """Return the cell registered under ``store_id``, or None."""
        return self._cells.get(store_id)

    def ids(self) -> tuple[str, ...]:
        """Return the registered ids as a sorted tuple (stable for tests)."""
        return tuple(sorted(self._cells))

    def __contains__(self, store_id: object) -> bool:
        return store_id in self._cells

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self._cells.items())

    def __len__(self) -> int:
        return len(self._cells)


__all__ = ["Cell", "WritableCell", "CellRegistry", "Subscriber", "Unsubscriber"]
