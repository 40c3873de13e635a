# src/cellhistory/cli.py
"""
cellhistory Command Line Interface (CLI).

Developer tooling for snapshot files written by ``HistoryStack.create_snapshot``
(serialized with ``HistorySnapshot.to_json``). Built with `typer` and `rich`.

Commands
--------
- **inspect**: render the records of a snapshot as a table and mark the
  current position.
- **validate**: decode the snapshot against placeholder cells and load it
  into a fresh history, reporting the first structural error found.

Usage
-----
    $ cellhistory inspect artifacts/history.json
    $ cellhistory validate artifacts/history.json --store counter --store todos
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cellhistory.core.cells import CellRegistry, WritableCell
from cellhistory.core.errors import CellHistoryError
from cellhistory.core.history.stack import HistoryStack
from cellhistory.core.snapshot.records import HistorySnapshot

# Settings read CELLHISTORY_* from the environment; pick up a local .env first
load_dotenv()

app = typer.Typer(
    help="cellhistory: inspect and validate undo history snapshots.",
    rich_markup_mode="markdown",
)
console = Console()


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _read_snapshot(path: Path) -> HistorySnapshot:
    """Parse ``path`` as a snapshot or exit with code 1."""
    try:
        return HistorySnapshot.from_json(path.read_bytes())
    except ValidationError as e:
        console.print(f"[bold red]❌ Invalid snapshot file:[/bold red] {path}")
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e


def _walk(
    records: Sequence[Any], depth: int = 0
) -> Iterator[tuple[int, int, dict[str, Any]]]:
    """Yield ``(depth, position, record)`` for every record, groups expanded."""
    for position, record in enumerate(records):
        if not isinstance(record, dict):
            continue
        yield depth, position, record
        if record.get("type") == "group" and isinstance(record.get("data"), list):
            yield from _walk(record["data"], depth + 1)


def _referenced_ids(records: Sequence[Any]) -> list[str]:
    """Return every ``storeId`` used by ``records`` (nested ones included), sorted."""
    ids = {str(r["storeId"]) for _, _, r in _walk(records) if r.get("storeId")}
    return sorted(ids)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def inspect(
    file: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to a snapshot JSON file.",
        ),
    ],
) -> None:
    """
    Show the actions recorded in a snapshot.

    Group children are listed under their group, indented. The row of the
    current action is marked with an arrow.
    """
    snapshot = _read_snapshot(file)

    table = Table(title=f"{file.name} ({len(snapshot.actions)} actions)")
    table.add_column("", width=1)
    table.add_column("#", justify="right")
    table.add_column("type", style="cyan")
    table.add_column("storeId", style="magenta")
    table.add_column("msg")

    for depth, position, record in _walk(snapshot.actions):
        is_current = depth == 0 and position == snapshot.index
        indent = "  " * depth + ("└ " if depth else "")
        table.add_row(
            "▶" if is_current else "",
            str(position) if depth == 0 else "",
            f"{indent}{record.get('type', '?')}",
            str(record.get("storeId") or ""),
            str(record.get("msg", "")),
            style="bold" if is_current else None,
        )

    console.print(table)
    console.print(f"[dim]index={snapshot.index}[/dim]")


@app.command()  # type: ignore[misc]
def validate(
    file: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to a snapshot JSON file.",
        ),
    ],
    store: Annotated[
        list[str] | None,
        typer.Option(
            "--store",
            "-s",
            help="Store id available at load time (repeatable). "
            "Defaults to every id the snapshot references.",
        ),
    ] = None,
) -> None:
    """
    Check that a snapshot can be loaded.

    Each store id gets a placeholder cell, then the snapshot is decoded and
    loaded into a fresh history exactly as an application would.
    """
    snapshot = _read_snapshot(file)
    store_ids = store if store else _referenced_ids(snapshot.actions)
    registry = CellRegistry({store_id: WritableCell(None) for store_id in store_ids})

    stack = HistoryStack()
    try:
        stack.load_snapshot(snapshot, registry)
    except (CellHistoryError, ValidationError) as e:
        console.print(f"[bold red]❌ Snapshot does not load:[/bold red] {e}")
        raise typer.Exit(code=1) from e

    console.print(
        Panel.fit(
            f"actions: {len(stack)}\n"
            f"index:   {stack.index}\n"
            f"undo:    {stack.can_undo}\n"
            f"redo:    {stack.can_redo}\n"
            f"stores:  {', '.join(store_ids) or '-'}",
            title="[bold green]✅ Snapshot OK[/bold green]",
            border_style="green",
        )
    )


if __name__ == "__main__":
    app()
