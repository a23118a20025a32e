"""Rich terminal reporter — one row per path, coloured by mode kind."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from patchmode.git.models import ModeEntry

_KIND_STYLE = {
    "file": "white",
    "executable": "bold green",
    "directory": "bold blue",
    "symlink": "cyan",
    "submodule": "magenta",
    "unknown": "yellow",
}


def render(
    entries: Sequence[ModeEntry],
    working_directory: Path,
    *,
    show_summary: bool = True,
    console: Console | None = None,
) -> None:
    """Print resolved modes to the terminal using Rich."""
    console = console or Console(stderr=True)

    if not entries:
        console.print("[dim]No file modes resolved.[/dim]")
        return

    table = Table(
        title="Resolved file modes",
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Path", style="magenta")
    table.add_column("Mode", justify="center")
    table.add_column("Kind")
    table.add_column("Source", style="dim")

    for entry in entries:
        style = _KIND_STYLE.get(entry.kind, "")
        kind = Text(entry.kind, style=style)
        if entry.deleted:
            kind.append(" (deleted)", style="red")
        table.add_row(entry.path, Text(entry.mode, style=style), kind, entry.source.value)

    console.print(table)

    if show_summary:
        _print_summary(console, entries, working_directory)


def _print_summary(console: Console, entries: Sequence[ModeEntry], working_directory: Path) -> None:
    sources = Counter(e.source.value for e in entries)
    console.print()
    console.print(f"[dim]Working dir:[/dim]   {working_directory}")
    console.print(f"[dim]Paths:[/dim]         {len(entries)}")
    console.print(f"[dim]From patch:[/dim]    {len(entries) - sources.get('filesystem', 0)}")
    console.print(f"[dim]From disk:[/dim]     {sources.get('filesystem', 0)}")
