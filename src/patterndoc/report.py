"""Summary output for parsed patterns."""

import json
from typing import Iterable

from rich.console import Console
from rich.table import Table

from patterndoc.models import Pattern


def patterns_to_json(patterns: Iterable[Pattern], indent: int | None = 2) -> str:
    """Serialize patterns to a JSON array."""
    return json.dumps([p.to_dict() for p in patterns], indent=indent, ensure_ascii=False)


def print_patterns(patterns: list[Pattern], console: Console | None = None) -> None:
    """Print a summary table of patterns to a Rich console."""
    console = console or Console()
    console.print()
    console.print("[bold]Pattern Documentation[/bold]")
    console.print("━" * 52)

    if not patterns:
        console.print("[yellow]No patterns found[/yellow]")
        console.print()
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Pattern", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Params", justify="right")
    table.add_column("Examples", justify="right")
    table.add_column("Metadata", style="dim")

    for pattern in patterns:
        table.add_row(
            pattern.name,
            _first_line(pattern.description),
            str(len(pattern.parameters)),
            str(len(pattern.examples)),
            ", ".join(sorted(pattern.metadata)),
        )

    console.print(table)
    console.print()
    console.print(f"Summary: {len(patterns)} patterns")
    console.print()


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]
