"""Rich terminal output for redaction runs.

Renders the redact summary, dry-run listings, the inspect table, and
the JSON form of a RewriteResult.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from utracy_redact.capture.srcloc import SrcLocEntry
    from utracy_redact.models.result import RewriteResult


def render_dry_run(console: Console, result: RewriteResult) -> None:
    """Print what a dry run would redact, one function name per line."""
    if result.redacted_count == 0:
        console.print("Dry run: no source locations would be redacted.")
        return
    console.print(f"Dry run: would redact {result.redacted_count} source locations:")
    for index, function in zip(result.redacted_indices, result.redacted_functions):
        console.print(f"  [dim]#{index}[/dim] {escape(function)}", soft_wrap=True)


def render_written(console: Console, result: RewriteResult, output_path: Path) -> None:
    """Print the summary after a capture was written."""
    if result.redacted_count == 0:
        console.print("No source locations were redacted.")
    else:
        console.print(
            f"[bold green]Redacted {result.redacted_count} source locations.[/bold green]"
        )
    console.print(f"Output: {escape(str(output_path))}", soft_wrap=True, highlight=False)


def render_srclocs(
    console: Console,
    rows: list[tuple[int, SrcLocEntry, bool]],
    show_all: bool = False,
) -> None:
    """Render srclocs as a table, flagging the ones that would be redacted.

    Args:
        console: Rich console to print to.
        rows: (index, entry, would_redact) tuples in table order.
        show_all: Include entries that would be kept.
    """
    table = Table(box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Function")
    table.add_column("File")
    table.add_column("Line", justify="right")
    table.add_column("Redact")

    for index, entry, hit in rows:
        if not (hit or show_all):
            continue
        table.add_row(
            str(index),
            escape(entry.name),
            escape(entry.function),
            escape(entry.file),
            str(entry.line),
            "[bold red]yes[/bold red]" if hit else "[dim]no[/dim]",
        )

    hits = sum(1 for _, _, hit in rows if hit)
    if table.row_count:
        console.print(table)
    console.print(f"{hits}/{len(rows)} source locations match the redaction markers")


def output_json(result: RewriteResult) -> None:
    """Write the result as pure JSON to stdout.

    No Rich markup, no color, no extra text. output_bytes is excluded.
    """
    sys.stdout.write(result.model_dump_json(indent=2))
    sys.stdout.write("\n")
