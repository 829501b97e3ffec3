"""utracy-redact inspect -- list srclocs and which ones would be redacted."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from utracy_redact.cli.output import render_srclocs
from utracy_redact.cli.redact_cmd import fail, resolve_markers
from utracy_redact.errors import CaptureIOError, RedactError
from utracy_redact.redaction.engine import scan

console = Console()


def inspect(
    input_path: Path = typer.Argument(..., help="Path to the .utracy file"),
    file_markers: Optional[list[str]] = typer.Option(
        None, "--file-marker", help="Substring matched against the srcloc file path"
    ),
    fn_markers: Optional[list[str]] = typer.Option(
        None, "--fn-marker", help="Substring matched against the srcloc function name"
    ),
    show_all: bool = typer.Option(
        False, "--all", help="List every srcloc, not only the matching ones"
    ),
) -> None:
    """Show the srcloc table without writing anything."""
    try:
        config = resolve_markers(input_path, file_markers, fn_markers)
        try:
            with input_path.open("rb") as source:
                rows = scan(source, config)
        except OSError as exc:
            raise CaptureIOError(input_path, "read", str(exc)) from exc
    except RedactError as exc:
        fail(exc)
        return

    render_srclocs(console, rows, show_all=show_all)
