"""utracy-redact redact -- rewrite a capture with secret srclocs removed.

Resolves marker configuration (utracy-redact.yaml, overridden by
--file-marker/--fn-marker), runs the redaction driver, and maps the
error kinds onto exit codes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from utracy_redact.cli.output import output_json, render_dry_run, render_written
from utracy_redact.errors import (
    CaptureIOError,
    ConfigurationError,
    FormatError,
    RedactError,
)
from utracy_redact.models.config import MarkerConfig, load_project_config
from utracy_redact.redaction.driver import redact_file
from utracy_redact.redaction.paths import resolve_output

console = Console()
err_console = Console(stderr=True)

# Exit code mapping: error kind -> exit code
EXIT_CODES: dict[type[RedactError], int] = {
    FormatError: 2,
    CaptureIOError: 3,
    ConfigurationError: 4,
}


def fail(exc: RedactError) -> None:
    """Print exc to stderr and exit with its mapped code."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", soft_wrap=True)
    raise typer.Exit(code=EXIT_CODES.get(type(exc), 1))


def resolve_markers(
    input_path: Path,
    file_markers: Optional[list[str]],
    fn_markers: Optional[list[str]],
) -> MarkerConfig:
    """Load project config near input_path and apply CLI overrides."""
    project_config = load_project_config(input_path.parent)
    return project_config.marker_config(
        file_markers=file_markers or None,
        fn_markers=fn_markers or None,
    )


def redact(
    input_path: Path = typer.Argument(..., help="Path to the input .utracy file"),
    output: Optional[Path] = typer.Option(
        None,
        "-o",
        "--output",
        help="Output path (default: <stem>.redacted.utracy beside the input)",
    ),
    in_place: bool = typer.Option(
        False, "--in-place", help="Overwrite the input file atomically"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print what would be redacted without writing"
    ),
    file_markers: Optional[list[str]] = typer.Option(
        None,
        "--file-marker",
        help="Substring matched against the srcloc file path (case-insensitive, repeatable)",
    ),
    fn_markers: Optional[list[str]] = typer.Option(
        None,
        "--fn-marker",
        help="Substring matched against the srcloc function name (case-insensitive, repeatable)",
    ),
    format_json: bool = typer.Option(
        False, "--json", help="Output the result as JSON to stdout"
    ),
) -> None:
    """Replace name/function/file of secret srclocs with a marker."""
    try:
        output_path = resolve_output(
            input_path, output, in_place=in_place, dry_run=dry_run
        )
        config = resolve_markers(input_path, file_markers, fn_markers)
        result = redact_file(
            input_path,
            config,
            output_path=output_path,
            in_place=in_place,
            dry_run=dry_run,
        )
    except RedactError as exc:
        fail(exc)
        return

    if format_json:
        output_json(result)
    elif dry_run:
        render_dry_run(console, result)
    else:
        render_written(console, result, input_path if in_place else output_path)
