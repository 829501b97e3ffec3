"""utracy-redact CLI entry point."""

import logging

import typer

from utracy_redact import __version__
from utracy_redact.cli.inspect_cmd import inspect
from utracy_redact.cli.redact_cmd import redact

app = typer.Typer(
    name="utracy-redact",
    help="Strip secret source locations from .utracy profiler captures",
    no_args_is_help=True,
)

# Register subcommands
app.command()(inspect)
app.command()(redact)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"utracy-redact {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(
        False, "-V", "--verbose", help="Log each decode, match, and write step."
    ),
) -> None:
    """Strip secret source locations from .utracy profiler captures."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
