"""Output path resolution for the redact command."""

from __future__ import annotations

from pathlib import Path

from utracy_redact.errors import ConfigurationError

REDACTED_SUFFIX = ".redacted.utracy"


def default_output_path(input_path: Path) -> Path:
    """<stem>.redacted.utracy next to the input."""
    return input_path.with_name(f"{input_path.stem}{REDACTED_SUFFIX}")


def resolve_output(
    input_path: Path | str,
    output: Path | str | None = None,
    *,
    in_place: bool = False,
    dry_run: bool = False,
) -> Path | None:
    """Decide where the redacted capture should be written.

    Args:
        input_path: The capture being redacted.
        output: Explicit output path, if the user gave one.
        in_place: Overwrite the input (atomically) instead.
        dry_run: Report only; nothing is written.

    Returns:
        The output path, or None for dry runs and in-place rewrites.

    Raises:
        ConfigurationError: If in_place and output are combined, or the
            output resolves to the input file.
    """
    if in_place and output is not None:
        raise ConfigurationError("--in-place cannot be combined with --output")
    if dry_run or in_place:
        return None

    canonical_in = Path(input_path).resolve()
    if output is not None:
        if Path(output).resolve() == canonical_in:
            raise ConfigurationError(
                "--output path is the same as the input file; use --in-place to overwrite"
            )
        return Path(output)

    derived = default_output_path(canonical_in)
    if derived == canonical_in:
        raise ConfigurationError(
            f"Derived output path ({derived}) equals the input path; "
            "use --output to choose a different path or --in-place to overwrite"
        )
    return derived
