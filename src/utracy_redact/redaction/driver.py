"""File-level redaction: the entry point collaborators call.

Validates the requested mode, then streams the capture through the
rewrite engine. Every write, whether in place or to a new path, goes
through a temporary file that is only renamed into position once the
whole capture has been rewritten, so a failed run never leaves a
partial file behind.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO

from utracy_redact.errors import CaptureIOError
from utracy_redact.models.config import MarkerConfig
from utracy_redact.models.result import RewriteResult
from utracy_redact.redaction.engine import rewrite_stream
from utracy_redact.redaction.paths import resolve_output
from utracy_redact.storage.atomic import atomic_replace

logger = logging.getLogger(__name__)


class CaptureReader:
    """Binary reader that reports OSError as a read failure on its path.

    Keeps read errors on the input distinct from write errors on the
    output, which the atomic writer reports against the temporary file.
    """

    def __init__(self, raw: BinaryIO, path: Path) -> None:
        self._raw = raw
        self.path = path

    def read(self, size: int = -1) -> bytes:
        try:
            return self._raw.read(size)
        except OSError as exc:
            raise CaptureIOError(self.path, "read", str(exc)) from exc


def _open_input(path: Path) -> BinaryIO:
    try:
        return path.open("rb")
    except OSError as exc:
        raise CaptureIOError(path, "read", str(exc)) from exc


def redact_file(
    input_path: Path | str,
    config: MarkerConfig,
    *,
    output_path: Path | str | None = None,
    in_place: bool = False,
    dry_run: bool = False,
) -> RewriteResult:
    """Redact one capture file.

    Args:
        input_path: Capture to read.
        config: Marker configuration for this run.
        output_path: Where to write; defaults to <stem>.redacted.utracy.
        in_place: Atomically replace input_path with the output.
        dry_run: Only compute which srclocs would be redacted.

    Returns:
        RewriteResult for the run (output_bytes is always None).

    Raises:
        ConfigurationError: For invalid mode/path combinations, before
            any file is opened.
        CaptureIOError: If the input is missing or any read, write, or
            rename fails.
        FormatError: If the input is not a valid capture.
    """
    input_path = Path(input_path)
    target = resolve_output(input_path, output_path, in_place=in_place, dry_run=dry_run)
    if not input_path.is_file():
        raise CaptureIOError(input_path, "read", "file not found")

    if dry_run:
        with _open_input(input_path) as raw:
            return rewrite_stream(CaptureReader(raw, input_path), config)

    destination = input_path if in_place else target
    logger.debug("Rewriting %s -> %s", input_path, destination)
    with atomic_replace(destination) as sink:
        with _open_input(input_path) as raw:
            return rewrite_stream(CaptureReader(raw, input_path), config, sink)
