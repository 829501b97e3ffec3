"""Rewrite engine: one pass over the srcloc table.

Decodes the table, evaluates the redaction predicate per entry,
substitutes the marker into matched entries, and reassembles the file
with the event stream copied verbatim. Entry count and order never
change, so index references from the event stream stay valid.
"""

from __future__ import annotations

import io
import logging
from typing import BinaryIO

from utracy_redact.capture.container import (
    CaptureFile,
    decode_bytes,
    decode_capture,
    encode_bytes,
    encode_capture,
)
from utracy_redact.capture.srcloc import SrcLocEntry
from utracy_redact.models.config import MarkerConfig
from utracy_redact.models.result import RewriteMode, RewriteResult
from utracy_redact.redaction.markers import matches

logger = logging.getLogger(__name__)


def redact_entries(
    srclocs: list[SrcLocEntry],
    config: MarkerConfig,
) -> tuple[list[SrcLocEntry], list[int]]:
    """Apply the predicate to every entry.

    Matched entries have name, function, and file replaced together;
    line and color are kept.

    Returns:
        Tuple of (rewritten entries in original order, redacted indices).
    """
    rewritten: list[SrcLocEntry] = []
    indices: list[int] = []
    for index, entry in enumerate(srclocs):
        if matches(entry, config):
            logger.debug("Redacting srcloc %d (%s in %s)", index, entry.function, entry.file)
            indices.append(index)
            rewritten.append(entry.redacted(config.marker))
        else:
            rewritten.append(entry)
    return rewritten, indices


def _apply(capture: CaptureFile, config: MarkerConfig) -> tuple[CaptureFile, RewriteResult]:
    rewritten, indices = redact_entries(capture.srclocs, config)
    result = RewriteResult(
        total_srclocs=len(capture.srclocs),
        redacted_count=len(indices),
        redacted_indices=indices,
        redacted_functions=[capture.srclocs[i].function for i in indices],
    )
    new_capture = CaptureFile(header=capture.header, srclocs=rewritten, reader=capture.reader)
    return new_capture, result


def run(data: bytes, config: MarkerConfig, mode: RewriteMode = RewriteMode.WRITE) -> RewriteResult:
    """Rewrite an in-memory capture.

    Args:
        data: Complete capture file contents.
        config: Marker configuration for this run.
        mode: WRITE to produce output bytes, DRY_RUN to only count.

    Returns:
        RewriteResult; output_bytes is set only in WRITE mode.

    Raises:
        FormatError: If data is not a valid capture.
    """
    capture, result = _apply(decode_bytes(data), config)
    if mode is RewriteMode.DRY_RUN:
        return result
    return result.model_copy(update={"output_bytes": encode_bytes(capture)})


def rewrite_stream(
    source: BinaryIO,
    config: MarkerConfig,
    sink: BinaryIO | None = None,
) -> RewriteResult:
    """Rewrite a capture from source into sink.

    With sink=None this is a dry run: only the header and table are
    read and nothing is written. Otherwise the event stream is streamed
    through in bounded chunks.

    Raises:
        FormatError: If source is not a valid capture. Nothing has been
            written to sink when this is raised.
    """
    capture, result = _apply(decode_capture(source), config)
    logger.debug(
        "Matched %d of %d srclocs", result.redacted_count, result.total_srclocs
    )
    if sink is not None:
        encode_capture(capture, sink)
    return result


def scan(data: bytes | BinaryIO, config: MarkerConfig) -> list[tuple[int, SrcLocEntry, bool]]:
    """List every srcloc with whether it would be redacted.

    Used by the inspect command. Accepts raw bytes or a binary stream.
    """
    stream = io.BytesIO(data) if isinstance(data, bytes) else data
    capture = decode_capture(stream)
    return [(i, entry, matches(entry, config)) for i, entry in enumerate(capture.srclocs)]
