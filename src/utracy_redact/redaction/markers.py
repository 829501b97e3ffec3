"""Redaction predicate for srcloc entries."""

from __future__ import annotations

from utracy_redact.capture.srcloc import SrcLocEntry
from utracy_redact.models.config import MarkerConfig, ascii_lower


def matches(entry: SrcLocEntry, config: MarkerConfig) -> bool:
    """Return True if entry should be redacted under config.

    An entry matches when its file path contains any file marker, or its
    function name contains any function marker. Comparison is substring
    containment, case-insensitive for ASCII letters only.
    """
    file_lower = ascii_lower(entry.file)
    if any(ascii_lower(m) in file_lower for m in config.file_markers):
        return True
    fn_lower = ascii_lower(entry.function)
    return any(ascii_lower(m) in fn_lower for m in config.fn_markers)
