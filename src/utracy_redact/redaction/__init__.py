"""Redaction subpackage: predicate, rewrite engine, and file driver."""

from utracy_redact.redaction.driver import redact_file
from utracy_redact.redaction.engine import redact_entries, rewrite_stream, run, scan
from utracy_redact.redaction.markers import matches
from utracy_redact.redaction.paths import resolve_output

__all__ = [
    "matches",
    "redact_entries",
    "redact_file",
    "resolve_output",
    "rewrite_stream",
    "run",
    "scan",
]
