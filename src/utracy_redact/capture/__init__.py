"""Capture file codecs - container layout and srcloc records."""

from utracy_redact.capture.container import (
    CaptureFile,
    CaptureHeader,
    decode_bytes,
    decode_capture,
    encode_bytes,
    encode_capture,
    read_header,
)
from utracy_redact.capture.srcloc import SrcLocEntry, decode_entries, encode_entries

__all__ = [
    "CaptureFile",
    "CaptureHeader",
    "SrcLocEntry",
    "decode_bytes",
    "decode_capture",
    "decode_entries",
    "encode_bytes",
    "encode_capture",
    "encode_entries",
    "read_header",
]
