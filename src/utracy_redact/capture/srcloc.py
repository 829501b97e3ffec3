"""Source-location table entries and their on-disk encoding.

Each srcloc entry is laid out as three length-prefixed UTF-8 strings
(name, function, file) followed by two fixed-width numbers (line,
color). All integers are little-endian u32. Because strings are
variable-width, redacting an entry changes its encoded length and the
table is always re-laid-out rather than patched in place.
"""

from __future__ import annotations

import struct
from collections.abc import Iterable
from dataclasses import dataclass, replace
from typing import BinaryIO

from utracy_redact.errors import FormatError

_U32 = struct.Struct("<I")
_READ_CHUNK = 1024 * 1024


@dataclass(frozen=True)
class SrcLocEntry:
    """One decoded source location.

    Entries are addressed by their index in the table, never by byte
    offset, so the numeric fields and the position of an entry must
    survive redaction unchanged.
    """

    name: str
    function: str
    file: str
    line: int
    color: int

    def redacted(self, marker: str) -> SrcLocEntry:
        """Return a copy with all three text fields replaced by marker."""
        return replace(self, name=marker, function=marker, file=marker)


def read_exact(stream: BinaryIO, size: int, field: str, offset: int) -> bytes:
    """Read exactly size bytes or raise FormatError naming field/offset.

    Large reads are chunked so a corrupt length prefix cannot force a
    huge up-front allocation.
    """
    if size <= _READ_CHUNK:
        data = stream.read(size)
    else:
        parts: list[bytes] = []
        remaining = size
        while remaining:
            part = stream.read(min(remaining, _READ_CHUNK))
            if not part:
                break
            parts.append(part)
            remaining -= len(part)
        data = b"".join(parts)
    if len(data) != size:
        raise FormatError(
            f"Unexpected end of file: needed {size} bytes, got {len(data)}",
            field=field,
            offset=offset,
        )
    return data


def read_u32(stream: BinaryIO, field: str, offset: int) -> int:
    return _U32.unpack(read_exact(stream, 4, field, offset))[0]


def read_string(stream: BinaryIO, field: str, offset: int) -> tuple[str, int]:
    """Read a u32-length-prefixed UTF-8 string.

    Returns:
        Tuple of (decoded string, offset just past the string).
    """
    length = read_u32(stream, f"{field} length", offset)
    raw = read_exact(stream, length, field, offset + 4)
    try:
        value = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FormatError(
            f"String is not valid UTF-8: {exc.reason}",
            field=field,
            offset=offset + 4,
        ) from exc
    return value, offset + 4 + length


def write_string(value: str) -> bytes:
    raw = value.encode("utf-8")
    return _U32.pack(len(raw)) + raw


def decode_entry(stream: BinaryIO, index: int, offset: int) -> tuple[SrcLocEntry, int]:
    """Decode the srcloc entry starting at offset.

    Args:
        stream: Binary stream positioned at the start of the entry.
        index: Table index of the entry (used in error messages).
        offset: Absolute byte offset of the entry within the file.

    Returns:
        Tuple of (entry, offset just past the entry).

    Raises:
        FormatError: If the stream ends mid-entry or a string is not UTF-8.
    """
    prefix = f"srcloc[{index}]"
    name, offset = read_string(stream, f"{prefix}.name", offset)
    function, offset = read_string(stream, f"{prefix}.function", offset)
    file, offset = read_string(stream, f"{prefix}.file", offset)
    line = read_u32(stream, f"{prefix}.line", offset)
    color = read_u32(stream, f"{prefix}.color", offset + 4)
    entry = SrcLocEntry(name=name, function=function, file=file, line=line, color=color)
    return entry, offset + 8


def decode_entries(stream: BinaryIO, count: int, offset: int = 0) -> list[SrcLocEntry]:
    """Decode count consecutive entries starting at offset."""
    entries: list[SrcLocEntry] = []
    for index in range(count):
        entry, offset = decode_entry(stream, index, offset)
        entries.append(entry)
    return entries


def encode_entry(entry: SrcLocEntry) -> bytes:
    """Encode one entry. Unmodified entries reproduce their original bytes."""
    return b"".join(
        (
            write_string(entry.name),
            write_string(entry.function),
            write_string(entry.file),
            _U32.pack(entry.line),
            _U32.pack(entry.color),
        )
    )


def encode_entries(entries: Iterable[SrcLocEntry]) -> bytes:
    return b"".join(encode_entry(entry) for entry in entries)
