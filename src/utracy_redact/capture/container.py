"""Container codec for .utracy capture files.

File layout (little-endian):
    [0, 1200)        header: u64 signature, u32 version, opaque rest
    [1200, 1204)     u32 srcloc_count
    [1204, ...)      srcloc_count srcloc entries (see capture/srcloc.py)
    [..., EOF)       event stream, opaque, copied verbatim

The table is count-prefixed, so no header field records its byte
length and nothing needs recomputing when entries change size. The
event stream references srclocs by table index only.
"""

from __future__ import annotations

import io
import logging
import shutil
import struct
from dataclasses import dataclass
from typing import BinaryIO

from utracy_redact.capture.srcloc import SrcLocEntry, decode_entries, encode_entries, read_exact
from utracy_redact.errors import FormatError

logger = logging.getLogger(__name__)

HEADER_SIZE = 1200
FILE_SIGNATURE = 0x6D64796361727475
FILE_VERSION = 2
SIGNATURE_OFFSET = 0
VERSION_OFFSET = 8
COUNT_OFFSET = HEADER_SIZE
TABLE_OFFSET = COUNT_OFFSET + 4

# Chunk size for copying the event stream.
COPY_BUFFER_SIZE = 8 * 1024 * 1024

_COUNT = struct.Struct("<I")


@dataclass(frozen=True)
class CaptureHeader:
    """The fixed-size capture header.

    Only the signature and version are interpreted; raw is written back
    byte-for-byte.
    """

    raw: bytes
    signature: int
    version: int


@dataclass
class CaptureFile:
    """A decoded capture: header, srcloc table, and the unread remainder.

    The reader is left positioned at the start of the event stream so
    the remainder can be streamed to an output without being loaded.
    """

    header: CaptureHeader
    srclocs: list[SrcLocEntry]
    reader: BinaryIO


def read_header(stream: BinaryIO) -> CaptureHeader:
    """Read and validate the capture header.

    Raises:
        FormatError: If the header is truncated or the signature or
            version does not match.
    """
    raw = read_exact(stream, HEADER_SIZE, "header", 0)
    (signature,) = struct.unpack_from("<Q", raw, SIGNATURE_OFFSET)
    if signature != FILE_SIGNATURE:
        raise FormatError(
            f"Invalid .utracy signature: got 0x{signature:016X}, "
            f"expected 0x{FILE_SIGNATURE:016X}",
            field="signature",
            offset=SIGNATURE_OFFSET,
        )
    (version,) = struct.unpack_from("<I", raw, VERSION_OFFSET)
    if version != FILE_VERSION:
        raise FormatError(
            f"Unsupported .utracy version: got {version}, expected {FILE_VERSION}",
            field="version",
            offset=VERSION_OFFSET,
        )
    return CaptureHeader(raw=raw, signature=signature, version=version)


def decode_capture(stream: BinaryIO) -> CaptureFile:
    """Decode the header and srcloc table from stream.

    The stream is consumed up to the end of the table; everything
    after that is left unread.
    """
    header = read_header(stream)
    (count,) = _COUNT.unpack(read_exact(stream, 4, "srcloc_count", COUNT_OFFSET))
    logger.debug("Capture declares %d srclocs", count)
    srclocs = decode_entries(stream, count, TABLE_OFFSET)
    return CaptureFile(header=header, srclocs=srclocs, reader=stream)


def decode_bytes(data: bytes) -> CaptureFile:
    """Decode an in-memory capture."""
    return decode_capture(io.BytesIO(data))


def write_table(sink: BinaryIO, header: CaptureHeader, srclocs: list[SrcLocEntry]) -> None:
    """Write the header, srcloc count, and encoded srcloc table."""
    sink.write(header.raw)
    sink.write(_COUNT.pack(len(srclocs)))
    sink.write(encode_entries(srclocs))


def encode_capture(capture: CaptureFile, sink: BinaryIO) -> None:
    """Write capture to sink, streaming the remainder of its reader.

    The event stream is copied in bounded chunks so peak memory tracks
    the table size, not the file size.
    """
    write_table(sink, capture.header, capture.srclocs)
    shutil.copyfileobj(capture.reader, sink, COPY_BUFFER_SIZE)


def encode_bytes(capture: CaptureFile) -> bytes:
    """Encode capture to bytes. Consumes the remainder of its reader."""
    out = io.BytesIO()
    encode_capture(capture, out)
    return out.getvalue()
