"""Shared fixtures: hand-built .utracy captures.

Captures are assembled with struct directly rather than through the
codec under test.
"""

from __future__ import annotations

import struct
from collections.abc import Callable
from pathlib import Path

import pytest

SIGNATURE = 0x6D64796361727475
VERSION = 2
HEADER_SIZE = 1200

# Opaque event data; includes bytes that look like length prefixes and text.
EVENTS = (
    bytes(range(256)) * 8
    + struct.pack("<I", 3)
    + b"code_secret/a.dm"
    + b"\x00" * 64
    + b"\xff\xfe trailing metadata"
)


def lp(value: str) -> bytes:
    raw = value.encode("utf-8")
    return struct.pack("<I", len(raw)) + raw


def entry_bytes(name: str, function: str, file: str, line: int, color: int = 0) -> bytes:
    return lp(name) + lp(function) + lp(file) + struct.pack("<II", line, color)


def header_bytes(signature: int = SIGNATURE, version: int = VERSION) -> bytes:
    tail = bytes((i * 7 + 3) % 256 for i in range(HEADER_SIZE - 12))
    return struct.pack("<QI", signature, version) + tail


def make_capture(
    entries: list[dict],
    events: bytes = EVENTS,
    signature: int = SIGNATURE,
    version: int = VERSION,
) -> bytes:
    """Assemble header + count + entries + events."""
    table = b"".join(entry_bytes(**e) for e in entries)
    return header_bytes(signature, version) + struct.pack("<I", len(entries)) + table + events


SCENARIO_ENTRIES: list[dict] = [
    {"name": "Foo", "function": "proc_a", "file": "code_secret/a.dm", "line": 10, "color": 0xFF0000},
    {"name": "Bar", "function": "do_secret_stuff", "file": "src/b.dm", "line": 22, "color": 0x00FF00},
    {"name": "Baz", "function": "draw", "file": "src/c.dm", "line": 5, "color": 0x0000FF},
]


@pytest.fixture
def build_capture() -> Callable[..., bytes]:
    """The capture builder, for tests that need custom tables."""
    return make_capture


@pytest.fixture
def scenario_entries() -> list[dict]:
    return [dict(e) for e in SCENARIO_ENTRIES]


@pytest.fixture
def scenario_capture() -> bytes:
    """Three srclocs: secret file, secret function, public."""
    return make_capture(SCENARIO_ENTRIES)


@pytest.fixture
def table_offset() -> int:
    """Byte offset of the first srcloc entry."""
    return HEADER_SIZE + 4


@pytest.fixture
def capture_path(tmp_path: Path, scenario_capture: bytes) -> Path:
    """scenario_capture written to tmp_path/capture.utracy."""
    path = tmp_path / "capture.utracy"
    path.write_bytes(scenario_capture)
    return path
