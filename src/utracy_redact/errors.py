"""Error kinds raised by the capture rewriter.

The core never prints or exits; callers (the CLI) turn these into
messages and exit codes. Each error carries enough context (path,
offset, field) to produce an actionable message.
"""

from __future__ import annotations

from pathlib import Path


class RedactError(Exception):
    """Base class for every error the rewriter raises."""


class FormatError(RedactError):
    """Raised when a capture file is structurally invalid.

    Covers a bad signature or version, a truncated header, and a
    srcloc table that runs past the end of the file.

    Attributes:
        field: Name of the field being read when the problem was found.
        offset: Byte offset of that field within the file, if known.
    """

    def __init__(self, message: str, field: str, offset: int | None = None) -> None:
        self.field = field
        self.offset = offset
        where = f" at offset {offset}" if offset is not None else ""
        super().__init__(f"{message} ({field}{where})")


class CaptureIOError(RedactError):
    """Raised when reading, writing, or renaming a capture file fails.

    Attributes:
        path: The file the operation was acting on.
        operation: Short verb describing the failed step.
    """

    def __init__(self, path: Path | str, operation: str, reason: str) -> None:
        self.path = Path(path)
        self.operation = operation
        super().__init__(f"Failed to {operation} {self.path}: {reason}")


class ConfigurationError(RedactError):
    """Raised for invalid option combinations or output paths.

    Always raised before any file is opened.
    """
