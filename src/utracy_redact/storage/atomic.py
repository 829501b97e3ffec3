"""Atomic in-place replacement of capture files.

Output is written to a temporary file beside the original, flushed and
fsynced, then renamed over the original with os.replace. The rename is
the single commit point: any failure before it removes the temporary
file and leaves the original untouched.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from utracy_redact.errors import CaptureIOError

logger = logging.getLogger(__name__)


def temp_path_for(path: Path) -> Path:
    """Temporary file path in the same directory as path."""
    return path.with_name(f"{path.name}.{os.getpid()}.tmp")


def _open_temp(tmp_path: Path) -> BinaryIO:
    return tmp_path.open("wb")


def _abandon(handle: BinaryIO, tmp_path: Path) -> None:
    try:
        handle.close()
    except OSError as exc:
        logger.warning("Could not close temporary file %s: %s", tmp_path, exc)
    try:
        tmp_path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not remove temporary file %s: %s", tmp_path, exc)


@contextmanager
def atomic_replace(path: Path | str) -> Iterator[BinaryIO]:
    """Yield a binary handle whose contents replace path on clean exit.

    An OSError raised in the body is reported as a write failure on the
    temporary file; any other exception propagates unchanged. Either
    way the temporary file is removed first. When path already exists
    its permission bits carry over to the replacement.

    Raises:
        CaptureIOError: If the temporary file cannot be created, written,
            synced, or renamed over path.
    """
    path = Path(path)
    tmp_path = temp_path_for(path)
    try:
        handle = _open_temp(tmp_path)
    except OSError as exc:
        raise CaptureIOError(tmp_path, "create", str(exc)) from exc
    logger.debug("Writing temporary file %s", tmp_path)

    try:
        try:
            yield handle
        except OSError as exc:
            raise CaptureIOError(tmp_path, "write", str(exc)) from exc
        try:
            handle.flush()
            os.fsync(handle.fileno())
            handle.close()
        except OSError as exc:
            raise CaptureIOError(tmp_path, "sync", str(exc)) from exc
        if path.exists():
            try:
                shutil.copymode(path, tmp_path)
            except OSError as exc:
                raise CaptureIOError(tmp_path, "copy permissions to", str(exc)) from exc
    except BaseException:
        _abandon(handle, tmp_path)
        raise

    try:
        os.replace(tmp_path, path)
    except OSError as exc:
        _abandon(handle, tmp_path)
        raise CaptureIOError(path, "rename over", str(exc)) from exc
    logger.debug("Replaced %s", path)


def write_in_place(path: Path | str, data: bytes) -> None:
    """Atomically replace the contents of path with data."""
    with atomic_replace(path) as handle:
        handle.write(data)
