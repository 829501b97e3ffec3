"""Tests for atomic in-place file replacement."""

from __future__ import annotations

import io
import os
import stat
from pathlib import Path

import pytest

from utracy_redact.errors import CaptureIOError
from utracy_redact.storage import atomic
from utracy_redact.storage.atomic import atomic_replace, temp_path_for, write_in_place


def _leftovers(directory: Path) -> list[Path]:
    return list(directory.glob("*.tmp"))


class _CloseFailsOnce(io.FileIO):
    """Temp file whose first close reports an error after closing."""

    failed = False

    def close(self) -> None:
        super().close()
        if not self.failed:
            self.failed = True
            raise OSError("close failed")


class TestAtomicReplace:
    """Tests for atomic_replace and write_in_place."""

    def test_replaces_contents(self, tmp_path: Path) -> None:
        """On success the target holds the new bytes and no temp remains."""
        target = tmp_path / "cap.utracy"
        target.write_bytes(b"old")
        write_in_place(target, b"new contents")
        assert target.read_bytes() == b"new contents"
        assert _leftovers(tmp_path) == []

    def test_creates_missing_target(self, tmp_path: Path) -> None:
        """A target that does not exist yet is created."""
        target = tmp_path / "fresh.utracy"
        write_in_place(target, b"data")
        assert target.read_bytes() == b"data"

    def test_temp_file_is_beside_target(self, tmp_path: Path) -> None:
        """The temp file lives in the target's directory."""
        target = tmp_path / "cap.utracy"
        assert temp_path_for(target).parent == tmp_path

    def test_exception_in_body_keeps_original(self, tmp_path: Path) -> None:
        """An error while writing leaves the original and removes the temp."""
        target = tmp_path / "cap.utracy"
        target.write_bytes(b"original")
        with pytest.raises(RuntimeError):
            with atomic_replace(target) as handle:
                handle.write(b"partial")
                raise RuntimeError("boom")
        assert target.read_bytes() == b"original"
        assert _leftovers(tmp_path) == []

    def test_rename_failure_keeps_original(self, tmp_path: Path, monkeypatch) -> None:
        """A failure after the temp is written but before rename is harmless."""
        target = tmp_path / "cap.utracy"
        target.write_bytes(b"original")

        def _fail_replace(src, dst):
            assert Path(src).read_bytes() == b"new"
            raise OSError("rename refused")

        monkeypatch.setattr(atomic.os, "replace", _fail_replace)
        with pytest.raises(CaptureIOError) as exc_info:
            write_in_place(target, b"new")
        assert exc_info.value.path == target
        assert target.read_bytes() == b"original"
        assert _leftovers(tmp_path) == []

    def test_fsync_failure_keeps_original(self, tmp_path: Path, monkeypatch) -> None:
        """A failed fsync aborts before rename."""
        target = tmp_path / "cap.utracy"
        target.write_bytes(b"original")

        def _fail_fsync(fd):
            raise OSError("disk full")

        monkeypatch.setattr(atomic.os, "fsync", _fail_fsync)
        with pytest.raises(CaptureIOError, match="sync"):
            write_in_place(target, b"new")
        assert target.read_bytes() == b"original"
        assert _leftovers(tmp_path) == []

    def test_close_failure_is_capture_io_error(self, tmp_path: Path, monkeypatch) -> None:
        """An error closing the temp file is wrapped and keeps the original."""
        target = tmp_path / "cap.utracy"
        target.write_bytes(b"original")
        monkeypatch.setattr(atomic, "_open_temp", lambda p: _CloseFailsOnce(p, "wb"))
        with pytest.raises(CaptureIOError) as exc_info:
            write_in_place(target, b"new")
        assert exc_info.value.operation == "sync"
        assert target.read_bytes() == b"original"
        assert _leftovers(tmp_path) == []

    def test_oserror_in_body_is_write_error(self, tmp_path: Path) -> None:
        """An OSError while writing names the temp file, not the target."""
        target = tmp_path / "cap.utracy"
        target.write_bytes(b"original")
        with pytest.raises(CaptureIOError) as exc_info:
            with atomic_replace(target):
                raise OSError(28, "No space left on device")
        assert exc_info.value.operation == "write"
        assert exc_info.value.path == temp_path_for(target)
        assert target.read_bytes() == b"original"
        assert _leftovers(tmp_path) == []

    @pytest.mark.skipif(os.name == "nt", reason="POSIX permission bits")
    def test_replacement_keeps_permission_bits(self, tmp_path: Path) -> None:
        """The replaced file keeps the original mode."""
        target = tmp_path / "cap.utracy"
        target.write_bytes(b"original")
        target.chmod(0o640)
        write_in_place(target, b"new")
        assert stat.S_IMODE(target.stat().st_mode) == 0o640

    def test_unwritable_directory(self, tmp_path: Path) -> None:
        """A missing directory surfaces as CaptureIOError on create."""
        target = tmp_path / "missing" / "cap.utracy"
        with pytest.raises(CaptureIOError) as exc_info:
            write_in_place(target, b"x")
        assert exc_info.value.operation == "create"
        assert not target.exists()


def test_temp_name_includes_pid(tmp_path: Path) -> None:
    """Concurrent processes do not share a temp file name."""
    assert str(os.getpid()) in temp_path_for(tmp_path / "a.utracy").name
