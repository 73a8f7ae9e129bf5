from __future__ import annotations

import os
import socket
import stat
from pathlib import Path

import pytest

from mermaid_aid.constants import DEFAULT_MAX_FILE_SIZE
from mermaid_aid.filesystem import (
    MAX_FILE_SIZE_ENV_VAR,
    collect_file_stat,
    enforce_file_size,
    get_max_file_size,
    safe_read,
    write_output,
)


def test_get_max_file_size_defaults(monkeypatch):
    monkeypatch.delenv(MAX_FILE_SIZE_ENV_VAR, raising=False)

    assert get_max_file_size() == DEFAULT_MAX_FILE_SIZE
    assert get_max_file_size(default=42) == 42


def test_get_max_file_size_reads_environment(monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "2048")

    assert get_max_file_size(default=42) == 2048


def test_get_max_file_size_rejects_non_integer(monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "invalid")

    with pytest.raises(ValueError, match="Invalid value for MERMAID_AID_MAX_FILE_SIZE"):
        get_max_file_size()


def test_get_max_file_size_rejects_non_positive(monkeypatch):
    monkeypatch.setenv(MAX_FILE_SIZE_ENV_VAR, "0")

    with pytest.raises(ValueError, match="must be a positive integer, got 0"):
        get_max_file_size()


def test_collect_file_stat_handles_missing_file(tmp_path: Path):
    with pytest.raises(IOError, match="Error accessing"):
        collect_file_stat(tmp_path / "missing.mad")


def test_collect_file_stat_rejects_directory(tmp_path: Path):
    directory = tmp_path / "folder"
    directory.mkdir()

    with pytest.raises(IOError, match="is not a regular file"):
        collect_file_stat(directory)


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="mkfifo not available")
def test_collect_file_stat_rejects_fifo(tmp_path: Path):
    """FIFOs would block a reader, so they are refused before opening."""
    fifo = tmp_path / "pipe.mad"
    try:
        os.mkfifo(fifo)
    except OSError:  # pragma: no cover
        pytest.skip("Unable to create FIFO")

    with pytest.raises(IOError) as exc_info:
        collect_file_stat(fifo)
    assert "is not a regular file" in str(exc_info.value)


@pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="Unix sockets not available")
def test_collect_file_stat_rejects_socket(tmp_path: Path):
    socket_path = tmp_path / "socket.mad"
    sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    try:
        sock.bind(str(socket_path))
    except OSError:  # pragma: no cover
        pytest.skip("Unable to create socket")
    finally:
        sock.close()

    with pytest.raises(IOError) as exc_info:
        collect_file_stat(socket_path)
    assert "is not a regular file" in str(exc_info.value)


def test_collect_file_stat_returns_regular_file_metadata(tmp_path: Path):
    target = tmp_path / "flow.mad"
    target.write_text("flow\nA\n", encoding="utf-8")

    result = collect_file_stat(target)

    assert stat.S_ISREG(result.st_mode)
    assert result.st_size == 7


def test_enforce_file_size(tmp_path: Path):
    target = tmp_path / "flow.mad"
    target.write_text("flow\nA -> B\n", encoding="utf-8")
    stat_result = os.stat(target)

    enforce_file_size(stat_result, stat_result.st_size, target)

    with pytest.raises(IOError) as exc_info:
        enforce_file_size(stat_result, 3, target)
    assert str(exc_info.value) == f"{target} exceeds the maximum allowed size of 3 bytes."


def test_safe_read_returns_text(tmp_path: Path):
    target = tmp_path / "flow.mad"
    target.write_text("flow\n@ ○ start\n", encoding="utf-8")

    with safe_read(target) as handle:
        assert handle.read() == "flow\n@ ○ start\n"


def test_safe_read_raises_for_directory(tmp_path: Path):
    directory = tmp_path / "folder"
    directory.mkdir()

    with pytest.raises(IOError, match="Error accessing"):
        safe_read(directory)


def test_safe_read_raises_for_missing_file(tmp_path: Path):
    with pytest.raises(IOError, match="Error accessing"):
        safe_read(tmp_path / "missing.mad")


def test_write_output_replaces_existing_file(tmp_path: Path):
    target = tmp_path / "out.mmd"
    target.write_text("stale", encoding="utf-8")

    write_output(target, "flowchart TD\n    A[A]")

    assert target.read_text(encoding="utf-8") == "flowchart TD\n    A[A]"
    assert [path.name for path in tmp_path.iterdir()] == ["out.mmd"]


def test_write_output_uses_umask_permissions(tmp_path: Path):
    target = tmp_path / "out.mmd"
    umask = os.umask(0o022)
    try:
        write_output(target, "classDiagram")
    finally:
        os.umask(umask)

    assert stat.S_IMODE(os.stat(target).st_mode) == 0o644


def test_write_output_rejects_missing_directory(tmp_path: Path):
    target = tmp_path / "missing" / "out.mmd"

    with pytest.raises(IOError, match="Error writing"):
        write_output(target, "classDiagram")


def test_write_output_cleans_up_on_failure(tmp_path: Path, monkeypatch):
    def _fail_replace(source, destination):
        raise OSError("replace boom")

    monkeypatch.setattr(os, "replace", _fail_replace)

    with pytest.raises(IOError, match="replace boom"):
        write_output(tmp_path / "out.mmd", "classDiagram")

    assert list(tmp_path.iterdir()) == []
