from __future__ import annotations

import io
import os
import stat
from pathlib import Path

import pytest

from md_sentences.exceptions import FileChangedError, FileTooLargeError, InputError
from md_sentences.filesystem import (
    collect_file_stat,
    enforce_file_size,
    ensure_file_unchanged,
    read_document,
    read_stream,
    safe_read,
    write_document,
)


def test_collect_file_stat_missing_file(tmp_path: Path):
    with pytest.raises(InputError, match="Error accessing"):
        collect_file_stat(tmp_path / "missing.md")


def test_collect_file_stat_rejects_directory(tmp_path: Path):
    with pytest.raises(InputError, match="not a regular file"):
        collect_file_stat(tmp_path)


@pytest.mark.skipif(not hasattr(os, "symlink"), reason="Symlink support is required")
def test_symlinks_are_rejected_before_reading(tmp_path: Path):
    source = tmp_path / "source.md"
    source.write_text("Text.\n", encoding="utf-8")
    link = tmp_path / "alias.md"
    try:
        os.symlink(source, link)
    except OSError as error:  # pragma: no cover - platform dependent
        pytest.skip(f"Unable to create symlink: {error}")

    with pytest.raises(InputError, match="Symlinks"):
        collect_file_stat(link)
    with pytest.raises(InputError, match="Symlinks"):
        read_document(link, 1024, "utf-8")


def test_enforce_file_size(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("X" * 20, encoding="utf-8")
    stat_result = target.stat()

    enforce_file_size(stat_result, 20, target)
    with pytest.raises(FileTooLargeError) as excinfo:
        enforce_file_size(stat_result, 10, target)

    assert excinfo.value.max_size == 10
    assert "maximum allowed size of 10 bytes" in str(excinfo.value)


def test_ensure_file_unchanged_detects_modification(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("one\n", encoding="utf-8")
    before = target.stat()
    target.write_text("one and more\n", encoding="utf-8")

    ensure_file_unchanged(before, before, target)
    with pytest.raises(FileChangedError, match="changed during processing"):
        ensure_file_unchanged(before, target.stat(), target)


def test_safe_read_missing_file(tmp_path: Path):
    with pytest.raises(InputError):
        safe_read(tmp_path / "missing.md", "utf-8")


def test_read_document_keeps_crlf(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_bytes(b"One. Two.\r\nThree.\r\n")

    content, stat_result = read_document(target, 1024, "utf-8")

    assert content == "One. Two.\r\nThree.\r\n"
    assert stat_result.st_size == 19


def test_read_document_rejects_large_files(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("X" * 20, encoding="utf-8")

    with pytest.raises(FileTooLargeError):
        read_document(target, 10, "utf-8")


def test_read_document_rejects_invalid_encoding(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_bytes(b"\xff\xfe\xfa bad")

    with pytest.raises(InputError, match="Invalid utf-8 sequence"):
        read_document(target, 1024, "utf-8")


def test_read_document_uses_encoding(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_bytes("Café. Olé.".encode("latin-1"))

    content, _ = read_document(target, 1024, "latin-1")

    assert content == "Café. Olé."


def test_read_stream():
    assert read_stream(io.StringIO("From stdin.")) == "From stdin."


def test_read_stream_wraps_errors():
    class _Broken(io.StringIO):
        def read(self, *args):
            raise OSError("stream boom")

    with pytest.raises(InputError, match="Error reading from stdin"):
        read_stream(_Broken())


def test_write_document_replaces_content_and_keeps_mode(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("One. Two.\n", encoding="utf-8")
    os.chmod(target, 0o640)
    _, before = read_document(target, 1024, "utf-8")

    write_document(target, "One.\nTwo.\n", before, "utf-8")

    assert target.read_text(encoding="utf-8") == "One.\nTwo.\n"
    assert stat.S_IMODE(target.stat().st_mode) == 0o640
    assert [path.name for path in tmp_path.iterdir()] == ["doc.md"]


def test_write_document_refuses_changed_file(tmp_path: Path):
    target = tmp_path / "doc.md"
    target.write_text("One. Two.\n", encoding="utf-8")
    _, before = read_document(target, 1024, "utf-8")
    target.write_text("Edited elsewhere, longer now.\n", encoding="utf-8")

    with pytest.raises(FileChangedError):
        write_document(target, "One.\nTwo.\n", before, "utf-8")

    assert target.read_text(encoding="utf-8") == "Edited elsewhere, longer now.\n"


def test_write_document_cleans_up_on_failure(tmp_path: Path, monkeypatch):
    target = tmp_path / "doc.md"
    target.write_text("One. Two.\n", encoding="utf-8")
    _, before = read_document(target, 1024, "utf-8")

    def _fail_replace(src, dst):
        raise OSError("replace boom")

    monkeypatch.setattr(os, "replace", _fail_replace)

    with pytest.raises(InputError, match="replace boom"):
        write_document(target, "One.\nTwo.\n", before, "utf-8")

    assert target.read_text(encoding="utf-8") == "One. Two.\n"
    assert [path.name for path in tmp_path.iterdir()] == ["doc.md"]
