"""Filesystem helpers for md-sentence-format."""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from pathlib import Path
from typing import TextIO

from .exceptions import FileChangedError, FileTooLargeError, InputError

logger = logging.getLogger(__name__)


def collect_file_stat(filepath: Path) -> os.stat_result:
    """Return stat information for a file while disallowing symlinks.

    Args:
        filepath: Path to the file.

    Returns:
        os.stat_result: File metadata gathered without following symlinks.

    Raises:
        InputError: If the path is inaccessible, a symlink, or not a regular
            file.

    Examples:
        stat_result = collect_file_stat(Path("README.md"))
    """
    try:
        stat_result = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise InputError(f"Error accessing {filepath}: {error}") from error

    if stat.S_ISLNK(stat_result.st_mode):
        raise InputError(f"Symlinks are not supported: {filepath}.")

    if not stat.S_ISREG(stat_result.st_mode):
        raise InputError(f"{filepath} is not a regular file.")

    return stat_result


def enforce_file_size(stat_result: os.stat_result, max_size: int, filepath: Path):
    """Guard against files that exceed the configured maximum size.

    Raises:
        FileTooLargeError: If `stat_result.st_size` exceeds `max_size`.
    """
    if stat_result.st_size > max_size:
        raise FileTooLargeError(filepath, max_size)


def ensure_file_unchanged(
    expected_stat: os.stat_result, current_stat: os.stat_result, filepath: Path
):
    """Detect changes between two filesystem snapshots.

    Raises:
        FileChangedError: If inode, device, size, or modification time differ.
    """
    fingerprint_before = (
        getattr(expected_stat, "st_ino", None),
        getattr(expected_stat, "st_dev", None),
        expected_stat.st_size,
        expected_stat.st_mtime_ns,
    )
    fingerprint_after = (
        getattr(current_stat, "st_ino", None),
        getattr(current_stat, "st_dev", None),
        current_stat.st_size,
        current_stat.st_mtime_ns,
    )

    if fingerprint_before != fingerprint_after:
        raise FileChangedError(filepath)


def safe_read(filepath: Path, encoding: str) -> TextIO:
    """Open a file for reading with consistent error handling.

    Raises:
        InputError: If the path is missing, inaccessible, or not a file.

    Examples:
        with safe_read(Path("README.md"), "utf-8") as handle:
            first_line = handle.readline()
    """
    try:
        return open(filepath, "r", encoding=encoding, newline="")
    except (
        FileNotFoundError,
        PermissionError,
        IsADirectoryError,
        NotADirectoryError,
    ) as error:
        raise InputError(f"Error accessing {filepath}: {error}") from error


def read_document(
    filepath: Path, max_size: int, encoding: str
) -> tuple[str, os.stat_result]:
    """Read a whole document from disk.

    Line terminators are returned untranslated so that the reflow sees the
    original ``\\r\\n`` pairs.

    Args:
        filepath: File to read.
        max_size: Maximum allowed size in bytes.
        encoding: Text encoding of the file.

    Returns:
        tuple[str, os.stat_result]: The file text and the stat captured before
        reading, used later to detect concurrent modification.

    Raises:
        InputError: If the file is missing, too large, unreadable, or not
            valid text in `encoding`.
    """
    initial_stat = collect_file_stat(filepath)
    enforce_file_size(initial_stat, max_size, filepath)

    try:
        with safe_read(filepath, encoding) as file:
            content = file.read()
    except UnicodeDecodeError as error:
        raise InputError(f"Invalid {encoding} sequence in {filepath}: {error}") from error
    except InputError:
        raise
    except OSError as error:
        raise InputError(f"Error reading file {filepath}: {error}") from error

    logger.debug("Read %d characters from %s", len(content), filepath)
    return content, initial_stat


def read_stream(stream: TextIO) -> str:
    """Read a whole document from a text stream such as stdin.

    Raises:
        InputError: If the stream cannot be read or decoded.
    """
    try:
        content = stream.read()
    except (OSError, UnicodeDecodeError) as error:
        raise InputError(f"Error reading from stdin: {error}") from error

    logger.debug("Read %d characters from stdin", len(content))
    return content


def write_document(
    filepath: Path, content: str, expected_stat: os.stat_result, encoding: str
):
    """Replace a file's content atomically.

    The new content is written to a temporary file in the same directory,
    synced, given the original permissions, and moved over the original.

    Args:
        filepath: File to rewrite.
        content: New file content.
        expected_stat: Stat captured when the file was read.
        encoding: Text encoding for the new content.

    Raises:
        InputError: If the file is a symlink, changed since it was read, or
            cannot be replaced.

    Examples:
        text, before = read_document(Path("notes.md"), 1024, "utf-8")
        write_document(Path("notes.md"), reflow(text), before, "utf-8")
    """
    current_stat = collect_file_stat(filepath)
    ensure_file_unchanged(expected_stat, current_stat, filepath)

    permissions = stat.S_IMODE(expected_stat.st_mode)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding=encoding, newline="", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
            os.chmod(tmp_file.name, permissions)

        os.replace(temp_path, filepath)
        logger.debug("Rewrote %s", filepath)
    except OSError as error:
        raise InputError(f"Error writing {filepath}: {error}") from error
    finally:
        if temp_path is not None:
            try:
                temp_path.unlink(missing_ok=True)
            except OSError:
                pass
