"""Package-specific exception types."""

from __future__ import annotations

from pathlib import Path


class InputError(OSError):
    """Base class for errors reading or writing a document.

    The reflow engine itself never raises; these errors come from the
    command-line layer around it.
    """


class FileTooLargeError(InputError):
    """Raised when a file exceeds the configured maximum size.

    Args:
        path: File that was rejected.
        max_size: Maximum allowed size in bytes.
    """

    def __init__(self, path: Path, max_size: int):
        self.path = path
        self.max_size = max_size
        super().__init__(f"{path} exceeds the maximum allowed size of {max_size} bytes.")


class FileChangedError(InputError):
    """Raised when a file changes between reading and rewriting it.

    Args:
        path: File that changed.
    """

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"{path} changed during processing; refusing to overwrite.")
