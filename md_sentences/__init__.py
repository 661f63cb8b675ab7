"""
md-sentence-format: one sentence per line for Markdown files.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    md-sentence-format README.md
    md-sentence-format --in-place README.md

Library Usage:
    from md_sentences import reflow

    print(reflow("First sentence. Second sentence."), end="")
"""

from .exceptions import FileChangedError, FileTooLargeError, InputError
from .formatter import classify_line, iter_classified_lines, reflow, render_line
from .markers import extract_prefix_and_content, is_header, is_list_item
from .models import ClassifiedLine, LineCategory, PrefixedContent, ScanContext, ScanState
from .sentences import split_sentences

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "reflow",
    "split_sentences",
    "classify_line",
    "iter_classified_lines",
    "render_line",
    # Marker helpers
    "extract_prefix_and_content",
    "is_header",
    "is_list_item",
    # Data models
    "ClassifiedLine",
    "LineCategory",
    "PrefixedContent",
    "ScanContext",
    "ScanState",
    # Exceptions
    "InputError",
    "FileChangedError",
    "FileTooLargeError",
    # Version
    "__version__",
]
