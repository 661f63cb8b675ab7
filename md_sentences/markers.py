"""Header and list marker detection."""

from __future__ import annotations

from .constants import HEADER_MARKER_PATTERN, ORDERED_LIST_PATTERN, UNORDERED_LIST_MARKERS
from .models import PrefixedContent


def _unordered_marker(trimmed: str) -> str | None:
    for marker in UNORDERED_LIST_MARKERS:
        if trimmed.startswith(f"{marker} "):
            return f"{marker} "
    return None


def is_list_item(trimmed: str) -> bool:
    """Determine whether left-trimmed text opens with a list marker.

    Unordered items use ``*``, ``-`` or ``+``; ordered items use a run of
    ASCII digits followed by ``.`` or ``)``. Either marker must be followed
    immediately by a space.

    Args:
        trimmed: Line text with leading whitespace removed.

    Returns:
        bool: True when the text starts with a list marker.

    Examples:
        is_list_item("- item")  # True
        is_list_item("12) item")  # True
        is_list_item("1.5 litres")  # False
    """
    if _unordered_marker(trimmed) is not None:
        return True
    return ORDERED_LIST_PATTERN.match(trimmed) is not None


def is_header(trimmed: str) -> bool:
    """Determine whether left-trimmed text opens with a ``#`` header marker.

    Examples:
        is_header("## Usage")  # True
        is_header("#hashtag")  # False
    """
    return HEADER_MARKER_PATTERN.match(trimmed) is not None


def extract_prefix_and_content(line: str) -> PrefixedContent:
    """Split a header or list line into its prefix and prose content.

    The prefix keeps the original indentation, the marker, and exactly one
    following space, so ``prefix + content`` always equals `line`.

    Args:
        line: Original line, indentation included.

    Returns:
        PrefixedContent: The split line. Lines without a header or list
        marker yield an empty prefix and the whole line as content.

    Examples:
        extract_prefix_and_content("  - Item. More.")  # ("  - ", "Item. More.")
        extract_prefix_and_content("### Title")  # ("### ", "Title")
    """
    trimmed = line.lstrip()
    indent = line[: len(line) - len(trimmed)]

    header_match = HEADER_MARKER_PATTERN.match(trimmed)
    if header_match:
        marker = header_match.group(0)
    else:
        marker = _unordered_marker(trimmed)
        if marker is None:
            ordered_match = ORDERED_LIST_PATTERN.match(trimmed)
            marker = ordered_match.group(0) if ordered_match else None

    if marker is None:
        return PrefixedContent(prefix="", content=line)

    prefix = indent + marker
    return PrefixedContent(prefix=prefix, content=line[len(prefix) :])
