"""Data models for md-sentence-format."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class ScanState(Enum):
    """Scanner states used while walking Markdown lines.

    Attributes:
        NORMAL: Default state for regular text.
        IN_FENCED_CODE: Inside a fenced code block.
    """

    NORMAL = auto()
    IN_FENCED_CODE = auto()


@dataclass(frozen=True)
class ScanContext:
    """Scan state carried from one line to the next.

    A fence token is recorded only while a fenced code block is open.

    Attributes:
        state: Current scanner state.
        fence_token: Fence token (```` ``` ```` or ``~~~``) that opened the
            active code block, or None outside code blocks.
    """

    state: ScanState = ScanState.NORMAL
    fence_token: str | None = None

    @property
    def in_code_block(self) -> bool:
        return self.state is ScanState.IN_FENCED_CODE


class LineCategory(Enum):
    """Structural category assigned to a single line.

    Members are listed in the order the classifier tries them.
    """

    FENCE_DELIMITER = auto()
    INSIDE_CODE_BLOCK = auto()
    INDENTED_CODE = auto()
    TABLE_ROW = auto()
    BLANK = auto()
    HEADER = auto()
    LIST_ITEM = auto()
    STRUCTURAL = auto()
    PARAGRAPH = auto()

    @property
    def is_verbatim(self) -> bool:
        """True for categories that are always emitted unchanged."""
        return self not in (LineCategory.HEADER, LineCategory.LIST_ITEM, LineCategory.PARAGRAPH)


@dataclass(frozen=True)
class PrefixedContent:
    """A header or list line split into its marker prefix and prose.

    Attributes:
        prefix: Indentation, marker, and the single separating space. Empty
            when the line carries no recognized marker.
        content: Everything after the prefix.
    """

    prefix: str
    content: str


@dataclass(frozen=True)
class ClassifiedLine:
    """A physical line together with its category.

    Attributes:
        text: The line without its terminator.
        category: Category chosen for the line.
        context: Scan state after the line has been consumed.
    """

    text: str
    category: LineCategory
    context: ScanContext
