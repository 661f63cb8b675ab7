"""Structure-aware sentence reflow for Markdown documents."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .constants import (
    FENCE_TOKENS,
    INDENTED_CODE_PREFIXES,
    TABLE_CELL_SEPARATOR,
    VERBATIM_LEADERS,
)
from .markers import extract_prefix_and_content, is_header, is_list_item
from .models import ClassifiedLine, LineCategory, ScanContext, ScanState
from .sentences import split_sentences

logger = logging.getLogger(__name__)


def split_document_lines(document: str) -> list[str]:
    """Split a document into lines without terminators.

    Lines end at ``\\n``; a ``\\r`` right before the ``\\n`` is dropped. A
    final terminator does not produce an extra empty line.

    Examples:
        split_document_lines("a\\r\\nb\\n")  # ["a", "b"]
        split_document_lines("")  # []
    """
    *terminated, last = document.split("\n")
    lines = [line[:-1] if line.endswith("\r") else line for line in terminated]
    if last:
        lines.append(last)
    return lines


def _fence_token(line: str) -> str | None:
    stripped = line.lstrip()
    for token in FENCE_TOKENS:
        if stripped.startswith(token):
            return token
    return None


def _try_open_fence(ctx: ScanContext, token: str) -> ScanContext | None:
    """Open a fenced code block when scanning normal text.

    Args:
        ctx: Scan state before the fence line.
        token: Fence token found at the start of the line.

    Returns:
        ScanContext | None: The state inside the new block, or None when a
        block is already open.
    """
    if ctx.in_code_block:
        return None
    return ScanContext(state=ScanState.IN_FENCED_CODE, fence_token=token)


def _try_close_fence(ctx: ScanContext, token: str) -> ScanContext | None:
    """Close the active code block when the fence token matches.

    A fence of the other kind inside a block is plain block content.

    Examples:
        ctx = ScanContext(state=ScanState.IN_FENCED_CODE, fence_token="```")
        _try_close_fence(ctx, "```")  # ScanContext()
        _try_close_fence(ctx, "~~~")  # None
    """
    if not ctx.in_code_block or token != ctx.fence_token:
        return None
    return ScanContext()


def classify_line(line: str, ctx: ScanContext) -> tuple[LineCategory, ScanContext]:
    """Classify one line and compute the scan state for the next one.

    Checks run in priority order and the first match wins: fence delimiter,
    inside a code block, indented code, table row, blank line, header or
    list item, other structural lines, and finally plain paragraph text.

    Args:
        line: Line without its terminator.
        ctx: Scan state before the line.

    Returns:
        tuple[LineCategory, ScanContext]: The category and the scan state
        after the line. `ctx` itself is never modified.

    Examples:
        classify_line("```python", ScanContext())
        # (LineCategory.FENCE_DELIMITER, ScanContext(IN_FENCED_CODE, "```"))
    """
    token = _fence_token(line)
    if token is not None:
        next_ctx = _try_open_fence(ctx, token) or _try_close_fence(ctx, token) or ctx
        return LineCategory.FENCE_DELIMITER, next_ctx

    if ctx.in_code_block:
        return LineCategory.INSIDE_CODE_BLOCK, ctx

    if line.startswith(INDENTED_CODE_PREFIXES):
        return LineCategory.INDENTED_CODE, ctx

    stripped = line.strip()
    if stripped and TABLE_CELL_SEPARATOR in stripped:
        return LineCategory.TABLE_ROW, ctx

    if not stripped:
        return LineCategory.BLANK, ctx

    trimmed = line.lstrip()
    if is_header(trimmed):
        return LineCategory.HEADER, ctx

    if is_list_item(trimmed):
        return LineCategory.LIST_ITEM, ctx

    if trimmed.startswith(VERBATIM_LEADERS):
        return LineCategory.STRUCTURAL, ctx

    return LineCategory.PARAGRAPH, ctx


def iter_classified_lines(document: str) -> Iterator[ClassifiedLine]:
    """Classify every line of a document, threading the scan state.

    Each call starts from a fresh `ScanContext`. An unterminated fence leaves
    the remaining lines inside the code block.

    Args:
        document: Full Markdown text.

    Yields:
        ClassifiedLine: Each line with its category and the state after it.
    """
    ctx = ScanContext()
    line_count = 0
    for line in split_document_lines(document):
        category, ctx = classify_line(line, ctx)
        line_count += 1
        yield ClassifiedLine(text=line, category=category, context=ctx)

    logger.debug("Scanned %d lines", line_count)
    if ctx.in_code_block:
        logger.debug("Document ends inside a %s code block", ctx.fence_token)


def render_line(classified: ClassifiedLine) -> list[str]:
    """Render one classified line as output lines without terminators.

    Header and list lines keep their prefix on the first sentence; later
    sentences are padded with spaces to the prefix width. Paragraph lines
    emit one sentence per line. Everything else is returned unchanged.

    Examples:
        render_line(ClassifiedLine("1. One. Two.", LineCategory.LIST_ITEM, ScanContext()))
        # ["1. One.", "   Two."]
    """
    if classified.category is LineCategory.PARAGRAPH:
        return split_sentences(classified.text)

    if classified.category.is_verbatim:
        return [classified.text]

    split = extract_prefix_and_content(classified.text)
    if not split.content.strip():
        return [classified.text]

    first, *rest = split_sentences(split.content)
    padding = " " * len(split.prefix)
    return [split.prefix + first, *(padding + sentence for sentence in rest)]


def reflow(document: str) -> str:
    """Reformat Markdown so each sentence starts on its own line.

    Code blocks, indented code, tables, blank lines, blockquotes and rules
    pass through unchanged. Headers, list items and paragraph lines are
    split into sentences. Never raises for `str` input.

    Args:
        document: Markdown text.

    Returns:
        str: Reformatted text, every line terminated by ``\\n``. Empty input
        yields an empty string.

    Examples:
        reflow("One. Two.")  # "One.\\nTwo.\\n"
        reflow("* First item. Second sentence.")  # "* First item.\\n  Second sentence.\\n"
    """
    output: list[str] = []
    for classified in iter_classified_lines(document):
        output.extend(f"{line}\n" for line in render_line(classified))
    return "".join(output)
