"""Sentence segmentation for prose content."""

from __future__ import annotations

from collections.abc import Sequence

from .constants import SENTENCE_OPENERS, SENTENCE_TERMINALS


def _starts_sentence(character: str) -> bool:
    return character.isupper() or character.isnumeric() or character in SENTENCE_OPENERS


def _gap_end(chars: Sequence[str], index: int) -> int:
    while index < len(chars) and chars[index].isspace() and chars[index] != "\n":
        index += 1
    return index


def is_sentence_boundary(chars: Sequence[str], index: int) -> bool:
    """Decide whether the terminal just before `index` ends a sentence.

    Any whitespace after the terminal is skipped, possibly none. The
    terminal ends a sentence at the end of the text, or when the next
    character is an uppercase letter, a digit, ``[`` or ``(``.

    Args:
        chars: Characters of the text being segmented.
        index: Position right after a ``.``, ``!`` or ``?``.

    Returns:
        bool: True when a new sentence starts after the terminal.

    Examples:
        is_sentence_boundary("One. Two", 4)  # True
        is_sentence_boundary("e.g. this", 4)  # False
        is_sentence_boundary("Hello.World", 6)  # True
    """
    gap_end = _gap_end(chars, index)
    if gap_end >= len(chars):
        return True
    return _starts_sentence(chars[gap_end])


def split_sentences(text: str) -> list[str]:
    """Split a unit of prose into trimmed sentences.

    Scans left to right. After each ``.``, ``!`` or ``?`` the following
    whitespace (never a newline) is consumed into the current sentence, which
    ends there when `is_sentence_boundary` agrees. Abbreviations followed by
    a lowercase word therefore stay inside their sentence.

    Args:
        text: A paragraph line or the content of a header or list item.

    Returns:
        list[str]: At least one sentence. Blank input is returned unchanged
        as the only element.

    Examples:
        split_sentences("Is it? Yes! Done.")  # ["Is it?", "Yes!", "Done."]
        split_sentences("Use a tool, e.g. this one.")  # ["Use a tool, e.g. this one."]
    """
    if not text.strip():
        return [text]

    chars = list(text)
    sentences: list[str] = []
    buffer: list[str] = []
    i = 0

    while i < len(chars):
        character = chars[i]
        buffer.append(character)
        i += 1

        if character not in SENTENCE_TERMINALS:
            continue

        boundary = is_sentence_boundary(chars, i)
        gap_end = _gap_end(chars, i)
        # Trailing gap belongs to the sentence and is trimmed on emission
        buffer.extend(chars[i:gap_end])
        i = gap_end

        if boundary:
            sentences.append("".join(buffer).strip())
            buffer.clear()

    remainder = "".join(buffer).strip()
    if remainder:
        sentences.append(remainder)

    return sentences
