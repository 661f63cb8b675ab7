"""Constants used across the md-sentence-format package."""

from __future__ import annotations

import re

# Code fences
BACKTICK_FENCE = "```"
TILDE_FENCE = "~~~"
FENCE_TOKENS = (BACKTICK_FENCE, TILDE_FENCE)

# Indented code opens with four literal spaces or a tab
INDENTED_CODE_PREFIXES = ("    ", "\t")

TABLE_CELL_SEPARATOR = "|"

# Structural markers
BLOCKQUOTE_MARKER = ">"
UNORDERED_LIST_MARKERS = ("*", "-", "+")
# Blockquotes, rules (--- *** ___) and bare bullets are kept verbatim
UNDERSCORE_RULE = "___"
VERBATIM_LEADERS = (BLOCKQUOTE_MARKER, UNDERSCORE_RULE, *UNORDERED_LIST_MARKERS)

HEADER_MARKER_PATTERN = re.compile(r"^(#+) ")
ORDERED_LIST_PATTERN = re.compile(r"^([0-9]+)([.)]) ")

# Sentences
SENTENCE_TERMINALS = frozenset(".!?")
SENTENCE_OPENERS = frozenset("[(")

# I/O limits and defaults
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_ENCODING = "utf-8"
STDIN_PATH = "-"
