"""
Line classification for code-only counting.

Each physical line is classified as blank, comment or code by a two-state
automaton driven by the comment grammar of the file's language. This is an
approximation of a real lexer: comment markers inside string literals and
nested block comments are not recognized.

Python is handled through the grammar's docstring delimiters. A line that
starts with a triple quote opens a block unless the same delimiter closes it
later on the line, and a block ends on the first line that ends with either
triple quote. The closing check does not remember which delimiter opened the
block.
"""

from enum import Enum
from typing import Iterable

from models import LanguageGrammar


class BlockState(Enum):
    OUTSIDE = "outside"
    INSIDE_BLOCK = "inside_block"


def classify_lines(
    lines: Iterable[str], grammar: LanguageGrammar | None
) -> tuple[int, int]:
    """
    Count total and code lines in a sequence of physical lines.

    Rules, applied per line in order:
        1. Every line counts towards the total.
        2. Whitespace-only lines are never code.
        3. Without a grammar every other line is code.
        4. Inside a block comment, the line is a comment; a line containing
           the closing delimiter ends the block.
        5. A line starting with the block opener is a comment. It opens a
           block unless it also closes on the same line.
        6. A line starting with a line-comment prefix is a comment.
        7. Anything else is code.

    Args:
        lines: Physical lines, without line terminators.
        grammar: The comment grammar, or None for unrecognized languages.

    Returns:
        A (total, code) tuple with 0 <= code <= total.
    """
    total = 0
    code = 0
    state = BlockState.OUTSIDE

    for line in lines:
        total += 1
        trimmed = line.strip()

        if not trimmed:
            continue

        if grammar is None:
            code += 1
            continue

        if state is BlockState.INSIDE_BLOCK:
            if closes_block(trimmed, grammar):
                state = BlockState.OUTSIDE
            continue

        if grammar.has_block_comments and opens_block(trimmed, grammar):
            if not is_same_line_block(trimmed, grammar):
                state = BlockState.INSIDE_BLOCK
            continue

        if is_line_comment(trimmed, grammar):
            continue

        code += 1

    return total, code


def is_line_comment(trimmed: str, grammar: LanguageGrammar) -> bool:
    return any(trimmed.startswith(prefix) for prefix in grammar.line_comment_prefixes)


def opens_block(trimmed: str, grammar: LanguageGrammar) -> bool:
    if grammar.docstring_delimiters:
        return any(trimmed.startswith(d) for d in grammar.docstring_delimiters)
    return trimmed.startswith(grammar.block_comment_start)


def closes_block(trimmed: str, grammar: LanguageGrammar) -> bool:
    if grammar.docstring_delimiters:
        # Docstrings close at the end of a line, never in the middle.
        return any(trimmed.endswith(d) for d in grammar.docstring_delimiters)
    return grammar.block_comment_end in trimmed


def is_same_line_block(trimmed: str, grammar: LanguageGrammar) -> bool:
    """Return True when a block opened by this line also closes on it."""
    if grammar.docstring_delimiters:
        for delim in grammar.docstring_delimiters:
            if trimmed.startswith(delim) and delim in trimmed[len(delim) :]:
                return True
        return False

    start = grammar.block_comment_start
    if not trimmed.startswith(start):
        return False
    return grammar.block_comment_end in trimmed[len(start) :]
