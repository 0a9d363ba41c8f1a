"""Heading level detection for Markdown lines."""

from __future__ import annotations

from collections.abc import Iterable

from .constants import (
    ATX_HEADING_PATTERN,
    CLOSING_FENCE_MAX_INDENT,
    CODE_FENCE_PATTERN,
    FRONT_MATTER_CLOSERS,
    FRONT_MATTER_OPENER,
    INDENTED_CODE_COLUMNS,
    LINE_BREAK_PATTERN,
    MAX_HEADING_LEVEL,
    NOT_A_HEADING,
    SETEXT_UNDERLINE_PATTERN,
)
from .models import ParserContext, ParserState


def split_lines(text: str) -> list[str]:
    """Split `text` at Markdown line breaks (``\\n``, ``\\r\\n`` and ``\\r``).

    Other characters that `str.splitlines` treats as breaks, such as form feeds
    or U+2028, stay inside their line.

    Examples:
        split_lines("# A\\r\\nB\\x0cC\\n")  # ["# A", "B\\x0cC"]
    """
    lines = LINE_BREAK_PATTERN.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def front_matter_end(lines: Iterable[str]) -> int | None:
    """Zero-based index of the line closing a leading front-matter block.

    Returns None when the first line is not ``---`` or no closing ``---`` or
    ``...`` line follows it.

    Examples:
        front_matter_end(["---", "title: x", "---", "# A"])  # 2
        front_matter_end(["---", "# A"])  # None
    """
    iterator = iter(lines)
    first_line = next(iterator, None)
    if first_line is None or first_line.rstrip() != FRONT_MATTER_OPENER:
        return None

    for index, line in enumerate(iterator, start=1):
        if line.rstrip() in FRONT_MATTER_CLOSERS:
            return index
    return None


def _leading_whitespace_columns(line: str) -> int:
    """Compute the column width of leading whitespace.

    Tabs advance to the next multiple of four columns to match Markdown
    indentation rules.

    Examples:
        _leading_whitespace_columns("    text")  # 4
        _leading_whitespace_columns("\\ttext")  # 4
    """
    columns = 0
    for character in line:
        if character == " ":
            columns += 1
            continue
        if character == "\t":
            columns += 4 - (columns % 4)
            continue
        break
    return columns


def _try_open_fence(ctx: ParserContext, line: str) -> bool:
    """Detect the start of a fenced code block and update the context."""
    if ctx.state is not ParserState.NORMAL:
        return False

    fence_match = CODE_FENCE_PATTERN.match(line)
    if not fence_match:
        return False

    if _leading_whitespace_columns(fence_match.group("indent")) > CLOSING_FENCE_MAX_INDENT:
        return False

    fence_sequence = fence_match.group("fence")
    # Backtick fences cannot carry backticks in their info string.
    if fence_sequence[0] == "`" and "`" in fence_match.group("info"):
        return False

    ctx.state = ParserState.IN_FENCED_CODE
    ctx.fence_char = fence_sequence[0]
    ctx.fence_length = len(fence_sequence)
    return True


def _try_close_fence(ctx: ParserContext, line: str) -> bool:
    """Close the active fenced code block when `line` is a matching fence."""
    if ctx.state is not ParserState.IN_FENCED_CODE or ctx.fence_char is None:
        return False

    stripped_line = line.lstrip(" \t")
    if not stripped_line or stripped_line[0] != ctx.fence_char:
        return False

    fence_run_length = len(stripped_line) - len(stripped_line.lstrip(ctx.fence_char))
    if fence_run_length < ctx.fence_length:
        return False

    if stripped_line[fence_run_length:].strip():
        return False

    if _leading_whitespace_columns(line) > CLOSING_FENCE_MAX_INDENT:
        return False

    ctx.state = ParserState.NORMAL
    ctx.fence_char = None
    ctx.fence_length = 0
    return True


def _try_enter_front_matter(ctx: ParserContext, line_index: int, line: str) -> bool:
    if ctx.state is not ParserState.NORMAL or line_index != 1:
        return False

    if line.rstrip() != FRONT_MATTER_OPENER:
        return False

    ctx.state = ParserState.IN_FRONT_MATTER
    return True


def _try_exit_front_matter(ctx: ParserContext, line: str) -> bool:
    if ctx.state is not ParserState.IN_FRONT_MATTER:
        return False

    if line.rstrip() not in FRONT_MATTER_CLOSERS:
        return False

    ctx.state = ParserState.NORMAL
    return True


def atx_level(line: str) -> int:
    """Return the level of a hash-prefixed heading line, or -1.

    Examples:
        atx_level("## Section")  # 2
        atx_level("####### Too deep")  # -1
        atx_level("#hashtag")  # -1
    """
    match = ATX_HEADING_PATTERN.match(line)
    if not match:
        return NOT_A_HEADING

    level = len(match.group("hashes"))
    if level > MAX_HEADING_LEVEL:
        return NOT_A_HEADING
    return level


def setext_level(underline: str) -> int:
    """Return the level implied by a setext underline, or -1.

    Examples:
        setext_level("=====")  # 1
        setext_level("  ---  ")  # 2
        setext_level("-=-")  # -1
    """
    if _leading_whitespace_columns(underline) >= INDENTED_CODE_COLUMNS:
        return NOT_A_HEADING

    stripped = underline.strip()
    if not SETEXT_UNDERLINE_PATTERN.match(stripped):
        return NOT_A_HEADING
    return 1 if stripped[0] == "=" else 2


def _is_setext_text(line: str) -> bool:
    stripped = line.strip()
    if not stripped:
        return False
    if stripped.startswith("#"):
        return False
    if SETEXT_UNDERLINE_PATTERN.match(stripped):
        return False
    if _leading_whitespace_columns(line) >= INDENTED_CODE_COLUMNS:
        return False
    return True


class Heading:
    """Classify document lines as heading levels.

    Recognizes hash-prefixed (ATX) and underline-style (setext) headings.
    Fenced code blocks and a leading YAML front-matter block are tracked
    across calls, so every line has to be fed in increasing order without
    skipping any. Feeding an index not greater than the previous one starts a
    new scan.

    Args:
        front_matter: Whether the document opens with a closed front-matter
            block (see `front_matter_end`). A first line of ``---`` is only
            skipped as front matter when this is True.

    Examples:
        heading = Heading()
        heading.handler(1, "# Title", "")  # 1
        heading.handler(2, "Intro", "=====")  # 1
        heading.handler(3, "=====", "")  # -1
    """

    def __init__(self, front_matter: bool = False):
        self.front_matter = front_matter
        self._ctx = ParserContext()

    def handler(self, line_index: int, line_text: str, next_line_text: str = "") -> int:
        ctx = self._ctx
        if line_index <= ctx.last_line_index:
            self._ctx = ctx = ParserContext()
        ctx.last_line_index = line_index

        line_text = line_text.rstrip("\r\n")
        next_line_text = next_line_text.rstrip("\r\n")

        if ctx.state is ParserState.IN_FENCED_CODE:
            _try_close_fence(ctx, line_text)
            return NOT_A_HEADING

        if ctx.state is ParserState.IN_FRONT_MATTER:
            _try_exit_front_matter(ctx, line_text)
            return NOT_A_HEADING

        if self.front_matter and _try_enter_front_matter(ctx, line_index, line_text):
            return NOT_A_HEADING

        if _try_open_fence(ctx, line_text):
            return NOT_A_HEADING

        level = atx_level(line_text)
        if level != NOT_A_HEADING:
            return level

        if _is_setext_text(line_text) and not CODE_FENCE_PATTERN.match(line_text):
            return setext_level(next_line_text)

        return NOT_A_HEADING
