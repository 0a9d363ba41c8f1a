"""Build a configured counter for one document scan."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Protocol

from .config import DecoratorSettings, get_unordered_level_headings
from .constants import NOT_A_HEADING
from .counter import (
    Counter,
    IndependentCounter,
    OrderedCounter,
    Querier,
    SpliceCounter,
    UnorderedCounter,
)
from .heading import Heading, front_matter_end, split_lines
from .models import DecoratorMode

logger = logging.getLogger(__name__)


class Document(Protocol):
    """A finite sequence of lines addressable by one-based index."""

    @property
    def line_count(self) -> int:
        ...

    def line_text(self, index: int) -> str:
        ...


class TextDocument:
    """`Document` backed by a string.

    Examples:
        doc = TextDocument("# Title\\nBody\\n")
        doc.line_count  # 2
        doc.line_text(1)  # "# Title"
    """

    def __init__(self, text: str):
        self._lines = split_lines(text)

    @classmethod
    def from_lines(cls, lines: list[str]) -> TextDocument:
        document = cls("")
        document._lines = [line.rstrip("\r\n") for line in lines]
        return document

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line_text(self, index: int) -> str:
        return self._lines[index - 1]


def iter_heading_levels(document: Document) -> Iterator[tuple[int, int]]:
    """Yield ``(line_index, level)`` for every heading line, top to bottom.

    A fresh `Heading` detector is used for each call, and every line is fed to
    it so code-fence tracking stays consistent. A leading ``---`` line is only
    treated as front matter when a closing line follows it.
    """
    line_count = document.line_count
    lines = (document.line_text(index) for index in range(1, line_count + 1))
    heading = Heading(front_matter=front_matter_end(lines) is not None)
    for line_index in range(1, line_count + 1):
        line_text = document.line_text(line_index)
        next_line_text = document.line_text(line_index + 1) if line_index < line_count else ""
        level = heading.handler(line_index, line_text, next_line_text)
        if level == NOT_A_HEADING:
            continue
        yield line_index, level


def resolve_ignore_top_level(settings: DecoratorSettings, document: Document) -> int:
    """Work out how many top levels the numbered counters should skip.

    Scans the document through a `Querier` only when the single-top-level or
    existing-structure heuristics are enabled. The scan stops as soon as the
    candidate drops to the limit; the result is then raised to the
    always-ignore floor when that option is set.

    Examples:
        settings = DecoratorSettings(ordered_based_on_existing=True)
        resolve_ignore_top_level(settings, TextDocument("## A\\n### B\\n## C"))  # 2
    """
    ignore_top_level = 0
    ignore_single = settings.ordered_ignore_single and not settings.ordered_always_ignore
    ignore_limit = settings.ordered_ignore_maximum if settings.ordered_always_ignore else 0

    if ignore_single or settings.ordered_based_on_existing:
        querier = Querier(settings.ordered_allow_zero_level, settings.max_rec_level)
        for _, level in iter_heading_levels(document):
            querier.handler(level)
            ignore_top_level = querier.query(
                ignore_single,
                settings.ordered_ignore_maximum,
                settings.ordered_based_on_existing,
            )
            if ignore_top_level <= ignore_limit:
                break

    if ignore_top_level < ignore_limit:
        ignore_top_level = ignore_limit

    return ignore_top_level


def create_counter(settings: DecoratorSettings, document: Document) -> Counter:
    """Create the counter described by `settings` for one scan of `document`.

    Args:
        settings: Decorator settings.
        document: Document that will be scanned with the returned counter.

    Returns:
        Counter: A fresh counter; build a new one for every scan.

    Examples:
        counter = create_counter(DecoratorSettings(), TextDocument("# A\\n## B"))
        counter.decorator(1)  # "1"
    """
    mode = settings.mode
    if mode is DecoratorMode.UNORDERED:
        return UnorderedCounter(
            get_unordered_level_headings(settings.unordered_level_headings),
            settings.max_rec_level,
        )

    ignore_top_level = resolve_ignore_top_level(settings, document)
    logger.debug("Creating %s counter, ignoring %d top level(s)", mode.value, ignore_top_level)

    common = {
        "max_rec_level": settings.max_rec_level,
        "ignore_top_level": ignore_top_level,
        "allow_zero_level": settings.ordered_allow_zero_level,
    }
    if mode is DecoratorMode.INDEPENDENT:
        independent = settings.independent
        return IndependentCounter(
            descriptors=[level.to_descriptor() for level in independent.levels],
            ordered_rec_level=independent.ordered_rec_level,
            **common,
        )
    if mode is DecoratorMode.SPLICE:
        splice = settings.splice
        return SpliceCounter(
            styles=[level.to_style() for level in splice.levels],
            joiner=splice.to_joiner(),
            **common,
        )
    return OrderedCounter(descriptor=settings.ordered_descriptor(), **common)
