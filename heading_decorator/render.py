"""Pair detected headings with their labels and place labels on lines."""

from __future__ import annotations

from .config import DecoratorSettings
from .factory import Document, TextDocument, create_counter, iter_heading_levels
from .models import DecoratedHeading, Position


def find_first_character_index(text: str) -> int:
    """Index of the first heading-text character in a line.

    For hash-prefixed lines this skips the hashes and the following
    whitespace; otherwise it skips leading whitespace. Returns 0 when the line
    has no such character.

    Examples:
        find_first_character_index("## Title")  # 3
        find_first_character_index("  Title")  # 2
    """
    if text.strip().startswith("#"):
        for index, character in enumerate(text):
            if character != "#" and character.strip():
                return index
    else:
        for index, character in enumerate(text):
            if character.strip():
                return index
    return 0


def render_line(text: str, label: str, position: Position | str = Position.BEFORE) -> str:
    """Place `label` on a heading line.

    Args:
        text: Heading line.
        label: Label to add; an empty label leaves the line unchanged.
        position: ``before`` prefixes the line, ``before-inside`` inserts the
            label before the heading text (after any ``#`` markers), ``after``
            and ``after-inside`` append it.

    Examples:
        render_line("## Title", "1.1", "before-inside")  # "## 1.1 Title"
        render_line("## Title", "1.1", "after")  # "## Title 1.1"
    """
    if not label:
        return text

    position = Position(position)
    if position is Position.BEFORE:
        return f"{label} {text}"
    if position is Position.BEFORE_INSIDE:
        index = find_first_character_index(text)
        return f"{text[:index]}{label} {text[index:]}"
    return f"{text.rstrip()} {label}"


def decorate_document(settings: DecoratorSettings, document: Document) -> list[DecoratedHeading]:
    """Run both scans over `document` and return every heading with its label.

    The first scan (inside the factory) resolves how many top levels to
    ignore; the second feeds each detected level to a fresh counter.

    Examples:
        headings = decorate_document(DecoratorSettings(), TextDocument("# A\\n## B"))
        [heading.label for heading in headings]  # ["1", "1.1"]
    """
    counter = create_counter(settings, document)
    decorated = []
    for line_index, level in iter_heading_levels(document):
        counter.handler(level)
        decorated.append(
            DecoratedHeading(
                line_index=line_index,
                level=level,
                text=document.line_text(line_index),
                label=counter.decorator(level),
            )
        )
    return decorated


def decorate_text(text: str, settings: DecoratorSettings, headings_only: bool = True) -> str:
    """Return `text` with labels placed according to ``settings.position``.

    Args:
        text: Markdown document.
        settings: Decorator settings.
        headings_only: When True only heading lines are returned; otherwise
            the whole document is returned with heading lines decorated.

    Returns:
        str: Newline-terminated lines.
    """
    document = TextDocument(text)
    headings = decorate_document(settings, document)

    if headings_only:
        lines = [render_line(heading.text, heading.label, settings.position) for heading in headings]
    else:
        lines = [document.line_text(index) for index in range(1, document.line_count + 1)]
        for heading in headings:
            lines[heading.line_index - 1] = render_line(heading.text, heading.label, settings.position)

    return "".join(f"{line}\n" for line in lines)
