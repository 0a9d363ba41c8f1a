"""Data models for heading-decorator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from .counter_styles import get_counter_style


class ParserState(Enum):
    """Detector states used while scanning Markdown lines.

    Attributes:
        NORMAL: Default state for regular text.
        IN_FENCED_CODE: Inside a fenced code block.
        IN_FRONT_MATTER: Inside a YAML front-matter block at the top of the file.
    """

    NORMAL = auto()
    IN_FENCED_CODE = auto()
    IN_FRONT_MATTER = auto()


@dataclass
class ParserContext:
    """Detector state carried from one line to the next.

    Attributes:
        state: Current parser state.
        fence_char: Fence character that opened a fenced code block, if any.
        fence_length: Number of fence characters that opened the block.
        last_line_index: Index of the most recently scanned line (0 before any).
    """

    state: ParserState = ParserState.NORMAL
    fence_char: str | None = None
    fence_length: int = 0
    last_line_index: int = 0


class DecoratorMode(Enum):
    """Counting strategy selected by the settings."""

    ORDERED = "ordered"
    INDEPENDENT = "independent"
    SPLICE = "splice"
    UNORDERED = "unordered"

    @classmethod
    def parse(cls, value: object) -> DecoratorMode:
        """Resolve a mode name, defaulting to `ORDERED` for unknown values.

        The misspelt ``"orderd"`` written by older settings files is accepted.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "orderd":
                return cls.ORDERED
            for mode in cls:
                if mode.value == normalized:
                    return mode
        return cls.ORDERED


class Position(Enum):
    """Where a label is placed relative to its heading line."""

    BEFORE = "before"
    BEFORE_INSIDE = "before-inside"
    AFTER = "after"
    AFTER_INSIDE = "after-inside"


@dataclass(frozen=True)
class CounterStyle:
    """A named counter style such as ``decimal`` or ``upper-roman``."""

    name: str = "decimal"

    def format(self, count: int) -> str:
        return get_counter_style(self.name).format(count)


@dataclass(frozen=True)
class CustomIdentStyle:
    """A user-supplied glyph list cycled by count."""

    idents: tuple[str, ...] = ()

    def format(self, count: int) -> str:
        if not self.idents or count <= 0:
            return ""
        return self.idents[(count - 1) % len(self.idents)]


@dataclass(frozen=True)
class SpecifiedStringStyle:
    """A literal string rendered regardless of the count."""

    text: str = ""

    def format(self, count: int) -> str:
        return self.text


NumberingStyle = CounterStyle | CustomIdentStyle | SpecifiedStringStyle


@dataclass(frozen=True)
class StyleDescriptor:
    """Rendering policy for a chain of counts.

    Attributes:
        style: Numbering style applied to every count in the chain.
        delimiter: Text placed between formatted counts.
        trailing_delimiter: Whether to append a delimiter after the chain.
        custom_trailing_delimiter: Replacement text for the trailing delimiter.
        leading_delimiter: Whether to prepend a delimiter before the chain.
        custom_leading_delimiter: Replacement text for the leading delimiter.

    Examples:
        StyleDescriptor(trailing_delimiter=True).render([1, 2])  # "1.2."
    """

    style: NumberingStyle = CounterStyle()
    delimiter: str = "."
    trailing_delimiter: bool = False
    custom_trailing_delimiter: str = ""
    leading_delimiter: bool = False
    custom_leading_delimiter: str = ""

    def render(self, counts: list[int] | tuple[int, ...]) -> str:
        return self.wrap(self.delimiter.join(self.style.format(count) for count in counts))

    def wrap(self, body: str) -> str:
        leading = ""
        if self.leading_delimiter:
            leading = self.custom_leading_delimiter or self.delimiter
        trailing = ""
        if self.trailing_delimiter:
            trailing = self.custom_trailing_delimiter or self.delimiter
        return f"{leading}{body}{trailing}"


@dataclass(frozen=True)
class DecoratedHeading:
    """A detected heading paired with the label computed for it.

    Attributes:
        line_index: One-based index of the heading line.
        level: Detected heading level (1-6).
        text: Original text of the heading line.
        label: Label to display; empty when the heading is not decorated.
    """

    line_index: int
    level: int
    text: str
    label: str
