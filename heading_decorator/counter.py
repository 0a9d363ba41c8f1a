"""Heading counters and the ignore-top-level querier.

Every counter exposes the same two calls:

- ``handler(level)`` advances the counter for a heading at ``level`` and
  returns its state.
- ``decorator(level)`` returns the label for that heading. When the level
  was not just fed to ``handler``, ``decorator`` feeds it first, so callers
  may either call both or call ``decorator`` alone.

Counters hold state for one top-to-bottom scan of one document and must be
rebuilt for every scan.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from .constants import DEFAULT_LEVEL_HEADINGS, MAX_HEADING_LEVEL, MIN_HEADING_LEVEL
from .models import NumberingStyle, StyleDescriptor

CounterState = tuple[int, ...]


class Counter(Protocol):
    def decorator(self, level: int) -> str:
        ...

    def handler(self, level: int) -> object:
        ...


def clamp_level(value: int, low: int = MIN_HEADING_LEVEL, high: int = MAX_HEADING_LEVEL) -> int:
    return max(low, min(high, value))


class Querier:
    """Decide how many top levels to leave unnumbered.

    Fed with every detected level of one scan, in document order. Tracks the
    shallowest level seen so far and whether that minimum ever changed.

    Args:
        allow_zero_level: Whether skipped levels render as zero segments.
        max_rec_level: Deepest level that is numbered (1-6).

    Examples:
        querier = Querier()
        for level in [1, 1, 1, 2, 1]:
            querier.handler(level)
        querier.query(ignore_single=True, ignore_maximum=6)  # 1
    """

    def __init__(self, allow_zero_level: bool = False, max_rec_level: int = MAX_HEADING_LEVEL):
        self.allow_zero_level = allow_zero_level
        self.max_rec_level = clamp_level(max_rec_level)
        self._min_level: int | None = None
        self._distinct_minimums = 0

    @property
    def min_level(self) -> int | None:
        return self._min_level

    def handler(self, level: int) -> int | None:
        if self._min_level is None or level < self._min_level:
            self._min_level = level
            self._distinct_minimums += 1
        return self._min_level

    def query(
        self, ignore_single: bool, ignore_maximum: int, based_on_existing: bool = False
    ) -> int:
        """Return the candidate number of top levels to ignore.

        Args:
            ignore_single: Ignore the top level while it is the only top-most
                level value seen so far.
            ignore_maximum: Cap for the single-top-level candidate.
            based_on_existing: Derive the candidate from the shallowest level
                present in the document.

        Returns:
            int: Candidate ignore count, never above `max_rec_level`.
        """
        if self._min_level is None:
            return 0

        if ignore_single and self._distinct_minimums == 1:
            candidate = min(self._min_level, max(ignore_maximum, 0))
        elif based_on_existing:
            candidate = self._min_level - 1 if self.allow_zero_level else self._min_level
        else:
            candidate = 0

        return min(candidate, self.max_rec_level)


class NestedCounter:
    """Depth-keyed running counts shared by the numbered counters.

    Args:
        max_rec_level: Deepest heading level that advances a counter; deeper
            headings reuse the current chain. Clamped to 1-6.
        ignore_top_level: Number of top levels left unnumbered. Clamped to
            0..max_rec_level.
        allow_zero_level: When True a heading's depth is its level minus
            `ignore_top_level`, so skipped levels show up as ``0``. When False
            skipped levels collapse and depth follows the open headings.
    """

    def __init__(
        self,
        max_rec_level: int = MAX_HEADING_LEVEL,
        ignore_top_level: int = 0,
        allow_zero_level: bool = False,
    ):
        self.max_rec_level = clamp_level(max_rec_level)
        self.ignore_top_level = max(0, min(ignore_top_level, self.max_rec_level))
        self.allow_zero_level = allow_zero_level

        self._counts = [0] * MAX_HEADING_LEVEL
        self._open_levels: list[int] = []
        self._depth = 0
        self._pending: int | None = None

    @property
    def state(self) -> CounterState:
        return tuple(self._counts)

    def handler(self, level: int) -> CounterState:
        self._pending = level
        if level <= self.ignore_top_level or level > self.max_rec_level:
            return self.state

        depth = self._enter(level)
        self._counts[depth - 1] += 1
        for index in range(depth, MAX_HEADING_LEVEL):
            self._counts[index] = 0
        self._depth = depth
        return self.state

    def decorator(self, level: int) -> str:
        if self._pending != level:
            self.handler(level)
        self._pending = None

        if level <= self.ignore_top_level:
            return ""

        depth = self._depth if level <= self.max_rec_level else self._capped_depth()
        if depth <= 0 or not any(self._counts[:depth]):
            return ""
        return self.render(self._counts[:depth])

    def render(self, counts: list[int]) -> str:
        raise NotImplementedError

    def _enter(self, level: int) -> int:
        if self.allow_zero_level:
            return level - self.ignore_top_level

        while self._open_levels and self._open_levels[-1] >= level:
            self._open_levels.pop()
        self._open_levels.append(level)
        return len(self._open_levels)

    def _capped_depth(self) -> int:
        if self.allow_zero_level:
            return self.max_rec_level - self.ignore_top_level
        return len(self._open_levels)


class OrderedCounter(NestedCounter):
    """Number every depth with one shared style: 1, 1.1, 1.2, 2, 2.1, ...

    Examples:
        counter = OrderedCounter()
        [counter.decorator(level) for level in [1, 2, 2, 1, 2]]
        # ["1", "1.1", "1.2", "2", "2.1"]
    """

    def __init__(self, descriptor: StyleDescriptor | None = None, **kwargs):
        super().__init__(**kwargs)
        self.descriptor = descriptor or StyleDescriptor()

    def render(self, counts: list[int]) -> str:
        return self.descriptor.render(counts)


class IndependentCounter(NestedCounter):
    """Give every depth its own style and delimiters.

    A heading at depth ``d <= ordered_rec_level`` shows only its own count,
    formatted with descriptor ``d``. Deeper headings show the chain of counts
    below the threshold, formatted with the single descriptor of depth
    ``ordered_rec_level + 1``.

    Args:
        descriptors: Six descriptors, indexed by depth - 1. Missing entries
            use the default descriptor.
        ordered_rec_level: Last depth rendered independently (1-6).
    """

    def __init__(
        self,
        descriptors: Sequence[StyleDescriptor] = (),
        ordered_rec_level: int = MAX_HEADING_LEVEL,
        **kwargs,
    ):
        super().__init__(**kwargs)
        padded = list(descriptors[:MAX_HEADING_LEVEL])
        padded += [StyleDescriptor()] * (MAX_HEADING_LEVEL - len(padded))
        self.descriptors: tuple[StyleDescriptor, ...] = tuple(padded)
        self.ordered_rec_level = clamp_level(ordered_rec_level)

    def render(self, counts: list[int]) -> str:
        depth = len(counts)
        if depth <= self.ordered_rec_level:
            return self.descriptors[depth - 1].render(counts[-1:])
        fallback = self.descriptors[self.ordered_rec_level]
        return fallback.render(counts[self.ordered_rec_level :])


class SpliceCounter(NestedCounter):
    """Join per-depth segments, each formatted with its own numbering style.

    Args:
        styles: Six numbering styles, indexed by depth - 1.
        joiner: Delimiter settings used between and around segments; its own
            style is not used.
    """

    def __init__(
        self,
        styles: Sequence[NumberingStyle] = (),
        joiner: StyleDescriptor | None = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        default = StyleDescriptor().style
        padded = list(styles[:MAX_HEADING_LEVEL])
        padded += [default] * (MAX_HEADING_LEVEL - len(padded))
        self.styles: tuple[NumberingStyle, ...] = tuple(padded)
        self.joiner = joiner or StyleDescriptor()

    def render(self, counts: list[int]) -> str:
        segments = [self.styles[index].format(count) for index, count in enumerate(counts)]
        return self.joiner.wrap(self.joiner.delimiter.join(segments))


class UnorderedCounter:
    """Map each level to a fixed literal, with no counting.

    Examples:
        UnorderedCounter().decorator(2)  # "H2"
    """

    def __init__(
        self,
        level_headings: Sequence[str] = DEFAULT_LEVEL_HEADINGS,
        max_rec_level: int = MAX_HEADING_LEVEL,
    ):
        if len(level_headings) < MAX_HEADING_LEVEL:
            level_headings = DEFAULT_LEVEL_HEADINGS
        self.level_headings = tuple(level_headings[:MAX_HEADING_LEVEL])
        self.max_rec_level = clamp_level(max_rec_level)

    def handler(self, level: int) -> None:
        return None

    def decorator(self, level: int) -> str:
        if level > self.max_rec_level:
            return ""
        return self.level_headings[level - 1]
