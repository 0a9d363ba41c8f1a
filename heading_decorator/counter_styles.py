"""Named counter styles used to format heading counts.

Each style follows one of the CSS ``@counter-style`` systems (numeric,
alphabetic, additive). A style that cannot represent a count, such as a
roman numeral above 3999 or an alphabetic style at zero, falls back to
``decimal``.
"""

from __future__ import annotations

import abc

Range = tuple[int | None, int | None]
Pad = tuple[int, str]


class CounterType(abc.ABC):
    """Base class for a named counter style.

    Args:
        name: CSS-style identifier, e.g. ``"lower-roman"``.
        fallback: Style used when a count is outside `count_range`.
        count_range: Inclusive (min, max) counts this style can represent;
            None means unbounded.
        pad: Minimum width and padding symbol applied to the formatted value.
    """

    def __init__(
        self,
        name: str,
        fallback: CounterType | None = None,
        count_range: Range = (1, None),
        pad: Pad = (0, "0"),
    ):
        self._name = name
        self._fallback = fallback
        self._range = count_range
        self._pad = pad
        self._cache: dict[int, str] = {}

    @property
    def name(self) -> str:
        return self._name

    def format(self, count: int) -> str:
        text = self._cache.get(count)
        if text is not None:
            return text

        low, high = self._range
        if (low is None or low <= count) and (high is None or count <= high):
            text = self.format_impl(count)
            if text is not None:
                pad_width, pad_symbol = self._pad
                text = pad_symbol * (pad_width - len(text)) + text

        if text is None:
            text = self._fallback.format(count) if self._fallback is not None else str(count)

        self._cache[count] = text
        return text

    @abc.abstractmethod
    def format_impl(self, count: int) -> str | None:
        ...


class NumericCounter(CounterType):
    """Positional notation over a digit alphabet (``decimal`` and friends)."""

    def __init__(self, name: str, symbols: list[str], **kwargs):
        kwargs.setdefault("count_range", (0, None))
        super().__init__(name, **kwargs)
        self._symbols = symbols

    def format_impl(self, count: int) -> str:
        digits: list[str] = []
        base = len(self._symbols)
        while count > 0:
            digits.insert(0, self._symbols[count % base])
            count //= base
        return "".join(digits) or self._symbols[0]


class AlphabeticCounter(CounterType):
    """Bijective numbering: a, b, ..., z, aa, ab, ..."""

    def __init__(self, name: str, symbols: list[str], **kwargs):
        super().__init__(name, **kwargs)
        self._symbols = symbols

    def format_impl(self, count: int) -> str | None:
        digits: list[str] = []
        base = len(self._symbols)
        while count > 0:
            digits.insert(0, self._symbols[(count - 1) % base])
            count = (count - 1) // base
        return "".join(digits) or None


class AdditiveCounter(CounterType):
    """Sum-of-weights notation, as used by roman numerals."""

    def __init__(self, name: str, additive_symbols: list[tuple[int, str]], **kwargs):
        super().__init__(name, **kwargs)
        self._symbols = sorted(additive_symbols, reverse=True)

    def format_impl(self, count: int) -> str | None:
        parts: list[str] = []
        for weight, symbol in self._symbols:
            while count >= weight:
                parts.append(symbol)
                count -= weight
        if count != 0:
            return None
        return "".join(parts) or None


def _roman(name: str, symbols: str) -> AdditiveCounter:
    weights = [1000, 900, 500, 400, 100, 90, 50, 40, 10, 9, 5, 4, 1]
    return AdditiveCounter(
        name,
        list(zip(weights, symbols.split())),
        count_range=(1, 3999),
        fallback=DECIMAL,
    )


DECIMAL = NumericCounter("decimal", list("0123456789"))

_LATIN = "abcdefghijklmnopqrstuvwxyz"

COUNTER_STYLES: dict[str, CounterType] = {
    style.name: style
    for style in (
        DECIMAL,
        NumericCounter("decimal-leading-zero", list("0123456789"), pad=(2, "0")),
        NumericCounter("cjk-decimal", list("〇一二三四五六七八九")),
        NumericCounter("arabic-indic", list("٠١٢٣٤٥٦٧٨٩")),
        AlphabeticCounter("lower-alpha", list(_LATIN), fallback=DECIMAL),
        AlphabeticCounter("upper-alpha", list(_LATIN.upper()), fallback=DECIMAL),
        AlphabeticCounter("lower-latin", list(_LATIN), fallback=DECIMAL),
        AlphabeticCounter("upper-latin", list(_LATIN.upper()), fallback=DECIMAL),
        AlphabeticCounter("lower-greek", list("αβγδεζηθικλμνξοπρστυφχψω"), fallback=DECIMAL),
        AlphabeticCounter(
            "hiragana",
            list("あいうえおかきくけこさしすせそたちつてとなにぬねのはひふへほまみむめもやゆよらりるれろわゐゑをん"),
            fallback=DECIMAL,
        ),
        AlphabeticCounter(
            "katakana",
            list("アイウエオカキクケコサシスセソタチツテトナニヌネノハヒフヘホマミムメモヤユヨラリルレロワヰヱヲン"),
            fallback=DECIMAL,
        ),
        AlphabeticCounter("cjk-earthly-branch", list("子丑寅卯辰巳午未申酉戌亥"), fallback=DECIMAL),
        AlphabeticCounter("cjk-heavenly-stem", list("甲乙丙丁戊己庚辛壬癸"), fallback=DECIMAL),
        _roman("lower-roman", "m cm d cd c xc l xl x ix v iv i"),
        _roman("upper-roman", "M CM D CD C XC L XL X IX V IV I"),
    )
}

ABBREVIATIONS = {
    "1": "decimal",
    "a": "lower-alpha",
    "A": "upper-alpha",
    "i": "lower-roman",
    "I": "upper-roman",
}


def get_counter_style(name: str) -> CounterType:
    """Look up a counter style by name, falling back to ``decimal``.

    Args:
        name: Style name or one of the single-character abbreviations
            (``1``, ``a``, ``A``, ``i``, ``I``).

    Returns:
        CounterType: The matching style, or ``decimal`` for unknown names.

    Examples:
        get_counter_style("upper-roman").format(4)  # "IV"
        get_counter_style("no-such-style").format(4)  # "4"
    """
    name = ABBREVIATIONS.get(name, name)
    return COUNTER_STYLES.get(name, DECIMAL)


def is_counter_style(name: str) -> bool:
    return ABBREVIATIONS.get(name, name) in COUNTER_STYLES
