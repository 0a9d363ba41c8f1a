from __future__ import annotations

import pytest

from heading_decorator.counter_styles import COUNTER_STYLES, get_counter_style, is_counter_style


@pytest.mark.parametrize(
    ("name", "count", "expected"),
    [
        ("decimal", 0, "0"),
        ("decimal", 12, "12"),
        ("decimal-leading-zero", 5, "05"),
        ("decimal-leading-zero", 12, "12"),
        ("lower-alpha", 1, "a"),
        ("lower-alpha", 26, "z"),
        ("lower-alpha", 27, "aa"),
        ("upper-alpha", 28, "AB"),
        ("upper-latin", 3, "C"),
        ("lower-greek", 1, "α"),
        ("lower-roman", 9, "ix"),
        ("upper-roman", 4, "IV"),
        ("upper-roman", 1994, "MCMXCIV"),
        ("cjk-decimal", 10, "一〇"),
        ("cjk-heavenly-stem", 2, "乙"),
    ],
)
def test_counter_styles_format(name: str, count: int, expected: str):
    assert get_counter_style(name).format(count) == expected


def test_out_of_range_counts_fall_back_to_decimal():
    assert get_counter_style("upper-roman").format(4000) == "4000"
    assert get_counter_style("lower-roman").format(0) == "0"
    assert get_counter_style("lower-alpha").format(0) == "0"


def test_abbreviations_resolve_to_named_styles():
    assert get_counter_style("I").format(3) == "III"
    assert get_counter_style("a").format(2) == "b"
    assert get_counter_style("1").name == "decimal"


def test_unknown_style_uses_decimal():
    assert get_counter_style("no-such-style").format(7) == "7"
    assert is_counter_style("no-such-style") is False
    assert is_counter_style("i") is True


def test_registry_is_keyed_by_style_name():
    for name, style in COUNTER_STYLES.items():
        assert style.name == name
