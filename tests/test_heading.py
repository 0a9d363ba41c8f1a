from __future__ import annotations

import pytest

from heading_decorator.heading import (
    Heading,
    atx_level,
    front_matter_end,
    setext_level,
    split_lines,
)


def _scan(lines: list[str]) -> list[int]:
    heading = Heading(front_matter=front_matter_end(lines) is not None)
    levels = []
    for index, line in enumerate(lines, start=1):
        next_line = lines[index] if index < len(lines) else ""
        levels.append(heading.handler(index, line, next_line))
    return levels


@pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
def test_hash_headings_report_hash_count(level: int):
    assert Heading().handler(1, f"{'#' * level} Title", "") == level


@pytest.mark.parametrize(
    "line",
    ["####### Seven", "########## Ten", "#hashtag", "#!shebang", "plain text", "", "   "],
)
def test_non_headings_return_minus_one(line: str):
    assert Heading().handler(1, line, "") == -1


def test_hash_heading_allows_end_of_line_and_small_indent():
    assert atx_level("#") == 1
    assert atx_level("###\t Tabbed") == 3
    assert atx_level("   ## Indented") == 2
    assert atx_level("    ## Code") == -1


def test_setext_equals_underline_is_level_one():
    assert Heading().handler(1, "Title", "=====") == 1


def test_setext_dash_underline_is_level_two():
    assert Heading().handler(1, "Title", "---") == 2


def test_setext_underline_is_not_a_heading_on_its_own_turn():
    assert _scan(["Title", "=====", "Section", "-------"]) == [1, -1, 2, -1]


def test_setext_requires_text_line():
    assert _scan(["", "===="]) == [-1, -1]
    assert _scan(["----", "===="]) == [-1, -1]
    assert _scan(["    indented", "===="]) == [-1, -1]


def test_setext_underline_variants():
    assert setext_level("  ===  ") == 1
    assert setext_level("-") == 2
    assert setext_level("=-=") == -1
    assert setext_level("- - -") == -1
    assert setext_level("    ---") == -1


def test_hash_line_wins_over_setext_underline():
    assert Heading().handler(1, "## Title", "====") == 2


def test_fenced_code_blocks_are_skipped():
    lines = [
        "# Visible",
        "```python",
        "# comment",
        "Not a title",
        "---",
        "```",
        "## Also visible",
    ]

    assert _scan(lines) == [1, -1, -1, -1, -1, -1, 2]


def test_fence_closes_only_with_matching_run():
    lines = [
        "~~~~",
        "~~~",
        "# still code",
        "~~~~~",
        "# heading",
    ]

    assert _scan(lines) == [-1, -1, -1, -1, 1]


def test_backtick_fence_does_not_close_tilde_fence():
    assert _scan(["~~~", "```", "# code", "~~~", "# after"]) == [-1, -1, -1, -1, 1]


def test_front_matter_is_not_a_heading_context():
    lines = ["---", "title: Notes", "tags: [a]", "---", "# Real"]

    assert _scan(lines) == [-1, -1, -1, -1, 1]


def test_unclosed_front_matter_opener_is_a_thematic_break():
    lines = ["---", "# Intro", "## Usage", "## Install"]

    assert front_matter_end(lines) is None
    assert _scan(lines) == [-1, 1, 2, 2]


def test_heading_without_front_matter_flag_reads_first_rule_as_text():
    heading = Heading()

    assert heading.handler(1, "---", "# Intro") == -1
    assert heading.handler(2, "# Intro", "") == 1


@pytest.mark.parametrize(
    ("lines", "expected"),
    [
        (["---", "title: x", "---", "# A"], 2),
        (["---", "title: x", "...", "# A"], 2),
        (["---", "---"], 1),
        (["---"], None),
        (["# A", "---"], None),
        ([], None),
    ],
)
def test_front_matter_end(lines, expected):
    assert front_matter_end(lines) == expected


def test_split_lines_only_breaks_at_markdown_line_endings():
    text = "# Title\r\nsee page\x0cbreak\u2028here\rend\n"

    assert split_lines(text) == ["# Title", "see page\x0cbreak\u2028here", "end"]
    assert split_lines("a\n\n") == ["a", ""]
    assert split_lines("") == []


def test_front_matter_only_starts_on_first_line():
    lines = ["# Top", "", "key: value", "---"]

    assert _scan(lines) == [1, -1, 2, -1]


def test_trailing_newlines_are_ignored():
    assert Heading().handler(1, "Title\n", "===\r\n") == 1
    assert Heading().handler(1, "## Title\r\n", "") == 2


def test_restarting_line_numbers_resets_fence_tracking():
    heading = Heading()
    assert heading.handler(1, "```", "# inside") == -1
    assert heading.handler(2, "# inside", "") == -1

    assert heading.handler(1, "# fresh scan", "") == 1


def test_skipping_ahead_keeps_fence_tracking():
    heading = Heading()
    assert heading.handler(1, "```", "") == -1

    assert heading.handler(5, "# still inside", "") == -1
