"""Constants used across the heading-decorator package."""

from __future__ import annotations

import re

MIN_HEADING_LEVEL = 1
MAX_HEADING_LEVEL = 6
NOT_A_HEADING = -1

# Markdown patterns
ATX_HEADING_PATTERN = re.compile(r"^ {0,3}(?P<hashes>#+)(?:[ \t]|$)")
SETEXT_UNDERLINE_PATTERN = re.compile(r"^(?:=+|-+)$")
CODE_FENCE_PATTERN = re.compile(r"^(?P<indent>\s{0,3})(?P<fence>`{3,}|~{3,})(?P<info>.*)$")
CLOSING_FENCE_MAX_INDENT = 3
INDENTED_CODE_COLUMNS = 4
FRONT_MATTER_OPENER = "---"
FRONT_MATTER_CLOSERS = ("---", "...")
LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

# Decorator defaults
DEFAULT_LEVEL_HEADINGS = ("H1", "H2", "H3", "H4", "H5", "H6")
DEFAULT_CUSTOM_IDENTS = "Ⓐ Ⓑ Ⓒ Ⓓ Ⓔ Ⓕ Ⓖ Ⓗ Ⓘ Ⓙ Ⓚ Ⓛ Ⓜ Ⓝ Ⓞ Ⓟ Ⓠ Ⓡ Ⓢ Ⓣ Ⓤ Ⓥ Ⓦ Ⓧ Ⓨ Ⓩ"
DEFAULT_SPECIFIED_STRING = "#"
DEFAULT_STYLE_TYPE = "decimal"
DEFAULT_DELIMITER = "."

# Host defaults
DEFAULT_METADATA_KEYWORD = "heading"
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
MARKDOWN_EXTENSIONS = (".md", ".markdown", ".mdown", ".mkd", ".mkdn")
