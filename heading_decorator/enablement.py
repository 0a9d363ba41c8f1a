"""Per-document switches that turn decoration on or off.

A document can opt in or out through its YAML front matter, either with a
metadata keyword (``heading: false`` or a per-view mapping such as
``heading: {source: true, all: false}``) or through ``enable-heading`` /
``disable-heading`` style ``cssclasses``. Without a front-matter decision,
folder and file-name blocklists apply.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from pathlib import PurePosixPath

import yaml

from .heading import front_matter_end, split_lines

logger = logging.getLogger(__name__)

METADATA_MODES = ("reading", "preview", "source", "outline", "quiet-outline", "file-explorer")
DEFAULT_METADATA_MODE = "source"

_TRUE_VALUES = {"true", "yes", "on", "1", 1}
_FALSE_VALUES = {"false", "no", "off", "0", 0}
_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL}
_IGNORED_REGEX_FLAGS = set("guyd")


def get_boolean(value: object) -> bool | None:
    """Interpret a front-matter value as a boolean.

    Examples:
        get_boolean("yes")  # True
        get_boolean(0)  # False
        get_boolean("maybe")  # None
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (str, int)):
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
    return None


def check_enabled_css(css_classes: str, mode: str) -> tuple[bool | None, bool | None]:
    """Read enable/disable classes from a ``cssclasses`` string.

    Args:
        css_classes: Space-separated class names.
        mode: View the decision applies to, e.g. ``"source"``.

    Returns:
        tuple[bool | None, bool | None]: The decision for `mode` and the
            decision for all views; None where no class says anything.

    Examples:
        check_enabled_css("wide disable-source-heading", "source")  # (False, None)
    """
    mode_status: bool | None = None
    all_status: bool | None = None
    for css_class in css_classes.split(" "):
        css_class = css_class.strip()
        if css_class == f"enable-{mode}-heading":
            mode_status = True
        elif css_class == f"disable-{mode}-heading":
            mode_status = False
        elif css_class == "enable-heading":
            all_status = True
        elif css_class == "disable-heading":
            all_status = False
    return mode_status, all_status


def string_to_regex(value: str) -> re.Pattern[str] | None:
    """Compile a ``/pattern/flags`` string, or a bare pattern.

    Flags ``i``, ``m`` and ``s`` map to their Python equivalents; ``g``, ``u``,
    ``y`` and ``d`` have no meaning for a single match and are ignored.

    Returns:
        re.Pattern[str] | None: Compiled pattern, or None when `value` is blank
            or not a valid expression.

    Examples:
        string_to_regex("/^draft/i").search("Draft notes")  # match
        string_to_regex("/(/")  # None
    """
    text = value.strip()
    if not text:
        return None

    pattern, flag_text = text, ""
    if text.startswith("/") and text.rfind("/") > 0:
        end = text.rfind("/")
        pattern, flag_text = text[1:end], text[end + 1 :]

    flags = 0
    for flag in flag_text:
        if flag in _REGEX_FLAGS:
            flags |= _REGEX_FLAGS[flag]
        elif flag not in _IGNORED_REGEX_FLAGS:
            return None

    try:
        return re.compile(pattern, flags)
    except re.error:
        return None


def parse_front_matter(text: str) -> dict:
    """Return the YAML front matter at the top of `text` as a mapping.

    Returns an empty mapping when the document has no front matter, the block
    is never closed, or it does not hold a YAML mapping.
    """
    lines = split_lines(text)
    end = front_matter_end(lines)
    if end is None:
        return {}

    try:
        data = yaml.safe_load("\n".join(lines[1:end]))
    except yaml.YAMLError as error:
        logger.debug("Ignoring malformed front matter: %s", error)
        return {}

    return data if isinstance(data, dict) else {}


def enabled_from_front_matter(
    front_matter: dict | None, keyword: str, mode: str = DEFAULT_METADATA_MODE
) -> bool | None:
    """Decide from front matter whether decoration is enabled for `mode`.

    The metadata keyword wins over ``cssclasses``. A mapping under the keyword
    is read per view first, then through its ``all`` entry.

    Returns:
        bool | None: The decision, or None when the front matter says nothing.

    Examples:
        enabled_from_front_matter({"heading": {"source": "off"}}, "heading")  # False
        enabled_from_front_matter({"cssclasses": ["enable-heading"]}, "heading")  # True
    """
    if not keyword or not isinstance(front_matter, dict) or not front_matter:
        return None

    metadata = front_matter.get(keyword)
    if isinstance(metadata, dict):
        decision = get_boolean(metadata.get(mode))
        return decision if decision is not None else get_boolean(metadata.get("all"))
    if metadata is not None:
        return get_boolean(metadata)

    css_classes = front_matter.get("cssclasses")
    if isinstance(css_classes, str):
        css_classes = [css_classes]
    if not isinstance(css_classes, list):
        return None

    mode_status: bool | None = None
    all_status: bool | None = None
    for css_class in css_classes:
        if not isinstance(css_class, str):
            continue
        item_mode, item_all = check_enabled_css(css_class, mode)
        if item_mode is not None:
            mode_status = item_mode
        if item_all is not None:
            all_status = item_all
    return mode_status if mode_status is not None else all_status


def blocked_by_blocklist(
    filepath: str, folders: Iterable[str] = (), file_patterns: Iterable[str] = ()
) -> bool:
    """Return True when `filepath` sits in a blocked folder or name pattern.

    Args:
        filepath: Slash-separated path relative to the document root.
        folders: Folder paths whose contents are blocked.
        file_patterns: ``/pattern/flags`` expressions tested against the file
            name without its extension.

    Examples:
        blocked_by_blocklist("drafts/a.md", folders=["drafts"])  # True
        blocked_by_blocklist("notes/todo.md", file_patterns=["/^TODO$/i"])  # True
    """
    for folder in folders:
        if filepath.startswith(f"{folder.rstrip('/')}/"):
            return True

    filename = PurePosixPath(filepath).stem
    for pattern_text in file_patterns:
        regex = string_to_regex(pattern_text)
        if regex is not None and regex.search(filename):
            return True

    return False


def is_decoration_enabled(
    filepath: str,
    text: str,
    keyword: str,
    folders: Iterable[str] = (),
    file_patterns: Iterable[str] = (),
    mode: str = DEFAULT_METADATA_MODE,
) -> bool:
    """Combine front-matter and blocklist rules for one document."""
    decision = enabled_from_front_matter(parse_front_matter(text), keyword, mode)
    if decision is not None:
        logger.debug("Front matter %s decoration for %s", "enables" if decision else "disables", filepath)
        return decision

    if blocked_by_blocklist(filepath, folders, file_patterns):
        logger.debug("%s is blocklisted", filepath)
        return False
    return True
