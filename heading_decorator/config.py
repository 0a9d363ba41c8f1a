"""Configuration loading and management."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
import tomllib

from .constants import (
    DEFAULT_CUSTOM_IDENTS,
    DEFAULT_DELIMITER,
    DEFAULT_LEVEL_HEADINGS,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_METADATA_KEYWORD,
    DEFAULT_SPECIFIED_STRING,
    DEFAULT_STYLE_TYPE,
    MAX_HEADING_LEVEL,
)
from .counter_styles import is_counter_style
from .models import (
    CounterStyle,
    CustomIdentStyle,
    DecoratorMode,
    NumberingStyle,
    Position,
    SpecifiedStringStyle,
    StyleDescriptor,
)

logger = logging.getLogger(__name__)

CONFIG_TABLE = "heading-decorator"
CUSTOM_IDENT_STYLE_TYPES = ("customIdent", "custom-ident")
SPECIFIED_STRING_STYLE_TYPE = "string"
LEVEL_KEYS = tuple(f"h{level}" for level in range(1, MAX_HEADING_LEVEL + 1))


def get_unordered_level_headings(value: str) -> tuple[str, ...]:
    """Split the unordered literals, defaulting to ``H1``..``H6``.

    Args:
        value: Whitespace-separated literals, one per level.

    Returns:
        tuple[str, ...]: Exactly six literals. Fewer than six non-blank tokens
            yield the defaults; extra tokens are dropped.

    Examples:
        get_unordered_level_headings("a b c d e f g")  # ("a", "b", "c", "d", "e", "f")
        get_unordered_level_headings("a b")  # ("H1", ..., "H6")
    """
    tokens = value.split()
    if len(tokens) < MAX_HEADING_LEVEL:
        return DEFAULT_LEVEL_HEADINGS
    return tuple(tokens[:MAX_HEADING_LEVEL])


def get_ordered_custom_idents(value: str) -> tuple[str, ...]:
    return tuple(re.split(r"\s+", value.strip())) if value.strip() else ()


def build_numbering_style(
    style_type: str, custom_idents: str = "", specified_string: str = ""
) -> NumberingStyle:
    """Turn a style type name and its data into a numbering style.

    Unknown style names resolve to ``decimal``.

    Examples:
        build_numbering_style("upper-roman")  # CounterStyle("upper-roman")
        build_numbering_style("string", specified_string="§")  # SpecifiedStringStyle("§")
    """
    if style_type in CUSTOM_IDENT_STYLE_TYPES:
        return CustomIdentStyle(get_ordered_custom_idents(custom_idents))
    if style_type == SPECIFIED_STRING_STYLE_TYPE:
        return SpecifiedStringStyle(specified_string)
    if not is_counter_style(style_type):
        logger.debug("Unknown style type %r, using %s", style_type, DEFAULT_STYLE_TYPE)
        return CounterStyle(DEFAULT_STYLE_TYPE)
    return CounterStyle(style_type)


@dataclass
class LevelDecoratorSettings:
    """Style and delimiters for one depth in independent mode."""

    style_type: str = DEFAULT_STYLE_TYPE
    delimiter: str = DEFAULT_DELIMITER
    trailing_delimiter: bool = False
    custom_trailing_delimiter: str = ""
    leading_delimiter: bool = False
    custom_leading_delimiter: str = ""
    custom_idents: str = DEFAULT_CUSTOM_IDENTS
    specified_string: str = DEFAULT_SPECIFIED_STRING

    def to_descriptor(self) -> StyleDescriptor:
        return StyleDescriptor(
            style=build_numbering_style(self.style_type, self.custom_idents, self.specified_string),
            delimiter=self.delimiter,
            trailing_delimiter=self.trailing_delimiter,
            custom_trailing_delimiter=self.custom_trailing_delimiter,
            leading_delimiter=self.leading_delimiter,
            custom_leading_delimiter=self.custom_leading_delimiter,
        )


@dataclass
class SpliceLevelSettings:
    """Numbering style for one depth in splice mode."""

    style_type: str = DEFAULT_STYLE_TYPE
    custom_idents: str = DEFAULT_CUSTOM_IDENTS
    specified_string: str = DEFAULT_SPECIFIED_STRING

    def to_style(self) -> NumberingStyle:
        return build_numbering_style(self.style_type, self.custom_idents, self.specified_string)


def _default_levels(factory) -> tuple:
    return tuple(factory() for _ in range(MAX_HEADING_LEVEL))


@dataclass
class IndependentSettings:
    """Independent mode settings.

    Attributes:
        ordered_rec_level: Last depth rendered with its own style; deeper
            headings share the style of the following depth.
        levels: Six per-depth settings, indexed by depth - 1.
    """

    ordered_rec_level: int = MAX_HEADING_LEVEL
    levels: tuple[LevelDecoratorSettings, ...] = field(
        default_factory=lambda: _default_levels(LevelDecoratorSettings)
    )


@dataclass
class SpliceSettings:
    """Splice mode settings.

    Attributes:
        delimiter: Text placed between per-depth segments.
        trailing_delimiter: Whether to append a delimiter after the label.
        custom_trailing_delimiter: Replacement text for the trailing delimiter.
        leading_delimiter: Whether to prepend a delimiter before the label.
        custom_leading_delimiter: Replacement text for the leading delimiter.
        levels: Six per-depth numbering settings, indexed by depth - 1.
    """

    delimiter: str = DEFAULT_DELIMITER
    trailing_delimiter: bool = False
    custom_trailing_delimiter: str = ""
    leading_delimiter: bool = False
    custom_leading_delimiter: str = ""
    levels: tuple[SpliceLevelSettings, ...] = field(
        default_factory=lambda: _default_levels(SpliceLevelSettings)
    )

    def to_joiner(self) -> StyleDescriptor:
        return StyleDescriptor(
            delimiter=self.delimiter,
            trailing_delimiter=self.trailing_delimiter,
            custom_trailing_delimiter=self.custom_trailing_delimiter,
            leading_delimiter=self.leading_delimiter,
            custom_leading_delimiter=self.custom_leading_delimiter,
        )


@dataclass
class DecoratorSettings:
    """Settings consumed by the counter factory.

    Attributes:
        decorator_mode: ``ordered``, ``independent``, ``splice`` or
            ``unordered``. Unknown values behave as ``ordered``.
        max_rec_level: Deepest heading level that gets its own number.
        ordered_allow_zero_level: Render skipped levels as ``0`` segments.
        ordered_based_on_existing: Ignore top levels the document does not use.
        ordered_always_ignore: Always ignore `ordered_ignore_maximum` levels.
        ordered_ignore_maximum: Floor used with `ordered_always_ignore`, and cap
            for the single-top-level heuristic.
        ordered_ignore_single: Ignore a top level that is the only top-most
            level in the document.
        ordered_style_type: Counter style name, ``customIdent`` or ``string``.
        ordered_delimiter: Text placed between counts.
        ordered_trailing_delimiter: Append a delimiter after the label.
        ordered_custom_trailing_delimiter: Replacement trailing delimiter.
        ordered_leading_delimiter: Prepend a delimiter before the label.
        ordered_custom_leading_delimiter: Replacement leading delimiter.
        ordered_custom_idents: Whitespace-separated glyphs for ``customIdent``.
        ordered_specified_string: Literal for the ``string`` style.
        independent: Independent mode settings.
        splice: Splice mode settings.
        unordered_level_headings: Whitespace-separated literals for unordered mode.
        position: Where the label is placed relative to the heading line.
    """

    decorator_mode: str = DecoratorMode.ORDERED.value
    max_rec_level: int = MAX_HEADING_LEVEL

    ordered_allow_zero_level: bool = False
    ordered_based_on_existing: bool = False
    ordered_always_ignore: bool = False
    ordered_ignore_maximum: int = MAX_HEADING_LEVEL
    ordered_ignore_single: bool = False

    ordered_style_type: str = DEFAULT_STYLE_TYPE
    ordered_delimiter: str = DEFAULT_DELIMITER
    ordered_trailing_delimiter: bool = False
    ordered_custom_trailing_delimiter: str = ""
    ordered_leading_delimiter: bool = False
    ordered_custom_leading_delimiter: str = ""
    ordered_custom_idents: str = DEFAULT_CUSTOM_IDENTS
    ordered_specified_string: str = DEFAULT_SPECIFIED_STRING

    independent: IndependentSettings = field(default_factory=IndependentSettings)
    splice: SpliceSettings = field(default_factory=SpliceSettings)

    unordered_level_headings: str = " ".join(DEFAULT_LEVEL_HEADINGS)

    position: str = Position.BEFORE.value

    @property
    def mode(self) -> DecoratorMode:
        return DecoratorMode.parse(self.decorator_mode)

    def ordered_descriptor(self) -> StyleDescriptor:
        return StyleDescriptor(
            style=build_numbering_style(
                self.ordered_style_type, self.ordered_custom_idents, self.ordered_specified_string
            ),
            delimiter=self.ordered_delimiter,
            trailing_delimiter=self.ordered_trailing_delimiter,
            custom_trailing_delimiter=self.ordered_custom_trailing_delimiter,
            leading_delimiter=self.ordered_leading_delimiter,
            custom_leading_delimiter=self.ordered_custom_leading_delimiter,
        )


@dataclass
class HeadingConfig:
    """Configuration for decorating Markdown files from the command line.

    Attributes:
        settings: Decorator settings passed to the counter factory.
        metadata_keyword: Front-matter key that enables or disables decoration.
        folder_blocklist: Folders whose documents are not decorated.
        file_regex_blocklist: ``/pattern/flags`` expressions matched against
            file names (without extension) that are not decorated.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        HeadingConfig(settings=DecoratorSettings(decorator_mode="splice"))
    """

    settings: DecoratorSettings = field(default_factory=DecoratorSettings)
    metadata_keyword: str = DEFAULT_METADATA_KEYWORD
    folder_blocklist: tuple[str, ...] = ()
    file_regex_blocklist: tuple[str, ...] = ()
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_rec_level` must be an integer")
    """


def load_config(search_path: Path) -> HeadingConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.heading-decorator]`` table from `pyproject.toml` and the
    ``[heading-decorator]`` or ``[tool.heading-decorator]`` table from
    `.heading-decorator.toml` when present. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        HeadingConfig: Loaded configuration, or defaults when none is found.

    Raises:
        ConfigError: If a table is present but malformed or has unsupported keys.

    Examples:
        load_config(Path("docs"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", CONFIG_TABLE)]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / f".{CONFIG_TABLE}.toml",
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    logger.debug("No configuration found above %s, using defaults", search_path)
    return HeadingConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> HeadingConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError) as error:
        logger.debug("Skipping unreadable config file %s: %s", config_file, error)
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        logger.debug("Loading [%s] from %s", ".".join(table_path), config_file)
        return _build_config_from_raw(raw_config, f"[{'.'.join(table_path)}] in {config_file}")

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _field_names(cls) -> set[str]:
    return {item.name for item in fields(cls)}


def _require_table(raw: object, where: str) -> dict:
    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid settings in {where}")
    return raw


def _reject_unknown(raw: dict, allowed: set[str], where: str) -> None:
    unknown = set(raw) - allowed
    if unknown:
        raise ConfigError(f"Unsupported keys {sorted(unknown)} in {where}")


def _build_levels(cls, raw: dict, where: str) -> tuple:
    levels = []
    for key in LEVEL_KEYS:
        level_raw = raw.get(key)
        if level_raw is None:
            levels.append(cls())
            continue
        level_where = f"{key} of {where}"
        level_raw = _require_table(level_raw, level_where)
        _reject_unknown(level_raw, _field_names(cls), level_where)
        levels.append(cls(**level_raw))
    return tuple(levels)


def _build_independent(raw: object, where: str) -> IndependentSettings:
    raw = _require_table(raw, where)
    _reject_unknown(raw, {"ordered_rec_level", *LEVEL_KEYS}, where)
    return IndependentSettings(
        ordered_rec_level=raw.get("ordered_rec_level", MAX_HEADING_LEVEL),
        levels=_build_levels(LevelDecoratorSettings, raw, where),
    )


def _build_splice(raw: object, where: str) -> SpliceSettings:
    raw = _require_table(raw, where)
    scalar_keys = _field_names(SpliceSettings) - {"levels"}
    _reject_unknown(raw, scalar_keys | set(LEVEL_KEYS), where)
    values = {key: value for key, value in raw.items() if key in scalar_keys}
    return SpliceSettings(**values, levels=_build_levels(SpliceLevelSettings, raw, where))


def _build_config_from_raw(raw_config: object, where: str) -> HeadingConfig:
    if raw_config is None:
        return HeadingConfig()

    raw = _require_table(raw_config, where)
    host_keys = _field_names(HeadingConfig) - {"settings"}
    settings_keys = _field_names(DecoratorSettings) - {"independent", "splice"}
    _reject_unknown(raw, host_keys | settings_keys | {"independent", "splice"}, where)

    settings_values = {key: value for key, value in raw.items() if key in settings_keys}
    if "independent" in raw:
        settings_values["independent"] = _build_independent(
            raw["independent"], f"independent of {where}"
        )
    if "splice" in raw:
        settings_values["splice"] = _build_splice(raw["splice"], f"splice of {where}")

    host_values = {key: value for key, value in raw.items() if key in host_keys}
    for key in ("folder_blocklist", "file_regex_blocklist"):
        if key in host_values:
            value = host_values[key]
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                raise ConfigError(f"`{key}` must be a list of strings in {where}")
            host_values[key] = tuple(value)

    return HeadingConfig(settings=DecoratorSettings(**settings_values), **host_values)


_SCALAR_TYPES = {"bool": bool, "int": int, "str": str}


def _ensure_field_types(obj: object, prefix: str = "") -> None:
    for item in fields(obj):
        expected = _SCALAR_TYPES.get(item.type)
        if expected is None:
            continue
        value = getattr(obj, item.name)
        if expected is int and isinstance(value, bool):
            raise ConfigError(f"`{prefix}{item.name}` must be an integer")
        if not isinstance(value, expected):
            article = "an" if expected is int else "a"
            kind = {bool: "boolean", int: "integer", str: "string"}[expected]
            raise ConfigError(f"`{prefix}{item.name}` must be {article} {kind}")


def validate_config(config: HeadingConfig) -> None:
    """Validate a `HeadingConfig` instance.

    Only value types and host options are checked. Out-of-range levels and
    unknown modes or style names are not errors: the counters clamp or fall
    back to defaults for them.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If a value has the wrong type, the position is unknown,
            the metadata keyword is not a string, or the file size limit is
            not positive.

    Examples:
        validate_config(HeadingConfig())
    """
    settings = config.settings
    _ensure_field_types(config)
    _ensure_field_types(settings)
    _ensure_field_types(settings.independent, "independent.")
    _ensure_field_types(settings.splice, "splice.")
    for index, level in enumerate(settings.independent.levels, start=1):
        _ensure_field_types(level, f"independent.h{index}.")
    for index, level in enumerate(settings.splice.levels, start=1):
        _ensure_field_types(level, f"splice.h{index}.")

    if len(settings.independent.levels) != MAX_HEADING_LEVEL:
        raise ConfigError(f"`independent.levels` must hold {MAX_HEADING_LEVEL} entries")
    if len(settings.splice.levels) != MAX_HEADING_LEVEL:
        raise ConfigError(f"`splice.levels` must hold {MAX_HEADING_LEVEL} entries")

    positions = [position.value for position in Position]
    if settings.position not in positions:
        raise ConfigError(f"`position` must be one of: {', '.join(positions)}")

    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: HeadingConfig, **overrides: object) -> HeadingConfig:
    """Apply override values to a `HeadingConfig`.

    Keys naming a `DecoratorSettings` field update the settings; other keys
    update the config itself. None values are ignored.

    Raises:
        TypeError: If an override name matches neither dataclass.

    Examples:
        updated = apply_overrides(config, decorator_mode="splice", max_rec_level=3)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config

    settings_keys = _field_names(DecoratorSettings)
    settings_changes = {key: value for key, value in changes.items() if key in settings_keys}
    config_changes = {key: value for key, value in changes.items() if key not in settings_keys}
    if settings_changes:
        config_changes["settings"] = replace(config.settings, **settings_changes)
    return replace(config, **config_changes)


def build_config(search_path: Path, **overrides: object) -> HeadingConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by setting name; None values are ignored.

    Returns:
        HeadingConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), decorator_mode="unordered")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
