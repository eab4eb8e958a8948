"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

MAX_INDENT = 16


@dataclass
class FormatConfig:
    """Configuration for formatting compact source files.

    Attributes:
        indent: Number of spaces in one indent unit.
        line_length: Soft maximum line length used for wrapping decisions.
        max_file_size: Maximum input size in bytes that will be processed.

    Examples:
        FormatConfig(indent=2, line_length=100)
    """

    indent: int = 4
    line_length: int = 80

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`line_length` must be a positive integer")
    """


def load_config(search_path: Path) -> FormatConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.unminify]`` table from `pyproject.toml` and the ``[unminify]``
    or ``[tool.unminify]`` table from `.unminify.toml` when present. Returns
    default values when no configuration is found. TOML files that cannot be
    read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        FormatConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("assets"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "unminify")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".unminify.toml",
            table_paths=[("unminify",), ("tool", "unminify")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return FormatConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> FormatConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> FormatConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # Accept the long CLI spelling as well as the field name.
    raw_config = {key.replace("-", "_"): value for key, value in raw_config.items()}

    try:
        return FormatConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: FormatConfig) -> None:
    """Validate a `FormatConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If a value is not an integer, the indent is outside
            ``0..MAX_INDENT``, or a limit is non-positive.

    Examples:
        validate_config(FormatConfig(indent=2))
    """
    _ensure_integers(
        {
            "indent": config.indent,
            "line_length": config.line_length,
            "max_file_size": config.max_file_size,
        }
    )

    if not 0 <= config.indent <= MAX_INDENT:
        raise ConfigError(f"`indent` must be between 0 and {MAX_INDENT}")

    _ensure_positive(
        {
            "line_length": config.line_length,
            "max_file_size": config.max_file_size,
        }
    )


def apply_overrides(config: FormatConfig, **overrides: object) -> FormatConfig:
    """Apply override values to a `FormatConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set
            to None are ignored.

    Returns:
        FormatConfig: New configuration with the overrides applied, or the
        original configuration when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `FormatConfig`.

    Examples:
        updated = apply_overrides(config, indent=2)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> FormatConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None
            values are ignored.

    Returns:
        FormatConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), indent=2, line_length=100)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
