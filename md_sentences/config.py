"""Configuration loading and management."""

from __future__ import annotations

import codecs
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib

from .constants import DEFAULT_ENCODING, DEFAULT_MAX_FILE_SIZE

logger = logging.getLogger(__name__)

CONFIG_TABLE = "md-sentence-format"
DOTFILE_NAME = ".md-sentence-format.toml"
MAX_FILE_SIZE_ENV_VAR = "MD_SENTENCE_FORMAT_MAX_FILE_SIZE"


@dataclass
class FormatterConfig:
    """Settings for reading and writing documents.

    The reflow itself has no settings; these only govern file handling.

    Attributes:
        max_file_size: Maximum file size in bytes that will be processed.
        encoding: Text encoding used to read and write files.

    Examples:
        FormatterConfig(max_file_size=1024, encoding="latin-1")
    """

    max_file_size: int = DEFAULT_MAX_FILE_SIZE
    encoding: str = DEFAULT_ENCODING


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_file_size` must be a positive integer")
    """


def load_config(search_path: Path) -> FormatterConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.md-sentence-format]`` table from `pyproject.toml` and the
    ``[md-sentence-format]`` or ``[tool.md-sentence-format]`` table from
    `.md-sentence-format.toml`. The first table found wins. TOML files that
    cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        FormatterConfig: Loaded configuration, or defaults when none is found.

    Raises:
        ConfigError: If a table is present but is not a mapping or contains
            unsupported keys.

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
            current / DOTFILE_NAME,
            table_paths=[(CONFIG_TABLE,), ("tool", CONFIG_TABLE)],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return FormatterConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> FormatterConfig | None:
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
        logger.debug("Using [%s] from %s", ".".join(table_path), config_file)
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
) -> FormatterConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    known = {field.name for field in fields(FormatterConfig)}
    unknown = sorted(set(raw_config) - known)
    if unknown:
        raise ConfigError(
            f"Unsupported `[{table_display}]` keys in {config_file}: {', '.join(unknown)}"
        )

    return FormatterConfig(**raw_config)


def validate_config(config: FormatterConfig) -> None:
    """Validate a `FormatterConfig` instance.

    Raises:
        ConfigError: If `max_file_size` is not a positive integer or
            `encoding` is not a known codec.
    """
    max_file_size = config.max_file_size
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")

    if not isinstance(config.encoding, str) or not config.encoding:
        raise ConfigError("`encoding` must be a non-empty string")
    try:
        codecs.lookup(config.encoding)
    except LookupError as error:
        raise ConfigError(f"Unknown `encoding`: {config.encoding}") from error


def apply_overrides(config: FormatterConfig, **overrides: object) -> FormatterConfig:
    """Apply override values to a `FormatterConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        FormatterConfig: New configuration with the overrides applied, or
        `config` itself when nothing changes.

    Raises:
        TypeError: If an override name is not defined on `FormatterConfig`.

    Examples:
        updated = apply_overrides(config, encoding="latin-1")
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def get_max_file_size(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Resolve the maximum allowed file size from the environment.

    Args:
        default: Fallback value in bytes when the environment variable is unset.

    Returns:
        int: Maximum allowed file size in bytes.

    Raises:
        ConfigError: If the environment value is not a positive integer.

    Examples:
        os.environ["MD_SENTENCE_FORMAT_MAX_FILE_SIZE"] = "204800"
        limit = get_max_file_size(default=102400)
    """
    env_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if env_value is None:
        return default

    try:
        max_size = int(env_value)
    except ValueError as error:
        error_message = (
            f"Invalid value for {MAX_FILE_SIZE_ENV_VAR}: {env_value} (expected positive integer)"
        )
        raise ConfigError(error_message) from error

    if max_size <= 0:
        raise ConfigError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {max_size}.")

    return max_size


def build_config(search_path: Path, **overrides: object) -> FormatterConfig:
    """Load, override, and validate configuration.

    Precedence from lowest to highest: defaults, config file, the
    `MD_SENTENCE_FORMAT_MAX_FILE_SIZE` environment variable, `overrides`.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        FormatterConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), encoding="utf-8")
    """
    config = load_config(search_path)
    config = replace(config, max_file_size=get_max_file_size(default=config.max_file_size))
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config
