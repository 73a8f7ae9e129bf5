"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

FLOWCHART_DIRECTIONS = ("TB", "TD", "BT", "RL", "LR")


@dataclass
class TranslatorConfig:
    """Configuration for rendering Mermaid diagrams.

    Attributes:
        direction: Flowchart orientation written after ``flowchart``.
        indent: Characters prefixed to every line below the diagram header.
        indent_spaces: Number of spaces used for indentation; overrides
            `indent` when set.
        max_file_size: Maximum input file size in bytes accepted by the CLI.

    Examples:
        TranslatorConfig(direction="LR", indent_spaces=2)
    """

    # Rendering
    direction: str = "TD"
    indent: str = "    "
    indent_spaces: int | None = None

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`direction` must be one of: TB, TD, BT, RL, LR")
    """


def load_config(search_path: Path) -> TranslatorConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.mermaid-aid]`` table from `pyproject.toml` and the
    ``[mermaid-aid]`` or ``[tool.mermaid-aid]`` table from `.mermaid-aid.toml`
    when present. Returns default values when no configuration is found. TOML
    files that cannot be read or decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        TranslatorConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("diagrams"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "mermaid-aid")]
        )
        if pyproject_config is not None:
            return normalize_config(pyproject_config)

        dotfile_config = _load_from_file(
            current / ".mermaid-aid.toml",
            table_paths=[("mermaid-aid",), ("tool", "mermaid-aid")],
        )
        if dotfile_config is not None:
            return normalize_config(dotfile_config)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return TranslatorConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> TranslatorConfig | None:
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
) -> TranslatorConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    try:
        return TranslatorConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: TranslatorConfig) -> TranslatorConfig:
    indent = config.indent
    if config.indent_spaces is not None:
        _ensure_integers({"indent_spaces": config.indent_spaces})
        if config.indent_spaces < 0:
            raise ConfigError("`indent_spaces` must be a non-negative integer")
        indent = " " * config.indent_spaces

    direction = config.direction
    if isinstance(direction, str):
        direction = direction.upper()

    return replace(config, indent=indent, direction=direction)


def validate_config(config: TranslatorConfig) -> None:
    """Validate a `TranslatorConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the direction is unknown, the indent contains
            non-whitespace characters, or the size limit is not a positive
            integer.

    Examples:
        validate_config(TranslatorConfig(direction="LR"))
    """
    config = normalize_config(config)

    if config.direction not in FLOWCHART_DIRECTIONS:
        raise ConfigError(f"`direction` must be one of: {', '.join(FLOWCHART_DIRECTIONS)}")

    if not isinstance(config.indent, str) or config.indent.strip():
        raise ConfigError("`indent` must contain only whitespace")

    _ensure_integers({"max_file_size": config.max_file_size})
    if config.max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def apply_overrides(config: TranslatorConfig, **overrides: object) -> TranslatorConfig:
    """Apply override values to a `TranslatorConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        TranslatorConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `TranslatorConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if "indent" in changes and "indent_spaces" not in changes:
        changes["indent_spaces"] = None
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> TranslatorConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        TranslatorConfig: Validated configuration ready for translation.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), direction="LR")
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
    validate_config(config)
    return config


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
