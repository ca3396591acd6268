"""
TOML-based config file loading for repoquill.

Searches for `.repoquill.toml`, `repoquill.toml`, or `pyproject.toml [tool.repoquill]`
walking up from the scan root. Config values are merged with CLI flags using
three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]

logger = logging.getLogger(__name__)


@dataclass
class RepoquillConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    so the merge logic can tell "not configured" from "explicitly set to the
    default value".
    """

    # Patterns
    include: list[str] | None = None
    exclude: list[str] | None = None
    tree_only: list[str] | None = None
    respect_gitignore: bool | None = None
    # Output
    strip_comments: bool | None = None
    normalize_whitespace: bool | None = None
    format: str | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".repoquill.toml", "repoquill.toml", "pyproject.toml"]

# Mapping from TOML kebab-case keys to Python snake_case field names
_KEBAB_TO_SNAKE: dict[str, str] = {
    "tree-only": "tree_only",
    "respect-gitignore": "respect_gitignore",
    "strip-comments": "strip_comments",
    "normalize-whitespace": "normalize_whitespace",
}

_VALID_FIELDS = {f.name for f in fields(RepoquillConfig)}

_PATTERN_FIELDS = {"include", "exclude", "tree_only"}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.repoquill.toml` >
    `repoquill.toml` > `pyproject.toml` (only if it has `[tool.repoquill]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_repoquill_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_repoquill_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text())
        return "repoquill" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> RepoquillConfig:
    """
    Load a `RepoquillConfig` from a TOML file. Supports standalone
    `repoquill.toml` / `.repoquill.toml` and `pyproject.toml` (extracts
    `[tool.repoquill]`). TOML kebab-case keys are mapped to snake_case.
    """
    data = tomllib.loads(config_path.read_text())

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("repoquill", {})

    logger.debug("Loaded config from %s", config_path)
    return _parse_config_data(data)


def _parse_config_data(data: dict[str, Any]) -> RepoquillConfig:
    """Parse a flat or sectioned TOML dict into RepoquillConfig."""
    # Flatten sections: [patterns] and [output] merge into top level
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = _KEBAB_TO_SNAKE.get(key, key.replace("-", "_"))
        if snake_key in _PATTERN_FIELDS:
            mapped[snake_key] = _pattern_list(key, value)
        elif snake_key in _VALID_FIELDS:
            mapped[snake_key] = value
        else:
            logger.debug("Ignoring unknown config key: %s", key)

    return RepoquillConfig(**mapped)


def _pattern_list(key: str, value: Any) -> list[str]:
    """A single pattern may be given as a bare string."""
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ValueError(f"Config key {key!r} must be a string or a list of strings")
    return [str(v) for v in cast(list[Any], value)]


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: RepoquillConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(RepoquillConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
