"""
TOML-based config file loading for fjoin.

Searches for `.fjoin.toml`, `fjoin.toml`, or `pyproject.toml [tool.fjoin]`
walking up from the current directory. Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class FjoinConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    include: list[str] | None = None
    ignore_files: list[str] | None = None
    respect_gitignore: bool | None = None
    quiet: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".fjoin.toml", "fjoin.toml", "pyproject.toml"]

# Mapping from TOML kebab-case keys to Python snake_case field names
_KEBAB_TO_SNAKE: dict[str, str] = {
    "ignore-files": "ignore_files",
    "respect-gitignore": "respect_gitignore",
}

_VALID_FIELDS = {f.name for f in fields(FjoinConfig)}


def _warn(message: str, warnings: list[str] | None) -> None:
    if warnings is None:
        print(message, file=sys.stderr)
    else:
        warnings.append(message)


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.fjoin.toml` >
    `fjoin.toml` > `pyproject.toml` (only if it has `[tool.fjoin]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_fjoin_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_fjoin_section(path: Path) -> bool:
    """Check if a pyproject.toml has a [tool.fjoin] section."""
    try:
        data = tomllib.loads(path.read_text())
        return "fjoin" in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path, warnings: list[str] | None = None) -> FjoinConfig:
    """
    Load a `FjoinConfig` from a TOML file. Supports both standalone
    `fjoin.toml` / `.fjoin.toml` and `pyproject.toml` (extracts `[tool.fjoin]`).

    Malformed TOML is treated as an empty config. Relative `ignore-files` entries
    are resolved against the config file's directory.

    Problems are appended to `warnings` when given, so the caller can decide
    whether to show them; otherwise they are printed to stderr.
    """
    try:
        data = tomllib.loads(config_path.read_text())
    except (tomllib.TOMLDecodeError, OSError) as e:
        _warn(f"Warning: ignoring config file {config_path}: {e}", warnings)
        return FjoinConfig()

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("fjoin", {})

    config = _parse_config_data(data, config_path, warnings)
    if config.ignore_files is not None:
        base = config_path.parent
        config.ignore_files = [str(base / p) for p in config.ignore_files]
    return config


def _parse_config_data(
    data: dict[str, Any],
    source: Path | None = None,
    warnings: list[str] | None = None,
) -> FjoinConfig:
    """Parse a flat or sectioned TOML dict into FjoinConfig."""
    # Flatten sections: any [table] merges into the top level
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
        if snake_key in _VALID_FIELDS:
            mapped[snake_key] = value
        else:
            where = f" in {source}" if source else ""
            _warn(f"Warning: unrecognized config key '{key}'{where}", warnings)

    return FjoinConfig(**mapped)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: FjoinConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    A repeatable flag given on the command line replaces the config list.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(FjoinConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue

        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
