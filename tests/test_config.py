"""Tests for config file loading and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from fjoin.cli import Options
from fjoin.config import FjoinConfig, find_config_file, load_config, merge_cli_with_config


def test_find_config_fjoin_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "fjoin.toml"
    config_file.write_text("quiet = true\n")
    result = find_config_file(tmp_path)
    assert result == config_file


def test_find_config_dot_fjoin_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "fjoin.toml").write_text("quiet = true\n")
    dot_config = tmp_path / ".fjoin.toml"
    dot_config.write_text("quiet = false\n")
    result = find_config_file(tmp_path)
    assert result == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("[tool.fjoin]\nquiet = true\n")
    result = find_config_file(tmp_path)
    assert result == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    result = find_config_file(tmp_path)
    assert result is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "fjoin.toml"
    config_file.write_text("quiet = true\n")
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    result = find_config_file(subdir)
    assert result == config_file


def test_find_config_none_when_missing(tmp_path: Path) -> None:
    result = find_config_file(tmp_path)
    assert result is None


def test_load_config_fjoin_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "fjoin.toml"
    config_file.write_text('include = ["*.lock"]\nquiet = true\n')
    config = load_config(config_file)
    assert config.include == ["*.lock"]
    assert config.quiet is True
    # Unset fields should be None (not set)
    assert config.respect_gitignore is None
    assert config.ignore_files is None


def test_load_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text("[tool.fjoin]\nrespect-gitignore = false\n")
    config = load_config(config_file)
    assert config.respect_gitignore is False


def test_load_config_sections_are_flattened(tmp_path: Path) -> None:
    config_file = tmp_path / "fjoin.toml"
    config_file.write_text('[selection]\ninclude = ["*.lock"]\nrespect-gitignore = true\n')
    config = load_config(config_file)
    assert config.include == ["*.lock"]
    assert config.respect_gitignore is True


def test_load_config_ignore_files_relative_to_config(tmp_path: Path) -> None:
    sub = tmp_path / "conf"
    sub.mkdir()
    config_file = sub / "fjoin.toml"
    config_file.write_text(f'ignore-files = [".fjoinignore", "{tmp_path / "abs.ignore"}"]\n')
    config = load_config(config_file)
    assert config.ignore_files == [str(sub / ".fjoinignore"), str(tmp_path / "abs.ignore")]


def test_load_config_malformed_toml(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    """Malformed TOML should return empty config, not crash."""
    config_file = tmp_path / "fjoin.toml"
    config_file.write_text("this is not valid toml [[[")
    config = load_config(config_file)
    assert config == FjoinConfig()
    assert "ignoring config file" in capsys.readouterr().err


def test_parse_config_warns_unknown_keys(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config_file = tmp_path / "fjoin.toml"
    config_file.write_text("unknown_key = true\nquiet = true\n")
    config = load_config(config_file)
    assert config.quiet is True
    captured = capsys.readouterr()
    assert "unrecognized config key 'unknown_key'" in captured.err


def _make_options(
    files: list[str] | None = None,
    output: str = "-",
    force: bool = False,
    respect_gitignore: bool = True,
    include: list[str] | None = None,
    ignore_files: list[str] | None = None,
    quiet: bool = False,
    list_files: bool = False,
    version: bool = False,
) -> Options:
    """Create an Options with defaults for all required fields."""
    return Options(
        files=files if files is not None else ["a.txt"],
        output=output,
        force=force,
        respect_gitignore=respect_gitignore,
        include=include if include is not None else [],
        ignore_files=ignore_files if ignore_files is not None else [],
        quiet=quiet,
        list_files=list_files,
        version=version,
    )


def test_merge_no_config() -> None:
    opts = _make_options(quiet=False)
    result = merge_cli_with_config(opts, config=None, explicit_flags=set())
    assert result.quiet is False


def test_merge_config_overrides_defaults() -> None:
    opts = _make_options()
    config = FjoinConfig(quiet=True, respect_gitignore=False, include=["*.log"])
    result = merge_cli_with_config(opts, config=config, explicit_flags=set())
    assert result.quiet is True
    assert result.respect_gitignore is False
    assert result.include == ["*.log"]


def test_merge_explicit_cli_overrides_config() -> None:
    opts = _make_options(respect_gitignore=True, ignore_files=["cli.ignore"])
    config = FjoinConfig(respect_gitignore=False, ignore_files=["config.ignore"])
    result = merge_cli_with_config(
        opts, config=config, explicit_flags={"respect_gitignore", "ignore_files"}
    )
    assert result.respect_gitignore is True
    assert result.ignore_files == ["cli.ignore"]


def test_merge_leaves_non_config_options_alone() -> None:
    opts = _make_options(output="out.md", force=True)
    result = merge_cli_with_config(opts, config=FjoinConfig(quiet=True), explicit_flags=set())
    assert result.output == "out.md"
    assert result.force is True


def test_load_config_collects_warnings(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    """With a warnings list, problems are collected instead of printed."""
    config_file = tmp_path / "fjoin.toml"
    config_file.write_text("mystery = 1\nquiet = true\n")
    warnings: list[str] = []
    config = load_config(config_file, warnings)
    assert config.quiet is True
    assert warnings == [f"Warning: unrecognized config key 'mystery' in {config_file}"]
    assert capsys.readouterr().err == ""

    bad = tmp_path / ".fjoin.toml"
    bad.write_text("not valid toml [[[")
    warnings = []
    assert load_config(bad, warnings) == FjoinConfig()
    assert len(warnings) == 1
    assert warnings[0].startswith(f"Warning: ignoring config file {bad}")
