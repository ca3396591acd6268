"""Tests for config file loading and merging."""

from __future__ import annotations

from pathlib import Path

import pytest

from repoquill.cli import _parse_args  # pyright: ignore[reportPrivateUsage]
from repoquill.config import RepoquillConfig, find_config_file, load_config, merge_cli_with_config


def test_find_config_repoquill_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "repoquill.toml"
    config_file.write_text('[patterns]\ninclude = ["*.py"]\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_dot_repoquill_toml_takes_precedence(tmp_path: Path) -> None:
    (tmp_path / "repoquill.toml").write_text('include = ["*.py"]\n')
    dot_config = tmp_path / ".repoquill.toml"
    dot_config.write_text('include = ["*.md"]\n')
    assert find_config_file(tmp_path) == dot_config


def test_find_config_pyproject_toml(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[tool.repoquill]\nexclude = ["*.lock"]\n')
    assert find_config_file(tmp_path) == config_file


def test_find_config_pyproject_without_section_skipped(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text("[tool.ruff]\nline-length = 100\n")
    assert find_config_file(tmp_path) is None


def test_find_config_walks_up(tmp_path: Path) -> None:
    config_file = tmp_path / "repoquill.toml"
    config_file.write_text('format = "json"\n')
    subdir = tmp_path / "sub" / "deep"
    subdir.mkdir(parents=True)
    assert find_config_file(subdir) == config_file


def test_find_config_none_when_missing(tmp_path: Path) -> None:
    assert find_config_file(tmp_path) is None


def test_load_config_sections_and_kebab_case(tmp_path: Path) -> None:
    config_file = tmp_path / "repoquill.toml"
    config_file.write_text(
        "[patterns]\n"
        'include = ["*.py"]\n'
        'tree-only = ["*.csv"]\n'
        "respect-gitignore = false\n"
        "[output]\n"
        "strip-comments = true\n"
        'format = "json"\n'
        "unknown-key = 1\n"
    )
    config = load_config(config_file)
    assert config == RepoquillConfig(
        include=["*.py"],
        tree_only=["*.csv"],
        respect_gitignore=False,
        strip_comments=True,
        format="json",
    )


def test_load_config_pyproject(tmp_path: Path) -> None:
    config_file = tmp_path / "pyproject.toml"
    config_file.write_text('[project]\nname = "x"\n\n[tool.repoquill]\nexclude = ["dist/**"]\n')
    assert load_config(config_file) == RepoquillConfig(exclude=["dist/**"])


def test_load_config_bare_string_pattern(tmp_path: Path) -> None:
    config_file = tmp_path / "repoquill.toml"
    config_file.write_text('include = "*.py"\ntree-only = ["*.lock"]\n')
    config = load_config(config_file)
    assert config.include == ["*.py"]
    assert config.tree_only == ["*.lock"]


def test_load_config_rejects_non_list_pattern(tmp_path: Path) -> None:
    config_file = tmp_path / "repoquill.toml"
    config_file.write_text("exclude = 3\n")
    with pytest.raises(ValueError, match="exclude"):
        load_config(config_file)


def test_merge_config_fills_unset_options(tmp_path: Path) -> None:
    options, explicit = _parse_args([str(tmp_path)])
    merge_cli_with_config(
        options, RepoquillConfig(include=["*.py"], normalize_whitespace=True), explicit
    )
    assert options.include == ["*.py"]
    assert options.normalize_whitespace is True


def test_merge_explicit_cli_flags_win(tmp_path: Path) -> None:
    options, explicit = _parse_args(["--include", "*.md", "--format", "text", str(tmp_path)])
    assert explicit == {"include", "format"}
    merge_cli_with_config(options, RepoquillConfig(include=["*.py"], format="json"), explicit)
    assert options.include == ["*.md"]
    assert options.format == "text"


def test_merge_no_config_is_noop(tmp_path: Path) -> None:
    options, explicit = _parse_args([str(tmp_path)])
    assert merge_cli_with_config(options, None, explicit) is options
    assert options.include == []


def test_no_respect_gitignore_tracked_as_respect_gitignore(tmp_path: Path) -> None:
    options, explicit = _parse_args(["--no-respect-gitignore", str(tmp_path)])
    assert options.respect_gitignore is False
    assert "respect_gitignore" in explicit
