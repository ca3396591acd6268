"""Tests for glob pattern matching."""

from __future__ import annotations

from repoquill.discovery.globbing import compile_glob, matches, matches_any, normalize_path


def test_normalize_path():
    assert normalize_path("./src/app.py") == "src/app.py"
    assert normalize_path("src\\lib\\util.py") == "src/lib/util.py"
    assert normalize_path("build/") == "build"


def test_bare_pattern_matches_file_name_anywhere():
    assert matches("logs/app.log", "*.log")
    assert matches("app.log", "*.log")
    assert matches("a/b/c/deep.log", "*.log")
    assert not matches("logs/app.txt", "*.log")


def test_single_star_does_not_cross_directories():
    assert matches("src/app.py", "src/*.py")
    assert not matches("src/sub/app.py", "src/*.py")


def test_path_pattern_is_anchored():
    assert matches("src/app.py", "src/app.py")
    assert not matches("other/src/app.py", "src/app.py")
    assert not matches("src/app.py.bak", "src/app.py")


def test_leading_double_star_matches_any_depth():
    assert matches("test/foo.py", "**/test/*.py")
    assert matches("a/b/test/foo.py", "**/test/*.py")
    assert not matches("a/b/tests/foo.py", "**/test/*.py")


def test_interior_double_star_crosses_directories():
    assert matches("docs/guide.md", "docs/**/*.md")
    assert matches("docs/a/b/guide.md", "docs/**/*.md")
    assert matches("docs/a/b/guide.md", "docs/**")
    assert not matches("other/guide.md", "docs/**")


def test_question_mark_matches_one_character():
    assert matches("file1.txt", "file?.txt")
    assert not matches("file10.txt", "file?.txt")
    assert not matches("a/b", "a?b")


def test_case_insensitive():
    assert matches("SRC/App.CS", "src/*.cs")
    assert matches("README.MD", "readme.md")


def test_regex_metacharacters_are_literal():
    assert matches("a+b(1).txt", "a+b(1).txt")
    assert not matches("aab1.txt", "a+b(1).txt")
    assert matches("file.txt", "file.txt")
    assert not matches("fileXtxt", "file.txt")
    assert matches("[draft].md", "[draft].md")


def test_malformed_pattern_does_not_raise():
    assert not matches("src/app.py", "[unclosed")
    assert matches("x[unclosed", "x[unclosed")
    compile_glob("(((")


def test_backslash_and_dot_slash_normalization():
    assert matches(".\\src\\app.py", "./src/*.py")
    assert matches("src/app.py", "src\\app.py")


def test_matches_any():
    patterns = ["*.md", "src/*.py"]
    assert matches_any("README.md", patterns)
    assert matches_any("src/app.py", patterns)
    assert not matches_any("lib/app.py", patterns)
    assert not matches_any("README.md", [])
