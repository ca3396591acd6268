"""Tests for file classification and binary detection."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from repoquill.classification import PatternClassifier
from repoquill.classification.binary import (
    PROBE_SIZE,
    contains_null_bytes,
    has_binary_extension,
    is_binary,
)
from repoquill.models import FileEntry, FileState, QuillConfig


def _entry(root: Path, relative_path: str, content: bytes = b"text\n") -> FileEntry:
    path = root / relative_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return FileEntry(
        absolute_path=str(path),
        relative_path=relative_path,
        size_bytes=len(content),
        last_modified=datetime.now(timezone.utc),
    )


def _classify(entry: FileEntry, root: Path, **kwargs: tuple[str, ...]) -> FileState:
    config = QuillConfig(root_path=str(root), **kwargs)  # pyright: ignore[reportArgumentType]
    return PatternClassifier().classify(entry, config).state


def test_default_is_full(tmp_path: Path):
    entry = _entry(tmp_path, "src/app.py")
    assert _classify(entry, tmp_path) == FileState.full


def test_exclude_wins_over_include(tmp_path: Path):
    entry = _entry(tmp_path, "temp.cs")
    state = _classify(entry, tmp_path, include_patterns=("*.cs",), exclude_patterns=("temp.*",))
    assert state == FileState.excluded


def test_exclude_wins_over_tree_only(tmp_path: Path):
    entry = _entry(tmp_path, "package-lock.json")
    state = _classify(
        entry, tmp_path, exclude_patterns=("*.json",), tree_only_patterns=("package-lock.json",)
    )
    assert state == FileState.excluded


def test_tree_only_pattern(tmp_path: Path):
    entry = _entry(tmp_path, "docs/big.csv")
    state = _classify(entry, tmp_path, tree_only_patterns=("*.csv",), include_patterns=("*.csv",))
    assert state == FileState.tree_only


def test_include_patterns_restrict(tmp_path: Path):
    app = _entry(tmp_path, "app.cs")
    script = _entry(tmp_path, "script.js")
    assert _classify(app, tmp_path, include_patterns=("*.cs",)) == FileState.full
    assert _classify(script, tmp_path, include_patterns=("*.cs",)) == FileState.excluded


def test_binary_content_is_tree_only(tmp_path: Path):
    entry = _entry(tmp_path, "image.bin", b"\x89PNG\x00\x00\x01")
    assert _classify(entry, tmp_path) == FileState.tree_only


def test_binary_wins_over_include(tmp_path: Path):
    entry = _entry(tmp_path, "data.txt", b"abc\x00def")
    assert _classify(entry, tmp_path, include_patterns=("*.txt",)) == FileState.tree_only


def test_binary_extension_trusted_without_reading(tmp_path: Path):
    entry = _entry(tmp_path, "notes.exe", b"plain text, honestly\n")
    assert _classify(entry, tmp_path) == FileState.tree_only


def test_classification_is_pure(tmp_path: Path):
    entry = _entry(tmp_path, "src/app.py")
    config = QuillConfig(root_path=str(tmp_path), include_patterns=("src/*.py",))
    classifier = PatternClassifier()
    first = classifier.classify(entry, config)
    second = classifier.classify(entry, config)
    assert first == second
    assert entry.state == FileState.full
    assert first is not entry


def test_has_binary_extension():
    assert has_binary_extension("photo.PNG")
    assert has_binary_extension("dir/lib.so")
    assert not has_binary_extension("README")
    assert not has_binary_extension("main.py")


def test_contains_null_bytes_only_checks_probe_window(tmp_path: Path):
    late = tmp_path / "late.dat"
    late.write_bytes(b"a" * PROBE_SIZE + b"\x00")
    assert not contains_null_bytes(str(late))

    early = tmp_path / "early.dat"
    early.write_bytes(b"a" * (PROBE_SIZE - 1) + b"\x00")
    assert contains_null_bytes(str(early))


def test_unreadable_file_is_not_binary(tmp_path: Path):
    assert not is_binary(str(tmp_path / "missing.txt"))


def test_empty_file_is_not_binary(tmp_path: Path):
    empty = tmp_path / "empty.txt"
    empty.write_bytes(b"")
    assert not is_binary(str(empty))
