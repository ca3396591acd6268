from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def sample_repo(tmp_path: Path) -> Path:
    """
    A small project tree:

        .gitignore        (*.log)
        file1.txt
        ignored.log
        src/file2.cs
    """
    (tmp_path / ".gitignore").write_text("*.log\n")
    (tmp_path / "file1.txt").write_text("Hello from file1\n")
    (tmp_path / "ignored.log").write_text("log line\n")
    src = tmp_path / "src"
    src.mkdir()
    (src / "file2.cs").write_text("class Program {}\n")
    return tmp_path
