"""
Default ignore rules and file names used during discovery.

These rules use gitignore syntax. Directory rules end with `/`.
"""

from __future__ import annotations

IGNORE_FILE_NAME = ".gitignore"

HIDDEN_PREFIX = "."
"""Files and directories whose names start with this are never discovered."""

# Always present, whether or not any ignore file exists.
DEFAULT_IGNORE_RULES: list[str] = [
    ".git/",
]
