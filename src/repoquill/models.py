"""
Core data types shared by discovery, classification, loading and formatting.

All values here are immutable. A change of disposition produces a new
`FileEntry` via `with_state()`, so entries can be shared freely between
phases without copying.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum


class FileState(str, Enum):
    """How a file participates in the output."""

    full = "Full"
    """Listed in the tree and its content is included."""

    tree_only = "TreeOnly"
    """Listed in the tree, content omitted."""

    excluded = "Excluded"
    """Not listed at all."""


class OutputFormat(str, Enum):
    text = "text"
    json = "json"


@dataclass(frozen=True)
class FileEntry:
    """
    A discovered file. `relative_path` is relative to the scan root and always
    uses forward slashes, with no leading `./` or separator.
    """

    absolute_path: str
    relative_path: str
    size_bytes: int
    last_modified: datetime
    state: FileState = FileState.full

    def with_state(self, state: FileState) -> FileEntry:
        return replace(self, state=state)


@dataclass(frozen=True)
class FileContent:
    """A file entry together with its (possibly transformed) text content."""

    entry: FileEntry
    content: str

    def with_content(self, content: str) -> FileContent:
        return replace(self, content=content)


@dataclass(frozen=True)
class FileError:
    """A per-file failure, recorded without aborting the run."""

    file_path: str
    message: str


@dataclass(frozen=True)
class QuillConfig:
    """
    Settings for one run. Pattern lists use the glob syntax of
    `repoquill.discovery.globbing`; order within each list does not matter.
    An empty `include_patterns` means every non-binary file is included.
    """

    root_path: str
    include_patterns: tuple[str, ...] = ()
    exclude_patterns: tuple[str, ...] = ()
    tree_only_patterns: tuple[str, ...] = ()
    respect_gitignore: bool = True
    strip_comments: bool = False
    normalize_whitespace: bool = False
    output_format: OutputFormat = OutputFormat.text

    @property
    def has_transforms(self) -> bool:
        return self.strip_comments or self.normalize_whitespace


@dataclass(frozen=True)
class QuillResult:
    """Outcome of a completed run."""

    output: str
    total_files: int
    full_files: int
    tree_only_files: int
    total_size_bytes: int
    files: list[FileEntry] = field(default_factory=list)
    """All non-excluded entries, sorted by relative path."""

    errors: list[FileError] = field(default_factory=list)
