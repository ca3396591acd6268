"""
repoquill: scan a directory tree, classify each file as full, tree-only or
excluded, and pack the result into a single text or JSON document.

Usage::

    from repoquill import QuillConfig, QuillEngine

    result = QuillEngine().execute(QuillConfig(root_path=".", include_patterns=("*.py",)))
    print(result.output)
"""

from repoquill.cancellation import CancellationToken, OperationCancelledError
from repoquill.engine import QuillEngine
from repoquill.models import (
    FileContent,
    FileEntry,
    FileError,
    FileState,
    OutputFormat,
    QuillConfig,
    QuillResult,
)
from repoquill.progress import ProgressPhase, ProgressReport

__all__ = [
    "CancellationToken",
    "FileContent",
    "FileEntry",
    "FileError",
    "FileState",
    "OperationCancelledError",
    "OutputFormat",
    "ProgressPhase",
    "ProgressReport",
    "QuillConfig",
    "QuillEngine",
    "QuillResult",
]
