"""Output formatters and the tree renderer they share."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from repoquill.formatting.json_format import JsonFormatter
from repoquill.formatting.plaintext import PlainTextFormatter, format_size
from repoquill.formatting.tree import render_ascii_tree
from repoquill.models import FileContent, FileEntry, OutputFormat


class OutputFormatter(Protocol):
    def format(self, files: Sequence[FileEntry], contents: Sequence[FileContent]) -> str: ...


def create_formatter(output_format: OutputFormat) -> OutputFormatter:
    if output_format == OutputFormat.json:
        return JsonFormatter()
    return PlainTextFormatter()


__all__ = [
    "JsonFormatter",
    "OutputFormatter",
    "PlainTextFormatter",
    "create_formatter",
    "format_size",
    "render_ascii_tree",
]
