"""Plain text output: a project tree followed by each file's content."""

from __future__ import annotations

from collections.abc import Sequence

from repoquill.formatting.tree import render_ascii_tree
from repoquill.models import FileContent, FileEntry

SECTION_RULE = "=" * 80
FILE_RULE = "─" * 80


def format_size(size_bytes: int) -> str:
    """Human-readable size: `N B`, `N.N KB` or `N.N MB`."""
    kb = 1024
    mb = kb * 1024
    if size_bytes < kb:
        return f"{size_bytes} B"
    if size_bytes < mb:
        return f"{size_bytes / kb:.1f} KB"
    return f"{size_bytes / mb:.1f} MB"


def _banner(title: str) -> list[str]:
    return [SECTION_RULE, title.center(80).rstrip(), SECTION_RULE]


class PlainTextFormatter:
    def format(self, files: Sequence[FileEntry], contents: Sequence[FileContent]) -> str:
        lines: list[str] = [*_banner("PROJECT STRUCTURE"), "", render_ascii_tree(files)]

        if contents:
            lines.append("")
            lines.extend(_banner("FILES"))
            for content in contents:
                entry = content.entry
                lines.extend(
                    [
                        "",
                        FILE_RULE,
                        f"File: {entry.relative_path} ({format_size(entry.size_bytes)})",
                        FILE_RULE,
                        "",
                        content.content,
                    ]
                )

        return "\n".join(lines) + "\n"
