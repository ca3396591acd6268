"""Structured JSON output with camelCase keys."""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Any

from repoquill.formatting.tree import render_ascii_tree
from repoquill.models import FileContent, FileEntry, FileState


class JsonFormatter:
    """
    Emits `tree`, a `files` list and a `summary`. Entries without loaded
    content (tree-only files, or files that failed to load) have no
    `content` key.
    """

    def format(self, files: Sequence[FileEntry], contents: Sequence[FileContent]) -> str:
        content_by_path = {c.entry.relative_path: c.content for c in contents}

        file_items: list[dict[str, Any]] = []
        for entry in files:
            item: dict[str, Any] = {
                "path": entry.relative_path,
                "state": entry.state.value,
                "sizeBytes": entry.size_bytes,
            }
            if entry.relative_path in content_by_path:
                item["content"] = content_by_path[entry.relative_path]
            file_items.append(item)

        output = {
            "tree": render_ascii_tree(files),
            "files": file_items,
            "summary": {
                "totalFiles": len(files),
                "fullFiles": sum(1 for f in files if f.state == FileState.full),
                "treeOnlyFiles": sum(1 for f in files if f.state == FileState.tree_only),
                "totalSizeBytes": sum(f.size_bytes for f in files),
            },
        }
        return json.dumps(output, indent=2, ensure_ascii=False)
