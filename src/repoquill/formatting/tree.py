"""ASCII tree rendering of a flat list of file entries."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from repoquill.models import FileEntry, FileState

BRANCH = "├── "
LAST_BRANCH = "└── "
VERTICAL = "│   "
SPACE = "    "

TREE_ONLY_MARKER = "  [tree-only]"


@dataclass
class _Node:
    name: str
    is_dir: bool
    entry: FileEntry | None = None
    children: list[_Node] = field(default_factory=list)
    # Directory children by name, for lookup while building.
    dirs: dict[str, _Node] = field(default_factory=dict)


def _build_tree(files: Sequence[FileEntry]) -> _Node:
    root = _Node("", is_dir=True)
    for entry in files:
        parts = [p for p in entry.relative_path.split("/") if p]
        if not parts:
            continue
        current = root
        for part in parts[:-1]:
            child = current.dirs.get(part)
            if child is None:
                child = _Node(part, is_dir=True)
                current.dirs[part] = child
                current.children.append(child)
            current = child
        current.children.append(_Node(parts[-1], is_dir=False, entry=entry))
    _sort(root)
    return root


def _sort(node: _Node) -> None:
    # Directories first, then files, each case-insensitively by name.
    node.children.sort(key=lambda n: (not n.is_dir, n.name.lower(), n.name))
    for child in node.children:
        if child.is_dir:
            _sort(child)


def _render(node: _Node, prefix: str, is_last: bool, lines: list[str]) -> None:
    branch = LAST_BRANCH if is_last else BRANCH
    if node.is_dir:
        lines.append(f"{prefix}{branch}{node.name}/")
        child_prefix = prefix + (SPACE if is_last else VERTICAL)
        for i, child in enumerate(node.children):
            _render(child, child_prefix, i == len(node.children) - 1, lines)
    else:
        marker = ""
        if node.entry is not None and node.entry.state == FileState.tree_only:
            marker = TREE_ONLY_MARKER
        lines.append(f"{prefix}{branch}{node.name}{marker}")


def render_ascii_tree(files: Sequence[FileEntry]) -> str:
    """
    Render entries as an indented tree, directories before files. Tree-only
    files are marked. An empty list renders as an empty string.
    """
    if not files:
        return ""
    root = _build_tree(files)
    lines: list[str] = []
    for i, child in enumerate(root.children):
        _render(child, "", i == len(root.children) - 1, lines)
    return "\n".join(lines)
