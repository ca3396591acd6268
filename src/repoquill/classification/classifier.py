"""
PatternClassifier: decides whether each file is included in full, listed
in the tree only, or excluded.
"""

from __future__ import annotations

from repoquill.classification.binary import is_binary
from repoquill.discovery.globbing import matches_any
from repoquill.models import FileEntry, FileState, QuillConfig


class PatternClassifier:
    """
    Rules are checked in order and the first that applies wins:

    1. Matches an exclude pattern: `Excluded`
    2. Matches a tree-only pattern: `TreeOnly`
    3. Binary file: `TreeOnly`
    4. Include patterns are configured: `Full` if one matches, else `Excluded`
    5. Otherwise: `Full`

    Classification depends only on the entry and the config, so it gives the
    same answer regardless of discovery order.
    """

    def classify(self, entry: FileEntry, config: QuillConfig) -> FileEntry:
        path = entry.relative_path

        if config.exclude_patterns and matches_any(path, config.exclude_patterns):
            return entry.with_state(FileState.excluded)

        if config.tree_only_patterns and matches_any(path, config.tree_only_patterns):
            return entry.with_state(FileState.tree_only)

        if is_binary(entry.absolute_path):
            return entry.with_state(FileState.tree_only)

        if config.include_patterns:
            if matches_any(path, config.include_patterns):
                return entry.with_state(FileState.full)
            return entry.with_state(FileState.excluded)

        return entry.with_state(FileState.full)
