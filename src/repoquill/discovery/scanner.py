"""
FileScanner: streams file entries from a directory tree.

Traversal is depth-first over an explicit stack of directories. In each
directory, files are yielded first and then subdirectories are visited. Hidden
entries are always skipped, and gitignore rules are applied when enabled.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Generator, Iterator
from datetime import datetime, timezone
from pathlib import Path

from repoquill.cancellation import CancellationToken
from repoquill.discovery.defaults import HIDDEN_PREFIX
from repoquill.discovery.ignore_rules import IgnoreRuleSet, build_ignore_rules
from repoquill.models import FileEntry, FileState

logger = logging.getLogger(__name__)


class FileScanner:
    """
    Discovers files under a root directory. Each call to `discover()` is a
    single lazy pass over the tree as it is on disk at the time.
    """

    def discover(
        self,
        root_path: str | Path,
        respect_gitignore: bool = True,
        cancel_token: CancellationToken | None = None,
    ) -> Iterator[FileEntry]:
        """
        Yield an entry (with state `Full`, pending classification) for every
        visible, non-ignored file under `root_path`. A missing root yields
        nothing. Raises `OperationCancelledError` if cancelled mid-scan.
        """
        token = cancel_token or CancellationToken()
        root = Path(os.path.abspath(root_path))
        if not root.is_dir():
            logger.debug("Scan root %s is not a directory", root)
            return

        ignore_rules = build_ignore_rules(root, token) if respect_gitignore else None

        # Stack of (absolute dir, relative dir) pairs; relative dir is "" for the root.
        stack: list[tuple[Path, str]] = [(root, "")]
        while stack:
            token.raise_if_cancelled()
            current, current_rel = stack.pop()
            subdirs = yield from self._scan_directory(current, current_rel, ignore_rules, token)
            # Reversed so that popping visits subdirectories in enumeration order.
            stack.extend(reversed(subdirs))

    def _scan_directory(
        self,
        directory: Path,
        relative_dir: str,
        ignore_rules: IgnoreRuleSet | None,
        token: CancellationToken,
    ) -> Generator[FileEntry, None, list[tuple[Path, str]]]:
        """
        Yield the files directly in `directory` and return the subdirectories
        that should be visited next.
        """
        try:
            with os.scandir(directory) as it:
                children = list(it)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            return []

        files: list[os.DirEntry[str]] = []
        dirs: list[os.DirEntry[str]] = []
        for child in children:
            try:
                if child.is_dir(follow_symlinks=False):
                    dirs.append(child)
                elif child.is_file():
                    files.append(child)
            except OSError:
                continue

        for child in files:
            token.raise_if_cancelled()
            if child.name.startswith(HIDDEN_PREFIX):
                continue
            relative_path = _join(relative_dir, child.name)
            if ignore_rules is not None and ignore_rules.is_ignored(relative_path):
                continue
            try:
                stat = child.stat()
            except OSError as e:
                logger.debug("Skipping file that cannot be stat'ed %s: %s", child.path, e)
                continue
            yield FileEntry(
                absolute_path=child.path,
                relative_path=relative_path,
                size_bytes=stat.st_size,
                last_modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc),
                state=FileState.full,
            )

        subdirs: list[tuple[Path, str]] = []
        for child in dirs:
            token.raise_if_cancelled()
            if child.name.startswith(HIDDEN_PREFIX):
                continue
            relative_path = _join(relative_dir, child.name)
            if ignore_rules is not None and ignore_rules.is_ignored(relative_path + "/"):
                continue
            subdirs.append((Path(child.path), relative_path))
        return subdirs


def _join(relative_dir: str, name: str) -> str:
    return f"{relative_dir}/{name}" if relative_dir else name
