"""
Gitignore handling using pathspec.

All `.gitignore` files under the scan root are merged into one flat rule list.
Each nested file's patterns are rewritten so they only apply below the
directory that contains the file, then the files are ordered from shallowest
to deepest. Matching is last-match-wins, so a deeper rule (including a `!`
negation) overrides a shallower one.

This flattening approximates real gitignore scoping. One known divergence:
a negation cannot re-include a file whose parent directory was excluded by a
whole-directory rule, because discovery never enters that directory.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

import pathspec
from pathspec.patterns.gitignore.spec import GitIgnoreSpecPattern

from repoquill.cancellation import CancellationToken
from repoquill.discovery.defaults import DEFAULT_IGNORE_RULES, HIDDEN_PREFIX, IGNORE_FILE_NAME

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IgnoreRule:
    """A single scoped rule and the depth of the directory it came from (root is 0)."""

    pattern: str
    depth: int
    source: str = ""
    """Relative path of the ignore file, or empty for built-in rules."""


@dataclass(frozen=True)
class IgnoreRuleSet:
    """
    An ordered, read-only set of ignore rules. Later rules take precedence.
    """

    rules: tuple[IgnoreRule, ...]
    _spec: pathspec.PathSpec = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        spec = pathspec.GitIgnoreSpec.from_lines([rule.pattern for rule in self.rules])
        object.__setattr__(self, "_spec", spec)

    @classmethod
    def from_patterns(cls, patterns: Iterable[str], depth: int = 0) -> IgnoreRuleSet:
        return cls(tuple(IgnoreRule(p, depth) for p in patterns))

    def is_ignored(self, relative_path: str) -> bool:
        """
        Check a relative path against the rule set. Directories should be passed
        with a trailing `/` so directory-only rules apply to them.
        """
        return self._spec.match_file(relative_path.replace("\\", "/"))

    def __len__(self) -> int:
        return len(self.rules)


def _read_ignore_file(path: Path) -> list[str] | None:
    """
    Return the rule lines of an ignore file (blank lines and comments dropped),
    or `None` if the file is missing or cannot be read or decoded.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug("Skipping unreadable ignore file %s: %s", path, e)
        return None
    lines = [line.strip() for line in text.splitlines()]
    return [line for line in lines if line and not line.startswith("#")]


def scope_rule(line: str, relative_dir: str) -> str:
    """
    Rewrite a rule from the ignore file in `relative_dir` so it only applies
    below that directory. Rules from the root (`relative_dir == ""`) are
    returned unchanged.

    A pattern without an interior slash matches at any depth in gitignore, so
    it becomes `dir/**/pattern`. Patterns with a slash are anchored to `dir`.
    The directory part is escaped, so names like `lib[1]` or `!urgent` match
    literally.
    """
    if not relative_dir:
        return line

    negated = line.startswith("!")
    body = line[1:] if negated else line
    prefix = "/".join(GitIgnoreSpecPattern.escape(part) for part in relative_dir.split("/"))

    if "/" in body.rstrip("/"):
        scoped = f"{prefix}/{body.lstrip('/')}"
    else:
        scoped = f"{prefix}/**/{body}"
    return f"!{scoped}" if negated else scoped


def find_ignore_files(root: Path) -> list[Path]:
    """
    Find every ignore file at or below `root`, without descending into hidden
    directories. Unreadable directories are skipped.
    """
    found: list[Path] = []

    def on_error(error: OSError) -> None:
        logger.debug("Cannot list %s while collecting ignore files: %s", error.filename, error)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = [d for d in dirnames if not d.startswith(HIDDEN_PREFIX)]
        if IGNORE_FILE_NAME in filenames:
            found.append(Path(dirpath) / IGNORE_FILE_NAME)
    return found


def build_ignore_rules(
    root: str | Path, cancel_token: CancellationToken | None = None
) -> IgnoreRuleSet:
    """
    Build the merged rule set for a scan root. The default rules come first,
    then each ignore file's rules, ordered by the length of the containing
    directory's path (shallowest first).
    """
    root = Path(root)
    rules: list[IgnoreRule] = [IgnoreRule(pattern, 0) for pattern in DEFAULT_IGNORE_RULES]

    ignore_files = find_ignore_files(root)
    ignore_files.sort(key=lambda p: (len(str(p.parent)), str(p)))

    for ignore_file in ignore_files:
        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        lines = _read_ignore_file(ignore_file)
        if lines is None:
            continue

        relative_dir = ignore_file.parent.relative_to(root).as_posix()
        if relative_dir == ".":
            relative_dir = ""
        depth = len(relative_dir.split("/")) if relative_dir else 0
        source = f"{relative_dir}/{IGNORE_FILE_NAME}" if relative_dir else IGNORE_FILE_NAME

        for line in lines:
            rules.append(IgnoreRule(scope_rule(line, relative_dir), depth, source))

    logger.debug("Loaded %d ignore rules from %d files", len(rules), len(ignore_files))
    return IgnoreRuleSet(tuple(rules))
