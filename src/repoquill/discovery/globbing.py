"""
Glob matching for include, exclude and tree-only patterns.

Supported syntax:
- `*` matches any run of characters except `/`
- `?` matches one character except `/`
- `**` matches any run of characters including `/`; `**/` matches zero or
  more leading directories
- everything else is literal

A pattern without `/` is matched against the file name only, so `*.log`
matches `logs/app.log`. A pattern with `/` must match the whole relative
path. Matching is case-insensitive. Malformed patterns never raise; they
simply match literally.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import cache


def normalize_path(path: str) -> str:
    """Use forward slashes and drop a leading `./` and any trailing `/`."""
    path = path.replace("\\", "/")
    if path.startswith("./"):
        path = path[2:]
    return path.rstrip("/")


@cache
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a normalized glob pattern into an anchored, case-insensitive regex."""
    parts: list[str] = ["^"]
    i = 0
    if pattern.startswith("**/"):
        parts.append("(?:.*/)?")
        i = 3

    n = len(pattern)
    while i < n:
        c = pattern[i]
        if c == "*":
            if pattern.startswith("**/", i):
                parts.append("(?:.*/)?")
                i += 3
            elif pattern.startswith("**", i):
                parts.append(".*")
                i += 2
            else:
                parts.append("[^/]*")
                i += 1
        elif c == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(c))
            i += 1

    parts.append("$")
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def matches(path: str, pattern: str) -> bool:
    """Check whether a relative path matches a single glob pattern."""
    path = normalize_path(path)
    pattern = normalize_path(pattern)

    if "/" not in pattern:
        target = path.rsplit("/", 1)[-1]
    else:
        target = path
    return compile_glob(pattern).match(target) is not None


def matches_any(path: str, patterns: Iterable[str]) -> bool:
    """Check whether a relative path matches any of the given patterns."""
    return any(matches(path, pattern) for pattern in patterns)
