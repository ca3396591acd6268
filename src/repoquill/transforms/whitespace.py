"""Whitespace normalization: line endings, trailing spaces and blank-line runs."""

from __future__ import annotations

import re

from repoquill.models import FileContent

_TRAILING_SPACE_RE = re.compile(r"[ \t]+$", re.MULTILINE)
_BLANK_RUN_RE = re.compile(r"\n{3,}")


def normalize_whitespace(text: str) -> str:
    """
    Convert line endings to `\\n`, strip trailing spaces and tabs, collapse runs
    of blank lines to one, and end with exactly one newline.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _TRAILING_SPACE_RE.sub("", text)
    text = _BLANK_RUN_RE.sub("\n\n", text)
    return text.rstrip() + "\n"


class WhitespaceNormalizer:
    def apply(self, content: FileContent) -> FileContent:
        return content.with_content(normalize_whitespace(content.content))
