"""
Content transforms applied to loaded files before formatting.

Each transform maps a `FileContent` to a new `FileContent` and never mutates
its input. `build_transforms()` returns the configured transforms in the
order they must run: comment stripping, then whitespace normalization.
"""

from __future__ import annotations

from typing import Protocol

from repoquill.models import FileContent, QuillConfig
from repoquill.transforms.comments import CommentStripper, strip_comments
from repoquill.transforms.whitespace import WhitespaceNormalizer, normalize_whitespace


class ContentTransform(Protocol):
    def apply(self, content: FileContent) -> FileContent: ...


def build_transforms(config: QuillConfig) -> list[ContentTransform]:
    transforms: list[ContentTransform] = []
    if config.strip_comments:
        transforms.append(CommentStripper())
    if config.normalize_whitespace:
        transforms.append(WhitespaceNormalizer())
    return transforms


__all__ = [
    "CommentStripper",
    "ContentTransform",
    "WhitespaceNormalizer",
    "build_transforms",
    "normalize_whitespace",
    "strip_comments",
]
