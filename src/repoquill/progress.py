"""Progress reports emitted by the engine while a run is underway."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

UNKNOWN = -1
"""Sentinel for an unknown total count or percentage."""


class ProgressPhase(str, Enum):
    discovering = "Discovering"
    classifying = "Classifying"
    loading = "Loading"
    transforming = "Transforming"
    formatting = "Formatting"


@dataclass(frozen=True)
class ProgressReport:
    """
    One progress update. `current_file` is the relative path of the item just
    processed, or empty when not applicable. `total_count` is `UNKNOWN` while
    the total is not yet known (during discovery).
    """

    phase: ProgressPhase
    current_file: str
    processed_count: int
    total_count: int

    @property
    def percent(self) -> int:
        """Whole-number percentage (floored), or `UNKNOWN`."""
        if self.total_count > 0:
            return (self.processed_count * 100) // self.total_count
        return UNKNOWN


ProgressSink = Callable[[ProgressReport], None]
