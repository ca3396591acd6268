"""Cooperative cancellation shared between a caller and a running engine."""

from __future__ import annotations

import threading


class OperationCancelledError(Exception):
    """Raised at an iteration boundary once cancellation has been requested."""


class CancellationToken:
    """
    Thread-safe cancellation flag. The caller calls `cancel()`; the engine
    calls `raise_if_cancelled()` between items.
    """

    def __init__(self) -> None:
        self._event: threading.Event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelledError("Operation was cancelled")

