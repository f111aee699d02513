"""Cooperative cancellation for analysis and fix passes."""

from __future__ import annotations

import threading


class OperationCanceledError(Exception):
    """Raised when the host cancels an analysis or fix in flight."""


class CancellationToken:
    """A flag the host sets and the analyzer polls between call sites."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancellation_requested(self) -> bool:
        return self._event.is_set()

    def raise_if_cancellation_requested(self) -> None:
        if self._event.is_set():
            msg = "operation was canceled"
            raise OperationCanceledError(msg)


def check_cancellation(token: CancellationToken | None) -> None:
    if token is not None:
        token.raise_if_cancellation_requested()


__all__ = ["CancellationToken", "OperationCanceledError", "check_cancellation"]
