"""Cooperative cancellation token implementation.

Exposes the ``CancellationToken`` class a caller passes to
``UnifiedClient.stream``. Cancelling runs the registered callbacks, which is
how the facade closes the open connection from another thread; the stream
then raises ``CancelledError`` to its consumer.
"""

from __future__ import annotations

from threading import Lock
from typing import Callable

from .state import State
from .cancelled_error import CancelledError


class CancellationToken:
    """Thread-safe one-shot cancellation flag with close callbacks.

    Callbacks registered after cancellation run immediately. Each callback
    runs at most once.
    """

    def __init__(self) -> None:
        self._state = State()
        self._lock = Lock()

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._state.cancelled

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason string supplied at cancel time (if any)."""
        return self._state.reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation and run the registered callbacks once."""
        with self._lock:
            if self._state.cancelled:
                return
            self._state.cancelled = True
            self._state.reason = reason
            callbacks = list(self._state.callbacks)
            self._state.callbacks.clear()
        for callback in callbacks:
            callback()

    def add_callback(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` on cancellation (now, if already cancelled)."""
        with self._lock:
            if not self._state.cancelled:
                self._state.callbacks.append(callback)
                return
        callback()

    def remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._state.callbacks:
                self._state.callbacks.remove(callback)

    def raise_if_cancelled(self) -> None:
        """Raise ``CancelledError`` if the token is cancelled."""
        if self._state.cancelled:
            raise CancelledError(reason=self._state.reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return (
            f"CancellationToken(cancelled={self._state.cancelled}, "
            f"reason={self._state.reason!r}, callbacks={len(self._state.callbacks)})"
        )


__all__ = ["CancellationToken"]
