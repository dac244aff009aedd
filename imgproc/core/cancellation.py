"""Cooperative cancellation for long-running filter passes."""

import threading

from .errors import ProcessingCancelled


class CancellationToken:
    """Thread-safe stop flag checked by filters between row bands."""

    def __init__(self):
        self._event = threading.Event()

    def request_stop(self) -> None:
        """Request the current processing to stop gracefully."""
        self._event.set()

    @property
    def stop_requested(self) -> bool:
        return self._event.is_set()

    def raise_if_stopped(self) -> None:
        if self._event.is_set():
            raise ProcessingCancelled()
