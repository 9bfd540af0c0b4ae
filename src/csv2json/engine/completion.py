"""One-shot completion signal raised by the writer stage."""

from __future__ import annotations

import threading

from csv2json.contracts.errors import CompletionSignalError


class CompletionSignal:
    """Single-use notification that the writer has finished.

    The writer raises it exactly once, after the destination is flushed and
    closed, passing the fatal error if it failed. The coordinator waits on it.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._error: BaseException | None = None

    def signal(self, error: BaseException | None = None) -> None:
        """Mark the writer as finished.

        Raises:
            CompletionSignalError: If the signal was already raised.
        """
        if self._event.is_set():
            raise CompletionSignalError("completion signal raised more than once")
        self._error = error
        self._event.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Block until signalled. Returns False only if timeout expired."""
        return self._event.wait(timeout)

    @property
    def is_set(self) -> bool:
        return self._event.is_set()

    @property
    def error(self) -> BaseException | None:
        """The writer's fatal error, or None on success or before signalling."""
        return self._error

    @property
    def succeeded(self) -> bool:
        return self._event.is_set() and self._error is None
