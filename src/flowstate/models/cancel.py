"""Cancellation token for playlist generation."""

import threading

from flowstate.exceptions import CancellationError


class CancelToken:
    """Lets a caller abandon a generation request early.

    Backed by threading.Event so a token can be cancelled from a UI thread
    while the pipeline runs on an event loop. Single-use.

    Example:
        >>> token = CancelToken()
        >>> task = asyncio.create_task(generator.generate(prompt, cancel_token=token))
        >>> token.cancel()  # the pipeline stops at its next checkpoint
    """

    __slots__ = ("_event", "_reason")

    def __init__(self) -> None:
        self._event = threading.Event()
        self._reason = "Generation cancelled"

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation. Safe to call from any thread."""
        if reason:
            self._reason = reason
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise CancellationError if cancel() has been called."""
        if self._event.is_set():
            raise CancellationError(self._reason)
