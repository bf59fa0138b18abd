"""Exceptions raised by basebot."""

from __future__ import annotations


class BotError(Exception):
    """Base class for errors created by basebot itself.

    Errors passed to a continuation by a handler are propagated as-is and do
    not need to derive from this class.
    """


class HandlerTimeoutError(BotError):
    """A handler did not call its continuation within the configured timeout."""

    def __init__(self, index: int, timeout: float) -> None:
        super().__init__(f"Handler #{index} did not continue within {timeout}s")
        self.index = index
        self.timeout = timeout


class DispatchTimeoutError(BotError):
    """A blocking dispatch did not complete in time."""

    def __init__(self, event_name: str, timeout: float) -> None:
        super().__init__(f"Dispatch of '{event_name}' did not complete within {timeout}s")
        self.event_name = event_name
        self.timeout = timeout
