"""Minimal event emitter owned by each bot."""

from __future__ import annotations

import threading
from typing import Any, Callable


class EventSystem:
    """Minimal event emitter: a mapping of event name to an ordered handler list.

    Handlers run in registration order. Registering the same handler twice
    makes it run twice. Table updates are serialized with a lock; readers
    get snapshots so a handler may unregister itself while being called.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Callable]] = {}
        self._lock = threading.Lock()

    def on(self, event_name: str, handler: Callable) -> EventSystem:
        """Register a handler for an event."""
        if not callable(handler):
            raise TypeError(f"Handler for '{event_name}' must be callable, got {handler!r}")
        with self._lock:
            if event_name not in self._handlers:
                self._handlers[event_name] = []
            self._handlers[event_name].append(handler)
        return self

    def once(self, event_name: str, handler: Callable) -> EventSystem:
        """Register a handler that removes itself before its first call."""

        def wrapper(*args: Any, **kwargs: Any) -> Any:
            self.off(event_name, wrapper)
            return handler(*args, **kwargs)

        wrapper.fn = handler  # type: ignore[attr-defined]
        return self.on(event_name, wrapper)

    def off(self, event_name: str | None = None, handler: Callable | None = None) -> EventSystem:
        """Unregister handlers.

        With no arguments every event is cleared, with only an event name all of
        its handlers are removed, otherwise the first matching registration
        (including a pending ``once`` wrapper of ``handler``) is removed.
        """
        with self._lock:
            if event_name is None:
                self._handlers.clear()
                return self

            registered = self._handlers.get(event_name)
            if registered is None:
                return self

            if handler is None:
                del self._handlers[event_name]
                return self

            for idx, fn in enumerate(registered):
                if fn is handler or getattr(fn, "fn", None) is handler:
                    del registered[idx]
                    break

            if not registered:
                del self._handlers[event_name]
        return self

    def listeners(self, event_name: str) -> list[Callable]:
        """Return a copy of the handlers registered for an event."""
        with self._lock:
            return list(self._handlers.get(event_name, []))

    def has_listeners(self, event_name: str) -> bool:
        with self._lock:
            return bool(self._handlers.get(event_name))

    def emit(self, event_name: str, *args: Any, **kwargs: Any) -> None:
        """Call all handlers registered for this event."""
        for handler in self.listeners(event_name):
            handler(*args, **kwargs)
