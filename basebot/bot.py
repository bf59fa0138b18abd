"""The bot: named event handlers run as a sequential reduction pipeline."""

from __future__ import annotations

import logging
import threading
import types
from typing import Any, Callable

from basebot.lib.errors import DispatchTimeoutError
from basebot.lib.events import EventSystem
from basebot.lib.flow import reduce_series
from basebot.lib.utils import arrayify, namify, snakecase

Handler = Callable[[Any, Callable[..., None]], None]
"""A handler is called as ``handler(payload, done)`` and must call ``done(err, payload)`` once."""


class Bot:
    """Dispatches payloads through the handlers registered for an event.

    Handlers are called one after another in registration order. Each one gets
    the payload returned by the previous handler and a continuation ``done``
    that it must call exactly once, either with an error or with the
    (possibly modified) payload. A handler calling ``done`` twice, or never,
    is a bug in the handler; set the ``handler_timeout`` option to fail the
    dispatch when a handler hangs.

    Example:
        ```python
        bot = Bot()
        bot.handler("issue")
        bot.on_issue(lambda payload, done: done(None, payload))
        bot.handle_issue(payload, lambda err, result: print(err, result))
        ```
    """

    def __init__(self, options: dict[str, Any] | None = None) -> None:
        """Create a bot.

        Args:
            options: Optional settings. ``handler_timeout`` (seconds) fails a
                dispatch when a handler does not continue in time.
        """
        self.options: dict[str, Any] = dict(options or {})
        self.events = EventSystem()

    def on(self, event_name: str, handler: Handler) -> Bot:
        """Register a handler for an event."""
        self.events.on(event_name, handler)
        return self

    def once(self, event_name: str, handler: Handler) -> Bot:
        """Register a handler for the next dispatch of an event only."""
        self.events.once(event_name, handler)
        return self

    def off(self, event_name: str | None = None, handler: Handler | None = None) -> Bot:
        """Unregister one handler, all handlers of an event, or everything."""
        self.events.off(event_name, handler)
        return self

    def listeners(self, event_name: str) -> list[Handler]:
        return self.events.listeners(event_name)

    def has_listeners(self, event_name: str) -> bool:
        return self.events.has_listeners(event_name)

    def emit(self, event_name: str, *args: Any, **kwargs: Any) -> None:
        """Call the handlers of an event synchronously, without the pipeline."""
        self.events.emit(event_name, *args, **kwargs)

    def handle(self, event_name: str, payload: Any, callback: Callable[[Any, Any], None]) -> None:
        """Pass a payload through every handler registered for an event.

        ``callback(None, result)`` gets the payload returned by the last
        handler. The first handler error stops the pipeline and is passed
        unchanged as ``callback(err, None)``. With no handlers registered the
        callback gets the original payload.

        Args:
            event_name: Event to handle. Only handlers registered for it run.
            payload: Value given to the first handler.
            callback: Called once with ``(err, result)`` when handling finished.
        """
        handlers = self.listeners(event_name)
        if not handlers:
            logging.debug(f"No handlers for '{event_name}', returning payload unchanged")
            callback(None, payload)
            return

        logging.debug(f"Handling '{event_name}' with {len(handlers)} handler(s)")
        reduce_series(
            handlers,
            payload,
            callback,
            timeout=self.options.get("handler_timeout") or None,
        )

    def dispatch(self, event_name: str, payload: Any, timeout: float | None = None) -> Any:
        """Handle an event and block until the pipeline finished.

        Returns:
            The payload returned by the last handler.

        Raises:
            DispatchTimeoutError: If the pipeline did not finish within ``timeout`` seconds.
            Exception: The error a handler passed to its continuation, as-is.
        """
        finished = threading.Event()
        outcome: dict[str, Any] = {}

        def callback(err: Any, result: Any) -> None:
            outcome["err"] = err
            outcome["result"] = result
            finished.set()

        self.handle(event_name, payload, callback)
        if not finished.wait(timeout):
            raise DispatchTimeoutError(event_name, timeout)

        err = outcome["err"]
        if err is not None:
            if isinstance(err, BaseException):
                raise err
            raise RuntimeError(err)
        return outcome["result"]

    def handler(self, name: str) -> Bot:
        """Add ``on`` and ``handle`` methods for an event.

        ``bot.handler("pull-request")`` adds ``on_pull_request`` /
        ``handle_pull_request`` and the aliases ``onPullRequest`` /
        ``handlePullRequest``. The event key stays ``"pull-request"``.

        Returns:
            The bot, for chaining.

        Raises:
            ValueError: If the name has no word characters to build method names from.
        """

        def on_event(self: Bot, fn: Handler) -> Bot:
            return self.on(name, fn)

        def handle_event(self: Bot, payload: Any, callback: Callable[[Any, Any], None]) -> None:
            self.handle(name, payload, callback)

        snake = snakecase(name)
        pascal = namify(name)
        if not pascal or not f"on{pascal}".isidentifier():
            raise ValueError(f"Cannot generate handler methods for event name {name!r}")
        for prefix, fn in (("on", on_event), ("handle", handle_event)):
            self.define(f"{prefix}_{snake}", fn)
            self.define(f"{prefix}{pascal}", fn)
        return self

    def handlers(self, names: str | list[str] | None) -> Bot:
        """Call :meth:`handler` for one name or a list of names."""
        for name in arrayify(names):
            self.handler(name)
        return self

    def define(self, key: str, value: Any) -> Bot:
        """Attach an attribute to this bot; functions become bound methods."""
        if isinstance(value, types.FunctionType):
            value = types.MethodType(value, self)
        setattr(self, key, value)
        return self

    def use(self, plugin: Callable[[Bot], Any]) -> Bot:
        """Run a plugin against this bot so it can add handlers and methods."""
        if not callable(plugin):
            raise TypeError(f"Plugin must be callable, got {plugin!r}")
        plugin(self)
        return self
