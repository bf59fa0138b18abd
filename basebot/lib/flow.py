"""Callback based control flow: sequential reduction and parallel fan-out.

Every step receives a continuation ``done(err=None, value=None)`` which it must
call exactly once, from any thread. ``err`` is anything that is not ``None``.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Iterable

from basebot.lib.errors import HandlerTimeoutError

Callback = Callable[[Any, Any], None]


class _Step:
    """Continuation handed to one step of a series."""

    def __init__(self, series: _Series, index: int) -> None:
        self._series = series
        self.index = index
        self._timer: threading.Timer | None = None
        # Guarded by the series lock
        self.settled = False
        self.in_call = True
        self.continued_in_call = False

    def start_timer(self, timeout: float | None) -> None:
        if not timeout:
            return
        self._timer = threading.Timer(timeout, self._expire, args=(timeout,))
        self._timer.daemon = True
        self._timer.start()

    def cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()

    def _expire(self, timeout: float) -> None:
        logging.warning(f"Handler #{self.index} timed out after {timeout}s")
        self(HandlerTimeoutError(self.index, timeout))

    def __call__(self, err: Any = None, value: Any = None) -> None:
        if not self._series.settle(self, err, value):
            logging.debug(f"Ignoring late continuation of handler #{self.index}")


class _Series:
    def __init__(
        self,
        functions: Iterable[Callable],
        initial: Any,
        callback: Callback,
        timeout: float | None = None,
    ) -> None:
        self._functions = list(functions)
        self._callback = callback
        self._timeout = timeout
        self._acc = initial
        self._index = 0
        self._finished = False
        self._lock = threading.Lock()

    def run(self) -> None:
        # Steps that continue while still inside their call are picked up by
        # this loop instead of recursing, so the stack does not grow with the
        # chain length.
        while True:
            with self._lock:
                if self._finished:
                    return
                if self._index >= len(self._functions):
                    self._finished = True
                    result = self._acc
                    break
                step = _Step(self, self._index)
                fn = self._functions[self._index]
                acc = self._acc

            step.start_timer(self._timeout)
            try:
                fn(acc, step)
            except Exception as e:
                if not self.settle(step, e, None):
                    # The step already reported its outcome; the series goes on.
                    logging.exception(f"Handler #{step.index} raised after continuing: {e}")

            with self._lock:
                step.in_call = False
                if not step.continued_in_call:
                    return

        self._callback(None, result)

    def settle(self, step: _Step, err: Any, value: Any) -> bool:
        """Record the outcome of a step. Returns False if it was already settled.

        The accumulator and index are updated under the same lock that marks
        the step settled, so the driving loop never sees a settled step with
        stale series state.
        """
        with self._lock:
            if step.settled:
                return False
            step.settled = True
            if err is not None:
                failed = not self._finished
                self._finished = True
            else:
                failed = False
                self._acc = value
                self._index += 1
            if step.in_call:
                step.continued_in_call = True
            resume = err is None and not step.in_call

        step.cancel_timer()
        if failed:
            self._callback(err, None)
        elif resume:
            self.run()
        return True


def reduce_series(
    functions: Iterable[Callable],
    initial: Any,
    callback: Callback,
    timeout: float | None = None,
) -> None:
    """Thread ``initial`` through ``functions`` one at a time.

    Each function is called as ``fn(acc, done)``; the value it passes to
    ``done`` becomes the accumulator of the next one. The first error stops
    the series and is passed to ``callback(err, None)``; otherwise
    ``callback(None, acc)`` is called after the last function.

    A function that raises before continuing fails the series with that
    exception. One that raises after continuing keeps the outcome it reported;
    the exception is logged and the series carries on. If ``timeout`` is set, a
    function that has not continued within that many seconds fails the series
    with :class:`HandlerTimeoutError` and its late continuation is ignored. Without a
    timeout a function that never continues blocks the series forever.

    Args:
        functions: Step functions, called in order.
        initial: Seed for the accumulator.
        callback: Called exactly once with ``(err, result)``.
        timeout: Optional per-step timeout in seconds.
    """
    _Series(functions, initial, callback, timeout).run()


def parallel(tasks: Iterable[Callable], callback: Callback) -> None:
    """Start every task at once and collect their results in task order.

    Each task is called as ``task(done)``. ``callback(err, None)`` is called on
    the first error, or ``callback(None, results)`` once every task finished.
    """
    tasks = list(tasks)
    results: list[Any] = [None] * len(tasks)
    remaining = [len(tasks)]
    finished = [False]
    lock = threading.Lock()

    if not tasks:
        callback(None, results)
        return

    def make_done(idx: int) -> Callable[..., None]:
        def done(err: Any = None, value: Any = None) -> None:
            with lock:
                if finished[0]:
                    return
                if err is None:
                    results[idx] = value
                    remaining[0] -= 1
                if err is not None or remaining[0] == 0:
                    finished[0] = True
                else:
                    return
            callback(err, None if err is not None else results)

        return done

    for idx, task in enumerate(tasks):
        task(make_done(idx))
