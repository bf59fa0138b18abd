"""Pytest fixtures for basebot tests."""

import threading

import pytest

from basebot.bot import Bot
from basebot.lib.events import EventSystem


class CallbackRecorder:
    """Callback that records every ``(err, result)`` it is called with."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.called = threading.Event()

    def __call__(self, err=None, result=None) -> None:
        self.calls.append((err, result))
        self.called.set()

    def wait(self, timeout: float = 2.0) -> bool:
        return self.called.wait(timeout)

    @property
    def err(self):
        return self.calls[-1][0]

    @property
    def result(self):
        return self.calls[-1][1]


@pytest.fixture
def events():
    return EventSystem()


@pytest.fixture
def bot():
    return Bot()


@pytest.fixture
def recorder():
    return CallbackRecorder()


@pytest.fixture
def make_recorder():
    return CallbackRecorder
