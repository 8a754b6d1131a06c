from __future__ import annotations

import heapq
import itertools
from typing import Callable, List

import pytest

from reminder_bot.session import SessionExecutor


class FakeTimers:
    """Virtual clock implementing the TimerBackend protocol.

    Time only moves when advance() is called; due callbacks then run in
    fire-time order, each one observing the clock at its own fire time.
    """

    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start
        self._queue: list = []
        self._seq = itertools.count()
        self._cancelled: set = set()

    def time(self) -> float:
        return self.now

    def arm(self, delay: float, callback: Callable[[], None]) -> int:
        token = next(self._seq)
        heapq.heappush(self._queue, (self.now + max(delay, 0), token, callback))
        return token

    def cancel(self, token: int) -> None:
        self._cancelled.add(token)

    @property
    def pending(self) -> int:
        return sum(1 for _, token, _ in self._queue if token not in self._cancelled)

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while self._queue and self._queue[0][0] <= target:
            fire_at, token, callback = heapq.heappop(self._queue)
            if token in self._cancelled:
                continue
            self.now = fire_at
            callback()
        self.now = target


@pytest.fixture
def timers() -> FakeTimers:
    return FakeTimers()


@pytest.fixture
def sent() -> List[str]:
    """Out-of-band messages delivered by fired reminders."""
    return []


@pytest.fixture
def executor(timers, sent) -> SessionExecutor:
    return SessionExecutor(timers=timers, notify=sent.append, now_fn=timers.time)
