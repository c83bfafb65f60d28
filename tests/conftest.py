from __future__ import annotations

import itertools
import threading
from typing import Callable, List

import pytest

from rps_hand.adapters.hand_output import HandOutput
from rps_hand.adapters.transport import LoopbackTransport
from rps_hand.animation.timers import Scheduler, TimerHandle
from rps_hand.errors import TransportWriteError


class ManualTimer(TimerHandle):
    def __init__(self, interval_s: float, callback: Callable[[], None], next_at: float, seq: int, name: str):
        self.interval_s = interval_s
        self.callback = callback
        self.next_at = next_at
        self.seq = seq
        self.name = name
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        self._active = False


class ManualScheduler(Scheduler):
    """Scheduler driven by simulated time; timers only fire inside ``advance``."""

    def __init__(self):
        self.lock = threading.RLock()
        self.now = 0.0
        self.timers: List[ManualTimer] = []
        self._seq = itertools.count()

    def call_every(self, interval_s, callback, name="timer"):
        timer = ManualTimer(interval_s, callback, self.now + interval_s, next(self._seq), name)
        self.timers.append(timer)
        return timer

    @property
    def active_timers(self) -> List[ManualTimer]:
        return [t for t in self.timers if t.active]

    def advance(self, seconds: float) -> None:
        target = self.now + seconds
        while True:
            due = [t for t in self.active_timers if t.next_at <= target + 1e-9]
            if not due:
                break
            timer = min(due, key=lambda t: (t.next_at, t.seq))
            self.now = timer.next_at
            timer.next_at += timer.interval_s
            with self.lock:
                timer.callback()
        self.now = target


class RecordingSink:
    def __init__(self):
        self.sent: List[int] = []

    def send(self, command: int) -> None:
        self.sent.append(int(command))


class FailingTransport(LoopbackTransport):
    """Loopback transport whose writes start failing once ``fail`` is set."""

    def __init__(self):
        super().__init__()
        self.fail = False

    def write(self, data: bytes) -> None:
        if self.fail:
            raise TransportWriteError(data[0], "device unplugged")
        super().write(data)


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def transport():
    return LoopbackTransport()


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def hand(transport, scheduler, sleeps):
    return HandOutput(transport, scheduler=scheduler, sleep=sleeps.append)
