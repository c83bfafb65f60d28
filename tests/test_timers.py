import threading
import time

import pytest

from rps_hand.animation.timers import ThreadScheduler


def test_repeating_timer_fires_until_cancelled():
    sched = ThreadScheduler()
    calls = []
    three = threading.Event()

    def tick():
        calls.append(time.monotonic())
        if len(calls) >= 3:
            three.set()

    handle = sched.call_every(0.01, tick, name="test-tick")
    assert three.wait(2.0)
    handle.cancel()
    assert not handle.active
    with sched.lock:
        settled = len(calls)
    time.sleep(0.05)
    assert len(calls) == settled

def test_cancel_from_inside_callback():
    sched = ThreadScheduler()
    calls = []
    done = threading.Event()
    holder = {}

    def tick():
        calls.append(1)
        holder["handle"].cancel()
        done.set()

    with sched.lock:
        holder["handle"] = sched.call_every(0.01, tick)
    assert done.wait(2.0)
    time.sleep(0.05)
    assert calls == [1]

def test_callbacks_hold_the_shared_lock():
    sched = ThreadScheduler()
    fired = threading.Event()
    handle = None
    with sched.lock:
        handle = sched.call_every(0.01, fired.set)
        # the timer cannot run its callback while the lock is held here
        assert not fired.wait(0.1)
        handle.cancel()
    time.sleep(0.05)
    assert not fired.is_set()

def test_failing_callback_stops_timer():
    sched = ThreadScheduler()
    calls = []

    def tick():
        calls.append(1)
        raise RuntimeError("boom")

    handle = sched.call_every(0.01, tick)
    deadline = time.monotonic() + 2.0
    while handle.active and time.monotonic() < deadline:
        time.sleep(0.01)
    assert not handle.active
    assert calls == [1]

def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        ThreadScheduler().call_every(0, lambda: None)
