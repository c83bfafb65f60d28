"""
Repeating timers that share one execution context.

Timer callbacks run on background threads, but each one runs while holding
the scheduler's re-entrant lock. Public controller calls take the same lock,
so a callback and an external event never interleave their command sends.
"""

from __future__ import annotations
import logging
import threading
from abc import ABC, abstractmethod
from typing import Callable

logger = logging.getLogger(__name__)


class TimerHandle(ABC):
    @abstractmethod
    def cancel(self) -> None:
        """Stop future ticks. Safe to call more than once and from inside the callback."""
        ...

    @property
    @abstractmethod
    def active(self) -> bool: ...


class Scheduler(ABC):
    lock: threading.RLock

    @abstractmethod
    def call_every(self, interval_s: float, callback: Callable[[], None], name: str = "timer") -> TimerHandle:
        """Run ``callback`` every ``interval_s`` seconds until the handle is cancelled.

        The first call happens one interval after scheduling.
        """
        ...


class _RepeatingTimer(TimerHandle):
    def __init__(self, interval_s: float, callback: Callable[[], None], lock: threading.RLock, name: str):
        self.interval_s = interval_s
        self._callback = callback
        self._lock = lock
        self._cancelled = threading.Event()
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def active(self) -> bool:
        return not self._cancelled.is_set()

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._cancelled.set()

    def _run(self) -> None:
        while not self._cancelled.wait(self.interval_s):
            with self._lock:
                # cancelled while waiting for the lock
                if self._cancelled.is_set():
                    break
                try:
                    self._callback()
                except Exception:
                    logger.exception(f"Timer '{self._thread.name}' callback failed; stopping timer")
                    self._cancelled.set()
                    break


class ThreadScheduler(Scheduler):
    """Scheduler backed by one daemon thread per repeating timer."""

    def __init__(self, lock: threading.RLock | None = None):
        self.lock = lock or threading.RLock()

    def call_every(self, interval_s: float, callback: Callable[[], None], name: str = "timer") -> TimerHandle:
        if interval_s <= 0:
            raise ValueError(f"timer interval must be positive, got {interval_s}")
        timer = _RepeatingTimer(interval_s, callback, self.lock, name)
        timer.start()
        return timer
