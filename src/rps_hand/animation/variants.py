"""
Idle animation variants.

Each variant plays one self-contained motion through a command sink and
exposes the same two operations, ``start`` and ``stop``. They differ only in
how they end:

- WristTurn: one pulse, nothing to stop
- GestureCycle: rock, paper, scissors once, then cancels its own timer
- FingerWave: loops until stopped
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import Optional, Protocol, Tuple

from ..protocol.commands import (
    FINGER_COUNT,
    HandCommand,
    Move,
    curl_code,
    previous_finger,
    relax_code,
)
from .timers import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

DEFAULT_ANIMATION_INTERVAL_S = 1.0


class CommandSink(Protocol):
    def send(self, command: int) -> None: ...


class AnimationVariant(ABC):
    name = "animation"

    def __init__(self, scheduler: Scheduler, interval_s: float = DEFAULT_ANIMATION_INTERVAL_S):
        self.scheduler = scheduler
        self.interval_s = interval_s
        self._timer: Optional[TimerHandle] = None

    @property
    def running(self) -> bool:
        """True while this variant owns a live tick timer."""
        return self._timer is not None

    @abstractmethod
    def start(self, output: CommandSink) -> None: ...

    def stop(self, output: CommandSink) -> None:
        self._cancel_timer()

    def _check_not_running(self) -> None:
        if self._timer is not None:
            raise RuntimeError(f"{self.name} started while its timer is still running")

    def _start_timer(self, tick) -> None:
        self._check_not_running()
        self._timer = self.scheduler.call_every(self.interval_s, tick, name=f"anim-{self.name}")

    def _cancel_timer(self) -> bool:
        if self._timer is None:
            return False
        self._timer.cancel()
        self._timer = None
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(interval_s={self.interval_s}, running={self.running})"


class WristTurn(AnimationVariant):
    name = "wrist_turn"

    def start(self, output: CommandSink) -> None:
        output.send(HandCommand.TURN_WRIST)

    def stop(self, output: CommandSink) -> None:
        pass


class GestureCycle(AnimationVariant):
    name = "gesture_cycle"

    def __init__(self, scheduler: Scheduler, interval_s: float = DEFAULT_ANIMATION_INTERVAL_S):
        super().__init__(scheduler, interval_s)
        self.move: Optional[Move] = None

    def start(self, output: CommandSink) -> None:
        self._check_not_running()
        self.move = Move.ROCK
        output.send(self.move)
        self._start_timer(lambda: self._tick(output))

    def _tick(self, output: CommandSink) -> None:
        self.move = Move(self.move + 1)
        output.send(self.move)
        if self.move >= Move.SCISSORS:
            self._cancel_timer()


class FingerWave(AnimationVariant):
    name = "finger_wave"
    START_FINGER = 4

    def __init__(self, scheduler: Scheduler, interval_s: float = DEFAULT_ANIMATION_INTERVAL_S):
        super().__init__(scheduler, interval_s)
        self.finger: Optional[int] = None

    def start(self, output: CommandSink) -> None:
        self._check_not_running()
        output.send(Move.ROCK)
        self.finger = self.START_FINGER
        self._start_timer(lambda: self._tick(output))

    def _tick(self, output: CommandSink) -> None:
        output.send(curl_code(previous_finger(self.finger)))
        self.finger = (self.finger + 1) % FINGER_COUNT
        output.send(relax_code(self.finger))

    def stop(self, output: CommandSink) -> None:
        # open hand only if the wave was actually running
        if self._cancel_timer():
            output.send(Move.PAPER)


def default_rotation(scheduler: Scheduler, interval_s: float = DEFAULT_ANIMATION_INTERVAL_S) -> Tuple[AnimationVariant, ...]:
    return (
        FingerWave(scheduler, interval_s),
        WristTurn(scheduler, interval_s),
        GestureCycle(scheduler, interval_s),
    )
