from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Optional, Sequence

from ..animation.idle import DEFAULT_IDLE_INTERVAL_S, IdleScheduler
from ..animation.timers import Scheduler, ThreadScheduler
from ..animation.variants import DEFAULT_ANIMATION_INTERVAL_S, AnimationVariant, default_rotation
from ..errors import TransportClosedError
from ..protocol.commands import HandCommand, Move
from .encoder import CommandEncoder
from .output_base import CountdownState, GameOutput
from .transport import Transport

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_DELAY_S = 2.0


class ControllerMode(str, Enum):
    DISCONNECTED = "disconnected"
    ACTIVE = "active"
    IDLE = "idle"


class HandOutput(GameOutput):
    """Game output that drives the robotic hand over a byte transport.

    Game events are sent straight to the encoder; idle periods hand control to
    the IdleScheduler. Any event that belongs to active play stops idling
    first, so animation bytes never interleave with game bytes.
    """

    def __init__(
        self,
        transport: Transport,
        scheduler: Optional[Scheduler] = None,
        settle_delay_s: float = DEFAULT_SETTLE_DELAY_S,
        idle_interval_s: float = DEFAULT_IDLE_INTERVAL_S,
        animation_interval_s: float = DEFAULT_ANIMATION_INTERVAL_S,
        variants: Optional[Sequence[AnimationVariant]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.transport = transport
        self.scheduler = scheduler or ThreadScheduler()
        self.settle_delay_s = settle_delay_s
        self._sleep = sleep
        self.encoder = CommandEncoder(transport)
        if variants is None:
            variants = default_rotation(self.scheduler, animation_interval_s)
        self.idle = IdleScheduler(self.encoder, self.scheduler, variants, interval_s=idle_interval_s)
        self.mode = ControllerMode.DISCONNECTED
        self._torn_down = False

    def send(self, command: int) -> None:
        with self.scheduler.lock:
            self._require_connected()
            self.encoder.send(command)

    def initialize_connection(self) -> None:
        if self._torn_down:
            raise TransportClosedError("Hand output was already torn down")
        with self.scheduler.lock:
            # re-initializing a live connection drops back to the known pose
            self.idle.stop_idling()
        self.transport.open()
        logger.info(f"Waiting {self.settle_delay_s}s for hand firmware to settle")
        self._sleep(self.settle_delay_s)
        with self.scheduler.lock:
            self.mode = ControllerMode.ACTIVE
            self.encoder.send(Move.ROCK)
        logger.info("✓ Hand connected")

    def teardown_connection(self) -> None:
        with self.scheduler.lock:
            if self._torn_down or self.mode is ControllerMode.DISCONNECTED:
                raise TransportClosedError("Hand output is not connected")
            self._torn_down = True
            self.mode = ControllerMode.DISCONNECTED
            try:
                self.idle.stop_idling()
                self.encoder.send(Move.PAPER)
            finally:
                self.transport.close()
        logger.info("Hand disconnected")

    def enter_idle(self) -> None:
        with self.scheduler.lock:
            self._require_connected()
            self.idle.start_idling()
            self.mode = ControllerMode.IDLE

    def on_game_start(self) -> None:
        self._game_command(Move.ROCK)

    def on_game_stop(self) -> None:
        # game is over; idle state and mode are left to enter_idle
        self.send(Move.PAPER)

    def on_countdown_tick(self, state: CountdownState) -> None:
        self._game_command(HandCommand.TURN_WRIST)

    def on_move_chosen(self, move: Move) -> None:
        self._game_command(Move(move))

    # outcomes share one pose until per-outcome feedback exists on the hand
    def on_robot_win(self, robot: Move, human: Move) -> None:
        self._game_command(Move.ROCK)

    def on_human_win(self, robot: Move, human: Move) -> None:
        self._game_command(Move.ROCK)

    def on_tie(self, move: Move) -> None:
        self._game_command(Move.ROCK)

    def _game_command(self, command: int) -> None:
        with self.scheduler.lock:
            self._require_connected()
            self.idle.stop_idling()
            self.mode = ControllerMode.ACTIVE
            self.encoder.send(command)

    def _require_connected(self) -> None:
        if self.mode is ControllerMode.DISCONNECTED:
            raise TransportClosedError("Hand output is not connected")
