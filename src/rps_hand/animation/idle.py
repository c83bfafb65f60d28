from __future__ import annotations
import logging
from typing import Optional, Sequence

from ..obs.metrics import IDLE_ANIMATIONS_STARTED
from ..protocol.commands import Move
from .timers import Scheduler, TimerHandle
from .variants import AnimationVariant, CommandSink

logger = logging.getLogger(__name__)

DEFAULT_IDLE_INTERVAL_S = 10.0


class IdleScheduler:
    """Rotates through idle animations, one at a time, while no game is running.

    The previous variant is always stopped before the next one starts, so at
    most one variant is ever mid-animation even if its own timer outlives the
    rotation interval.
    """

    def __init__(
        self,
        output: CommandSink,
        scheduler: Scheduler,
        variants: Sequence[AnimationVariant],
        interval_s: float = DEFAULT_IDLE_INTERVAL_S,
    ):
        if not variants:
            raise ValueError("idle rotation needs at least one animation")
        longest_tick = max(v.interval_s for v in variants)
        if interval_s <= longest_tick:
            raise ValueError(
                f"idle interval ({interval_s}s) must exceed the animation tick interval ({longest_tick}s)"
            )
        self.output = output
        self.scheduler = scheduler
        self.variants = tuple(variants)
        self.interval_s = interval_s
        self.current_index: Optional[int] = None
        self.rotation_timer: Optional[TimerHandle] = None

    @property
    def is_idling(self) -> bool:
        return self.rotation_timer is not None and self.rotation_timer.active

    @property
    def current_variant(self) -> Optional[AnimationVariant]:
        if self.current_index is None:
            return None
        return self.variants[self.current_index]

    def start_idling(self) -> None:
        if self.is_idling:
            return
        if self.rotation_timer is not None:
            # rotation died on a failed tick; clear what it left behind
            self.stop_idling()
        logger.info(f"Entering idle mode ({len(self.variants)} animations, every {self.interval_s}s)")
        self.output.send(Move.PAPER)
        self.rotation_timer = self.scheduler.call_every(self.interval_s, self._rotate, name="idle-rotation")

    def stop_idling(self) -> None:
        if self.current_index is not None:
            variant = self.variants[self.current_index]
            self.current_index = None
            variant.stop(self.output)
        if self.rotation_timer is not None:
            self.rotation_timer.cancel()
            self.rotation_timer = None
            logger.info("Left idle mode")

    def _rotate(self) -> None:
        if self.current_index is not None:
            self.variants[self.current_index].stop(self.output)
            next_index = (self.current_index + 1) % len(self.variants)
        else:
            next_index = 0
        self.current_index = next_index
        variant = self.variants[next_index]
        logger.info(f"Idle animation -> {variant.name}")
        IDLE_ANIMATIONS_STARTED.labels(variant=variant.name).inc()
        variant.start(self.output)
