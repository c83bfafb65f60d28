from __future__ import annotations
from abc import ABC, abstractmethod
from enum import IntEnum

from ..protocol.commands import Move


class CountdownState(IntEnum):
    THREE = 3
    TWO = 2
    ONE = 1
    SHOOT = 0


class GameOutput(ABC):
    """Output capability driven by the game-flow engine.

    Every call is fire-and-forget; the engine never inspects return values.
    """

    @abstractmethod
    def initialize_connection(self) -> None: ...

    @abstractmethod
    def teardown_connection(self) -> None: ...

    @abstractmethod
    def enter_idle(self) -> None: ...

    @abstractmethod
    def on_game_start(self) -> None: ...

    @abstractmethod
    def on_game_stop(self) -> None: ...

    @abstractmethod
    def on_countdown_tick(self, state: CountdownState) -> None: ...

    @abstractmethod
    def on_move_chosen(self, move: Move) -> None: ...

    @abstractmethod
    def on_robot_win(self, robot: Move, human: Move) -> None: ...

    @abstractmethod
    def on_human_win(self, robot: Move, human: Move) -> None: ...

    @abstractmethod
    def on_tie(self, move: Move) -> None: ...

    def on_score_update(self, robot: int, human: int) -> None:
        """Score changes. Optional - no feedback by default."""
        pass

    def on_try_again(self) -> None:
        """Round was void and will be replayed. Optional - no feedback by default."""
        pass
