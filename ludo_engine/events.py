from __future__ import annotations

from typing import Callable, List, Optional

from loguru import logger

from .game import Game
from .types import GameSnapshot, MoveResult

StateHandler = Callable[[GameSnapshot], None]


class GameEvents:
    """Minimal observer registry for game snapshots."""

    def __init__(self) -> None:
        self._handlers: List[StateHandler] = []

    def subscribe(self, handler: StateHandler) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: StateHandler) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def publish(self, snapshot: GameSnapshot) -> None:
        for handler in list(self._handlers):
            try:
                handler(snapshot)
            except Exception as e:
                logger.warning(f"State subscriber {handler!r} failed: {e}")

    def __len__(self) -> int:
        return len(self._handlers)


class ObservableGame:
    """Wraps a Game and publishes ``get_state()`` after every mutating call."""

    def __init__(self, game: Game, events: Optional[GameEvents] = None) -> None:
        self.game = game
        self.events = events or GameEvents()

    def subscribe(self, handler: StateHandler) -> None:
        self.events.subscribe(handler)

    def unsubscribe(self, handler: StateHandler) -> None:
        self.events.unsubscribe(handler)

    def roll_dice(self) -> int:
        value = self.game.roll_dice()
        self._publish()
        return value

    def select_token(self, token_index: int) -> Optional[MoveResult]:
        result = self.game.select_token(token_index)
        self._publish()
        return result

    def reset(self) -> None:
        self.game.reset()
        self._publish()

    def best_move(self) -> int:
        return self.game.best_move()

    def get_state(self) -> GameSnapshot:
        return self.game.get_state()

    def _publish(self) -> None:
        self.events.publish(self.game.get_state())
