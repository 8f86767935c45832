from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from loguru import logger

from .config import config
from .game import ROLL_REJECTED, Game
from .types import Color, GamePhase

Chooser = Callable[[Game], int]


def heuristic_chooser(game: Game) -> int:
    return game.best_move()


def random_chooser(game: Game) -> int:
    return game.rng.choice(game.valid_token_indices)


@dataclass(slots=True)
class SimulationResult:
    ranking: List[Color]
    rolls: int = 0
    moves: int = 0
    captures: int = 0
    finished: bool = False


@dataclass(slots=True)
class Simulator:
    """Drives a Game to completion with automated token choices.

    Each color may use its own chooser; colors without one fall back to the
    default (the move heuristic).
    """

    game: Game
    choosers: dict = field(default_factory=dict)
    default_chooser: Chooser = heuristic_chooser
    max_rolls: int = config.MAX_TURNS

    @classmethod
    def for_players(
        cls, num_players: int, seed: Optional[int] = None, **kwargs
    ) -> "Simulator":
        return cls(game=Game(num_players=num_players, rng=random.Random(seed)), **kwargs)

    def step(self, result: SimulationResult) -> None:
        """One roll plus, when required, one selection."""
        game = self.game
        rolled = game.roll_dice()
        result.rolls += 1
        if rolled == ROLL_REJECTED or game.phase != GamePhase.AWAITING_SELECTION:
            return
        chooser = self.choosers.get(game.turn, self.default_chooser)
        choice = chooser(game)
        move = game.select_token(choice)
        if move is None:
            logger.warning(
                f"Chooser picked invalid token {choice} for {game.turn}: {game.status}"
            )
            move = game.select_token(game.valid_token_indices[0])
        result.moves += 1
        result.captures += move.capture_count

    def run(self) -> SimulationResult:
        result = SimulationResult(ranking=[])
        while not self.game.is_finished and result.rolls < self.max_rolls:
            self.step(result)
        result.ranking = list(self.game.ranking)
        result.finished = self.game.is_finished
        if not result.finished:
            logger.warning(f"Game stopped after {result.rolls} rolls without finishing")
        return result
