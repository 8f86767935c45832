from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loguru import logger

from .board import Board
from .config import config
from .heuristic import best_move
from .rules import (
    destination,
    explain_illegal,
    legal_tokens,
    resolve_captures,
    update_ranking,
)
from .tokens import TokenPositions
from .types import (
    PLAYER_COLORS,
    Color,
    GamePhase,
    GameSnapshot,
    MoveResult,
    Rejection,
)

ROLL_REJECTED = -1


@dataclass(slots=True)
class Game:
    """Ludo turn state machine.

    roll_dice -> (select_token | auto-pass | three-sixes forfeit) -> next roll.
    Rejected actions never raise: they update ``status`` and ``last_rejection``
    and leave everything else untouched.
    """

    num_players: int = config.NUM_PLAYERS
    rng: random.Random = field(default_factory=random.Random)
    players: Tuple[Color, ...] = field(init=False)
    board: Board = field(init=False)
    tokens: TokenPositions = field(init=False)
    turn: Color = field(init=False)
    ranking: List[Color] = field(default_factory=list, init=False)
    dice_roll: Optional[int] = field(default=None, init=False)
    last_dice_roll: Optional[int] = field(default=None, init=False)
    valid_token_indices: List[int] = field(default_factory=list, init=False)
    consecutive_sixes: int = field(default=0, init=False)
    status: str = field(default="", init=False)
    phase: GamePhase = field(default=GamePhase.AWAITING_ROLL, init=False)
    last_rejection: Optional[Rejection] = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.num_players not in PLAYER_COLORS:
            raise ValueError(
                f"num_players must be one of {sorted(PLAYER_COLORS)}, got {self.num_players}"
            )
        self.players = PLAYER_COLORS[self.num_players]
        self.tokens = TokenPositions()
        self.reset()

    # --- Setup ---
    def reset(self) -> None:
        """Rebuild the board, send every token home and pick a random starter."""
        self.board = Board(colors=self.players)
        self.tokens.reset()
        self.ranking = []
        self._clear_dice(clear_last=True)
        self.consecutive_sixes = 0
        self.status = ""
        self.phase = GamePhase.AWAITING_ROLL
        self.last_rejection = None
        self.turn = self.players[self.rng.randrange(len(self.players))]
        logger.debug(f"New {self.num_players}-player game, {self.turn} starts")

    # --- Dice ---
    def roll_dice(self) -> int:
        if self.phase != GamePhase.AWAITING_ROLL:
            return self._reject_roll(
                Rejection.PHASE_VIOLATION,
                f"Invalid action. Current state: {self.phase.value}.",
            )
        if self.dice_roll is not None:
            self._reject(
                Rejection.REDUNDANT_ROLL,
                "Already rolled. You must select a token or pass.",
            )
            return self.dice_roll

        roll = self.rng.randint(1, config.DICE_SIDES)
        self.dice_roll = roll
        self.last_dice_roll = roll
        self.last_rejection = None
        logger.debug(f"{self.turn} rolled {roll}")

        if roll == config.EXIT_HOME_ROLL:
            self.consecutive_sixes += 1
            if self.consecutive_sixes >= config.MAX_CONSECUTIVE_SIXES:
                reason = f"Three consecutive sixes! Turn skipped for {self.turn}."
                logger.debug(reason)
                self._clear_dice()
                self._advance_turn(reason)
                return roll
        else:
            self.consecutive_sixes = 0

        self.valid_token_indices = legal_tokens(self.tokens, self.turn, roll)
        if not self.valid_token_indices:
            reason = f"No valid moves for {self.turn} (rolled {roll}). Passing turn."
            logger.debug(reason)
            self._clear_dice()
            self._advance_turn(reason)
        else:
            self.phase = GamePhase.AWAITING_SELECTION
            self.status = f"{self.turn} rolled {roll}. Select a token to move."
        return roll

    # --- Moves ---
    def select_token(self, token_index: int) -> Optional[MoveResult]:
        if self.phase != GamePhase.AWAITING_SELECTION:
            return self._reject(
                Rejection.PHASE_VIOLATION,
                f"Invalid action. State: {self.phase.value}",
            )
        if self.dice_roll is None:
            return self._reject(
                Rejection.NO_PENDING_ROLL,
                "You must roll before selecting a token.",
            )
        if token_index not in self.valid_token_indices:
            if 0 <= token_index < config.PIECES_PER_PLAYER:
                reason = explain_illegal(
                    self.tokens.position(self.turn, token_index), self.dice_roll
                )
            else:
                reason = f"There is no token {token_index}."
            return self._reject(Rejection.ILLEGAL_TOKEN, reason)

        color = self.turn
        roll = self.dice_roll
        old = self.tokens.position(color, token_index)
        new = destination(old, roll)
        self.tokens.move_to(color, token_index, new)
        logger.debug(f"{color} token {token_index}: {old} -> {new}")
        captured = resolve_captures(self.board, self.tokens, self.players, color, new)
        finished = new == config.FINAL_POSITION
        ranked = finished and update_ranking(self.tokens, color, self.ranking)

        self.last_rejection = None
        self._clear_dice()
        result = MoveResult(
            color=color,
            token_index=token_index,
            old_position=old,
            new_position=new,
            dice_roll=roll,
            captured=captured,
            finished=finished,
            ranked=ranked,
        )

        if len(self.ranking) >= len(self.players):
            self._advance_turn()
            return result

        if captured:
            result.extra_turn = True
            self.phase = GamePhase.AWAITING_ROLL
            self.status = f"{color} captured {len(captured)} token(s). Roll again!"
        elif roll == config.EXIT_HOME_ROLL:
            result.extra_turn = True
            self.phase = GamePhase.AWAITING_ROLL
            self.status = f"{color} rolled a 6. Roll again!"
        else:
            self._advance_turn()
        return result

    def best_move(self) -> int:
        return best_move(
            self.board,
            self.tokens,
            self.players,
            self.turn,
            self.dice_roll,
            self.valid_token_indices,
        )

    # --- Snapshot ---
    def get_state(self) -> GameSnapshot:
        return GameSnapshot(
            turn=self.turn,
            token_positions=self.tokens.as_dict(self.players),
            ranking=tuple(self.ranking),
            status=self.status,
            dice_roll=self.dice_roll,
            last_dice_roll=self.last_dice_roll,
            phase=self.phase,
            players=self.players,
            valid_token_indices=tuple(self.valid_token_indices),
            consecutive_sixes=self.consecutive_sixes,
        )

    @property
    def is_finished(self) -> bool:
        return self.phase == GamePhase.FINISHED

    # --- Internals ---
    def _advance_turn(self, reason: str = "") -> None:
        """Pass the turn on, prefixing the new status with ``reason`` when given."""
        if len(self.ranking) >= len(self.players):
            self.phase = GamePhase.FINISHED
            self.status = "Game Over! All players have finished."
            logger.info(f"Game over. Ranking: {[str(c) for c in self.ranking]}")
            return
        idx = self.players.index(self.turn)
        self.turn = self.players[(idx + 1) % len(self.players)]
        self.consecutive_sixes = 0
        self.phase = GamePhase.AWAITING_ROLL
        self.status = f"{reason} Now it's {self.turn}'s turn to roll.".lstrip()

    def _clear_dice(self, clear_last: bool = False) -> None:
        self.dice_roll = None
        self.valid_token_indices = []
        if clear_last:
            self.last_dice_roll = None

    def _reject(self, reason: Rejection, message: str) -> None:
        self.status = message
        self.last_rejection = reason
        logger.debug(f"Rejected ({reason.value}): {message}")
        return None

    def _reject_roll(self, reason: Rejection, message: str) -> int:
        self._reject(reason, message)
        return ROLL_REJECTED
