"""
Move legality, capture resolution and ranking.
Pure rule helpers; the turn state machine in ``game`` decides when to call them.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from loguru import logger

from .board import Board
from .config import config
from .tokens import TokenPositions
from .types import Color


def destination(position: int, dice_roll: int) -> Optional[int]:
    """New track index for a token, or None when the roll cannot move it."""
    if position == config.FINAL_POSITION:
        return None
    if position == config.HOME_POSITION:
        return config.START_INDEX if dice_roll == config.EXIT_HOME_ROLL else None
    target = position + dice_roll
    return target if target <= config.FINAL_POSITION else None


def legal_tokens(tokens: TokenPositions, color: Color, dice_roll: int) -> List[int]:
    return [
        i
        for i, pos in enumerate(tokens[color])
        if destination(pos, dice_roll) is not None
    ]


def explain_illegal(position: int, dice_roll: int) -> str:
    """Human-readable reason a token cannot use this roll."""
    if position == config.FINAL_POSITION:
        return "That token has already reached the final square."
    if position == config.HOME_POSITION:
        return "Can't leave home without rolling a 6."
    if position + dice_roll > config.FINAL_POSITION:
        return "Move would exceed final square. Can't move."
    return "That token isn't a valid choice this turn."


def capture_candidates(
    board: Board,
    tokens: TokenPositions,
    players: Sequence[Color],
    mover: Color,
    new_position: int,
) -> List[Tuple[Color, int]]:
    """Opponent tokens sharing the square the mover would land on.

    Final and safe squares never yield candidates.
    """
    if new_position == config.FINAL_POSITION or board.is_safe_index(new_position):
        return []
    opponents = [c for c in players if c != mover]
    return [
        (color, token_index)
        for color, token_index, pos in tokens.on_track(opponents)
        if board.same_square(mover, new_position, color, pos)
    ]


def resolve_captures(
    board: Board,
    tokens: TokenPositions,
    players: Sequence[Color],
    mover: Color,
    new_position: int,
) -> List[Tuple[Color, int]]:
    """Send every opponent on the mover's landing square back to its yard."""
    captured = capture_candidates(board, tokens, players, mover, new_position)
    for color, token_index in captured:
        tokens.send_home(color, token_index)
        logger.debug(
            f"{mover} captured {color} token {token_index} at {board.coordinate(mover, new_position)}"
        )
    return captured


def update_ranking(tokens: TokenPositions, color: Color, ranking: List[Color]) -> bool:
    """Append ``color`` once all of its tokens are final. Returns True when appended."""
    if color in ranking or not tokens.all_finished(color):
        return False
    ranking.append(color)
    logger.info(f"{color} finished in place {len(ranking)}")
    return True
