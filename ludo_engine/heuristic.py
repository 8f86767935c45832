from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from loguru import logger

from .board import Board
from .config import HeuristicWeights, config, heuristic_weights
from .rules import capture_candidates, destination
from .tokens import TokenPositions
from .types import Color


@dataclass(slots=True)
class MoveOption:
    """Structured metadata about one legal token choice."""

    token_index: int
    current_pos: int
    new_pos: int
    dice_roll: int
    leaves_home: bool
    lands_safe: bool
    capture_count: int
    in_final_approach: bool
    reaches_final: bool
    threat_count: int


def count_threats(
    board: Board,
    tokens: TokenPositions,
    players: Sequence[Color],
    mover: Color,
    new_position: int,
) -> int:
    """Opponent tokens able to land on the mover's square with a single roll."""
    opponents = [c for c in players if c != mover]
    threats = 0
    for color, _, pos in tokens.on_track(opponents):
        for roll in range(1, config.DICE_SIDES + 1):
            target = pos + roll
            if target > config.FINAL_POSITION:
                break
            if board.same_square(color, target, mover, new_position):
                threats += 1
                break
    return threats


def build_move_options(
    board: Board,
    tokens: TokenPositions,
    players: Sequence[Color],
    color: Color,
    dice_roll: int,
    legal: Sequence[int],
) -> List[MoveOption]:
    options: List[MoveOption] = []
    for token_index in legal:
        current = tokens.position(color, token_index)
        new_pos = destination(current, dice_roll)
        if new_pos is None:
            continue
        reaches_final = new_pos == config.FINAL_POSITION
        lands_safe = board.is_safe_index(new_pos)
        exposed = not (reaches_final or lands_safe)
        options.append(
            MoveOption(
                token_index=token_index,
                current_pos=current,
                new_pos=new_pos,
                dice_roll=dice_roll,
                leaves_home=current == config.HOME_POSITION,
                lands_safe=lands_safe,
                capture_count=len(
                    capture_candidates(board, tokens, players, color, new_pos)
                ),
                in_final_approach=board.is_final_approach(new_pos),
                reaches_final=reaches_final,
                threat_count=(
                    count_threats(board, tokens, players, color, new_pos)
                    if exposed
                    else 0
                ),
            )
        )
    return options


def score_move(move: MoveOption, weights: Optional[HeuristicWeights] = None) -> float:
    w = weights or heuristic_weights
    score = 0.0
    if move.leaves_home:
        score += w.leave_home
    if move.lands_safe:
        score += w.safe_zone
    score += move.capture_count * w.capture
    if move.in_final_approach:
        score += w.final_approach
    if move.reaches_final:
        score += w.final
    score += move.new_pos * w.progress
    score -= move.threat_count * w.risk
    return score


def best_move(
    board: Board,
    tokens: TokenPositions,
    players: Sequence[Color],
    color: Color,
    dice_roll: Optional[int],
    legal: Sequence[int],
    weights: Optional[HeuristicWeights] = None,
) -> int:
    """Pick the legal token with the highest one-ply score.

    This is a greedy heuristic, not an optimal policy. Candidates are scored in
    ``legal`` order and only a strictly better score replaces the current pick.
    Returns -1 when no roll is pending or nothing is movable.
    """
    if dice_roll is None:
        logger.warning("best_move called but no dice roll available")
        return -1

    best_index = -1
    best_score = float("-inf")
    for move in build_move_options(board, tokens, players, color, dice_roll, legal):
        score = score_move(move, weights)
        logger.debug(f"{color} token {move.token_index}: {move.current_pos}->{move.new_pos} score={score:.1f}")
        if score > best_score:
            best_score = score
            best_index = move.token_index
    return best_index
