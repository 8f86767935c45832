"""
Ludo rules engine.
Board geometry, turn state machine, captures, ranking and a one-ply move heuristic.
"""

from .board import Board
from .config import HeuristicWeights, config, heuristic_weights
from .events import GameEvents, ObservableGame
from .game import ROLL_REJECTED, Game
from .heuristic import MoveOption, best_move, score_move
from .simulator import SimulationResult, Simulator
from .tokens import TokenPositions
from .types import (
    PLAYER_COLORS,
    Cell,
    Color,
    GamePhase,
    GameSnapshot,
    MoveResult,
    Rejection,
)

__all__ = [
    "Board",
    "Cell",
    "Color",
    "config",
    "Game",
    "GameEvents",
    "GamePhase",
    "GameSnapshot",
    "HeuristicWeights",
    "heuristic_weights",
    "MoveOption",
    "MoveResult",
    "ObservableGame",
    "PLAYER_COLORS",
    "Rejection",
    "ROLL_REJECTED",
    "SimulationResult",
    "Simulator",
    "TokenPositions",
    "best_move",
    "score_move",
]
