import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(slots=True)
class Config:
    NUM_PLAYERS: int = int(os.getenv("NUM_PLAYERS", 4))
    PIECES_PER_PLAYER: int = 4
    MAX_TURNS: int = int(os.getenv("MAX_TURNS", 5000))

    # --- Board ---
    BOARD_SIZE: int = 15
    TRACK_LENGTH: int = 57  # 0=start, 1..50=ring, 51..55=final approach, 56=final
    START_INDEX: int = 0
    FINAL_APPROACH_START: int = 51
    HOME_POSITION: int = -1  # token still in its yard

    # Track-relative safe squares, identical for every color
    SAFE_INDICES: list[int] = field(
        default_factory=lambda: [0, 8, 13, 21, 26, 34, 39, 47]
    )

    # --- Dice ---
    DICE_SIDES: int = 6
    EXIT_HOME_ROLL: int = 6
    MAX_CONSECUTIVE_SIXES: int = 3

    # Derived (populated in __post_init__ due to slots)
    FINAL_POSITION: int = 0
    BOARD_CENTER: int = 0

    def __post_init__(self):
        self.FINAL_POSITION = self.TRACK_LENGTH - 1
        self.BOARD_CENTER = self.BOARD_SIZE // 2

        if self.NUM_PLAYERS < 2 or self.NUM_PLAYERS > 4:
            raise ValueError("NUM_PLAYERS must be between 2 and 4")


@dataclass(slots=True)
class HeuristicWeights:
    """Additive weights used by the move heuristic.

    Only the ordering matters for play quality:
    final > capture > leave_home > safe_zone > final_approach > progress.
    """

    final: float = float(os.getenv("HEURISTIC_FINAL", 100.0))
    capture: float = float(os.getenv("HEURISTIC_CAPTURE", 50.0))
    leave_home: float = float(os.getenv("HEURISTIC_LEAVE_HOME", 35.0))
    safe_zone: float = float(os.getenv("HEURISTIC_SAFE_ZONE", 25.0))
    final_approach: float = float(os.getenv("HEURISTIC_FINAL_APPROACH", 15.0))
    progress: float = float(os.getenv("HEURISTIC_PROGRESS", 0.5))
    risk: float = float(os.getenv("HEURISTIC_RISK", 40.0))


config = Config()
heuristic_weights = HeuristicWeights()
