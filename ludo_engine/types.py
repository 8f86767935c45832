from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Tuple

Coord = Tuple[int, int]


class Color(IntEnum):
    # value doubles as the number of quarter turns from the red reference path
    RED = 0
    GREEN = 1
    YELLOW = 2
    BLUE = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    def __str__(self) -> str:
        return self.label

    def __format__(self, format_spec: str) -> str:
        return format(self.label, format_spec)


# Active colors (in turn order) for each supported player count
PLAYER_COLORS: Dict[int, Tuple[Color, ...]] = {
    2: (Color.BLUE, Color.GREEN),
    3: (Color.BLUE, Color.RED, Color.GREEN),
    4: (Color.BLUE, Color.RED, Color.GREEN, Color.YELLOW),
}


class GamePhase(str, Enum):
    AWAITING_ROLL = "awaiting_roll"
    AWAITING_SELECTION = "awaiting_selection"
    FINISHED = "finished"


class Rejection(str, Enum):
    """Why the last public action was refused."""

    PHASE_VIOLATION = "phase_violation"
    REDUNDANT_ROLL = "redundant_roll"
    NO_PENDING_ROLL = "no_pending_roll"
    ILLEGAL_TOKEN = "illegal_token"


@dataclass(frozen=True, slots=True)
class Cell:
    """Metadata for one used square of the 15x15 grid.

    ``track`` is indexed by ``Color`` and holds the step of that color's path
    landing on this square, or ``None`` when the color never visits it.
    """

    track: Tuple[Optional[int], ...] = (None, None, None, None)
    is_safe: bool = False
    start: Optional[Color] = None
    final_approach: Optional[Color] = None
    final: Optional[Color] = None
    home: Optional[Color] = None

    def track_index(self, color: Color) -> Optional[int]:
        return self.track[int(color)]


@dataclass(slots=True)
class MoveResult:
    color: Color
    token_index: int
    old_position: int
    new_position: int
    dice_roll: int
    captured: List[Tuple[Color, int]] = field(default_factory=list)
    finished: bool = False
    ranked: bool = False
    extra_turn: bool = False

    @property
    def capture_count(self) -> int:
        return len(self.captured)


@dataclass(frozen=True, slots=True)
class GameSnapshot:
    turn: Color
    token_positions: Dict[Color, Tuple[int, int, int, int]]
    ranking: Tuple[Color, ...]
    status: str
    dice_roll: Optional[int]
    last_dice_roll: Optional[int]
    phase: GamePhase
    players: Tuple[Color, ...]
    valid_token_indices: Tuple[int, ...] = ()
    consecutive_sixes: int = 0

    def to_dict(self) -> dict:
        """Convert the snapshot to plain JSON-friendly types."""
        return {
            "turn": self.turn.label,
            "token_positions": {
                color.label: list(positions)
                for color, positions in self.token_positions.items()
            },
            "ranking": [color.label for color in self.ranking],
            "status": self.status,
            "dice_roll": self.dice_roll,
            "last_dice_roll": self.last_dice_roll,
            "phase": self.phase.value,
            "players": [color.label for color in self.players],
            "valid_token_indices": list(self.valid_token_indices),
            "consecutive_sixes": self.consecutive_sixes,
        }
