from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Tuple

import numpy as np

from .config import config
from .types import Color


@dataclass(slots=True)
class TokenPositions:
    """Fixed (color, token) -> position table.

    Positions: -1 = yard, 0..55 = on the track, 56 = final (never moves again).
    Rows exist for all four colors; inactive colors simply stay in the yard.
    """

    _positions: np.ndarray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._positions = np.full(
            (len(Color), config.PIECES_PER_PLAYER),
            config.HOME_POSITION,
            dtype=np.int64,
        )

    def reset(self) -> None:
        self._positions.fill(config.HOME_POSITION)

    def position(self, color: Color, token_index: int) -> int:
        return int(self._positions[color, token_index])

    def __getitem__(self, color: Color) -> Tuple[int, ...]:
        return tuple(int(p) for p in self._positions[color])

    def move_to(self, color: Color, token_index: int, new_position: int) -> None:
        """Advance a token. Tokens only ever move forward along their own path."""
        current = self.position(color, token_index)
        if not 0 <= new_position <= config.FINAL_POSITION:
            raise ValueError(
                f"Position {new_position} outside the track 0..{config.FINAL_POSITION}"
            )
        if current == config.FINAL_POSITION:
            raise ValueError(f"{color} token {token_index} already finished")
        if new_position <= current:
            raise ValueError(
                f"{color} token {token_index} cannot move back from {current} to {new_position}"
            )
        self._positions[color, token_index] = new_position

    def send_home(self, color: Color, token_index: int) -> None:
        """Capture: return an on-track token to its yard."""
        current = self.position(color, token_index)
        if current == config.FINAL_POSITION:
            raise ValueError(f"{color} token {token_index} finished and cannot be captured")
        self._positions[color, token_index] = config.HOME_POSITION

    def all_finished(self, color: Color) -> bool:
        return bool(np.all(self._positions[color] == config.FINAL_POSITION))

    def on_track(self, colors: Iterable[Color]) -> Iterator[Tuple[Color, int, int]]:
        """Yield (color, token_index, position) for tokens between start and final."""
        for color in colors:
            for token_index, pos in enumerate(self._positions[color]):
                if 0 <= pos < config.FINAL_POSITION:
                    yield color, token_index, int(pos)

    def as_dict(self, colors: Iterable[Color]) -> Dict[Color, Tuple[int, ...]]:
        return {color: self[color] for color in colors}
