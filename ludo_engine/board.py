from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .config import config
from .types import Cell, Color, Coord

# Red reference path as straight runs: (first cell, (d_row, d_col), length).
# Starts on the left arm, circles the ring clockwise and turns into row 7.
_REFERENCE_RUNS: Tuple[Tuple[Coord, Coord, int], ...] = (
    ((6, 1), (0, 1), 5),
    ((5, 6), (-1, 0), 6),
    ((0, 7), (0, 1), 2),
    ((1, 8), (1, 0), 5),
    ((6, 9), (0, 1), 6),
    ((7, 14), (1, 0), 2),
    ((8, 13), (0, -1), 5),
    ((9, 8), (1, 0), 6),
    ((14, 7), (0, -1), 2),
    ((13, 6), (-1, 0), 5),
    ((8, 5), (0, -1), 6),
    ((7, 0), (0, 1), 7),
)

# Red yard, row-major; token i waits on cell i
_REFERENCE_YARD: Tuple[Coord, ...] = ((1, 1), (1, 4), (4, 1), (4, 4))


def reference_path() -> np.ndarray:
    """Build the (TRACK_LENGTH, 2) coordinate table of the red path."""
    steps: List[Coord] = []
    for (row, col), (d_row, d_col), length in _REFERENCE_RUNS:
        for k in range(length):
            steps.append((row + k * d_row, col + k * d_col))
    path = np.asarray(steps, dtype=np.int64)
    if path.shape != (config.TRACK_LENGTH, 2):
        raise ValueError(f"Reference path has {len(steps)} steps")
    return path


def rotate(coords: np.ndarray, quarter_turns: int) -> np.ndarray:
    """Rotate (row, col) coordinates by 90 degrees per quarter turn about the centre."""
    last = 2 * config.BOARD_CENTER
    out = np.array(coords, dtype=np.int64, copy=True)
    for _ in range(quarter_turns % 4):
        rows, cols = out[:, 0].copy(), out[:, 1].copy()
        out[:, 0] = cols
        out[:, 1] = last - rows
    return out


def _compute_color_paths() -> Tuple[np.ndarray, ...]:
    base = reference_path()
    paths = []
    for color in Color:
        path = rotate(base, int(color))
        path.setflags(write=False)
        paths.append(path)
    return tuple(paths)


def _compute_yards() -> Tuple[Tuple[Coord, ...], ...]:
    base = np.asarray(_REFERENCE_YARD, dtype=np.int64)
    yards = []
    for color in Color:
        cells = sorted((int(r), int(c)) for r, c in rotate(base, int(color)))
        yards.append(tuple(cells))
    return tuple(yards)


@dataclass(slots=True)
class Board:
    """Board geometry for one game: per-color paths plus the cell metadata grid.

    Paths for all four colors are always available (they are pure geometry);
    cell metadata is only written for the active colors. Everything is built
    once in ``__post_init__`` and read-only afterwards.
    """

    colors: Sequence[Color]
    paths: Tuple[np.ndarray, ...] = field(init=False)
    yards: Tuple[Tuple[Coord, ...], ...] = field(init=False)
    cells: Tuple[Tuple[Optional[Cell], ...], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.colors = tuple(self.colors)
        self.paths = _compute_color_paths()
        self.yards = _compute_yards()
        self.cells = self._build_cells()
        logger.debug(
            f"Board built for {[str(c) for c in self.colors]}: "
            f"{self.used_cell_count()} used cells"
        )

    def _build_cells(self) -> Tuple[Tuple[Optional[Cell], ...], ...]:
        size = config.BOARD_SIZE
        grid: List[List[Optional[dict]]] = [[None] * size for _ in range(size)]

        def slot(row: int, col: int) -> dict:
            if grid[row][col] is None:
                grid[row][col] = {"track": [None, None, None, None]}
            return grid[row][col]

        for color in self.colors:
            for row, col in self.yards[color]:
                slot(row, col)["home"] = color

            for index, (row, col) in enumerate(self.paths[color]):
                meta = slot(int(row), int(col))
                meta["track"][int(color)] = index
                if index in config.SAFE_INDICES:
                    meta["is_safe"] = True
                if index == config.START_INDEX:
                    meta["start"] = color
                    meta["is_safe"] = True
                if config.FINAL_APPROACH_START <= index < config.FINAL_POSITION:
                    meta["final_approach"] = color
                if index == config.FINAL_POSITION:
                    meta["final"] = color

        return tuple(
            tuple(
                None
                if meta is None
                else Cell(**{**meta, "track": tuple(meta["track"])})
                for meta in row
            )
            for row in grid
        )

    # --- Lookups ---
    def cell(self, row: int, col: int) -> Optional[Cell]:
        return self.cells[row][col]

    def path(self, color: Color) -> np.ndarray:
        return self.paths[color]

    def coordinate(self, color: Color, position: int, token_index: int = 0) -> Coord:
        """Grid square of a token; yard tokens resolve to their own yard cell."""
        if position == config.HOME_POSITION:
            return self.yards[color][token_index]
        row, col = self.paths[color][position]
        return int(row), int(col)

    def same_square(
        self, color_a: Color, pos_a: int, color_b: Color, pos_b: int
    ) -> bool:
        """Whether two on-track positions of (possibly different) colors alias one square."""
        a = self.paths[color_a][pos_a]
        b = self.paths[color_b][pos_b]
        return bool(a[0] == b[0] and a[1] == b[1])

    @staticmethod
    def is_safe_index(position: int) -> bool:
        return position in config.SAFE_INDICES

    @staticmethod
    def is_final_approach(position: int) -> bool:
        return config.FINAL_APPROACH_START <= position < config.FINAL_POSITION

    def used_cell_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is not None)
