"""
Board implementation for the 14x14 four-player game.
"""

from enum import IntEnum
from typing import Iterable, List, Optional, Tuple

import numpy as np


BOARD_SIZE = 14
EMPTY = -1


class PlayerColor(IntEnum):
    """The four seat colors, in turn order."""
    BLUE = 0
    YELLOW = 1
    RED = 2
    GREEN = 3


# Indexed by PlayerColor
START_CORNERS: Tuple[Tuple[int, int], ...] = (
    (0, 0),
    (0, BOARD_SIZE - 1),
    (BOARD_SIZE - 1, BOARD_SIZE - 1),
    (BOARD_SIZE - 1, 0),
)

EDGE_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))
CORNER_DIRECTIONS = ((-1, -1), (-1, 1), (1, -1), (1, 1))


def start_corner(player: PlayerColor) -> Tuple[int, int]:
    """Get the fixed starting corner for a player."""
    return START_CORNERS[int(player)]


def next_player(player: PlayerColor) -> PlayerColor:
    """Get the player who moves after ``player``."""
    return PlayerColor((int(player) + 1) % len(PlayerColor))


class Board:
    """
    Game board.

    The grid is an int8 array where:
    - -1 represents an empty cell
    - 0-3 represent the owning PlayerColor

    Cells only ever go from empty to owned.
    """

    SIZE = BOARD_SIZE

    def __init__(self, grid: Optional[np.ndarray] = None):
        if grid is None:
            grid = np.full((self.SIZE, self.SIZE), EMPTY, dtype=np.int8)
        elif grid.shape != (self.SIZE, self.SIZE):
            raise ValueError(f"Board grid must be {self.SIZE}x{self.SIZE}, got {grid.shape}")
        self.grid = grid

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if a cell is within board bounds."""
        return 0 <= row < self.SIZE and 0 <= col < self.SIZE

    def is_occupied(self, row: int, col: int) -> bool:
        """Check if a cell is owned. Out-of-bounds cells count as occupied."""
        if not self.in_bounds(row, col):
            return True
        return self.grid[row, col] != EMPTY

    def owner(self, row: int, col: int) -> Optional[PlayerColor]:
        """Get the owner of a cell, or None if empty or off the board."""
        if not self.in_bounds(row, col):
            return None
        value = int(self.grid[row, col])
        if value == EMPTY:
            return None
        return PlayerColor(value)

    def is_owned_by(self, row: int, col: int, player: PlayerColor) -> bool:
        return self.in_bounds(row, col) and self.grid[row, col] == int(player)

    def claim(self, row: int, col: int, player: PlayerColor) -> None:
        """Assign an empty cell to a player."""
        if not self.in_bounds(row, col):
            raise ValueError(f"Cell ({row}, {col}) is off the board")
        if self.grid[row, col] != EMPTY:
            raise ValueError(f"Cell ({row}, {col}) is already owned by player {int(self.grid[row, col])}")
        self.grid[row, col] = int(player)

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self.grid != EMPTY))

    def cells_owned_by(self, player: PlayerColor) -> List[Tuple[int, int]]:
        rows, cols = np.nonzero(self.grid == int(player))
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def to_rows(self) -> List[List[Optional[int]]]:
        """Convert to nested lists with None for empty cells."""
        return [
            [None if value == EMPTY else int(value) for value in row]
            for row in self.grid.tolist()
        ]

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[Optional[int]]]) -> 'Board':
        """Build a board from nested lists with None for empty cells."""
        values = [[EMPTY if cell is None else int(PlayerColor(cell)) for cell in row] for row in rows]
        return cls(np.array(values, dtype=np.int8))

    def copy(self) -> 'Board':
        return Board(self.grid.copy())

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    def __str__(self) -> str:
        """String representation of the board."""
        result = []
        for row in self.grid:
            result.append("".join("." if value == EMPTY else str(int(value)) for value in row))
        return "\n".join(result)
