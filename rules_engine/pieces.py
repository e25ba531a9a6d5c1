"""
Piece catalog with all 21 polyominoes and their rotations/reflections.
"""

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

import numpy as np


Offset = Tuple[int, int]
Offsets = Tuple[Offset, ...]


def shape_to_offsets(shape: np.ndarray) -> Offsets:
    """
    Convert a numpy shape array to (row, col) offsets.

    Args:
        shape: 2D numpy array with 1s where cells are occupied

    Returns:
        Tuple of (row, col) offsets in row-major order
    """
    rows, cols = np.nonzero(shape)
    return tuple((int(r), int(c)) for r, c in zip(rows, cols))


def normalize(offsets: Iterable[Offset]) -> Offsets:
    """
    Shift offsets so that min_row = 0 and min_col = 0.

    Order is preserved. An empty input gives an empty tuple.
    """
    offsets = tuple(offsets)
    if not offsets:
        return ()

    min_row = min(r for r, c in offsets)
    min_col = min(c for r, c in offsets)
    return tuple((r - min_row, c - min_col) for r, c in offsets)


def rotate(offsets: Iterable[Offset]) -> Offsets:
    """Rotate a piece 90 degrees, (r, c) -> (c, -r), and renormalize."""
    return normalize((c, -r) for r, c in offsets)


def mirror(offsets: Iterable[Offset]) -> Offsets:
    """Mirror a piece left-to-right, (r, c) -> (r, -c), renormalizing columns only."""
    flipped = tuple((r, -c) for r, c in offsets)
    if not flipped:
        return ()

    min_col = min(c for r, c in flipped)
    return tuple((r, c - min_col) for r, c in flipped)


def orient(offsets: Iterable[Offset], rotation: int = 0, mirrored: bool = False) -> Offsets:
    """
    Put a piece into its final orientation.

    Rotates ``rotation`` quarter turns (taken mod 4) and then mirrors if
    ``mirrored`` is set.
    """
    result = tuple(offsets)
    for _ in range(rotation % 4):
        result = rotate(result)
    if mirrored:
        result = mirror(result)
    return result


def canonical(offsets: Iterable[Offset]) -> Offsets:
    """Sorted normalized offsets, usable as a shape key."""
    return tuple(sorted(normalize(offsets)))


def unique_orientations(offsets: Iterable[Offset]) -> List[Offsets]:
    """
    Get all distinct orientations of a piece (at most 8).

    Returns canonical (sorted) offsets in rotation-then-mirror order.
    """
    base = tuple(offsets)
    seen = set()
    orientations = []
    for mirrored in (False, True):
        for rotation in range(4):
            key = canonical(orient(base, rotation, mirrored))
            if key in seen:
                continue
            seen.add(key)
            orientations.append(key)
    return orientations


@dataclass(frozen=True)
class Piece:
    """A catalog piece."""
    index: int
    name: str
    offsets: Offsets

    def __post_init__(self):
        if not self.offsets:
            raise ValueError("Piece must have at least one cell")
        if normalize(self.offsets) != self.offsets:
            raise ValueError(f"Piece {self.name} offsets are not normalized")
        if len(set(self.offsets)) != len(self.offsets):
            raise ValueError(f"Piece {self.name} has duplicate cells")

    @classmethod
    def from_shape(cls, index: int, name: str, shape: Sequence[Sequence[int]]) -> 'Piece':
        return cls(index, name, shape_to_offsets(np.array(shape)))

    @property
    def size(self) -> int:
        return len(self.offsets)

    @property
    def shape(self) -> np.ndarray:
        """2D 0/1 array of the piece in its base orientation."""
        height = max(r for r, c in self.offsets) + 1
        width = max(c for r, c in self.offsets) + 1
        grid = np.zeros((height, width), dtype=int)
        for r, c in self.offsets:
            grid[r, c] = 1
        return grid

    def oriented(self, rotation: int = 0, mirrored: bool = False) -> Offsets:
        return orient(self.offsets, rotation, mirrored)


PIECE_CATALOG: Tuple[Piece, ...] = (
    Piece.from_shape(0, "Monomino", [[1]]),
    Piece.from_shape(1, "Domino", [[1, 1]]),
    Piece.from_shape(2, "Tromino I", [[1, 1, 1]]),
    Piece.from_shape(3, "Tromino L", [[1, 1], [1, 0]]),
    Piece.from_shape(4, "Tetromino I", [[1, 1, 1, 1]]),
    Piece.from_shape(5, "Tetromino L", [[1, 1, 1], [1, 0, 0]]),
    Piece.from_shape(6, "Tetromino T", [[1, 1, 1], [0, 1, 0]]),
    Piece.from_shape(7, "Tetromino Z", [[1, 1, 0], [0, 1, 1]]),
    Piece.from_shape(8, "Tetromino O", [[1, 1], [1, 1]]),
    Piece.from_shape(9, "Pentomino I", [[1, 1, 1, 1, 1]]),
    Piece.from_shape(10, "Pentomino L", [[1, 1, 1, 1], [1, 0, 0, 0]]),
    Piece.from_shape(11, "Pentomino Y", [[1, 1, 1, 1], [0, 1, 0, 0]]),
    Piece.from_shape(12, "Pentomino N", [[0, 1, 1, 1], [1, 1, 0, 0]]),
    Piece.from_shape(13, "Pentomino P", [[1, 1, 1], [1, 1, 0]]),
    Piece.from_shape(14, "Pentomino U", [[1, 1, 1], [1, 0, 1]]),
    Piece.from_shape(15, "Pentomino V", [[1, 1, 1], [1, 0, 0], [1, 0, 0]]),
    Piece.from_shape(16, "Pentomino T", [[1, 1, 1], [0, 1, 0], [0, 1, 0]]),
    Piece.from_shape(17, "Pentomino S", [[1, 1, 0], [0, 1, 0], [0, 1, 1]]),
    Piece.from_shape(18, "Pentomino F", [[1, 1, 0], [0, 1, 1], [0, 1, 0]]),
    Piece.from_shape(19, "Pentomino W", [[1, 1, 0], [0, 1, 1], [0, 0, 1]]),
    Piece.from_shape(20, "Pentomino X", [[0, 1, 0], [1, 1, 1], [0, 1, 0]]),
)

PIECE_COUNT = len(PIECE_CATALOG)


def get_piece(index: int) -> Piece:
    """Get a catalog piece by index."""
    if not 0 <= index < PIECE_COUNT:
        raise IndexError(f"Unknown piece index {index}")
    return PIECE_CATALOG[index]
