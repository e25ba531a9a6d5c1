"""
Placement legality checks.

A placement is legal when every cell is on the board and empty, and either:
- it is the player's first piece and it covers the player's start corner, or
- it touches the player's own pieces at a corner and nowhere along an edge.

Other players' cells never affect legality beyond occupancy.
"""

from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .board import CORNER_DIRECTIONS, EDGE_DIRECTIONS, Board, PlayerColor, start_corner
from .pieces import Offset


class PlacementRejection(str, Enum):
    """Why a placement was rejected."""
    EMPTY_PIECE = "empty_piece"
    OUT_OF_BOUNDS = "out_of_bounds"
    OCCUPIED = "occupied"
    WRONG_FIRST_CORNER = "wrong_first_corner"
    FORBIDDEN_EDGE = "forbidden_edge"
    MISSING_CORNER = "missing_corner"


def placement_cells(piece: Iterable[Offset], anchor_row: int, anchor_col: int) -> List[Tuple[int, int]]:
    """Get the absolute board cells a piece covers at an anchor."""
    return [(anchor_row + dr, anchor_col + dc) for dr, dc in piece]


def _touches(board: Board, row: int, col: int, player: PlayerColor, directions) -> bool:
    for dr, dc in directions:
        if board.is_owned_by(row + dr, col + dc, player):
            return True
    return False


def check_placement(
    board: Board,
    piece: Iterable[Offset],
    anchor_row: int,
    anchor_col: int,
    player: PlayerColor,
    is_first_piece: bool,
) -> Optional[PlacementRejection]:
    """
    Check whether a placement is legal.

    Args:
        board: Current board
        piece: Offsets of the piece in its final orientation
        anchor_row: Board row that offset (0, 0) maps to
        anchor_col: Board column that offset (0, 0) maps to
        player: Player placing the piece
        is_first_piece: True if the player has not placed any piece yet

    Returns:
        None if the placement is legal, otherwise the rejection reason
    """
    cells = placement_cells(piece, anchor_row, anchor_col)
    if not cells:
        return PlacementRejection.EMPTY_PIECE

    has_edge = False
    has_corner = False
    for row, col in cells:
        if not board.in_bounds(row, col):
            return PlacementRejection.OUT_OF_BOUNDS
        if board.is_occupied(row, col):
            return PlacementRejection.OCCUPIED

        if not has_edge and _touches(board, row, col, player, EDGE_DIRECTIONS):
            has_edge = True
        if not has_corner and _touches(board, row, col, player, CORNER_DIRECTIONS):
            has_corner = True

    if is_first_piece:
        if start_corner(player) in cells:
            return None
        return PlacementRejection.WRONG_FIRST_CORNER

    if has_edge:
        return PlacementRejection.FORBIDDEN_EDGE
    if not has_corner:
        return PlacementRejection.MISSING_CORNER
    return None


def is_valid_placement(
    board: Board,
    piece: Iterable[Offset],
    anchor_row: int,
    anchor_col: int,
    player: PlayerColor,
    is_first_piece: bool,
) -> bool:
    """Check whether a placement is legal."""
    return check_placement(board, piece, anchor_row, anchor_col, player, is_first_piece) is None
