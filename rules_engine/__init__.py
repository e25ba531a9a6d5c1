"""
Rule engine for the four-player tile-placement game.

This package contains:
- Piece catalog and geometric transforms
- Board and player colors
- Placement legality checks
- Match state and move application
"""

from .board import BOARD_SIZE, Board, PlayerColor, start_corner
from .match_state import MatchState, MoveRecord
from .pieces import PIECE_CATALOG, Piece, get_piece, mirror, normalize, orient, rotate
from .placement import PlacementRejection, check_placement, is_valid_placement

__all__ = [
    'BOARD_SIZE', 'Board', 'PlayerColor', 'start_corner',
    'PIECE_CATALOG', 'Piece', 'get_piece', 'rotate', 'mirror', 'normalize', 'orient',
    'PlacementRejection', 'check_placement', 'is_valid_placement',
    'MatchState', 'MoveRecord',
]
