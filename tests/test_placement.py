"""
Tests for placement legality.
"""

import unittest

from rules_engine.board import Board, PlayerColor
from rules_engine.pieces import get_piece
from rules_engine.placement import (
    PlacementRejection, check_placement, is_valid_placement, placement_cells
)

MONOMINO = ((0, 0),)
DOMINO = ((0, 0), (0, 1))


class TestFirstMove(unittest.TestCase):
    """Test the start corner rule."""

    def test_covering_start_corner_is_legal(self):
        board = Board()
        self.assertTrue(is_valid_placement(board, DOMINO, 0, 0, PlayerColor.BLUE, True))

    def test_missing_start_corner_is_rejected(self):
        board = Board()
        self.assertEqual(
            check_placement(board, DOMINO, 1, 1, PlayerColor.BLUE, True),
            PlacementRejection.WRONG_FIRST_CORNER,
        )

    def test_other_players_corner_is_rejected(self):
        board = Board()
        self.assertFalse(is_valid_placement(board, MONOMINO, 0, 13, PlayerColor.BLUE, True))

    def test_each_player_start_corner(self):
        board = Board()
        corners = {
            PlayerColor.BLUE: (0, 0),
            PlayerColor.YELLOW: (0, 13),
            PlayerColor.RED: (13, 13),
            PlayerColor.GREEN: (13, 0),
        }
        for player, (row, col) in corners.items():
            self.assertTrue(is_valid_placement(board, MONOMINO, row, col, player, True))

    def test_corner_covered_by_non_anchor_cell(self):
        """The start corner can be any cell of the piece, not just the anchor."""
        board = Board()
        # Pentomino L turned so its foot is at offset (1, 3); placed to cover (13, 13)
        pentomino_l = get_piece(10).oriented(2)
        self.assertIn((1, 3), pentomino_l)
        self.assertTrue(is_valid_placement(board, pentomino_l, 12, 10, PlayerColor.RED, True))

    def test_first_move_ignores_edge_contact(self):
        board = Board()
        board.claim(1, 0, PlayerColor.BLUE)
        self.assertTrue(is_valid_placement(board, MONOMINO, 0, 0, PlayerColor.BLUE, True))

    def test_first_move_ignores_other_colors(self):
        board = Board()
        board.claim(0, 1, PlayerColor.YELLOW)
        self.assertTrue(is_valid_placement(board, MONOMINO, 0, 0, PlayerColor.BLUE, True))


class TestBoundsAndOccupancy(unittest.TestCase):
    """Test that every cell must be on the board and empty."""

    def test_out_of_bounds(self):
        board = Board()
        self.assertEqual(
            check_placement(board, DOMINO, 0, 13, PlayerColor.YELLOW, True),
            PlacementRejection.OUT_OF_BOUNDS,
        )
        self.assertEqual(
            check_placement(board, MONOMINO, -1, 0, PlayerColor.BLUE, True),
            PlacementRejection.OUT_OF_BOUNDS,
        )

    def test_occupied_by_own_color(self):
        board = Board()
        board.claim(0, 0, PlayerColor.BLUE)
        self.assertEqual(
            check_placement(board, MONOMINO, 0, 0, PlayerColor.BLUE, False),
            PlacementRejection.OCCUPIED,
        )

    def test_occupied_by_other_color(self):
        board = Board()
        board.claim(0, 0, PlayerColor.YELLOW)
        self.assertEqual(
            check_placement(board, MONOMINO, 0, 0, PlayerColor.BLUE, True),
            PlacementRejection.OCCUPIED,
        )

    def test_empty_piece_fails_closed(self):
        board = Board()
        self.assertEqual(
            check_placement(board, (), 0, 0, PlayerColor.BLUE, True),
            PlacementRejection.EMPTY_PIECE,
        )
        self.assertFalse(is_valid_placement(board, [], 0, 0, PlayerColor.BLUE, False))


class TestAdjacencyRules(unittest.TestCase):
    """Test corner-required / edge-forbidden rules after the first move."""

    def setUp(self):
        self.board = Board()
        self.board.claim(0, 0, PlayerColor.BLUE)

    def test_edge_contact_is_rejected(self):
        self.assertEqual(
            check_placement(self.board, MONOMINO, 0, 1, PlayerColor.BLUE, False),
            PlacementRejection.FORBIDDEN_EDGE,
        )

    def test_corner_contact_is_accepted(self):
        self.assertTrue(is_valid_placement(self.board, MONOMINO, 1, 1, PlayerColor.BLUE, False))

    def test_edge_and_corner_contact_is_rejected(self):
        # (0,1) touches (0,0) by edge, (1,1) touches it by corner
        self.assertEqual(
            check_placement(self.board, ((0, 0), (1, 0)), 0, 1, PlayerColor.BLUE, False),
            PlacementRejection.FORBIDDEN_EDGE,
        )

    def test_no_contact_is_rejected(self):
        self.assertEqual(
            check_placement(self.board, MONOMINO, 5, 5, PlayerColor.BLUE, False),
            PlacementRejection.MISSING_CORNER,
        )

    def test_other_colors_do_not_count_as_corner(self):
        self.board.claim(4, 4, PlayerColor.RED)
        self.assertEqual(
            check_placement(self.board, MONOMINO, 5, 5, PlayerColor.BLUE, False),
            PlacementRejection.MISSING_CORNER,
        )

    def test_edge_contact_with_other_color_is_allowed(self):
        self.board.claim(1, 2, PlayerColor.RED)
        self.assertTrue(is_valid_placement(self.board, MONOMINO, 1, 1, PlayerColor.BLUE, False))

    def test_contact_flags_accumulate_across_cells(self):
        """Corner contact from one cell and no edge contact anywhere is enough."""
        self.assertTrue(is_valid_placement(self.board, ((0, 0), (0, 1), (0, 2)), 1, 1, PlayerColor.BLUE, False))


class TestPlacementCells(unittest.TestCase):

    def test_cells_are_offsets_plus_anchor(self):
        self.assertEqual(placement_cells(DOMINO, 3, 4), [(3, 4), (3, 5)])


if __name__ == '__main__':
    unittest.main()
