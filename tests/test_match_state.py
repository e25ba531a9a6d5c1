"""
Tests for MatchState and the move-application transition.
"""

import unittest

from rules_engine.board import PlayerColor
from rules_engine.match_state import MatchState, MoveRecord
from rules_engine.pieces import get_piece
from rules_engine.placement import is_valid_placement
from tests.utils_match_states import OPENING, play

MONOMINO = ((0, 0),)


class TestInitialState(unittest.TestCase):

    def test_new_match(self):
        state = MatchState()
        self.assertEqual(state.current_player, PlayerColor.BLUE)
        self.assertEqual(state.board.occupied_count(), 0)
        self.assertEqual(state.used_pieces, [set(), set(), set(), set()])
        self.assertEqual(state.moves, [])
        self.assertEqual(state.move_count, 0)
        for player in PlayerColor:
            self.assertTrue(state.is_first_piece(player))
            self.assertEqual(len(state.remaining_pieces(player)), 21)

    def test_used_pieces_must_cover_four_colors(self):
        with self.assertRaises(ValueError):
            MatchState(used_pieces=[set(), set()])


class TestApplyMove(unittest.TestCase):

    def test_apply_move_effects(self):
        state = MatchState()
        piece = get_piece(1).offsets
        state.apply_move(piece, 0, 0, PlayerColor.BLUE, 1, 0)

        self.assertEqual(state.board.owner(0, 0), PlayerColor.BLUE)
        self.assertEqual(state.board.owner(0, 1), PlayerColor.BLUE)
        self.assertEqual(state.used_pieces[0], {1})
        self.assertEqual(state.moves, [MoveRecord(PlayerColor.BLUE, 1, 0, 0, 0)])
        self.assertEqual(state.current_player, PlayerColor.YELLOW)
        self.assertFalse(state.is_first_piece(PlayerColor.BLUE))
        self.assertNotIn(1, state.remaining_pieces(PlayerColor.BLUE))

    def test_apply_move_returns_state(self):
        state = MatchState()
        self.assertIs(state.apply_move(MONOMINO, 0, 0, PlayerColor.BLUE, 0, 0), state)

    def test_move_record_keeps_mirror_flag(self):
        state = play(MatchState(), OPENING)
        self.assertTrue(state.moves[-1].mirrored)
        self.assertEqual(state.moves[-1].piece_index, 5)

    def test_turn_cycle(self):
        state = MatchState()
        expected = [1, 2, 3, 0, 1, 2, 3, 0, 1]
        for move, after in zip(OPENING, expected):
            previous = state.current_player
            play(state, [move])
            self.assertEqual(state.current_player, (previous + 1) % 4)
            self.assertEqual(int(state.current_player), after)

    def test_occupancy_monotonic_and_sums_piece_sizes(self):
        state = MatchState()
        owned = {}
        total = 0
        for move in OPENING:
            play(state, [move])
            total += get_piece(move[1]).size
            for row in range(14):
                for col in range(14):
                    owner = state.board.owner(row, col)
                    if (row, col) in owned:
                        self.assertEqual(owner, owned[(row, col)])
                    elif owner is not None:
                        owned[(row, col)] = owner
            self.assertEqual(state.board.occupied_count(), total)

    def test_used_pieces_match_move_log(self):
        state = play(MatchState(), OPENING)
        for player in PlayerColor:
            logged = [m.piece_index for m in state.moves if m.player == player]
            self.assertEqual(len(logged), len(state.used_pieces[player]))
            self.assertEqual(set(logged), state.used_pieces[player])

    def test_cell_owners_match_placing_player(self):
        state = play(MatchState(), OPENING)
        for move in state.moves:
            piece = get_piece(move.piece_index).oriented(move.rotation, move.mirrored)
            for dr, dc in piece:
                self.assertEqual(state.board.owner(move.anchor_row + dr, move.anchor_col + dc), move.player)

    def test_turn_advances_even_without_legal_moves(self):
        """There is no pass: the next color always gets the turn."""
        state = MatchState()
        state.apply_move(MONOMINO, 0, 0, PlayerColor.BLUE, 0, 0)
        state.apply_move(MONOMINO, 0, 13, PlayerColor.YELLOW, 0, 0)
        state.apply_move(MONOMINO, 13, 13, PlayerColor.RED, 0, 0)
        state.apply_move(MONOMINO, 13, 0, PlayerColor.GREEN, 0, 0)
        self.assertEqual(state.current_player, PlayerColor.BLUE)


class TestScenario(unittest.TestCase):
    """Opening from a fresh 14x14 board."""

    def test_scenario(self):
        state = MatchState()

        self.assertTrue(is_valid_placement(state.board, MONOMINO, 0, 0, PlayerColor.BLUE, True))
        state.apply_move(MONOMINO, 0, 0, PlayerColor.BLUE, 0, 0)
        self.assertEqual(state.current_player, PlayerColor.YELLOW)

        self.assertTrue(is_valid_placement(state.board, MONOMINO, 0, 13, PlayerColor.YELLOW, True))
        state.apply_move(MONOMINO, 0, 13, PlayerColor.YELLOW, 0, 0)
        self.assertEqual(state.current_player, PlayerColor.RED)

        first = state.is_first_piece(PlayerColor.BLUE)
        self.assertFalse(first)
        self.assertFalse(is_valid_placement(state.board, MONOMINO, 0, 1, PlayerColor.BLUE, first))
        self.assertTrue(is_valid_placement(state.board, MONOMINO, 1, 1, PlayerColor.BLUE, first))


class TestReplayAndCopy(unittest.TestCase):

    def test_replay_rebuilds_state(self):
        state = play(MatchState(), OPENING)
        rebuilt = MatchState.replay(state.moves)
        self.assertEqual(rebuilt.board, state.board)
        self.assertEqual(rebuilt.used_pieces, state.used_pieces)
        self.assertEqual(rebuilt.current_player, state.current_player)
        self.assertEqual(rebuilt.moves, state.moves)

    def test_copy_is_independent(self):
        state = play(MatchState(), OPENING[:2])
        clone = state.copy()
        play(clone, OPENING[2:3])
        self.assertEqual(state.move_count, 2)
        self.assertEqual(clone.move_count, 3)
        self.assertTrue(state.is_first_piece(PlayerColor.RED))
        self.assertFalse(state.board.is_occupied(13, 13))


if __name__ == '__main__':
    unittest.main()
