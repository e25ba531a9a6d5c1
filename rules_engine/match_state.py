"""
Match state and the move-application transition.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from .board import Board, PlayerColor, next_player
from .pieces import PIECE_COUNT, Offset, get_piece


@dataclass(frozen=True)
class MoveRecord:
    """One applied move, as kept in the match log."""
    player: PlayerColor
    piece_index: int
    rotation: int
    anchor_row: int
    anchor_col: int
    mirrored: bool = False


class MatchState:
    """
    State of one match.

    Holds the board, the pieces each player has used, whose turn it is, and
    the ordered move log. The only mutation is ``apply_move``.
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        used_pieces: Optional[List[Set[int]]] = None,
        current_player: PlayerColor = PlayerColor.BLUE,
        moves: Optional[List[MoveRecord]] = None,
    ):
        self.board = board if board is not None else Board()
        # Indexed by PlayerColor
        self.used_pieces = used_pieces if used_pieces is not None else [set() for _ in PlayerColor]
        if len(self.used_pieces) != len(PlayerColor):
            raise ValueError(f"used_pieces must have {len(PlayerColor)} entries")
        self.current_player = PlayerColor(current_player)
        self.moves = moves if moves is not None else []

    @property
    def move_count(self) -> int:
        return len(self.moves)

    def is_first_piece(self, player: PlayerColor) -> bool:
        """True if the player has not placed anything yet."""
        return not self.used_pieces[int(player)]

    def is_piece_used(self, player: PlayerColor, piece_index: int) -> bool:
        return piece_index in self.used_pieces[int(player)]

    def remaining_pieces(self, player: PlayerColor) -> List[int]:
        """Catalog indices the player has not placed yet."""
        used = self.used_pieces[int(player)]
        return [index for index in range(PIECE_COUNT) if index not in used]

    def apply_move(
        self,
        piece: Iterable[Offset],
        anchor_row: int,
        anchor_col: int,
        player: PlayerColor,
        piece_index: int,
        rotation: int,
        mirrored: bool = False,
    ) -> 'MatchState':
        """
        Apply an already validated move.

        The caller must have checked the placement, the turn and that the
        piece is unused. Nothing is re-validated here.

        Returns:
            self, for chaining
        """
        player = PlayerColor(player)
        for dr, dc in piece:
            self.board.claim(anchor_row + dr, anchor_col + dc, player)

        self.used_pieces[int(player)].add(piece_index)
        self.moves.append(MoveRecord(
            player=player,
            piece_index=piece_index,
            rotation=rotation,
            anchor_row=anchor_row,
            anchor_col=anchor_col,
            mirrored=mirrored,
        ))
        self.current_player = next_player(player)
        return self

    @classmethod
    def replay(cls, moves: Iterable[MoveRecord]) -> 'MatchState':
        """Rebuild a state by applying a move log to an empty board."""
        state = cls()
        for move in moves:
            piece = get_piece(move.piece_index).oriented(move.rotation, move.mirrored)
            state.apply_move(
                piece, move.anchor_row, move.anchor_col,
                move.player, move.piece_index, move.rotation, move.mirrored,
            )
        return state

    def copy(self) -> 'MatchState':
        """Create a deep copy of the state."""
        return MatchState(
            board=self.board.copy(),
            used_pieces=[set(pieces) for pieces in self.used_pieces],
            current_player=self.current_player,
            moves=list(self.moves),
        )

    def __repr__(self) -> str:
        return f"MatchState(current_player={self.current_player.name}, moves={self.move_count})"
