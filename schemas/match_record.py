"""
Pydantic schemas for the persisted match record.

The record is what store adapters read and write. It converts to and from
``MatchState`` without loss.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from rules_engine.board import BOARD_SIZE, Board, PlayerColor, next_player
from rules_engine.match_state import MatchState, MoveRecord


class MoveEntry(BaseModel):
    """A move in the persisted log."""
    player: int = Field(..., ge=0, le=3)
    piece_index: int = Field(..., ge=0)
    rotation: int = Field(..., ge=0)
    anchor_row: int
    anchor_col: int
    mirrored: bool = False

    @classmethod
    def from_record(cls, record: MoveRecord) -> 'MoveEntry':
        return cls(
            player=int(record.player),
            piece_index=record.piece_index,
            rotation=record.rotation,
            anchor_row=record.anchor_row,
            anchor_col=record.anchor_col,
            mirrored=record.mirrored,
        )

    def to_record(self) -> MoveRecord:
        return MoveRecord(
            player=PlayerColor(self.player),
            piece_index=self.piece_index,
            rotation=self.rotation,
            anchor_row=self.anchor_row,
            anchor_col=self.anchor_col,
            mirrored=self.mirrored,
        )


def _empty_board() -> List[List[Optional[int]]]:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


class MatchRecord(BaseModel):
    """Persisted state of one match."""
    match_id: str = Field(..., min_length=1)
    version: int = Field(default=0, ge=0, description="Incremented on every successful save")
    board: List[List[Optional[int]]] = Field(default_factory=_empty_board, description="14x14 cell owners")
    used_pieces: List[List[int]] = Field(
        default_factory=lambda: [[] for _ in PlayerColor],
        description="Used piece indices, one list per color"
    )
    current_player: int = Field(default=0, ge=0, le=3)
    moves: List[MoveEntry] = Field(default_factory=list)

    @field_validator("board")
    @classmethod
    def _check_board(cls, board):
        if len(board) != BOARD_SIZE or any(len(row) != BOARD_SIZE for row in board):
            raise ValueError(f"board must be {BOARD_SIZE}x{BOARD_SIZE}")
        for row in board:
            for cell in row:
                if cell is not None and not 0 <= cell <= 3:
                    raise ValueError(f"invalid cell owner {cell}")
        return board

    @field_validator("used_pieces")
    @classmethod
    def _check_used_pieces(cls, used_pieces):
        if len(used_pieces) != len(PlayerColor):
            raise ValueError(f"used_pieces must have {len(PlayerColor)} entries")
        for pieces in used_pieces:
            if len(set(pieces)) != len(pieces):
                raise ValueError("used_pieces entries must not repeat")
        return used_pieces

    @model_validator(mode="after")
    def _check_against_log(self):
        for color in PlayerColor:
            logged = [move.piece_index for move in self.moves if move.player == color]
            if len(logged) != len(self.used_pieces[color]):
                raise ValueError(f"player {int(color)} has {len(logged)} logged moves but "
                                 f"{len(self.used_pieces[color])} used pieces")
            if set(logged) != set(self.used_pieces[color]):
                raise ValueError(f"player {int(color)} used pieces {sorted(self.used_pieces[color])} "
                                 f"but the log places {sorted(logged)}")

        expected = int(next_player(PlayerColor(self.moves[-1].player))) if self.moves else int(PlayerColor.BLUE)
        if self.current_player != expected:
            raise ValueError(f"current_player is {self.current_player} but the log gives the turn to {expected}")
        return self

    @classmethod
    def from_state(cls, match_id: str, state: MatchState, version: int = 0) -> 'MatchRecord':
        return cls(
            match_id=match_id,
            version=version,
            board=state.board.to_rows(),
            used_pieces=[sorted(pieces) for pieces in state.used_pieces],
            current_player=int(state.current_player),
            moves=[MoveEntry.from_record(move) for move in state.moves],
        )

    def to_state(self) -> MatchState:
        return MatchState(
            board=Board.from_rows(self.board),
            used_pieces=[set(pieces) for pieces in self.used_pieces],
            current_player=PlayerColor(self.current_player),
            moves=[move.to_record() for move in self.moves],
        )
