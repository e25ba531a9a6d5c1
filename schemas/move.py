"""
Pydantic schemas for move submission.
"""

from enum import Enum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from rules_engine.pieces import PIECE_COUNT
from rules_engine.placement import PlacementRejection


class MoveRejection(str, Enum):
    """Why a submitted move was not applied."""
    UNKNOWN_MATCH = "unknown_match"
    OUT_OF_TURN = "out_of_turn"
    PIECE_ALREADY_USED = "piece_already_used"
    PIECE_MISMATCH = "piece_mismatch"
    ILLEGAL_PLACEMENT = "illegal_placement"
    STALE_STATE = "stale_state"


class MoveRequest(BaseModel):
    """Request to place a piece."""
    player: int = Field(..., ge=0, le=3, description="Color of the player making the move")
    piece_index: int = Field(..., ge=0, lt=PIECE_COUNT, description="Catalog index of the piece")
    rotation: int = Field(default=0, ge=0, le=3, description="Quarter turns applied to the base shape")
    mirror: bool = Field(default=False, description="Whether the piece is mirrored after rotating")
    anchor_row: int = Field(..., description="Row of the anchor cell")
    anchor_col: int = Field(..., description="Column of the anchor cell")
    piece: Optional[List[Tuple[int, int]]] = Field(
        default=None,
        description="Offsets in final orientation; derived from the catalog when omitted"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "player": 0,
                "piece_index": 0,
                "rotation": 0,
                "mirror": False,
                "anchor_row": 0,
                "anchor_col": 0,
                "piece": [[0, 0]]
            }
        }


class MoveResult(BaseModel):
    """Outcome of a move submission."""
    success: bool
    message: str
    rejection: Optional[MoveRejection] = None
    placement_reason: Optional[PlacementRejection] = None
    current_player: Optional[int] = None
    version: Optional[int] = None

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "message": "Invalid placement: forbidden_edge",
                "rejection": "illegal_placement",
                "placement_reason": "forbidden_edge",
                "current_player": 0,
                "version": 3
            }
        }
