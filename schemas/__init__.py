"""
Pydantic schemas for match records and move submission.
"""

from .match_record import MatchRecord, MoveEntry
from .move import MoveRejection, MoveRequest, MoveResult

__all__ = [
    "MatchRecord",
    "MoveEntry",
    "MoveRejection",
    "MoveRequest",
    "MoveResult",
]
