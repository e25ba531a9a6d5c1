"""
Match service: runs the load / validate / apply / persist cycle for moves.

Moves for one match are serialized by a per-match asyncio.Lock, and every
save is a compare-and-swap on the record version, so at most one move per
match is committed at a time even with writers in other processes.
"""

import asyncio
import logging
import uuid
import weakref
from typing import Optional

from rules_engine.board import PlayerColor
from rules_engine.match_state import MatchState
from rules_engine.pieces import Offsets, get_piece
from rules_engine.placement import PlacementRejection, check_placement
from schemas.match_record import MatchRecord
from schemas.move import MoveRejection, MoveRequest, MoveResult
from .config import STORE_BACKEND_MONGO, get_match_collection_name, get_store_backend
from .store import InMemoryMatchStore, MatchStore, VersionConflictError

logger = logging.getLogger(__name__)


def generate_match_id() -> str:
    """Short upper-case id, e.g. ``'3F9A1C'``."""
    return uuid.uuid4().hex[:6].upper()


async def create_store() -> MatchStore:
    """Build the store selected by MATCH_STORE_BACKEND."""
    backend = get_store_backend()
    if backend == STORE_BACKEND_MONGO:
        from .db.mongo import connect_to_mongo
        from .mongo_store import MongoMatchStore

        database = await connect_to_mongo()
        logger.info(f"Using MongoDB match store (collection {get_match_collection_name()})")
        return MongoMatchStore(database[get_match_collection_name()])

    logger.info("Using in-memory match store")
    return InMemoryMatchStore()


class MatchService:
    """Creates matches and applies submitted moves."""

    def __init__(self, store: MatchStore):
        self.store = store
        # Entries live only while a caller holds or waits on the lock
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()

    def _lock_for(self, match_id: str) -> asyncio.Lock:
        lock = self._locks.get(match_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[match_id] = lock
        return lock

    async def create_match(self, match_id: Optional[str] = None) -> MatchRecord:
        """Create and persist a fresh match with an empty board."""
        match_id = match_id or generate_match_id()
        record = await self.store.create(MatchRecord.from_state(match_id, MatchState()))
        logger.info(f"Match created: {match_id}")
        return record

    async def get_match(self, match_id: str) -> Optional[MatchRecord]:
        return await self.store.load(match_id)

    async def discard_match(self, match_id: str) -> bool:
        """Delete a match."""
        async with self._lock_for(match_id):
            deleted = await self.store.delete(match_id)
        if deleted:
            logger.info(f"Match discarded: {match_id}")
        return deleted

    async def submit_move(self, match_id: str, request: MoveRequest) -> MoveResult:
        """
        Validate and apply a move, then persist the new state.

        Args:
            match_id: Match to play in
            request: Submitted move

        Returns:
            MoveResult; on rejection the stored match is unchanged
        """
        async with self._lock_for(match_id):
            record = await self.store.load(match_id)
            if record is None:
                return _reject(MoveRejection.UNKNOWN_MATCH, f"Match {match_id} not found")

            state = record.to_state()
            player = PlayerColor(request.player)

            if state.current_player != player:
                return _reject(
                    MoveRejection.OUT_OF_TURN,
                    f"Not your turn: current player is {int(state.current_player)}",
                    record,
                )

            if state.is_piece_used(player, request.piece_index):
                return _reject(
                    MoveRejection.PIECE_ALREADY_USED,
                    f"Piece {request.piece_index} already used by player {int(player)}",
                    record,
                )

            piece = _resolve_piece(request)
            if piece is None:
                return _reject(
                    MoveRejection.PIECE_MISMATCH,
                    f"Submitted cells do not match piece {request.piece_index} in the requested orientation",
                    record,
                )

            reason = check_placement(
                state.board, piece, request.anchor_row, request.anchor_col,
                player, state.is_first_piece(player),
            )
            if reason is not None:
                return _reject(
                    MoveRejection.ILLEGAL_PLACEMENT, f"Invalid placement: {reason.value}", record,
                    placement_reason=reason,
                )

            state.apply_move(
                piece, request.anchor_row, request.anchor_col, player,
                request.piece_index, request.rotation, request.mirror,
            )

            try:
                saved = await self.store.save(
                    MatchRecord.from_state(match_id, state, record.version),
                    expected_version=record.version,
                )
            except VersionConflictError as e:
                logger.warning(f"Lost update prevented in match {match_id}: {e}")
                return _reject(MoveRejection.STALE_STATE, "Match changed concurrently, reload and retry")

            logger.info(
                f"Match {match_id}: player {int(player)} placed piece {request.piece_index} "
                f"at ({request.anchor_row}, {request.anchor_col})"
            )
            return MoveResult(
                success=True,
                message="Move successful",
                current_player=saved.current_player,
                version=saved.version,
            )


def _resolve_piece(request: MoveRequest) -> Optional[Offsets]:
    """Offsets to place; None if the submitted cells do not match the catalog piece."""
    expected = get_piece(request.piece_index).oriented(request.rotation, request.mirror)
    if request.piece is None:
        return expected

    submitted = tuple((int(r), int(c)) for r, c in request.piece)
    if len(submitted) != len(expected) or set(submitted) != set(expected):
        return None
    return submitted


def _reject(
    rejection: MoveRejection,
    message: str,
    record: Optional[MatchRecord] = None,
    placement_reason: Optional[PlacementRejection] = None,
) -> MoveResult:
    logger.info(f"Move rejected ({rejection.value}): {message}")
    return MoveResult(
        success=False,
        message=message,
        rejection=rejection,
        placement_reason=placement_reason,
        current_player=record.current_player if record is not None else None,
        version=record.version if record is not None else None,
    )
