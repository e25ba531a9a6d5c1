#!/usr/bin/env python3
"""
Play a short scripted opening through MatchService and print the board.

Uses the store selected by MATCH_STORE_BACKEND (in-memory by default).
"""

import argparse
import asyncio
import logging
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from match_service.config import get_log_level
from match_service.service import MatchService, create_store
from schemas.move import MoveRequest
from utils.logging_setup import setup_logging

# (player, piece_index, rotation, mirror, anchor_row, anchor_col)
OPENING = [
    (0, 0, 0, False, 0, 0),
    (1, 0, 0, False, 0, 13),
    (2, 0, 0, False, 13, 13),
    (3, 0, 0, False, 13, 0),
    (0, 1, 0, False, 0, 1),    # rejected: edge contact
    (0, 1, 1, False, 1, 1),
    (1, 3, 0, False, 1, 11),
    (2, 2, 0, False, 12, 10),
    (3, 8, 0, False, 11, 1),
]


async def main(log_file):
    setup_logging(get_log_level(), log_file)
    logger = logging.getLogger("run_sample_match")

    store = await create_store()
    try:
        await play_opening(MatchService(store), logger)
    finally:
        await store.close()


async def play_opening(service, logger):
    record = await service.create_match()

    for player, piece_index, rotation, mirror, row, col in OPENING:
        result = await service.submit_move(record.match_id, MoveRequest(
            player=player,
            piece_index=piece_index,
            rotation=rotation,
            mirror=mirror,
            anchor_row=row,
            anchor_col=col,
        ))
        logger.info(f"player={player} piece={piece_index} at=({row}, {col}) -> {result.message}")

    final = await service.get_match(record.match_id)
    print(final.to_state().board)
    print(f"match={final.match_id} moves={len(final.moves)} current_player={final.current_player}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--log-file", type=Path, default=None)
    args = parser.parse_args()
    asyncio.run(main(args.log_file))
