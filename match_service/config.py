"""
Runtime configuration for the match service.

Environment Variables:
    MATCH_STORE_BACKEND: "memory" (default) or "mongo"
    MONGODB_URI: MongoDB connection string (default: mongodb://localhost:27017)
    MONGODB_DB_NAME: Database name (default: blokus_matches)
    MATCH_COLLECTION: Collection holding match records (default: matches)
    LOG_LEVEL: Logging level name (default: INFO)
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

STORE_BACKEND_MEMORY = "memory"
STORE_BACKEND_MONGO = "mongo"
_VALID_BACKENDS = {STORE_BACKEND_MEMORY, STORE_BACKEND_MONGO}


def get_store_backend() -> str:
    """
    Return the normalized store backend.

    Defaults to ``memory`` when unset or invalid.
    """
    raw = (os.getenv("MATCH_STORE_BACKEND") or STORE_BACKEND_MEMORY).strip().lower()
    if raw not in _VALID_BACKENDS:
        return STORE_BACKEND_MEMORY
    return raw


def get_mongodb_uri() -> str:
    return os.getenv("MONGODB_URI", "mongodb://localhost:27017")


def get_mongodb_db_name() -> str:
    return os.getenv("MONGODB_DB_NAME", "blokus_matches")


def get_match_collection_name() -> str:
    return os.getenv("MATCH_COLLECTION", "matches").strip() or "matches"


def get_log_level() -> int:
    """Logging level from LOG_LEVEL, falling back to INFO for unknown names."""
    name = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.INFO
    return level
