"""
Shared Motor client for the Mongo match store.

One client is opened per process by ``connect_to_mongo`` and handed to every
MongoMatchStore; ``close_mongo_connection`` shuts it down. Connection settings
come from match_service.config (MONGODB_URI, MONGODB_DB_NAME).
"""

import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from match_service.config import get_mongodb_db_name, get_mongodb_uri

logger = logging.getLogger(__name__)

SERVER_SELECTION_TIMEOUT_MS = 5000

_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None


def _redact(uri: str) -> str:
    """Strip credentials from a connection string for logging."""
    return uri.split('@')[-1] if '@' in uri else uri


async def connect_to_mongo() -> AsyncIOMotorDatabase:
    """
    Open the shared client and return the match database.

    A second call while connected returns the database already open.

    Raises:
        ConnectionFailure: If the server rejects the ping
        ServerSelectionTimeoutError: If no server answers in time
    """
    global _client, _database

    if _database is not None:
        return _database

    uri = get_mongodb_uri()
    db_name = get_mongodb_db_name()
    logger.info(f"Opening match database {db_name} at {_redact(uri)}")

    client = AsyncIOMotorClient(uri, serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS)
    try:
        await client.admin.command("ping")
    except (ConnectionFailure, ServerSelectionTimeoutError) as e:
        logger.error(f"MongoDB at {_redact(uri)} is unreachable: {e}")
        client.close()
        raise

    _client = client
    _database = client[db_name]
    return _database


async def close_mongo_connection() -> None:
    """Close the shared client, if one is open."""
    global _client, _database

    if _client is None:
        logger.debug("No MongoDB client to close")
        return

    _client.close()
    _client = None
    _database = None
    logger.info("MongoDB client closed")
