"""
Database module for the match service.

This module provides the MongoDB connection used by MongoMatchStore.
"""

from .mongo import connect_to_mongo, close_mongo_connection

__all__ = [
    "connect_to_mongo",
    "close_mongo_connection",
]
