"""
Match service: persistence contract and the serialized move-submission flow.
"""

from .service import MatchService, create_store, generate_match_id
from .store import (
    InMemoryMatchStore,
    MatchExistsError,
    MatchStore,
    MatchStoreError,
    VersionConflictError,
)

__all__ = [
    "MatchService",
    "create_store",
    "generate_match_id",
    "MatchStore",
    "InMemoryMatchStore",
    "MatchStoreError",
    "MatchExistsError",
    "VersionConflictError",
]
