"""
Store contract for persisted match records.

Every record carries a version. ``save`` is a compare-and-swap on that
version so two writers working from the same snapshot cannot both commit.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from schemas.match_record import MatchRecord

logger = logging.getLogger(__name__)


class MatchStoreError(Exception):
    """Base class for store failures."""


class MatchExistsError(MatchStoreError):
    """A record with this match id already exists."""

    def __init__(self, match_id: str):
        super().__init__(f"Match {match_id} already exists")
        self.match_id = match_id


class VersionConflictError(MatchStoreError):
    """The stored version no longer matches the version the writer read."""

    def __init__(self, match_id: str, expected_version: int):
        super().__init__(f"Match {match_id} changed since version {expected_version}")
        self.match_id = match_id
        self.expected_version = expected_version


class MatchStore(ABC):
    """Key/value store for match records."""

    @abstractmethod
    async def load(self, match_id: str) -> Optional[MatchRecord]:
        """Load a record, or None if the match is unknown."""

    @abstractmethod
    async def create(self, record: MatchRecord) -> MatchRecord:
        """Insert a new record. Raises MatchExistsError if the id is taken."""

    @abstractmethod
    async def save(self, record: MatchRecord, expected_version: int) -> MatchRecord:
        """
        Replace a record if its stored version equals ``expected_version``.

        Returns:
            The stored record, with version ``expected_version + 1``

        Raises:
            VersionConflictError: If the stored version differs or the record is gone
        """

    @abstractmethod
    async def delete(self, match_id: str) -> bool:
        """Delete a record. Returns True if something was deleted."""

    async def close(self) -> None:
        """Release connections held by the store."""


class InMemoryMatchStore(MatchStore):
    """
    Store that keeps serialized records in a dict.

    Records are kept as JSON so every load goes through the same
    round-trip a remote store would.
    """

    def __init__(self):
        self._records: Dict[str, str] = {}

    async def load(self, match_id: str) -> Optional[MatchRecord]:
        raw = self._records.get(match_id)
        if raw is None:
            return None
        return MatchRecord.model_validate_json(raw)

    async def create(self, record: MatchRecord) -> MatchRecord:
        if record.match_id in self._records:
            raise MatchExistsError(record.match_id)
        self._records[record.match_id] = record.model_dump_json()
        return record

    async def save(self, record: MatchRecord, expected_version: int) -> MatchRecord:
        raw = self._records.get(record.match_id)
        if raw is None:
            raise VersionConflictError(record.match_id, expected_version)
        stored_version = MatchRecord.model_validate_json(raw).version
        if stored_version != expected_version:
            logger.debug(f"Version mismatch for {record.match_id}: stored {stored_version}, "
                         f"expected {expected_version}")
            raise VersionConflictError(record.match_id, expected_version)

        saved = record.model_copy(update={"version": expected_version + 1})
        self._records[record.match_id] = saved.model_dump_json()
        return saved

    async def delete(self, match_id: str) -> bool:
        return self._records.pop(match_id, None) is not None

    def __len__(self) -> int:
        return len(self._records)
