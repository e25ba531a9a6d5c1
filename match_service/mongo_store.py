"""
MongoDB-backed match store.

Each match is one document keyed by ``_id = match_id``. Saves use
``update_one`` filtered on the expected version, so a concurrent writer that
got there first makes the filter miss and the save fails.
"""

import logging
from typing import Any, Dict, Optional

from pymongo.errors import DuplicateKeyError

from schemas.match_record import MatchRecord
from .db.mongo import close_mongo_connection
from .store import MatchExistsError, MatchStore, VersionConflictError

logger = logging.getLogger(__name__)


def _to_document(record: MatchRecord) -> Dict[str, Any]:
    document = record.model_dump(mode="json")
    document["_id"] = document.pop("match_id")
    return document


def _from_document(document: Dict[str, Any]) -> MatchRecord:
    data = dict(document)
    data["match_id"] = data.pop("_id")
    return MatchRecord.model_validate(data)


class MongoMatchStore(MatchStore):
    """Match store over a Motor collection."""

    def __init__(self, collection):
        self.collection = collection

    async def load(self, match_id: str) -> Optional[MatchRecord]:
        document = await self.collection.find_one({"_id": match_id})
        if document is None:
            return None
        return _from_document(document)

    async def create(self, record: MatchRecord) -> MatchRecord:
        try:
            await self.collection.insert_one(_to_document(record))
        except DuplicateKeyError:
            raise MatchExistsError(record.match_id)
        logger.debug(f"Inserted match {record.match_id}")
        return record

    async def save(self, record: MatchRecord, expected_version: int) -> MatchRecord:
        saved = record.model_copy(update={"version": expected_version + 1})
        document = _to_document(saved)
        match_id = document.pop("_id")

        result = await self.collection.update_one(
            {"_id": match_id, "version": expected_version},
            {"$set": document},
        )
        if result.matched_count == 0:
            raise VersionConflictError(match_id, expected_version)
        return saved

    async def delete(self, match_id: str) -> bool:
        result = await self.collection.delete_one({"_id": match_id})
        return result.deleted_count > 0

    async def close(self) -> None:
        await close_mongo_connection()
