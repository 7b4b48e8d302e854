from __future__ import annotations

from typing import Iterable, Optional, Sequence

from pymongo import DeleteOne, ReplaceOne
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..common.datetime_utils import now_utc
from ..core.constants import UNKNOWN_NAME, WHITELIST_COLLECTION
from ..core.exceptions import ConflictError, ExternalServiceError, NotFoundError
from ..database.mongo import MongoConnection, mongo_errors
from .model import WhitelistEntry
from .repository import WhitelistRepository


def _to_entry(doc: dict) -> WhitelistEntry:
    return WhitelistEntry(
        identity_id=str(doc["_id"]),
        display_name=doc.get("name") or UNKNOWN_NAME,
        created_at=doc.get("created_at"),
        updated_at=doc.get("updated_at"),
    )


class MongoWhitelistRepository(WhitelistRepository):
    def __init__(self, mongo: MongoConnection):
        self._col = mongo.collection(WHITELIST_COLLECTION)

    def lookup(self, identity_id: str) -> Optional[WhitelistEntry]:
        with mongo_errors("looking up whitelist entry"):
            doc = self._col.find_one({"_id": identity_id})
        return _to_entry(doc) if doc else None

    def list_all(self) -> Sequence[WhitelistEntry]:
        with mongo_errors("listing whitelist"):
            return [_to_entry(d) for d in self._col.find().sort("_id", 1)]

    def upsert_many(self, entries: Iterable[WhitelistEntry]) -> int:
        now = now_utc()
        ops = [
            ReplaceOne(
                {"_id": e.identity_id},
                {"name": e.display_name, "created_at": e.created_at or now},
                upsert=True,
            )
            for e in entries
        ]
        if not ops:
            return 0
        with mongo_errors("writing whitelist batch"):
            self._col.bulk_write(ops, ordered=False)
        return len(ops)

    def delete_many(self, identity_ids: Iterable[str]) -> int:
        ops = [DeleteOne({"_id": i}) for i in identity_ids]
        if not ops:
            return 0
        with mongo_errors("deleting whitelist batch"):
            return self._col.bulk_write(ops, ordered=False).deleted_count

    def rename(self, old_id: str, new_id: str, display_name: Optional[str] = None) -> WhitelistEntry:
        with mongo_errors("renaming whitelist entry"):
            old = self._col.find_one({"_id": old_id})
        if not old:
            raise NotFoundError("Original ID not found")

        now = now_utc()
        doc = {
            "_id": new_id,
            "name": (display_name or "").strip() or old.get("name") or UNKNOWN_NAME,
            "created_at": old.get("created_at") or now,
            "updated_at": now,
        }
        try:
            # The unique _id makes the insert a conditional create.
            self._col.insert_one(doc)
        except DuplicateKeyError as e:
            raise ConflictError("New ID already exists") from e
        except PyMongoError as e:
            raise ExternalServiceError("Document store unavailable") from e

        try:
            self._col.delete_one({"_id": old_id})
        except PyMongoError as e:
            # Roll back the insert so both keys are never left in place.
            with mongo_errors("rolling back whitelist rename"):
                self._col.delete_one({"_id": new_id})
            raise ExternalServiceError("Document store unavailable") from e
        return _to_entry(doc)

    def update_name(self, identity_id: str, display_name: str) -> None:
        with mongo_errors("updating whitelist name"):
            res = self._col.update_one(
                {"_id": identity_id},
                {"$set": {"name": display_name, "updated_at": now_utc()}},
            )
        if res.matched_count == 0:
            raise NotFoundError("ID not found")
