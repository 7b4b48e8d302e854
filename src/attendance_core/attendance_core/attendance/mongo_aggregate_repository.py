from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.constants import AGGREGATE_COLLECTION
from ..database.mongo import MongoConnection, mongo_errors
from .model import AttendanceAggregate
from .repository import AggregateRepository


class MongoAggregateRepository(AggregateRepository):
    def __init__(self, mongo: MongoConnection):
        self._col = mongo.collection(AGGREGATE_COLLECTION)

    def increment(self, partition_key: str) -> None:
        with mongo_errors("incrementing attendance aggregate"):
            self._col.update_one(
                {"_id": partition_key},
                {
                    "$inc": {"count": 1},
                    "$set": {"last_updated": now_utc(), "sheet_name": partition_key},
                },
                upsert=True,
            )

    def get(self, partition_key: str) -> Optional[AttendanceAggregate]:
        with mongo_errors("reading attendance aggregate"):
            doc = self._col.find_one({"_id": partition_key})
        if not doc:
            return None
        return AttendanceAggregate(
            partition_key=partition_key,
            count=int(doc.get("count", 0)),
            last_updated=doc.get("last_updated"),
        )
