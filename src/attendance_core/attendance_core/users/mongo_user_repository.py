from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.constants import USERS_COLLECTION
from ..core.enums import Role
from ..database.mongo import MongoConnection, mongo_errors
from .model import UserAccount
from .repository import UserRepository


class MongoUserRepository(UserRepository):
    def __init__(self, mongo: MongoConnection):
        self._col = mongo.collection(USERS_COLLECTION)

    def get_by_uid(self, uid: str) -> Optional[UserAccount]:
        with mongo_errors("reading user"):
            doc = self._col.find_one({"_id": uid})
        if not doc:
            return None
        return UserAccount(
            uid=str(doc["_id"]),
            email=doc.get("email", ""),
            name=doc.get("name", ""),
            role=Role.normalize(doc.get("role")),
            password_hash=doc.get("password_hash"),
        )

    def set_password_hash(self, uid: str, password_hash: str) -> bool:
        with mongo_errors("updating password"):
            res = self._col.update_one(
                {"_id": uid},
                {"$set": {"password_hash": password_hash, "password_updated_at": now_utc()}},
            )
        return res.matched_count == 1
