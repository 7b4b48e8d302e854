from __future__ import annotations

from datetime import datetime
from typing import Optional

from pymongo import ReturnDocument

from ..core.constants import VERIFICATION_COLLECTION
from ..database.mongo import MongoConnection, mongo_errors
from .model import VerificationCode
from .repository import VerificationCodeRepository


class MongoVerificationCodeRepository(VerificationCodeRepository):
    def __init__(self, mongo: MongoConnection):
        self._col = mongo.collection(VERIFICATION_COLLECTION)

    def save(self, code: VerificationCode) -> None:
        with mongo_errors("storing verification code"):
            self._col.replace_one(
                {"_id": code.subject_id},
                {
                    "code": code.code,
                    "email": code.email,
                    "expires_at": code.expires_at,
                    "created_at": code.created_at,
                    "attempts": code.attempts,
                },
                upsert=True,
            )

    def get(self, subject_id: str) -> Optional[VerificationCode]:
        with mongo_errors("reading verification code"):
            doc = self._col.find_one({"_id": subject_id})
        if not doc:
            return None
        return VerificationCode(
            subject_id=subject_id,
            code=str(doc["code"]),
            email=doc.get("email", ""),
            expires_at=doc["expires_at"],
            created_at=doc["created_at"],
            attempts=int(doc.get("attempts", 0)),
            verified=bool(doc.get("verified", False)),
            verified_at=doc.get("verified_at"),
            sent_at=doc.get("sent_at"),
        )

    def mark_sent(self, subject_id: str, code: str, sent_at: datetime) -> None:
        with mongo_errors("marking verification code sent"):
            self._col.update_one({"_id": subject_id, "code": code}, {"$set": {"sent_at": sent_at}})

    def increment_attempts(self, subject_id: str) -> Optional[int]:
        with mongo_errors("counting verification attempt"):
            doc = self._col.find_one_and_update(
                {"_id": subject_id},
                {"$inc": {"attempts": 1}},
                return_document=ReturnDocument.AFTER,
            )
        return int(doc["attempts"]) if doc else None

    def mark_verified(self, subject_id: str, code: str, verified_at: datetime) -> bool:
        with mongo_errors("marking verification code verified"):
            res = self._col.update_one(
                {"_id": subject_id, "code": code},
                {"$set": {"verified": True, "verified_at": verified_at}},
            )
        return res.matched_count > 0

    def delete(self, subject_id: str) -> None:
        with mongo_errors("deleting verification code"):
            self._col.delete_one({"_id": subject_id})
