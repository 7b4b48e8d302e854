from __future__ import annotations

import logging
from typing import Protocol

from ..common.datetime_utils import now_utc
from ..core.constants import ACTIVITY_COLLECTION
from ..core.enums import Severity
from ..database.mongo import MongoConnection, mongo_errors
from .model import ActivityLogEntry

logger = logging.getLogger(__name__)


class ActivityLogRepository(Protocol):
    def add(self, entry: ActivityLogEntry) -> None:
        raise NotImplementedError


class MongoActivityLogRepository(ActivityLogRepository):
    def __init__(self, mongo: MongoConnection):
        self._col = mongo.collection(ACTIVITY_COLLECTION)

    def add(self, entry: ActivityLogEntry) -> None:
        with mongo_errors("writing activity log"):
            self._col.insert_one(
                {
                    "category": entry.category,
                    "action": entry.action,
                    "severity": entry.severity.value,
                    "message": entry.message,
                    "actor_name": entry.actor_name,
                    "actor_role": entry.actor_role,
                    "timestamp": entry.timestamp,
                }
            )


class ActivityLogger:
    """Best-effort audit trail: a failed write is logged, never raised."""

    def __init__(self, repo: ActivityLogRepository):
        self._repo = repo

    def record(
        self,
        *,
        action: str,
        message: str,
        severity: Severity = Severity.MEDIUM,
        category: str = "users",
        actor_name: str | None = None,
        actor_role: str = "admin",
    ) -> None:
        entry = ActivityLogEntry(
            category=category,
            action=action,
            severity=severity,
            message=message,
            actor_name=actor_name or "Unknown Admin",
            actor_role=actor_role,
            timestamp=now_utc(),
        )
        try:
            self._repo.add(entry)
        except Exception:
            logger.exception("Failed to write activity log %r", action)
