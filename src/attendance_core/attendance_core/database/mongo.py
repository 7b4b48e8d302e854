from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from ..core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


class MongoConnection:
    """Singleton-like document store handle.

    MongoClient pools connections internally, so one client per process is enough.
    """

    _instance: Optional["MongoConnection"] = None

    def __init__(self, uri: str, db_name: str):
        self._client = MongoClient(uri, tz_aware=True)
        self._db_name = db_name

    @classmethod
    def get_instance(cls, uri: str, db_name: str) -> "MongoConnection":
        if cls._instance is None:
            cls._instance = MongoConnection(uri, db_name)
        return cls._instance

    @property
    def db(self) -> Database:
        return self._client[self._db_name]

    def collection(self, name: str):
        return self.db[name]


@contextmanager
def mongo_errors(action: str):
    """Translate driver failures into ExternalServiceError, logging the cause."""
    try:
        yield
    except PyMongoError as e:
        logger.error("Document store failure while %s: %s", action, e)
        raise ExternalServiceError("Document store unavailable") from e
