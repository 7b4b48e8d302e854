import pytest
from pymongo.errors import PyMongoError

from src.attendance_core.attendance_core.core.constants import WHITELIST_COLLECTION
from src.attendance_core.attendance_core.core.exceptions import (
    ConflictError,
    ExternalServiceError,
    NotFoundError,
)
from src.attendance_core.attendance_core.whitelist.mongo_whitelist_repository import MongoWhitelistRepository
from tests.fakes import MockMongoConnection


class FailingDelete:
    """Collection wrapper whose delete of one id fails, for the rename rollback path."""

    def __init__(self, col, fail_id):
        self._col = col
        self._fail_id = fail_id

    def __getattr__(self, name):
        return getattr(self._col, name)

    def delete_one(self, flt):
        if flt == {"_id": self._fail_id}:
            raise PyMongoError("connection reset")
        return self._col.delete_one(flt)


@pytest.fixture
def store():
    mongo = MockMongoConnection()
    col = mongo.collection(WHITELIST_COLLECTION)
    col.insert_one({"_id": "2021-0001", "name": "Ana Cruz"})
    col.insert_one({"_id": "2021-0002", "name": "Ben Reyes"})
    return MongoWhitelistRepository(mongo), col


def test_rename_onto_existing_id_conflicts_and_keeps_both(store):
    repo, col = store

    with pytest.raises(ConflictError):
        repo.rename("2021-0001", "2021-0002")

    assert col.find_one({"_id": "2021-0001"})["name"] == "Ana Cruz"
    assert col.find_one({"_id": "2021-0002"})["name"] == "Ben Reyes"
    assert col.count_documents({}) == 2


def test_rename_moves_entry_and_keeps_name(store):
    repo, col = store

    entry = repo.rename("2021-0001", "2021-0009")

    assert entry.identity_id == "2021-0009"
    assert entry.display_name == "Ana Cruz"
    assert repo.lookup("2021-0001") is None
    assert repo.lookup("2021-0009").display_name == "Ana Cruz"
    assert col.count_documents({}) == 2


def test_rename_with_new_name(store):
    repo, _ = store

    repo.rename("2021-0001", "2021-0009", "Ana Dela Cruz")

    assert repo.lookup("2021-0009").display_name == "Ana Dela Cruz"


def test_rename_of_missing_id_is_not_found(store):
    repo, _ = store

    with pytest.raises(NotFoundError):
        repo.rename("nope", "2021-0009")


def test_rename_rolls_back_new_id_when_old_delete_fails(store):
    repo, col = store
    repo._col = FailingDelete(col, "2021-0001")

    with pytest.raises(ExternalServiceError):
        repo.rename("2021-0001", "2021-0009")

    assert col.find_one({"_id": "2021-0009"}) is None
    assert col.find_one({"_id": "2021-0001"})["name"] == "Ana Cruz"


def test_update_name_sets_name_or_raises_not_found(store):
    repo, _ = store

    repo.update_name("2021-0002", "Benjamin Reyes")

    assert repo.lookup("2021-0002").display_name == "Benjamin Reyes"
    with pytest.raises(NotFoundError):
        repo.update_name("nope", "Someone")
