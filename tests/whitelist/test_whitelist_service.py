from datetime import datetime, timedelta, timezone

import pytest

from src.attendance_core.attendance_core.activity.repository import ActivityLogger
from src.attendance_core.attendance_core.core.enums import Role, Severity
from src.attendance_core.attendance_core.core.exceptions import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.attendance_core.attendance_core.sessions.model import SessionClaims
from src.attendance_core.attendance_core.whitelist.service import WhitelistService
from tests.fakes import InMemoryActivity, InMemoryWhitelist


def claims(role):
    issued = datetime(2025, 12, 9, tzinfo=timezone.utc)
    return SessionClaims(subject_id="uid-1", role=role, issued_at=issued, expires_at=issued + timedelta(days=7))


ADMIN = claims(Role.ADMIN)


def make_service(entries=None, *, activity=None):
    whitelist = InMemoryWhitelist(entries or {"2021-0001": "Ana Cruz", "2021-0002": "Ben Reyes"})
    activity = activity or InMemoryActivity()
    return WhitelistService(whitelist, ActivityLogger(activity)), whitelist, activity


def test_lookup_reflects_latest_upsert():
    service, _, _ = make_service()

    service.add_entries(ADMIN, [{"id": "2021-0001", "name": "Ana Dela Cruz"}])

    assert service.lookup("2021-0001").display_name == "Ana Dela Cruz"


def test_add_entries_skips_blank_ids_and_defaults_names():
    service, whitelist, activity = make_service()

    count = service.add_entries(ADMIN, [{"id": " 2022-0003 "}, {"id": ""}, {"name": "no id"}], actor_name="Registrar")

    assert count == 1
    assert whitelist.lookup("2022-0003").display_name == "Unknown Name"
    assert activity.entries[0].action == "Whitelist Batch Add"
    assert activity.entries[0].actor_name == "Registrar"


def test_add_entries_rejects_empty_batch():
    service, _, _ = make_service()

    with pytest.raises(ValidationError):
        service.add_entries(ADMIN, [])


def test_delete_entries_removes_ids():
    service, whitelist, activity = make_service()

    removed = service.delete_entries(ADMIN, ["2021-0001", "missing"])

    assert removed == 1
    assert service.lookup("2021-0001") is None
    assert "2021-0002" in whitelist.entries
    assert "2021-0001, missing" in activity.entries[0].message


def test_rename_moves_entry():
    service, _, activity = make_service()

    service.update_entry(ADMIN, "2021-0001", new_id="2021-0009")

    assert service.lookup("2021-0001") is None
    assert service.lookup("2021-0009").display_name == "Ana Cruz"
    assert activity.entries[0].severity == Severity.HIGH


def test_rename_onto_existing_id_conflicts_and_changes_nothing():
    service, whitelist, activity = make_service()
    before = dict(whitelist.entries)

    with pytest.raises(ConflictError):
        service.update_entry(ADMIN, "2021-0001", new_id="2021-0002")

    assert whitelist.entries == before
    assert activity.entries == []


def test_rename_of_missing_id_is_not_found():
    service, _, _ = make_service()

    with pytest.raises(NotFoundError):
        service.update_entry(ADMIN, "nope", new_id="2021-0009")


def test_update_name_only():
    service, _, activity = make_service()

    service.update_entry(ADMIN, "2021-0002", new_id="2021-0002", name="Benjamin Reyes")

    assert service.lookup("2021-0002").display_name == "Benjamin Reyes"
    assert activity.entries[0].action == "Whitelist Edit Name"


def test_maintenance_is_admin_only():
    service, _, _ = make_service()

    with pytest.raises(AuthorizationError):
        service.add_entries(claims(Role.MODERATOR), [{"id": "x", "name": "y"}])
    with pytest.raises(AuthorizationError):
        service.list_entries(claims(Role.USER))


def test_activity_log_failure_does_not_fail_the_change():
    service, whitelist, _ = make_service(activity=InMemoryActivity(fail=True))

    service.delete_entries(ADMIN, ["2021-0001"])

    assert "2021-0001" not in whitelist.entries


@pytest.mark.parametrize(
    "identity_id, full_name, allowed, error",
    [
        ("2021-0001", "  ana CRUZ ", True, None),
        ("2021-0001", "Ana Santos", False, "Name does not match whitelist"),
        ("9999-0000", "Ana Cruz", False, "ID not whitelisted"),
        ("", "Ana Cruz", False, "Invalid ID format"),
        (None, "Ana Cruz", False, "Invalid ID format"),
    ],
)
def test_check_whitelist(identity_id, full_name, allowed, error):
    service, _, _ = make_service()

    result = service.check_whitelist(identity_id, full_name)

    assert result.allowed is allowed
    assert result.error == error
    if allowed:
        assert result.name == "Ana Cruz"


def test_check_whitelist_reports_store_failure():
    class BrokenWhitelist(InMemoryWhitelist):
        def lookup(self, identity_id):
            raise RuntimeError("down")

    service = WhitelistService(BrokenWhitelist(), ActivityLogger(InMemoryActivity()))

    assert service.check_whitelist("2021-0001", "Ana").error == "System error"
