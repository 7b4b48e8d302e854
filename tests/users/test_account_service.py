import pytest
from werkzeug.security import check_password_hash

from src.attendance_core.attendance_core.activity.repository import ActivityLogger
from src.attendance_core.attendance_core.core.enums import Role, VerificationReason
from src.attendance_core.attendance_core.core.exceptions import NotFoundError, ValidationError
from src.attendance_core.attendance_core.users.model import UserAccount
from src.attendance_core.attendance_core.users.service import AccountService
from src.attendance_core.attendance_core.verification.service import VerificationCodeService
from tests.fakes import InMemoryActivity, InMemoryCodes, InMemoryUsers, RecordingMailer

CODE = "482913"


def make_service():
    users = InMemoryUsers(
        [
            UserAccount(uid="uid-admin", email="admin@example.com", name="Admin", role=Role.ADMIN),
            UserAccount(uid="uid-nomail", email="", name="No Mail", role=Role.USER),
        ]
    )
    mailer = RecordingMailer()
    codes = VerificationCodeService(InMemoryCodes(), mailer, code_generator=lambda: CODE)
    activity = InMemoryActivity()
    return AccountService(users, codes, ActivityLogger(activity)), users, mailer, activity


def test_request_code_mails_the_user():
    service, _, mailer, _ = make_service()

    result = service.request_code("uid-admin")

    assert result.success is True
    assert mailer.sent[0][0] == "admin@example.com"


def test_request_code_for_unknown_or_mailless_user():
    service, _, _, _ = make_service()

    with pytest.raises(NotFoundError):
        service.request_code("ghost")
    with pytest.raises(NotFoundError):
        service.request_code("uid-nomail")


def test_login_with_code_returns_stored_role_and_consumes_code():
    service, _, _, _ = make_service()
    service.request_code("uid-admin")

    result = service.login_with_code("uid-admin", CODE)
    replay = service.login_with_code("uid-admin", CODE)

    assert result.verification.success is True
    assert result.role == Role.ADMIN
    assert replay.verification.reason == VerificationReason.EXPIRED_OR_INVALID
    assert replay.role is None


def test_login_with_wrong_code_fails():
    service, _, _, _ = make_service()
    service.request_code("uid-admin")

    result = service.login_with_code("uid-admin", "000000")

    assert result.verification.reason == VerificationReason.INCORRECT
    assert result.role is None


def test_reset_password_stores_hash_and_blocks_replay():
    service, users, _, activity = make_service()
    service.request_code("uid-admin")

    result = service.reset_password("uid-admin", CODE, "n3w-secret")

    assert result.success is True
    assert check_password_hash(users.get_by_uid("uid-admin").password_hash, "n3w-secret")
    assert activity.entries[0].action == "UPDATE_PASSWORD"
    replay = service.reset_password("uid-admin", CODE, "another-one")
    assert replay.reason == VerificationReason.EXPIRED_OR_INVALID
    assert check_password_hash(users.get_by_uid("uid-admin").password_hash, "n3w-secret")


def test_reset_password_rejects_short_password_before_checking_code():
    service, _, _, _ = make_service()
    service.request_code("uid-admin")

    with pytest.raises(ValidationError):
        service.reset_password("uid-admin", CODE, "123")

    assert service.login_with_code("uid-admin", CODE).verification.success is True
