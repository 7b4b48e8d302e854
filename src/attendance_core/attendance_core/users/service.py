from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from werkzeug.security import generate_password_hash

from ..activity.repository import ActivityLogger
from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role, Severity
from ..core.exceptions import AuthenticationError, NotFoundError
from ..verification.model import IssueResult, VerificationResult
from ..verification.service import VerificationCodeService
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a code-confirmed login; ``role`` is set only on success."""

    verification: VerificationResult
    uid: str
    role: Optional[Role] = None


class AccountService:
    """Use case: code-confirmed login and password recovery."""

    def __init__(self, users: UserRepository, codes: VerificationCodeService, activity: ActivityLogger):
        self._users = users
        self._codes = codes
        self._activity = activity

    def request_code(self, uid: str) -> IssueResult:
        uid = require_non_empty(uid, "User ID")
        user = self._users.get_by_uid(uid)
        if not user or not user.email:
            raise NotFoundError("User not found")
        return self._codes.issue(uid, user.email)

    def login_with_code(self, uid: str, code: str) -> LoginResult:
        """Check the code and resolve the role the new session should carry.

        The code is consumed here; the caller issues the session token.
        """
        uid = require_non_empty(uid, "User ID")
        result = self._codes.verify(uid, code)
        if not result.success:
            return LoginResult(verification=result, uid=uid)

        user = self._users.get_by_uid(uid)
        self._codes.consume(uid)
        if user is None:
            raise AuthenticationError("Unauthorized")

        logger.info("Login confirmed | UID: %s | Role: %s", uid, user.role.value)
        return LoginResult(verification=result, uid=uid, role=user.role)

    def reset_password(self, uid: str, code: str, new_password: str) -> VerificationResult:
        uid = require_non_empty(uid, "User ID")
        require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)

        result = self._codes.verify(uid, code)
        if not result.success:
            return result

        if not self._users.set_password_hash(uid, generate_password_hash(new_password)):
            raise NotFoundError("User not found")
        # Consumed only after the password is stored, so the code cannot be replayed.
        self._codes.consume(uid)

        self._activity.record(
            action="UPDATE_PASSWORD",
            message=f'User "{uid}" password was updated via verification code',
            severity=Severity.HIGH,
            actor_name=uid,
            actor_role="user",
        )
        return result
