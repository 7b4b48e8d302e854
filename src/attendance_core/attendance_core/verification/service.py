from __future__ import annotations

import hmac
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable

from ..common.datetime_utils import now_utc
from ..common.validators import require_non_empty
from ..core.constants import (
    CODE_MAX_ATTEMPTS,
    CODE_RESEND_COOLDOWN_SECONDS,
    CODE_TTL_MINUTES,
)
from ..core.enums import VerificationReason
from ..core.exceptions import RateLimitedError
from .mailer import Mailer
from .model import IssueResult, VerificationCode, VerificationResult
from .repository import VerificationCodeRepository

logger = logging.getLogger(__name__)

EMAIL_SUBJECT = "Verification Code"
EMAIL_TEMPLATE = """
<div style="font-family: sans-serif; padding: 20px; color: #333;">
  <h3 style="color: #444;">Verification Code</h3>
  <p>Here is the code you requested:</p>
  <div style="font-size: 28px; font-weight: bold; margin: 20px 0; letter-spacing: 3px; color: #2563eb;">
    {code}
  </div>
  <p style="font-size: 14px; color: #666;">This code expires in {minutes} minutes.</p>
</div>
"""


def generate_code() -> str:
    """Uniformly random 6-digit code without a leading zero."""
    return str(100000 + secrets.randbelow(900000))


class VerificationCodeService:
    """Issue, check and consume one-time codes (2FA and password recovery).

    NoCode -> Issued -> Consumed | Expired | Locked. Expiry is checked lazily
    on ``verify``; nothing sweeps old codes.
    """

    def __init__(
        self,
        codes: VerificationCodeRepository,
        mailer: Mailer,
        *,
        ttl: timedelta = timedelta(minutes=CODE_TTL_MINUTES),
        max_attempts: int = CODE_MAX_ATTEMPTS,
        resend_cooldown: timedelta = timedelta(seconds=CODE_RESEND_COOLDOWN_SECONDS),
        code_generator: Callable[[], str] = generate_code,
    ):
        self._codes = codes
        self._mailer = mailer
        self._ttl = ttl
        self._max_attempts = int(max_attempts)
        self._resend_cooldown = resend_cooldown
        self._generate = code_generator

    def issue(self, subject_id: str, email: str, *, now: datetime | None = None) -> IssueResult:
        subject_id = require_non_empty(subject_id, "Subject ID")
        email = require_non_empty(email, "Email")
        now = now or now_utc()

        previous = self._codes.get(subject_id)
        # Only a delivered code starts the cooldown; a failed send may be retried at once.
        if previous and previous.sent_at and now - previous.sent_at < self._resend_cooldown:
            raise RateLimitedError("Please wait before requesting another code.")

        code = self._generate()
        # Overwrites any previous code: at most one live code per subject.
        self._codes.save(
            VerificationCode(
                subject_id=subject_id,
                code=code,
                email=email,
                expires_at=now + self._ttl,
                created_at=now,
            )
        )

        try:
            minutes = int(self._ttl.total_seconds() // 60)
            self._mailer.send(email, EMAIL_SUBJECT, EMAIL_TEMPLATE.format(code=code, minutes=minutes))
        except Exception:
            # The stored code stays; a retry overwrites it.
            logger.exception("Failed to send verification email for %s", subject_id)
            return IssueResult(
                success=False,
                message="Failed to send verification email. Please try again or contact support.",
            )
        self._codes.mark_sent(subject_id, code, now)
        return IssueResult(success=True)

    def verify(self, subject_id: str, input_code: str, *, now: datetime | None = None) -> VerificationResult:
        now = now or now_utc()
        stored = self._codes.get(subject_id) if subject_id else None
        if stored is None:
            return VerificationResult(False, VerificationReason.EXPIRED_OR_INVALID)

        if now > stored.expires_at:
            return VerificationResult(False, VerificationReason.EXPIRED)

        if not hmac.compare_digest(stored.code.encode(), str(input_code or "").strip().encode()):
            attempts = self._codes.increment_attempts(subject_id)
            if attempts is None:
                return VerificationResult(False, VerificationReason.EXPIRED_OR_INVALID)
            if attempts >= self._max_attempts:
                self._codes.delete(subject_id)
                logger.warning("Verification code for %s locked after %d attempts", subject_id, attempts)
                return VerificationResult(False, VerificationReason.LOCKED)
            return VerificationResult(False, VerificationReason.INCORRECT)

        # Kept until the gated effect is applied; see consume().
        if not self._codes.mark_verified(subject_id, stored.code, now):
            # Locked out or replaced between the read and the update.
            return VerificationResult(False, VerificationReason.EXPIRED_OR_INVALID)
        return VerificationResult(True)

    def consume(self, subject_id: str) -> None:
        """Delete the code after the effect it gated has been applied."""
        self._codes.delete(subject_id)
