from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import VerificationReason


@dataclass(frozen=True)
class VerificationCode:
    """The single live one-time code of a subject (keyed by subject_id)."""

    subject_id: str
    code: str
    email: str
    expires_at: datetime
    created_at: datetime
    attempts: int = 0
    verified: bool = False
    verified_at: Optional[datetime] = None
    sent_at: Optional[datetime] = None


_MESSAGES = {
    VerificationReason.EXPIRED_OR_INVALID: "Code expired or invalid.",
    VerificationReason.EXPIRED: "Code has expired.",
    VerificationReason.INCORRECT: "Incorrect code.",
    VerificationReason.LOCKED: "Too many failed attempts. Request a new code.",
}


@dataclass(frozen=True)
class VerificationResult:
    success: bool
    reason: Optional[VerificationReason] = None

    @property
    def message(self) -> str:
        return _MESSAGES[self.reason] if self.reason else "Code verified."

    def to_dict(self) -> dict:
        data = {"success": self.success, "message": self.message}
        if self.reason:
            data["reason"] = self.reason.value
        return data


@dataclass(frozen=True)
class IssueResult:
    success: bool
    message: Optional[str] = None
