from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role carried by a session token."""

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

    @classmethod
    def normalize(cls, raw: str | None) -> "Role":
        """Map any raw role string onto a known role, defaulting to USER."""
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return cls.USER


STAFF_ROLES = (Role.ADMIN, Role.MODERATOR)


class VerificationReason(str, Enum):
    """Why a verification attempt failed."""

    EXPIRED_OR_INVALID = "expired_or_invalid"
    EXPIRED = "expired"
    INCORRECT = "incorrect"
    LOCKED = "locked"


class Severity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
