from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Role


@dataclass(frozen=True)
class SessionClaims:
    """Decoded contents of a verified session token."""

    subject_id: str
    role: Role
    issued_at: datetime
    expires_at: datetime
