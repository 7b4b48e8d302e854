from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class UserAccount:
    """Portal member as stored in the ``users`` collection.

    Note: Plain data object (no store access code here).
    """

    uid: str
    email: str
    name: str
    role: Role
    password_hash: Optional[str] = None
