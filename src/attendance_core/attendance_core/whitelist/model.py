from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class WhitelistEntry:
    """Identity id authorized to register, with the name it must match."""

    identity_id: str
    display_name: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class WhitelistCheck:
    allowed: bool
    name: Optional[str] = None
    error: Optional[str] = None
