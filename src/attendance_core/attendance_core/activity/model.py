from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Severity


@dataclass(frozen=True)
class ActivityLogEntry:
    category: str
    action: str
    severity: Severity
    message: str
    actor_name: str
    actor_role: str
    timestamp: datetime
