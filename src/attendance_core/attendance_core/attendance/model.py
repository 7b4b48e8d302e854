from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class CheckIn:
    """One check-in as submitted by a scanner (admin/moderator)."""

    name: str
    identity_id: str
    year_level: str
    section: str
    sheet_date: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """One ledger row of a day partition, addressed by ``{partition_key}_{row}``."""

    id: str
    partition_key: str
    name: str
    identity_id: str
    year_level: str
    section: str
    timestamp: str


@dataclass(frozen=True)
class AttendanceAggregate:
    """Advisory per-day counter; may drift from the ledger if an increment is lost."""

    partition_key: str
    count: int
    last_updated: Optional[datetime] = None


@dataclass(frozen=True)
class RecordResult:
    success: bool
    partition_key: str
    reconcile: Optional[Future] = field(default=None, repr=False, compare=False)
