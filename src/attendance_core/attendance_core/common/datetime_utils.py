from __future__ import annotations

from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from ..core.constants import LOCAL_TIMEZONE
from ..core.exceptions import ValidationError

_LOCAL_TZ = ZoneInfo(LOCAL_TIMEZONE)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def now_local() -> datetime:
    """Current time in the portal's fixed local time zone."""
    return now_utc().astimezone(_LOCAL_TZ)


def partition_key_for(value: date) -> str:
    """Ledger partition naming convention: 2025-12-09 -> '2025_12_09'."""
    return value.strftime("%Y_%m_%d")


def resolve_partition_key(sheet_date: str | None, *, now: datetime | None = None) -> str:
    """Partition key for a caller-supplied date, or today in local time."""
    if sheet_date:
        return partition_key_for(parse_iso_date(sheet_date.replace("_", "-")))
    now = now or now_local()
    return partition_key_for(now.astimezone(_LOCAL_TZ).date())


def format_timestamp(moment: datetime) -> str:
    """Local, human-readable check-in stamp, e.g. '12/9/2025, 3:04:05 PM'."""
    local = moment.astimezone(_LOCAL_TZ)
    hour = local.hour % 12 or 12
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {'AM' if local.hour < 12 else 'PM'}"
    )
