from __future__ import annotations

import logging
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import format_timestamp, now_utc, resolve_partition_key
from ..common.validators import require_non_empty
from ..core.constants import MISSING_CELL
from ..core.enums import STAFF_ROLES
from ..core.exceptions import NotFoundError, ValidationError
from ..ledger.partitions import LedgerPartitionManager
from ..sessions.gate import check_role
from ..sessions.model import SessionClaims
from ..whitelist.repository import WhitelistRepository
from .model import AttendanceAggregate, AttendanceRecord, CheckIn, RecordResult
from .repository import AggregateRepository

logger = logging.getLogger(__name__)

_reconcile_pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="attendance-reconcile")


class AttendanceRecorder:
    """Use case: record a check-in into the day's ledger partition.

    The ledger append is the durability boundary. The aggregate increment runs
    concurrently on ``executor`` and is advisory: its failure is logged and
    never reaches the caller, and the caller never waits for it.
    """

    def __init__(
        self,
        partitions: LedgerPartitionManager,
        whitelist: WhitelistRepository,
        aggregates: AggregateRepository,
        *,
        verify_whitelist: bool = True,
        executor: Executor | None = None,
    ):
        self._partitions = partitions
        self._whitelist = whitelist
        self._aggregates = aggregates
        self._verify_whitelist = verify_whitelist
        self._executor = executor or _reconcile_pool

    def record_attendance(
        self,
        check_in: CheckIn,
        caller: Optional[SessionClaims],
        *,
        now: datetime | None = None,
    ) -> RecordResult:
        # Authorizing
        check_role(caller, STAFF_ROLES)

        # Validating
        now = now or now_utc()
        name = require_non_empty(check_in.name, "Name")
        identity_id = require_non_empty(check_in.identity_id, "ID Number")
        year_level = require_non_empty(check_in.year_level, "Year Level")
        section = require_non_empty(check_in.section, "Section")
        key = resolve_partition_key(check_in.sheet_date, now=now)

        if self._verify_whitelist and self._whitelist.lookup(identity_id) is None:
            raise NotFoundError("ID not whitelisted")

        # PartitionReady
        self._partitions.ensure_partition(key)

        # Appended + Reconciled, dispatched together
        reconcile = self._executor.submit(self._reconcile, key)
        try:
            self._partitions.append_row(key, [name, identity_id, year_level, section, format_timestamp(now)])
        except Exception:
            logger.exception("Appending check-in for %s to %s failed", identity_id, key)
            raise

        logger.info("Recorded attendance for %s in %s", identity_id, key)
        return RecordResult(success=True, partition_key=key, reconcile=reconcile)

    def _reconcile(self, key: str) -> None:
        try:
            self._aggregates.increment(key)
        except Exception:
            logger.exception("Failed to update real-time attendance stats for %s", key)

    def get_attendance(self, sheet_date: str, caller: Optional[SessionClaims]) -> list[AttendanceRecord]:
        check_role(caller, STAFF_ROLES)
        if not sheet_date:
            raise ValidationError("Missing sheetDate")
        key = resolve_partition_key(sheet_date)

        try:
            rows = self._partitions.read_rows(key)
        except NotFoundError:
            return []

        return [self._to_record(key, index, row) for index, row in enumerate(rows[1:], start=2)]

    def list_partitions(self, caller: Optional[SessionClaims]) -> list[str]:
        check_role(caller, STAFF_ROLES)
        return self._partitions.list_partitions()

    def get_aggregate(self, sheet_date: str, caller: Optional[SessionClaims]) -> AttendanceAggregate:
        check_role(caller, STAFF_ROLES)
        key = resolve_partition_key(sheet_date)
        return self._aggregates.get(key) or AttendanceAggregate(partition_key=key, count=0)

    @staticmethod
    def _to_record(key: str, row_number: int, row: list) -> AttendanceRecord:
        def cell(i: int) -> str:
            value = row[i] if i < len(row) else None
            return str(value) if value not in (None, "") else MISSING_CELL

        return AttendanceRecord(
            id=f"{key}_{row_number}",
            partition_key=key,
            name=cell(0),
            identity_id=cell(1),
            year_level=cell(2),
            section=cell(3),
            timestamp=cell(4),
        )
