from __future__ import annotations

import json
import logging
import re
from typing import Optional, Sequence, Tuple

import mysql.connector

from ..core.exceptions import ExternalServiceError, NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import DUPLICATE_KEY_ERRNO, db_cursor, fetchall, fetchone
from .repository import LedgerService, PartitionExistsError

logger = logging.getLogger(__name__)

_RANGE_RE = re.compile(r"^([A-Z]+)(\d*)(?::([A-Z]+)(\d*))?$")


def _column_index(letters: str) -> int:
    index = 0
    for ch in letters:
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index


def parse_range(range_: str) -> Tuple[Optional[int], int]:
    """Return ``(start_row, column_count)`` for ``"A1:E1"`` / ``"A:E"`` ranges."""
    m = _RANGE_RE.match((range_ or "").strip().upper())
    if not m:
        raise ValidationError(f"Invalid ledger range: {range_!r}")
    first_col, first_row, last_col, _ = m.groups()
    last_col = last_col or first_col
    width = _column_index(last_col) - _column_index(first_col) + 1
    if width <= 0:
        raise ValidationError(f"Invalid ledger range: {range_!r}")
    return (int(first_row) if first_row else None), width


class MySQLLedgerService(LedgerService):
    """Ledger service backed by two MySQL tables (see database/schema.sql).

    The (ledger_id, name) primary key on ``ledger_partitions`` makes partition
    creation a conditional create: a second creator gets ``PartitionExistsError``.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_partitions(self, ledger_id: str) -> Sequence[str]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "SELECT name FROM ledger_partitions WHERE ledger_id=%s ORDER BY name",
                    (ledger_id,),
                )
                return [r["name"] for r in fetchall(cur)]
        except mysql.connector.Error as e:
            logger.error("Listing partitions of ledger %s failed: %s", ledger_id, e)
            raise ExternalServiceError("Ledger service unavailable") from e

    def create_partition(self, ledger_id: str, name: str) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "INSERT INTO ledger_partitions(ledger_id, name) VALUES(%s,%s)",
                    (ledger_id, name),
                )
        except mysql.connector.IntegrityError as e:
            if e.errno == DUPLICATE_KEY_ERRNO:
                raise PartitionExistsError(f"Partition {name!r} already exists") from e
            logger.error("Creating partition %s failed: %s", name, e)
            raise ExternalServiceError("Ledger service unavailable") from e
        except mysql.connector.Error as e:
            logger.error("Creating partition %s failed: %s", name, e)
            raise ExternalServiceError("Ledger service unavailable") from e

    def write_row(self, ledger_id: str, partition: str, range_: str, values: Sequence[str]) -> None:
        start_row, width = parse_range(range_)
        if start_row is None:
            raise ValidationError("write_row needs a range with a row number, e.g. 'A1:E1'")
        cells = json.dumps(list(values)[:width])
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                self._require_partition(cur, ledger_id, partition)
                cur.execute(
                    """
                    INSERT INTO ledger_rows(ledger_id, partition_name, pinned_row, cells)
                    VALUES(%s,%s,%s,%s)
                    ON DUPLICATE KEY UPDATE cells=VALUES(cells)
                    """,
                    (ledger_id, partition, start_row, cells),
                )
        except mysql.connector.Error as e:
            logger.error("Writing %s!%s failed: %s", partition, range_, e)
            raise ExternalServiceError("Ledger service unavailable") from e

    def append_row(self, ledger_id: str, partition: str, range_: str, values: Sequence[str]) -> None:
        _, width = parse_range(range_)
        cells = json.dumps(list(values)[:width])
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                self._require_partition(cur, ledger_id, partition)
                cur.execute(
                    """
                    INSERT INTO ledger_rows(ledger_id, partition_name, pinned_row, cells)
                    VALUES(%s,%s,NULL,%s)
                    """,
                    (ledger_id, partition, cells),
                )
        except mysql.connector.Error as e:
            logger.error("Appending to %s failed: %s", partition, e)
            raise ExternalServiceError("Ledger service unavailable") from e

    def read_range(self, ledger_id: str, partition: str, range_: str) -> Sequence[Sequence[str]]:
        _, width = parse_range(range_)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                self._require_partition(cur, ledger_id, partition)
                # Pinned rows (the header) come first, then appended rows in insertion order.
                cur.execute(
                    """
                    SELECT cells
                    FROM ledger_rows
                    WHERE ledger_id=%s AND partition_name=%s
                    ORDER BY pinned_row IS NULL, pinned_row, row_id
                    """,
                    (ledger_id, partition),
                )
                rows = fetchall(cur)
        except mysql.connector.Error as e:
            logger.error("Reading %s!%s failed: %s", partition, range_, e)
            raise ExternalServiceError("Ledger service unavailable") from e
        return [list(json.loads(r["cells"]))[:width] for r in rows]

    def _require_partition(self, cur, ledger_id: str, partition: str) -> None:
        cur.execute(
            "SELECT name FROM ledger_partitions WHERE ledger_id=%s AND name=%s",
            (ledger_id, partition),
        )
        if not fetchone(cur):
            raise NotFoundError(f"Partition {partition!r} not found")
