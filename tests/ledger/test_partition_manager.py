import threading

import pytest

from src.attendance_core.attendance_core.core.constants import LEDGER_HEADER
from src.attendance_core.attendance_core.core.exceptions import NotFoundError, ValidationError
from src.attendance_core.attendance_core.ledger.mysql_ledger_service import parse_range
from src.attendance_core.attendance_core.ledger.partitions import LedgerPartitionManager
from tests.fakes import InMemoryLedger

LEDGER_ID = "ledger-1"


class StaleListingLedger(InMemoryLedger):
    """Always reports no partitions, as a second request racing the first would see."""

    def get_partitions(self, ledger_id):
        return []


class BarrierLedger(InMemoryLedger):
    def __init__(self, parties):
        super().__init__()
        self.barrier = threading.Barrier(parties, timeout=5)

    def get_partitions(self, ledger_id):
        names = super().get_partitions(ledger_id)
        self.barrier.wait()
        return names


def test_ensure_partition_creates_partition_with_header():
    ledger = InMemoryLedger()
    manager = LedgerPartitionManager(ledger, LEDGER_ID)

    manager.ensure_partition("2025_12_09")

    assert manager.list_partitions() == ["2025_12_09"]
    assert manager.read_rows("2025_12_09") == [LEDGER_HEADER]


def test_ensure_partition_is_noop_when_present():
    ledger = InMemoryLedger()
    manager = LedgerPartitionManager(ledger, LEDGER_ID)
    manager.ensure_partition("2025_12_09")

    manager.ensure_partition("2025_12_09")

    assert ledger.create_calls == 1


def test_losing_creator_swallows_conflict_and_keeps_one_header():
    ledger = StaleListingLedger()
    manager = LedgerPartitionManager(ledger, LEDGER_ID)

    manager.ensure_partition("2025_12_09")
    manager.append_row("2025_12_09", ["Ana", "2021-0001", "3", "A", "12/9/2025, 9:30:00 AM"])
    manager.ensure_partition("2025_12_09")
    manager.append_row("2025_12_09", ["Ben", "2021-0002", "3", "B", "12/9/2025, 9:31:00 AM"])

    rows = manager.read_rows("2025_12_09")
    assert ledger.create_calls == 2
    assert rows[0] == LEDGER_HEADER
    assert [r[0] for r in rows[1:]] == ["Ana", "Ben"]
    assert rows.count(LEDGER_HEADER) == 1


def test_concurrent_first_check_ins_converge():
    ledger = BarrierLedger(parties=2)
    manager = LedgerPartitionManager(ledger, LEDGER_ID)
    errors = []

    def check_in(name):
        try:
            manager.ensure_partition("2025_12_09")
            manager.append_row("2025_12_09", [name, "id", "1", "A", "ts"])
        except Exception as e:  # surfaced by the assertion below
            errors.append(e)

    threads = [threading.Thread(target=check_in, args=(n,)) for n in ("Ana", "Ben")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    rows = manager.read_rows("2025_12_09")
    assert errors == []
    assert ledger.create_calls == 2
    assert rows[0] == LEDGER_HEADER
    assert sorted(r[0] for r in rows[1:]) == ["Ana", "Ben"]


def test_read_rows_of_absent_partition_raises_not_found():
    manager = LedgerPartitionManager(InMemoryLedger(), LEDGER_ID)

    with pytest.raises(NotFoundError):
        manager.read_rows("2025_01_01")


def test_parse_range():
    assert parse_range("A1:E1") == (1, 5)
    assert parse_range("A:E") == (None, 5)
    assert parse_range("b2") == (2, 1)

    with pytest.raises(ValidationError):
        parse_range("E1:A1")
    with pytest.raises(ValidationError):
        parse_range("1:2")
