from __future__ import annotations

from typing import Protocol, Sequence

from ..core.exceptions import ConflictError


class PartitionExistsError(ConflictError):
    """Raised by ``create_partition`` when the name is already taken."""


class LedgerService(Protocol):
    """Contract of the external tabular ledger (one partition per day).

    Ranges use spreadsheet notation: ``"A1:E1"`` addresses one row, ``"A:E"``
    addresses whole columns. ``read_range`` raises ``NotFoundError`` for an
    unknown partition; callers translate that, never treat it as a 500.
    """

    def get_partitions(self, ledger_id: str) -> Sequence[str]:
        raise NotImplementedError

    def create_partition(self, ledger_id: str, name: str) -> None:
        raise NotImplementedError

    def write_row(self, ledger_id: str, partition: str, range_: str, values: Sequence[str]) -> None:
        raise NotImplementedError

    def append_row(self, ledger_id: str, partition: str, range_: str, values: Sequence[str]) -> None:
        raise NotImplementedError

    def read_range(self, ledger_id: str, partition: str, range_: str) -> Sequence[Sequence[str]]:
        raise NotImplementedError
