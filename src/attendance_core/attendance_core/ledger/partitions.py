from __future__ import annotations

import logging
from typing import Sequence

from ..core.constants import LEDGER_COLUMNS, LEDGER_HEADER, LEDGER_HEADER_RANGE
from .repository import LedgerService, PartitionExistsError

logger = logging.getLogger(__name__)


class LedgerPartitionManager:
    """Ensure-or-create access to day partitions of one ledger.

    No lock guards the check-then-create in ``ensure_partition``. Two callers
    may both see the partition missing; the loser's create fails with
    ``PartitionExistsError``, which is swallowed, and both write the same
    header row, so the partition converges to one header either way.
    """

    def __init__(self, ledger: LedgerService, ledger_id: str, *, header: Sequence[str] = LEDGER_HEADER):
        self._ledger = ledger
        self._ledger_id = ledger_id
        self._header = list(header)

    @property
    def header(self) -> list[str]:
        return list(self._header)

    def list_partitions(self) -> list[str]:
        return list(self._ledger.get_partitions(self._ledger_id))

    def ensure_partition(self, key: str) -> None:
        if key in self._ledger.get_partitions(self._ledger_id):
            return

        try:
            self._ledger.create_partition(self._ledger_id, key)
            logger.info("Created ledger partition %s", key)
        except PartitionExistsError:
            logger.debug("Partition %s created concurrently by another request", key)

        self._ledger.write_row(self._ledger_id, key, LEDGER_HEADER_RANGE, self._header)

    def append_row(self, key: str, row: Sequence[str]) -> None:
        self._ledger.append_row(self._ledger_id, key, LEDGER_COLUMNS, list(row))

    def read_rows(self, key: str) -> list[list[str]]:
        """All rows of the partition, header included. Raises NotFoundError if absent."""
        return [list(r) for r in self._ledger.read_range(self._ledger_id, key, LEDGER_COLUMNS)]
