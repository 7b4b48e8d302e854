from __future__ import annotations

from typing import Optional, Protocol

from .model import AttendanceAggregate


class AggregateRepository(Protocol):
    def increment(self, partition_key: str) -> None:
        """Atomically add one to the partition's count and stamp last_updated."""
        raise NotImplementedError

    def get(self, partition_key: str) -> Optional[AttendanceAggregate]:
        raise NotImplementedError
