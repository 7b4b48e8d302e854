from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from .model import VerificationCode


class VerificationCodeRepository(Protocol):
    def save(self, code: VerificationCode) -> None:
        """Store ``code``, replacing any previous code of the same subject."""
        raise NotImplementedError

    def get(self, subject_id: str) -> Optional[VerificationCode]:
        raise NotImplementedError

    def mark_sent(self, subject_id: str, code: str, sent_at: datetime) -> None:
        raise NotImplementedError

    def increment_attempts(self, subject_id: str) -> Optional[int]:
        """Atomically add one attempt; return the post-increment count, or None if gone."""
        raise NotImplementedError

    def mark_verified(self, subject_id: str, code: str, verified_at: datetime) -> bool:
        """Flag the live ``code`` as verified; False if it was deleted or replaced meanwhile."""
        raise NotImplementedError

    def delete(self, subject_id: str) -> None:
        raise NotImplementedError
