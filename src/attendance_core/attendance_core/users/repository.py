from __future__ import annotations

from typing import Optional, Protocol

from .model import UserAccount


class UserRepository(Protocol):
    """Repository interface for UserAccount.

    Note (DIP): services depend on this interface, never on a concrete store.
    """

    def get_by_uid(self, uid: str) -> Optional[UserAccount]:
        raise NotImplementedError

    def set_password_hash(self, uid: str, password_hash: str) -> bool:
        raise NotImplementedError
