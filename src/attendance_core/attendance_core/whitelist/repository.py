from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from .model import WhitelistEntry


class WhitelistRepository(Protocol):
    """Key/value store of identity id -> authorized display name.

    ``rename`` must never leave both ids present once it returns or raises:
    a collision raises ``ConflictError`` before anything is written.
    """

    def lookup(self, identity_id: str) -> Optional[WhitelistEntry]:
        raise NotImplementedError

    def list_all(self) -> Sequence[WhitelistEntry]:
        raise NotImplementedError

    def upsert_many(self, entries: Iterable[WhitelistEntry]) -> int:
        raise NotImplementedError

    def delete_many(self, identity_ids: Iterable[str]) -> int:
        raise NotImplementedError

    def rename(self, old_id: str, new_id: str, display_name: Optional[str] = None) -> WhitelistEntry:
        raise NotImplementedError

    def update_name(self, identity_id: str, display_name: str) -> None:
        raise NotImplementedError
