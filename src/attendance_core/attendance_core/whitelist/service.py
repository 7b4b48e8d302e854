from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

from ..activity.repository import ActivityLogger
from ..common.validators import require_non_empty, require_non_empty_list
from ..core.constants import UNKNOWN_NAME
from ..core.enums import Role, Severity
from ..core.exceptions import ValidationError
from ..sessions.gate import check_role
from ..sessions.model import SessionClaims
from .model import WhitelistCheck, WhitelistEntry
from .repository import WhitelistRepository

logger = logging.getLogger(__name__)


class WhitelistService:
    """Use case: who may register, and admin maintenance of that list."""

    def __init__(self, whitelist: WhitelistRepository, activity: ActivityLogger):
        self._whitelist = whitelist
        self._activity = activity

    def lookup(self, identity_id: str) -> Optional[WhitelistEntry]:
        return self._whitelist.lookup(identity_id)

    def check_whitelist(self, identity_id: str, full_name: str) -> WhitelistCheck:
        """Registration gate: the id must exist and the name match, ignoring case."""
        if not isinstance(identity_id, str) or not identity_id.strip():
            return WhitelistCheck(allowed=False, error="Invalid ID format")
        try:
            entry = self._whitelist.lookup(identity_id.strip())
        except Exception:
            logger.exception("Whitelist check failed for %s", identity_id)
            return WhitelistCheck(allowed=False, error="System error")

        if entry is None:
            return WhitelistCheck(allowed=False, error="ID not whitelisted")
        if entry.display_name.strip().lower() != (full_name or "").strip().lower():
            return WhitelistCheck(allowed=False, error="Name does not match whitelist")
        return WhitelistCheck(allowed=True, name=entry.display_name)

    def list_entries(self, caller: Optional[SessionClaims]) -> Sequence[WhitelistEntry]:
        check_role(caller, (Role.ADMIN,))
        return self._whitelist.list_all()

    def add_entries(self, caller: Optional[SessionClaims], entries: Iterable[Mapping], *, actor_name: str | None = None) -> int:
        check_role(caller, (Role.ADMIN,))
        entries = require_non_empty_list(entries, "entries")

        batch = []
        for raw in entries:
            identity_id = raw.get("id") if isinstance(raw, Mapping) else None
            if not isinstance(identity_id, str) or not identity_id.strip():
                continue
            name = raw.get("name")
            name = name.strip() if isinstance(name, str) and name.strip() else UNKNOWN_NAME
            batch.append(WhitelistEntry(identity_id=identity_id.strip(), display_name=name))

        count = self._whitelist.upsert_many(batch)
        if count:
            self._activity.record(
                action="Whitelist Batch Add",
                message=f"Added {count} students to whitelist.",
                actor_name=actor_name,
            )
        return count

    def delete_entries(self, caller: Optional[SessionClaims], identity_ids: Iterable[str], *, actor_name: str | None = None) -> int:
        check_role(caller, (Role.ADMIN,))
        ids = [i.strip() for i in require_non_empty_list(identity_ids, "ids") if isinstance(i, str) and i.strip()]
        if not ids:
            raise ValidationError("ids must contain at least one ID")

        removed = self._whitelist.delete_many(ids)
        self._activity.record(
            action="Whitelist Delete",
            message=f"Removed {len(ids)} students from whitelist: {', '.join(ids)}",
            actor_name=actor_name,
        )
        return removed

    def update_entry(
        self,
        caller: Optional[SessionClaims],
        old_id: str,
        *,
        new_id: str | None = None,
        name: str | None = None,
        actor_name: str | None = None,
    ) -> None:
        check_role(caller, (Role.ADMIN,))
        old_id = require_non_empty(old_id, "Original ID")
        new_id = new_id.strip() if isinstance(new_id, str) else None

        if new_id and new_id != old_id:
            self._whitelist.rename(old_id, new_id, name)
            self._activity.record(
                action="Whitelist Edit ID",
                message=f'Renamed Student ID from "{old_id}" to "{new_id}"',
                severity=Severity.HIGH,
                actor_name=actor_name,
            )
            return

        name = require_non_empty(name, "Name")
        self._whitelist.update_name(old_id, name)
        self._activity.record(
            action="Whitelist Edit Name",
            message=f'Updated name for Student ID "{old_id}" to "{name}"',
            severity=Severity.LOW,
            actor_name=actor_name,
        )
