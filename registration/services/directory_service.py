# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Member directory — the active-member view over the sheet.
Rebuilt from a fresh fetch on every call; nothing is cached.
"""

from typing import Optional

from registration.core.logging import get_logger
from registration.models.domain import (
    FIRST_COLUMN,
    FIRST_DATA_ROW,
    LAST_COLUMN,
    ROLE_ALL,
    MemberRecord,
)
from registration.repositories import RowStore

logger = get_logger(__name__)

STATUS_FILTER_REGISTERED = "registered"
STATUS_FILTER_NOT_REGISTERED = "not_registered"


def zone_selected(zone: Optional[str]) -> bool:
    """False for the "no zone" sentinels the dashboard sends."""
    return bool(zone and zone.strip() and zone.strip().lower() != "all")


def filter_members(
    members: list[MemberRecord],
    zone: Optional[str] = None,
    role: str = ROLE_ALL,
    status: Optional[str] = None,
) -> list[MemberRecord]:
    """Apply zone, role and status filters independently of each other."""
    result = members
    if zone_selected(zone):
        wanted = zone.strip().lower()
        result = [m for m in result if m.zone.lower() == wanted]
    if role and role != ROLE_ALL:
        result = [m for m in result if m.has_role(role)]
    if status == STATUS_FILTER_REGISTERED:
        result = [m for m in result if m.registered]
    elif status == STATUS_FILTER_NOT_REGISTERED:
        result = [m for m in result if not m.registered]
    return result


class MemberDirectory:
    """Reads every member row and exposes the non-Leave subset."""

    def __init__(self, row_store: RowStore) -> None:
        self._store = row_store

    def load_all(self) -> list[MemberRecord]:
        """Every named row, Leave included, in sheet order."""
        rows = self._store.fetch_rows(FIRST_COLUMN, LAST_COLUMN)
        members = [
            MemberRecord.from_row(row, FIRST_DATA_ROW + offset)
            for offset, row in enumerate(rows)
        ]
        return [m for m in members if m.name]

    def list_active(
        self,
        zone: Optional[str] = None,
        role: str = ROLE_ALL,
        status: Optional[str] = None,
    ) -> list[MemberRecord]:
        active = [m for m in self.load_all() if not m.on_leave]
        result = filter_members(active, zone=zone, role=role, status=status)
        logger.debug(
            "Directory: %d active, %d after filters zone=%s role=%s status=%s",
            len(active), len(result), zone, role, status,
        )
        return result

    def list_unregistered(self) -> list[MemberRecord]:
        return self.list_active(status=STATUS_FILTER_NOT_REGISTERED)
