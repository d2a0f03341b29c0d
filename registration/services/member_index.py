# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Identity index.
Maps normalized (zone, name) to the sheet row it lives on, built once per
fetched snapshot so every lookup in the same request is a dict hit.
Row numbers are only valid for the snapshot they were built from.
"""

from typing import Optional, Sequence

from registration.core.exceptions import MemberNotFoundError
from registration.models.domain import (
    COL_NAME,
    COL_ZONE,
    FIRST_DATA_ROW,
    IDENTITY_COLUMNS,
    cell,
    normalize_key,
)
from registration.repositories import RowStore


class MemberIndex:
    """Normalized (zone, name) -> 1-based sheet row number."""

    def __init__(self, rows: Sequence[Sequence[str]], first_row: int = FIRST_DATA_ROW) -> None:
        self._rows: dict[tuple[str, str], int] = {}
        self._size = len(rows)
        for offset, row in enumerate(rows):
            key = normalize_key(cell(row, COL_ZONE), cell(row, COL_NAME))
            if not key[1]:
                continue
            # First occurrence wins on duplicate identities.
            self._rows.setdefault(key, first_row + offset)

    def __len__(self) -> int:
        return self._size

    def locate(self, zone: str, name: str) -> Optional[int]:
        return self._rows.get(normalize_key(zone, name))


def locate_member_row(row_store: RowStore, zone: str, name: str) -> int:
    """
    Fetch only the identity columns and resolve (zone, name) to a sheet row.
    Raises MemberNotFoundError when the sheet is empty or nothing matches.
    """
    index = MemberIndex(row_store.fetch_rows(*IDENTITY_COLUMNS))
    if not len(index):
        raise MemberNotFoundError("No data found in sheet")
    row_number = index.locate(zone, name)
    if row_number is None:
        raise MemberNotFoundError("User not found in the list")
    return row_number
