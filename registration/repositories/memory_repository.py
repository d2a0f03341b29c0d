# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: In-memory row store.
Same contract as SheetRepository over a plain list of rows; used for local
development (ROW_STORE_BACKEND=memory) and in tests.
"""

import threading
from typing import Any, Optional, Sequence

from registration.core.exceptions import RowStoreError
from registration.models.domain import FIRST_DATA_ROW


def column_index(letter: str) -> int:
    """0-based index of a spreadsheet column letter ("A" -> 0, "AA" -> 26)."""
    letter = letter.strip().upper()
    if not letter.isalpha():
        raise ValueError(f"Invalid column letter '{letter}'")
    index = 0
    for ch in letter:
        index = index * 26 + (ord(ch) - ord("A") + 1)
    return index - 1


class InMemoryRowStore:
    """Worksheet stand-in: data rows only, row 2 is index 0."""

    def __init__(self, rows: Optional[Sequence[Sequence[str]]] = None) -> None:
        self._rows: list[list[str]] = [list(r) for r in (rows or [])]
        self._lock = threading.Lock()

    # ── Read ──

    def fetch_rows(self, first_column: str, last_column: str) -> list[list[str]]:
        start, end = column_index(first_column), column_index(last_column)
        with self._lock:
            return [list(row[start:end + 1]) for row in self._rows]

    def ping(self) -> None:
        return None

    # ── Write ──

    def write_row(
        self,
        row_number: int,
        first_column: str,
        last_column: str,
        values: Sequence[Any],
    ) -> None:
        start, end = column_index(first_column), column_index(last_column)
        if len(values) != end - start + 1:
            raise RowStoreError(
                f"Expected {end - start + 1} values for {first_column}:{last_column}, got {len(values)}"
            )
        index = row_number - FIRST_DATA_ROW
        with self._lock:
            if index < 0 or index >= len(self._rows):
                raise RowStoreError(f"Row {row_number} is outside the data range")
            row = self._rows[index]
            if len(row) <= end:
                row.extend([""] * (end + 1 - len(row)))
            for offset, value in enumerate(values):
                row[start + offset] = "" if value is None else str(value)

    # ── Bulk / internal ──

    def load(self, rows: Sequence[Sequence[str]]) -> None:
        with self._lock:
            self._rows = [list(r) for r in rows]

    def clear(self) -> None:
        with self._lock:
            self._rows.clear()

    @property
    def rows(self) -> list[list[str]]:
        """Direct access for tests and seeding."""
        return self._rows


DEMO_ROWS: list[list[str]] = [
    ["Tirur", "Abdul Rahman", "", "", "", "Yes", "Yes"],
    ["Tirur", "Fathima Beevi", "9846000001", "Yes", "Success", "", "Yes"],
    ["Tirur", "Muhammed Ali", "", "", "", "", "Yes"],
    ["Kottakkal", "Haris K", "9846000002", "No", "Success", "Yes", "Yes"],
    ["Kottakkal", "Shameer P", "", "", "Leave", "", "Yes"],
    ["Kottakkal", "Rasheed V", "", "", "", "", "Yes", "9846000003"],
    ["Malappuram", "Ashraf T", "", "", "", "Yes", "Yes", "", "No Answer", ""],
    ["Malappuram", "Jaseena M", "9846000004", "Yes", "Success", "", "Yes"],
]
