# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Row store contract shared by the Sheets and in-memory repositories."""

from typing import Any, Protocol, Sequence


class RowStore(Protocol):
    def fetch_rows(self, first_column: str, last_column: str) -> list[list[str]]:
        ...

    def write_row(
        self,
        row_number: int,
        first_column: str,
        last_column: str,
        values: Sequence[Any],
    ) -> None:
        ...

    def ping(self) -> None:
        ...
