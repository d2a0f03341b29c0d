# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Google Sheets row store.
Reads and writes column spans of the member worksheet by row position.
NO business rules here — one gspread call per method, never retried.
"""

import threading
import time
from typing import Any, Callable, Optional, Sequence

import gspread
from google.auth.exceptions import GoogleAuthError
from gspread.exceptions import GSpreadException

from registration.core.exceptions import RowStoreError
from registration.core.logging import get_logger
from registration.metrics import ROW_STORE_LATENCY, ROW_STORE_OPERATIONS
from registration.models.domain import FIRST_DATA_ROW

logger = get_logger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]

# ValueError covers malformed service-account keys raised while authorizing.
_UPSTREAM_ERRORS = (GSpreadException, GoogleAuthError, OSError, ValueError)


def build_gspread_client(
    client_email: str,
    private_key: str,
    token_uri: str = "https://oauth2.googleapis.com/token",
) -> gspread.Client:
    """Authorize a gspread client from bare service-account fields."""
    if "BEGIN PRIVATE KEY" not in private_key:
        logger.warning("Service-account private key has no PEM header; auth will likely fail")
    return gspread.service_account_from_dict(
        {
            "type": "service_account",
            "client_email": client_email,
            "private_key": private_key,
            "token_uri": token_uri,
        },
        scopes=SCOPES,
    )


class SheetRepository:
    """Row store backed by one worksheet of a Google spreadsheet."""

    def __init__(
        self,
        client_factory: Callable[[], gspread.Client],
        spreadsheet_id: str,
        sheet_name: str,
    ) -> None:
        self._client_factory = client_factory
        self._spreadsheet_id = spreadsheet_id
        self._sheet_name = sheet_name
        self._worksheet: Optional[gspread.Worksheet] = None
        self._lock = threading.Lock()

    # ── Read ──

    def fetch_rows(self, first_column: str, last_column: str) -> list[list[str]]:
        """All data rows (row 2 downwards) restricted to the column span."""
        cell_range = f"{first_column}{FIRST_DATA_ROW}:{last_column}"
        values = self._call("fetch", cell_range, lambda ws: ws.get(cell_range))
        rows = [[str(v) for v in row] for row in (values or [])]
        logger.debug("Fetched %d rows from %s!%s", len(rows), self._sheet_name, cell_range)
        return rows

    def ping(self) -> None:
        """Open the worksheet; raises RowStoreError when unreachable."""
        self._call("ping", self._sheet_name, lambda ws: ws.id)

    # ── Write ──

    def write_row(
        self,
        row_number: int,
        first_column: str,
        last_column: str,
        values: Sequence[Any],
    ) -> None:
        """Overwrite one row's cells in [first_column, last_column] in a single call."""
        cell_range = f"{first_column}{row_number}:{last_column}{row_number}"
        self._call(
            "write",
            cell_range,
            lambda ws: ws.update(
                range_name=cell_range,
                values=[list(values)],
                value_input_option="USER_ENTERED",
            ),
        )
        logger.info("Updated %s!%s", self._sheet_name, cell_range)

    # ── Internal ──

    def _open(self) -> gspread.Worksheet:
        with self._lock:
            if self._worksheet is None:
                client = self._client_factory()
                spreadsheet = client.open_by_key(self._spreadsheet_id)
                self._worksheet = spreadsheet.worksheet(self._sheet_name)
            return self._worksheet

    def _call(self, operation: str, cell_range: str, fn: Callable[[gspread.Worksheet], Any]) -> Any:
        start = time.monotonic()
        try:
            result = fn(self._open())
        except _UPSTREAM_ERRORS as exc:
            ROW_STORE_OPERATIONS.labels(operation=operation, outcome="error").inc()
            logger.error(
                "Sheet %s failed: range=%s!%s error=%s",
                operation, self._sheet_name, cell_range, exc,
            )
            raise RowStoreError(str(exc) or type(exc).__name__) from exc
        finally:
            ROW_STORE_LATENCY.labels(operation=operation).observe(time.monotonic() - start)
        ROW_STORE_OPERATIONS.labels(operation=operation, outcome="ok").inc()
        return result
