# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Call-campaign tracker.
Records the outcome of an outreach call and a free-text remark per member.
Independent of registration status; any outcome may follow any other.
"""

from typing import Any

from registration.core.exceptions import MemberNotFoundError, RowStoreError
from registration.core.logging import get_logger
from registration.metrics import CALL_STATUS_UPDATES
from registration.models.domain import CALL_COLUMNS
from registration.repositories import RowStore
from registration.services.member_index import locate_member_row

logger = get_logger(__name__)


class CallCampaignService:
    """Business logic for call-status updates."""

    def __init__(self, row_store: RowStore) -> None:
        self._store = row_store

    def set_call_status(
        self,
        zone: str,
        name: str,
        status: str,
        remarks: str = "",
    ) -> dict[str, Any]:
        """Write call status + remarks. Raises MemberNotFoundError / RowStoreError."""
        label = status or "not_called"
        try:
            row_number = locate_member_row(self._store, zone, name)
            self._store.write_row(row_number, *CALL_COLUMNS, [status, (remarks or "").strip()])
        except MemberNotFoundError:
            CALL_STATUS_UPDATES.labels(call_status=label, outcome="not_found").inc()
            logger.warning("Call status target not found: zone=%s name=%s", zone, name)
            raise
        except RowStoreError:
            CALL_STATUS_UPDATES.labels(call_status=label, outcome="error").inc()
            raise

        CALL_STATUS_UPDATES.labels(call_status=label, outcome="success").inc()
        logger.info(
            "Call status set: zone=%s name=%s status=%s row=%d",
            zone, name, label, row_number,
        )
        return {
            "status": "success",
            "message": "Call status updated successfully",
            "row": row_number,
        }
