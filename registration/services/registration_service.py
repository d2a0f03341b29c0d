# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Registration writer.
Resolves a member by (zone, name) and marks them registered, writing
mobile, participation and status in one batched cell update.
"""

from typing import Any, Union

from registration.core.exceptions import MemberNotFoundError, RowStoreError
from registration.core.logging import get_logger
from registration.metrics import REGISTRATIONS_TOTAL
from registration.models.domain import REGISTRATION_COLUMNS, STATUS_SUCCESS
from registration.repositories import RowStore
from registration.services.member_index import locate_member_row

logger = get_logger(__name__)


def participation_value(participated: Union[str, bool, None]) -> str:
    if isinstance(participated, bool):
        return "Yes" if participated else "No"
    return (participated or "").strip()


class RegistrationService:
    """Business logic for the Unregistered -> Registered transition."""

    def __init__(self, row_store: RowStore) -> None:
        self._store = row_store

    def register(
        self,
        zone: str,
        name: str,
        mobile: str,
        participated: Union[str, bool, None],
    ) -> dict[str, Any]:
        """
        Mark (zone, name) as registered. Last write wins: registering the
        same member twice overwrites the earlier mobile/participation.
        Raises MemberNotFoundError / RowStoreError.
        """
        try:
            row_number = locate_member_row(self._store, zone, name)
        except MemberNotFoundError:
            REGISTRATIONS_TOTAL.labels(outcome="not_found").inc()
            logger.warning("Registration target not found: zone=%s name=%s", zone, name)
            raise
        except RowStoreError:
            REGISTRATIONS_TOTAL.labels(outcome="error").inc()
            raise

        values = [(mobile or "").strip(), participation_value(participated), STATUS_SUCCESS]
        try:
            self._store.write_row(row_number, *REGISTRATION_COLUMNS, values)
        except RowStoreError:
            REGISTRATIONS_TOTAL.labels(outcome="error").inc()
            raise

        REGISTRATIONS_TOTAL.labels(outcome="success").inc()
        logger.info("Registered: zone=%s name=%s row=%d", zone, name, row_number)
        return {
            "status": "success",
            "message": "Registration updated successfully",
            "row": row_number,
        }
