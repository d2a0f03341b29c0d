# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
FastAPI dependency injection — wire the row store, services and auth from settings.
"""

from typing import Any, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from registration.core.config import Settings, settings
from registration.core.exceptions import AuthenticationError
from registration.repositories import RowStore
from registration.repositories.memory_repository import DEMO_ROWS, InMemoryRowStore
from registration.repositories.sheet_repository import SheetRepository, build_gspread_client
from registration.services.auth_service import AuthService
from registration.services.call_campaign_service import CallCampaignService
from registration.services.directory_service import MemberDirectory
from registration.services.registration_service import RegistrationService


def build_row_store(config: Settings) -> RowStore:
    if config.ROW_STORE_BACKEND == "memory":
        return InMemoryRowStore(DEMO_ROWS if config.SEED_DEMO_DATA else None)
    return SheetRepository(
        client_factory=lambda: build_gspread_client(
            config.GOOGLE_AUTH_EMAIL,
            config.GOOGLE_AUTH_PRIVATE_KEY,
            config.GOOGLE_TOKEN_URI,
        ),
        spreadsheet_id=config.SPREADSHEET_ID,
        sheet_name=config.SHEET_NAME,
    )


def build_auth_service(config: Settings) -> AuthService:
    return AuthService(
        username=config.ADMIN_USERNAME,
        password=config.ADMIN_PASSWORD,
        secret=config.JWT_SECRET,
        algorithm=config.JWT_ALGORITHM,
        expires_hours=config.JWT_EXPIRES_HOURS,
    )


# ── Singletons (built once from settings) ──
_row_store = build_row_store(settings)
_auth_service = build_auth_service(settings)
_bearer = HTTPBearer(auto_error=False)


# ── FastAPI dependency functions ──
def get_row_store() -> RowStore:
    return _row_store


def get_auth_service() -> AuthService:
    return _auth_service


def get_member_directory(store: RowStore = Depends(get_row_store)) -> MemberDirectory:
    return MemberDirectory(store)


def get_registration_service(store: RowStore = Depends(get_row_store)) -> RegistrationService:
    return RegistrationService(store)


def get_call_campaign_service(store: RowStore = Depends(get_row_store)) -> CallCampaignService:
    return CallCampaignService(store)


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> dict[str, Any]:
    """Bearer-token guard for dashboard and call-campaign routes."""
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Access token required")
    return auth.verify_token(credentials.credentials)
