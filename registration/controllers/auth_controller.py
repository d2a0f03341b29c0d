# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""Controller: Authentication — admin login endpoint."""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from registration.core.dependencies import get_auth_service
from registration.core.exceptions import AuthenticationError
from registration.schemas import LoginRequest, LoginResponse
from registration.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    try:
        return auth.login(payload.login_name, payload.password)
    except AuthenticationError as e:
        return JSONResponse(status_code=401, content={"success": False, "error": e.message})
