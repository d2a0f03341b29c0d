# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Public registration form endpoints.
Thin HTTP layer — delegates lookup and writes to the directory / registration services.
"""

from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from registration.core.dependencies import get_member_directory, get_registration_service
from registration.core.exceptions import MemberNotFoundError, RowStoreError
from registration.core.logging import get_logger
from registration.schemas import FormOption, OperationResult, RegisterRequest
from registration.services.directory_service import MemberDirectory
from registration.services.registration_service import RegistrationService

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Registration"])


@router.get("/data", response_model=List[FormOption])
def list_form_options(directory: MemberDirectory = Depends(get_member_directory)):
    """Zone/name pairs of members who still need to register."""
    try:
        pending = directory.list_unregistered()
    except RowStoreError as e:
        return JSONResponse(status_code=500, content={"error": f"Error fetching data: {e}"})
    logger.info("Serving %d unregistered members to the form", len(pending))
    return [FormOption(mandalam=m.zone, name=m.name) for m in pending]


@router.post("/register", response_model=OperationResult)
def register(
    payload: RegisterRequest,
    service: RegistrationService = Depends(get_registration_service),
):
    """Mark a member as registered with their mobile and participation answer."""
    try:
        result = service.register(
            zone=payload.mandalam,
            name=payload.name,
            mobile=payload.mobile,
            participated=payload.participated,
        )
    except MemberNotFoundError as e:
        return JSONResponse(status_code=404, content={"status": "error", "message": str(e)})
    except RowStoreError as e:
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": f"Error saving data: {e}"},
        )
    return OperationResult(status=result["status"], message=result["message"])
