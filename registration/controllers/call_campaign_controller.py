# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Call-campaign status endpoint.
Thin HTTP layer — delegates ALL logic to CallCampaignService.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from registration.core.dependencies import get_call_campaign_service, require_admin
from registration.core.exceptions import MemberNotFoundError, RowStoreError
from registration.schemas import CallStatusRequest, OperationResult
from registration.services.call_campaign_service import CallCampaignService

router = APIRouter(prefix="/api", tags=["Call Campaign"], dependencies=[Depends(require_admin)])


@router.post("/call-status", response_model=OperationResult)
def set_call_status(
    payload: CallStatusRequest,
    service: CallCampaignService = Depends(get_call_campaign_service),
):
    """Record the outcome of a call to a member."""
    try:
        result = service.set_call_status(
            zone=payload.zone,
            name=payload.name,
            status=payload.call_status,
            remarks=payload.remarks,
        )
    except MemberNotFoundError as e:
        return JSONResponse(status_code=404, content={"status": "error", "message": str(e)})
    except RowStoreError as e:
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": f"Error saving call status: {e}"},
        )
    return OperationResult(status=result["status"], message=result["message"])
