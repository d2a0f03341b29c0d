# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: System endpoints — health, readiness, metrics.
Pure HTTP layer — no business logic.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from registration.core.config import settings
from registration.core.dependencies import get_row_store
from registration.core.exceptions import RowStoreError
from registration.repositories import RowStore

router = APIRouter(tags=["System"])


@router.get("/health")
def health_check():
    """Liveness probe; never touches the sheet."""
    return {
        "status": "ok",
        "service": settings.SERVICE_NAME,
        "version": settings.SERVICE_VERSION,
        "row_store": settings.ROW_STORE_BACKEND,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/health/ready")
def readiness_check(store: RowStore = Depends(get_row_store)):
    """Readiness probe — verifies the row store can be reached."""
    try:
        store.ping()
    except RowStoreError as exc:
        raise HTTPException(status_code=503, detail=f"Row store unavailable: {exc}")
    return {"status": "ready", "service": settings.SERVICE_NAME, "row_store": "connected"}


@router.get("/metrics")
def prometheus_metrics():
    """Expose Prometheus metrics in OpenMetrics format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
