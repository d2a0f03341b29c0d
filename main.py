# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Tharbiya Registration Service
=============================
Backs the member self-registration form and the admin dashboard for a
zone-organised event. The member list lives in a spreadsheet; this service
reads it, writes registrations and call outcomes back into it, and serves
aggregate statistics plus ready-to-paste outreach messages.

Layout:
    registration/controllers   HTTP routers (thin)
    registration/services      business rules
    registration/repositories  row store (Google Sheets or in-memory)

Port: 5001
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from registration.controllers.auth_controller import router as auth_router
from registration.controllers.call_campaign_controller import router as call_campaign_router
from registration.controllers.dashboard_controller import router as dashboard_router
from registration.controllers.registration_controller import router as registration_router
from registration.controllers.system_controller import router as system_router
from registration.core.config import settings
from registration.core.dependencies import get_auth_service
from registration.core.exceptions import AuthenticationError, RowStoreError
from registration.core.logging import get_logger
from registration.middleware import MetricsMiddleware, RequestContextMiddleware

logger = get_logger(settings.SERVICE_NAME)


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
    request_id: Optional[str] = None


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(application: FastAPI):
    """Log the configured backend at startup; nothing to dispose on shutdown."""
    if settings.ROW_STORE_BACKEND == "memory":
        logger.info("Row store: in-memory (demo data=%s)", settings.SEED_DEMO_DATA)
    elif settings.sheets_configured:
        logger.info("Row store: Google Sheets, worksheet=%s", settings.SHEET_NAME)
    else:
        logger.warning(
            "Row store: Google Sheets credentials incomplete — sheet calls will fail"
        )
    if not settings.ADMIN_USERNAME or not settings.ADMIN_PASSWORD:
        logger.warning("Admin credentials not configured — dashboard login disabled")
    if get_auth_service().ephemeral_secret:
        logger.warning("JWT_SECRET not set — using a random per-process signing key")
    logger.info("%s v%s started", settings.SERVICE_NAME, settings.SERVICE_VERSION)
    yield
    logger.info("%s shutting down", settings.SERVICE_NAME)


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="Registration Service",
    description="Member registration, admin dashboard and call-campaign tracking over a spreadsheet.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={
        401: {"model": ErrorResponse, "description": "Authentication required"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestContextMiddleware)


# ── Exception handlers ────────────────────────────────────────────────────
@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    logger.warning(
        "Rejected %s %s: %s", request.method, request.url.path, exc.message,
        extra={"request_id": getattr(request.state, "request_id", None)},
    )
    return JSONResponse(
        status_code=401,
        content={"error": exc.message},
        headers={"WWW-Authenticate": "Bearer"},
    )


@app.exception_handler(RowStoreError)
async def row_store_error_handler(request: Request, exc: RowStoreError):
    req_id = getattr(request.state, "request_id", None)
    logger.error("Row store failure: %s", exc, extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "row_store_error", "detail": str(exc), "request_id": req_id},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


# ── Routers ───────────────────────────────────────────────────────────────
app.include_router(system_router)
app.include_router(registration_router)
app.include_router(auth_router)
app.include_router(dashboard_router)
app.include_router(call_campaign_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT)
