# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Controller: Admin dashboard — stats, zones, members, role report, outreach messages.
Thin HTTP layer — every route is bearer-protected and computes from one fresh fetch.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from registration.core.dependencies import get_member_directory, require_admin
from registration.core.exceptions import RowStoreError
from registration.core.logging import get_logger
from registration.models.domain import ROLE_ALL, ROLE_FILTERS, MemberRecord
from registration.schemas import (
    IncompleteZonesMessage,
    MemberList,
    MemberOut,
    OverallStats,
    RoleStatsList,
    UnregisteredMessage,
    ZoneList,
    ZoneRoleStats,
    ZoneStats,
)
from registration.services.directory_service import MemberDirectory, zone_selected
from registration.services.message_formatter import (
    format_incomplete_zones_message,
    format_unregistered_message,
    incomplete_zones,
)
from registration.services.stats import (
    aggregate_role_stats,
    aggregate_zone_stats,
    overall_stats,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/api/dashboard",
    tags=["Dashboard"],
    dependencies=[Depends(require_admin)],
)


def _upstream_error(what: str, exc: Exception) -> JSONResponse:
    logger.error("Failed to fetch %s: %s", what, exc)
    return JSONResponse(
        status_code=500,
        content={"error": f"Failed to fetch {what}", "detail": str(exc)},
    )


def _effective_role(zone: Optional[str], role: Optional[str]) -> str:
    """The role filter only applies once a zone is picked."""
    if not zone_selected(zone) or not role:
        return ROLE_ALL
    return role


def _member_out(member: MemberRecord) -> MemberOut:
    return MemberOut(
        zone=member.zone,
        name=member.name,
        mobile=member.mobile,
        participated=member.participated,
        status=member.status,
        is_secretariat=member.is_secretariat,
        is_executive=member.is_executive,
        registered=member.registered,
        call_status=member.call_status,
        call_remarks=member.call_remarks,
    )


@router.get("/stats", response_model=OverallStats)
def get_stats(directory: MemberDirectory = Depends(get_member_directory)):
    """Overall registration totals across all active members."""
    try:
        return OverallStats(**overall_stats(directory.list_active()))
    except RowStoreError as e:
        return _upstream_error("statistics", e)


@router.get("/zones", response_model=ZoneList)
def get_zones(directory: MemberDirectory = Depends(get_member_directory)):
    """Per-zone registration counts."""
    try:
        zones = aggregate_zone_stats(directory.list_active())
    except RowStoreError as e:
        return _upstream_error("zone data", e)
    return ZoneList(zones=[ZoneStats(**z) for z in zones.values()])


@router.get("/members", response_model=MemberList)
def get_members(
    zone: Optional[str] = Query(default=None, description="Zone name, or 'all'"),
    role: Optional[str] = Query(default=ROLE_ALL, description="All | Secretariat | Executive"),
    status: Optional[str] = Query(default=None, description="registered | not_registered"),
    directory: MemberDirectory = Depends(get_member_directory),
):
    """Active members, filtered by zone, role and registration status."""
    try:
        members = directory.list_active(
            zone=zone, role=_effective_role(zone, role), status=status
        )
    except RowStoreError as e:
        return _upstream_error("members", e)
    return MemberList(members=[_member_out(m) for m in members])


@router.get("/role-stats", response_model=RoleStatsList)
def get_role_stats(directory: MemberDirectory = Depends(get_member_directory)):
    """Secretariat / Executive completion per zone."""
    try:
        stats = aggregate_role_stats(directory.list_active())
    except RowStoreError as e:
        return _upstream_error("role statistics", e)
    return RoleStatsList(stats=[ZoneRoleStats(**s) for s in stats.values()])


# ── Outreach messages ──

@router.get("/messages/unregistered", response_model=UnregisteredMessage)
def get_unregistered_message(
    zone: Optional[str] = None,
    role: Optional[str] = ROLE_ALL,
    directory: MemberDirectory = Depends(get_member_directory),
):
    """WhatsApp text listing a zone's unregistered members."""
    effective_role = _effective_role(zone, role)
    if not zone_selected(zone):
        return UnregisteredMessage(zone=zone, role=effective_role, count=0, message="")
    try:
        members = directory.list_active(zone=zone, role=effective_role)
    except RowStoreError as e:
        return _upstream_error("members", e)
    return UnregisteredMessage(
        zone=zone,
        role=effective_role,
        count=sum(1 for m in members if not m.registered),
        message=format_unregistered_message(zone, effective_role, members),
    )


@router.get("/messages/incomplete-zones", response_model=IncompleteZonesMessage)
def get_incomplete_zones_message(
    role: str = ROLE_ALL,
    directory: MemberDirectory = Depends(get_member_directory),
):
    """WhatsApp text listing zones that have not reached full registration."""
    try:
        stats = list(aggregate_role_stats(directory.list_active()).values())
    except RowStoreError as e:
        return _upstream_error("role statistics", e)
    if role not in ROLE_FILTERS:
        role = ROLE_ALL
    return IncompleteZonesMessage(
        role=role,
        count=len(incomplete_zones(role, stats)),
        message=format_incomplete_zones_message(role, stats),
    )
