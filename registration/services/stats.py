# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Registration statistics — pure reductions, no I/O, no metrics.
Order-independent except for zone ordering, which follows first appearance.
"""

from typing import Any, Iterable

from registration.models.domain import ROLE_EXECUTIVE, ROLE_SECRETARIAT, MemberRecord


def _active(records: Iterable[MemberRecord]) -> list[MemberRecord]:
    return [r for r in records if not r.on_leave]


def format_percentage(registered: int, total: int) -> str:
    """registered/total as a one-decimal percentage string; "0" for an empty set."""
    if total <= 0:
        return "0"
    return f"{registered / total * 100:.1f}"


def compute_role_stats(total: int, registered: int) -> dict[str, Any]:
    return {
        "total": total,
        "registered": registered,
        "percentage": format_percentage(registered, total),
        "is_complete": total > 0 and registered == total,
    }


def overall_stats(records: Iterable[MemberRecord]) -> dict[str, Any]:
    active = _active(records)
    total = len(active)
    registered = sum(1 for r in active if r.registered)
    percentage = round(registered / total * 100, 2) if total > 0 else 0
    return {
        "total": total,
        "registered": registered,
        "not_registered": total - registered,
        "percentage_registered": percentage,
    }


def _zones_by_name(records: Iterable[MemberRecord]) -> dict[str, list[MemberRecord]]:
    """
    Group active records by zone, case-insensitively. Each group is keyed by
    the first spelling seen; blank zones are skipped.
    """
    spelling: dict[str, str] = {}
    groups: dict[str, list[MemberRecord]] = {}
    for record in _active(records):
        if not record.zone:
            continue
        name = spelling.setdefault(record.zone.lower(), record.zone)
        groups.setdefault(name, []).append(record)
    return groups


def aggregate_zone_stats(records: Iterable[MemberRecord]) -> dict[str, dict[str, Any]]:
    """zone -> {name, total, registered, not_registered}."""
    zones: dict[str, dict[str, Any]] = {}
    for name, members in _zones_by_name(records).items():
        registered = sum(1 for m in members if m.registered)
        zones[name] = {
            "name": name,
            "total": len(members),
            "registered": registered,
            "not_registered": len(members) - registered,
        }
    return zones


def aggregate_role_stats(records: Iterable[MemberRecord]) -> dict[str, dict[str, Any]]:
    """zone -> {name, secretariat: RoleStats, executive: RoleStats}."""
    stats: dict[str, dict[str, Any]] = {}
    for name, members in _zones_by_name(records).items():
        entry: dict[str, Any] = {"name": name}
        for role in (ROLE_SECRETARIAT, ROLE_EXECUTIVE):
            holders = [m for m in members if m.has_role(role)]
            entry[role.lower()] = compute_role_stats(
                len(holders), sum(1 for m in holders if m.registered)
            )
        stats[name] = entry
    return stats
