# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Outreach message builder — pure string formatting, no I/O.
Produces the WhatsApp-ready texts the dashboard copies to the clipboard.
"""

from typing import Any, Iterable, Mapping, Optional

from registration.models.domain import (
    ROLE_ALL,
    ROLE_EXECUTIVE,
    ROLE_SECRETARIAT,
    MemberRecord,
)
from registration.services.directory_service import zone_selected

UNREGISTERED_HEADERS = {
    ROLE_SECRETARIAT: "{zone} മണ്ഡലത്തിൽ സെക്രട്ടേറിയറ്റ് അംഗങ്ങളിൽ തർബിയക്ക് രജിസ്റ്റർ ചെയ്യാത്തവർ",
    ROLE_EXECUTIVE: "{zone} മണ്ഡലത്തിൽ എക്സിക്യൂട്ടീവ് അംഗങ്ങളിൽ തർബിയക്ക് രജിസ്റ്റർ ചെയ്യാത്തവർ",
    ROLE_ALL: "{zone} മണ്ഡലത്തിൽ തർബിയക്ക് രജിസ്റ്റർ ചെയ്യാത്തവർ",
}
UNREGISTERED_FOOTER = "ഇവരെ ഫോളോ ചെയ്ത് രജിസ്റ്റർ ചെയ്യിപ്പിച്ചു റിപ്പോർട്ട് നൽകുമല്ലോ"

INCOMPLETE_ZONES_HEADERS = {
    ROLE_SECRETARIAT: "Zones with pending Secretariat registrations",
    ROLE_EXECUTIVE: "Zones with pending Executive registrations",
    ROLE_ALL: "Zones with pending registrations",
}
INCOMPLETE_ZONES_FOOTER = "Please follow up and report once registration is complete."

_ROLE_KEYS = ((ROLE_SECRETARIAT, "secretariat"), (ROLE_EXECUTIVE, "executive"))


def format_unregistered_message(
    zone: Optional[str],
    role: str,
    members: Iterable[MemberRecord],
) -> str:
    """
    Numbered list of members in `zone` who have not registered yet.
    Empty when no zone is selected or nobody is left to chase.
    """
    if not zone_selected(zone):
        return ""
    pending = [m for m in members if not m.registered and not m.on_leave]
    if not pending:
        return ""

    header = UNREGISTERED_HEADERS.get(role, UNREGISTERED_HEADERS[ROLE_ALL])
    # Header uses the zone as the sheet spells it, not as it was queried.
    lines = [header.format(zone=pending[0].zone), ""]
    lines.extend(f"{i}. {m.name}" for i, m in enumerate(pending, start=1))
    lines.extend(["", UNREGISTERED_FOOTER])
    return "\n".join(lines)


def _is_pending(stats: Mapping[str, Any]) -> bool:
    return stats["total"] > 0 and not stats["is_complete"]


def _combined_percentage(zone_stats: Mapping[str, Any]) -> float:
    total = zone_stats["secretariat"]["total"] + zone_stats["executive"]["total"]
    registered = zone_stats["secretariat"]["registered"] + zone_stats["executive"]["registered"]
    return registered / total * 100 if total else 0.0


def incomplete_zones(
    role_filter: str,
    zone_role_stats: Iterable[Mapping[str, Any]],
) -> list[Mapping[str, Any]]:
    """
    Zones still short of full registration for the chosen role, highest
    completion first. sorted() is stable, so ties keep their input order.
    """
    zones = list(zone_role_stats)
    if role_filter in (ROLE_SECRETARIAT, ROLE_EXECUTIVE):
        key = role_filter.lower()
        pending = [z for z in zones if _is_pending(z[key])]
        return sorted(pending, key=lambda z: float(z[key]["percentage"]), reverse=True)

    pending = [z for z in zones if any(_is_pending(z[k]) for _, k in _ROLE_KEYS)]
    return sorted(pending, key=_combined_percentage, reverse=True)


def format_incomplete_zones_message(
    role_filter: str,
    zone_role_stats: Iterable[Mapping[str, Any]],
) -> str:
    if role_filter not in INCOMPLETE_ZONES_HEADERS:
        role_filter = ROLE_ALL
    pending = incomplete_zones(role_filter, zone_role_stats)
    if not pending:
        return ""

    lines = [INCOMPLETE_ZONES_HEADERS[role_filter], ""]
    for i, zone in enumerate(pending, start=1):
        if role_filter == ROLE_ALL:
            parts = [
                f"{label} {zone[key]['registered']}/{zone[key]['total']}"
                for label, key in _ROLE_KEYS
                if _is_pending(zone[key])
            ]
            lines.append(f"{i}. {zone['name']} - {' '.join(parts)}")
        else:
            stats = zone[role_filter.lower()]
            lines.append(f"{i}. {zone['name']} - {stats['registered']}/{stats['total']}")
    lines.extend(["", INCOMPLETE_ZONES_FOOTER])
    return "\n".join(lines)
