# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Domain models — pure data structures, NO FastAPI dependency.

One worksheet row is one member. Columns are positional:

    A zone | B name | C mobile | D participated | E status
    F secretariat flag | G executive flag | H fallback mobile
    I call status | J call remarks
"""

from typing import Optional, Sequence

from pydantic import BaseModel

# ── Sheet layout ──

FIRST_DATA_ROW = 2  # row 1 holds the headers

COL_ZONE = 0
COL_NAME = 1
COL_MOBILE = 2
COL_PARTICIPATED = 3
COL_STATUS = 4
COL_SECRETARIAT = 5
COL_EXECUTIVE = 6
COL_FALLBACK_MOBILE = 7
COL_CALL_STATUS = 8
COL_CALL_REMARKS = 9

FIRST_COLUMN = "A"
LAST_COLUMN = "J"
IDENTITY_COLUMNS = ("A", "B")
REGISTRATION_COLUMNS = ("C", "E")
CALL_COLUMNS = ("I", "J")

# ── Value sets ──

STATUS_EMPTY = ""
STATUS_SUCCESS = "Success"
STATUS_LEAVE = "Leave"

ROLE_ALL = "All"
ROLE_SECRETARIAT = "Secretariat"
ROLE_EXECUTIVE = "Executive"
ROLE_FILTERS = (ROLE_ALL, ROLE_SECRETARIAT, ROLE_EXECUTIVE)

# Call-campaign outcomes; "" means the member has not been called yet.
CALL_ATTENDING = "Attending"
CALL_NOT_ATTENDING = "Not Attending"
CALL_NO_ANSWER_MESSAGED = "No Answer - Messaged"
CALL_NO_ANSWER = "No Answer"
CALL_UNREACHABLE = "Unreachable"
CALL_OTHER = "Other"
CALL_STATUSES = (
    CALL_ATTENDING,
    CALL_NOT_ATTENDING,
    CALL_NO_ANSWER_MESSAGED,
    CALL_NO_ANSWER,
    CALL_UNREACHABLE,
    CALL_OTHER,
)

_FALSY_FLAGS = {"", "no", "n", "false", "0", "-"}


def cell(row: Sequence[str], index: int) -> str:
    """Trimmed cell value; short rows read as empty strings."""
    if index < len(row) and row[index] is not None:
        return str(row[index]).strip()
    return ""


def is_flag_set(value: str) -> bool:
    return value.strip().lower() not in _FALSY_FLAGS


def normalize_key(zone: str, name: str) -> tuple[str, str]:
    """Identity key: (zone, name), trimmed and case-folded."""
    return (zone or "").strip().lower(), (name or "").strip().lower()


class MemberRecord(BaseModel):
    """A single member as read from the sheet."""
    zone: str
    name: str
    mobile: str = ""
    participated: str = ""
    status: str = STATUS_EMPTY
    is_secretariat: bool = False
    is_executive: bool = False
    call_status: str = ""
    call_remarks: str = ""
    row_number: Optional[int] = None

    @classmethod
    def from_row(cls, row: Sequence[str], row_number: Optional[int] = None) -> "MemberRecord":
        return cls(
            zone=cell(row, COL_ZONE),
            name=cell(row, COL_NAME),
            mobile=cell(row, COL_MOBILE) or cell(row, COL_FALLBACK_MOBILE),
            participated=cell(row, COL_PARTICIPATED),
            status=cell(row, COL_STATUS),
            is_secretariat=is_flag_set(cell(row, COL_SECRETARIAT)),
            is_executive=is_flag_set(cell(row, COL_EXECUTIVE)),
            call_status=cell(row, COL_CALL_STATUS),
            call_remarks=cell(row, COL_CALL_REMARKS),
            row_number=row_number,
        )

    @property
    def registered(self) -> bool:
        return self.status == STATUS_SUCCESS

    @property
    def on_leave(self) -> bool:
        return self.status == STATUS_LEAVE

    @property
    def key(self) -> tuple[str, str]:
        return normalize_key(self.zone, self.name)

    def has_role(self, role: str) -> bool:
        if role == ROLE_SECRETARIAT:
            return self.is_secretariat
        if role == ROLE_EXECUTIVE:
            return self.is_executive
        return True
