# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Request / Response schemas — API contract definitions.
Used ONLY at the controller (HTTP) boundary. Responses are camelCase on the
wire to match the dashboard client.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from registration.models.domain import CALL_STATUSES


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Public form ──

class FormOption(BaseModel):
    mandalam: str
    name: str


class RegisterRequest(BaseModel):
    mandalam: str = ""
    name: str = ""
    mobile: str = ""
    participated: Union[bool, str, None] = ""


# ── Auth ──

class LoginRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: str = ""

    @property
    def login_name(self) -> str:
        return (self.username or self.email or "").strip()


class UserOut(BaseModel):
    username: str
    role: str


class LoginResponse(BaseModel):
    success: bool
    token: str
    user: UserOut


# ── Dashboard ──

class OverallStats(CamelModel):
    total: int
    registered: int
    not_registered: int
    percentage_registered: float


class ZoneStats(CamelModel):
    name: str
    total: int
    registered: int
    not_registered: int


class ZoneList(BaseModel):
    zones: List[ZoneStats]


class MemberOut(CamelModel):
    zone: str
    name: str
    mobile: str
    participated: str
    status: str
    is_secretariat: bool
    is_executive: bool
    registered: bool
    call_status: str
    call_remarks: str


class MemberList(BaseModel):
    members: List[MemberOut]


class RoleStats(CamelModel):
    total: int
    registered: int
    percentage: str
    is_complete: bool


class ZoneRoleStats(BaseModel):
    name: str
    secretariat: RoleStats
    executive: RoleStats


class RoleStatsList(BaseModel):
    stats: List[ZoneRoleStats]


class UnregisteredMessage(BaseModel):
    zone: Optional[str]
    role: str
    count: int
    message: str


class IncompleteZonesMessage(BaseModel):
    role: str
    count: int
    message: str


# ── Call campaign ──

class CallStatusRequest(CamelModel):
    zone: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    call_status: str = ""
    remarks: str = ""

    @field_validator("call_status")
    @classmethod
    def check_call_status(cls, v: str) -> str:
        v = (v or "").strip()
        if v and v not in CALL_STATUSES:
            raise ValueError(f"callStatus must be empty or one of {CALL_STATUSES}")
        return v


# ── Generic ──

class OperationResult(BaseModel):
    status: str
    message: str
