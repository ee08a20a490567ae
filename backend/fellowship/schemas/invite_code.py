from typing import Optional
from datetime import datetime
from pydantic import Field, field_validator

from .common import CamelModel, UserSummary


class InviteCodeCreate(CamelModel):
    code: str = Field(..., min_length=3, max_length=64)
    role: str
    ministry: str = Field("", max_length=100)
    family_id: Optional[str] = Field(None, max_length=36)
    expires_at: Optional[datetime] = None
    description: str = Field("", max_length=500)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v):
        return v.strip().upper()


class InviteCodeResponse(CamelModel):
    id: str
    code: str
    role: str
    ministry: str = ""
    family_id: Optional[str] = None
    expires_at: Optional[datetime] = None
    description: str = ""
    is_active: bool
    created_by: Optional[UserSummary] = None
    used_by: Optional[UserSummary] = None
    created_at: datetime


class InviteCodeCreateResponse(CamelModel):
    message: str
    invite_code: InviteCodeResponse


class InviteValidationResponse(CamelModel):
    valid: bool
    role: Optional[str] = None
    ministry: Optional[str] = None
    description: Optional[str] = None
    message: Optional[str] = None
