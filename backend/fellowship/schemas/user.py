from typing import Literal, Optional
from datetime import datetime
from pydantic import EmailStr, Field, field_validator

from .common import CamelModel, StripStringsMixin
from ..core.constants import (
    ROLE_MEMBER,
    ROLE_FAMILY_LEADER,
    ROLE_TEAM_LEADER,
    ROLE_GENERAL_LEADER,
    ROLE_SUPER_ADMIN,
)

RoleLiteral = Literal[
    ROLE_MEMBER,
    ROLE_FAMILY_LEADER,
    ROLE_TEAM_LEADER,
    ROLE_GENERAL_LEADER,
    ROLE_SUPER_ADMIN,
]


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    fellowship_role: Optional[str] = Field(None, max_length=100)
    invite_code: Optional[str] = Field(None, max_length=64)

    @field_validator("name", "fellowship_role", "invite_code", mode="before")
    @classmethod
    def strip_text(cls, v):
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.lower()


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        return v.strip().lower()


class UserPublic(CamelModel):
    """Sanitized projection returned with session tokens"""
    id: str
    name: str
    email: str
    role: str
    ministry: str = ""
    family_id: Optional[str] = None
    fellowship_role: str
    profile_photo: str = ""


class UserDetail(UserPublic):
    bio: str = ""
    is_active: bool = True
    created_at: datetime
    updated_at: datetime


class AuthResponse(CamelModel):
    message: str
    token: str
    user: UserPublic


class ProfileUpdate(StripStringsMixin):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=1000)
    fellowship_role: Optional[str] = Field(None, max_length=100)
    profile_photo: Optional[str] = Field(None, max_length=2000)


class ProfileUpdateResponse(CamelModel):
    message: str
    user: UserDetail


class PasswordChange(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6, max_length=128)


class RoleUpdate(CamelModel):
    role: RoleLiteral
