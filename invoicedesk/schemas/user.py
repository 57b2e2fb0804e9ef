"""
User Pydantic schemas.
Covers registration, admin creation, profile reads/updates, stats and token responses.
"""
from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from invoicedesk.models.user import SubscriptionPlan, UserRole

USERNAME_PATTERN = r"^[a-zA-Z0-9_]+$"

_MOBILE_RE = re.compile(r"^[+]?[1-9]\d{0,15}$")
_MOBILE_STRIP_RE = re.compile(r"[\s\-()]")


def validate_mobile(value: str) -> str:
    """
    Accept phone numbers such as "+1 (555) 123-4567".
    Spaces, dashes and parentheses are ignored for the check; the value is
    stored as typed (trimmed).
    """
    value = value.strip()
    if not _MOBILE_RE.match(_MOBILE_STRIP_RE.sub("", value)):
        raise ValueError("Valid mobile number is required")
    return value


def _required_text(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Field is required")
    return value


# ── Registration ──────────────────────────────────────────────────────────────

class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    username: str = Field(min_length=3, max_length=100, pattern=USERNAME_PATTERN)
    full_name: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1, max_length=500)
    mobile: str

    @field_validator("full_name", "address")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _required_text(v)

    @field_validator("mobile")
    @classmethod
    def check_mobile(cls, v: str) -> str:
        return validate_mobile(v)


# ── Admin create ──────────────────────────────────────────────────────────────

class UserCreate(BaseModel):
    email: EmailStr
    username: str = Field(min_length=3, max_length=100, pattern=USERNAME_PATTERN)
    full_name: str = Field(min_length=1, max_length=255)
    name: str | None = Field(default=None, max_length=255)
    address: str = Field(min_length=1, max_length=500)
    mobile: str
    role: UserRole = "user"
    subscription_plan: SubscriptionPlan = "Free Plan"
    is_email_verified: bool = False
    avatar: str | None = Field(default=None, max_length=500)

    @field_validator("full_name", "address")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _required_text(v)

    @field_validator("mobile")
    @classmethod
    def check_mobile(cls, v: str) -> str:
        return validate_mobile(v)


# ── Update ────────────────────────────────────────────────────────────────────

class UserUpdate(BaseModel):
    """Self-service profile edit."""

    email: EmailStr | None = None
    username: str | None = Field(
        default=None, min_length=3, max_length=100, pattern=USERNAME_PATTERN
    )
    full_name: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = Field(default=None, min_length=1, max_length=500)
    mobile: str | None = None
    avatar: str | None = Field(default=None, max_length=500)

    @field_validator("full_name", "address")
    @classmethod
    def strip_required(cls, v: str | None) -> str | None:
        return _required_text(v) if v is not None else v

    @field_validator("mobile")
    @classmethod
    def check_mobile(cls, v: str | None) -> str | None:
        return validate_mobile(v) if v is not None else v


class UserAdminUpdate(UserUpdate):
    role: UserRole | None = None
    subscription_plan: SubscriptionPlan | None = None
    is_email_verified: bool | None = None


# ── Read ──────────────────────────────────────────────────────────────────────

class UserRead(BaseModel):
    id: str
    email: EmailStr
    name: str
    username: str
    full_name: str
    address: str
    mobile: str
    role: str
    subscription_plan: str
    created_at: datetime
    is_email_verified: bool
    avatar: str | None

    model_config = {"from_attributes": True}


class UserStats(BaseModel):
    total: int
    admins: int
    users: int


# ── Auth flows ────────────────────────────────────────────────────────────────

class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


class RegisterResponse(BaseModel):
    user: UserRead
    needs_verification: bool = True


class VerificationEmailRequest(BaseModel):
    email: EmailStr


class VerifyEmailRequest(BaseModel):
    user_id: str
    token: str


class VerifyEmailResponse(BaseModel):
    verified: bool
