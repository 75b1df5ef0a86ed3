"""
EasyBuk: Pydantic V2 request/response schemas for the auth domain.

  - *Request  models:  input from the client (extra="forbid")
  - *View / *Response: output to the client; the password hash never appears
"""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator, EmailStr, Field, StringConstraints

from easybuk.auth.constants import MIN_PASSWORD_LENGTH, ProviderVerificationStatus
from easybuk.core.constants import SELF_SERVICE_ROLES, Role
from easybuk.core.schemas import RequestModel, ResponseModel


def _self_service_role(value: Role) -> Role:
    if value not in SELF_SERVICE_ROLES:
        raise ValueError("role must be CLIENT or PROVIDER")
    return value


SelfServiceRole = Annotated[Role, AfterValidator(_self_service_role)]

# Passwords are taken verbatim; the model-wide whitespace stripping skips them.
Password = Annotated[str, StringConstraints(strip_whitespace=False)]


# ── Requests ──────────────────────────────────────────────────────────────────

class SignupRequest(RequestModel):
    """Body for POST /auth/signup."""

    email: EmailStr
    password: Password = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)
    name: str = Field(min_length=2, max_length=150)
    role: SelfServiceRole
    phone: str | None = Field(
        default=None,
        pattern=r"^\+?[0-9]{9,15}$",
        description="Digits with optional leading +, e.g. +233201234567",
    )


class LoginRequest(RequestModel):
    """Body for POST /auth/login."""

    email: EmailStr
    password: Password = Field(min_length=1)


class AddRoleRequest(RequestModel):
    role: SelfServiceRole


class SendVerificationRequest(RequestModel):
    """Optional body for POST /auth/send-verification; ignored when signed in."""

    email: EmailStr | None = None


class VerifyEmailRequest(RequestModel):
    token: str = Field(min_length=1, max_length=128)


# ── Responses ─────────────────────────────────────────────────────────────────

class ClientProfileView(ResponseModel):
    id: uuid.UUID
    profile_completed: bool


class ProviderProfileView(ResponseModel):
    id: uuid.UUID
    profile_completed: bool
    verification_status: ProviderVerificationStatus


class AdminProfileView(ResponseModel):
    id: uuid.UUID
    permissions: list[str]


class UserSessionView(ResponseModel):
    """The signed-in user as the client sees it."""

    id: uuid.UUID
    email: str
    name: str
    phone: str | None = None
    image: str | None = None
    roles: list[Role]
    active_role: Role | None = None
    email_verified: bool
    email_verified_at: datetime | None = None
    client_profile: ClientProfileView | None = None
    provider_profile: ProviderProfileView | None = None
    admin_profile: AdminProfileView | None = None


class AuthResponse(ResponseModel):
    success: bool = True
    user: UserSessionView
