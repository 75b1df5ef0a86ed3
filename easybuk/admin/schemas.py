"""Admin domain: Pydantic V2 schemas."""
from __future__ import annotations

import uuid

from pydantic import EmailStr, Field

from easybuk.core.constants import Role
from easybuk.core.schemas import RequestModel, ResponseModel


class AdminRoleRequest(RequestModel):
    """Body for POST/DELETE /admin/assign-admin-role: ``{"userEmail", "reason"}``."""

    user_email: EmailStr
    reason: str | None = Field(default=None, max_length=500)


class AdminRoleData(ResponseModel):
    user_id: uuid.UUID
    email: str
    roles: list[Role]
    admin_id: uuid.UUID | None = None


class AdminRoleResponse(ResponseModel):
    success: bool = True
    message: str
    data: AdminRoleData
