"""
Admin domain: router.

Routes:
  POST    /api/admin/assign-admin-role   Grant ADMIN to a user by email
  DELETE  /api/admin/assign-admin-role   Revoke ADMIN from a user by email

The caller must hold ADMIN in the database (403 otherwise).
"""
from __future__ import annotations

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.admin import controller as ctrl
from easybuk.admin.schemas import AdminRoleRequest, AdminRoleResponse
from easybuk.auth.dependencies import get_current_user
from easybuk.config import Settings
from easybuk.core.models.user import CurrentUser
from easybuk.database import get_db
from easybuk.dependencies import get_settings

router = APIRouter(prefix="/admin", tags=["admin"])


@router.post(
    "/assign-admin-role",
    response_model=AdminRoleResponse,
    summary="Grant the ADMIN role",
)
async def grant_admin_role(
    body: AdminRoleRequest,
    background_tasks: BackgroundTasks,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AdminRoleResponse:
    return await ctrl.grant_admin(session, body, current_user, settings, background_tasks)


@router.delete(
    "/assign-admin-role",
    response_model=AdminRoleResponse,
    summary="Revoke the ADMIN role",
)
async def revoke_admin_role(
    body: AdminRoleRequest,
    background_tasks: BackgroundTasks,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> AdminRoleResponse:
    return await ctrl.revoke_admin(session, body, current_user, settings, background_tasks)
