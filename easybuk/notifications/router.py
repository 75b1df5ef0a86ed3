"""
Notifications domain: router.

Routes:
  GET     /api/notifications                  List own notifications
  PUT     /api/notifications                  Bulk read/unread by id
  PATCH   /api/notifications/mark-all-read    Mark every unread row read
  PATCH   /api/notifications/{id}/read        Mark one row read
  DELETE  /api/notifications/{id}             Delete one row

All routes require a session; rows of other users answer 403, unknown and
malformed ids 404.
"""
from __future__ import annotations


from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from easybuk.auth.dependencies import get_current_user
from easybuk.core.models.user import CurrentUser
from easybuk.core.schemas import MessageResponse
from easybuk.database import get_db
from easybuk.notifications import controller as ctrl
from easybuk.notifications.constants import DEFAULT_LIST_LIMIT, MAX_LIST_LIMIT
from easybuk.notifications.schemas import (
    BulkReadStateRequest,
    NotificationListResponse,
    NotificationResponse,
    UpdatedCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse, summary="List own notifications")
async def list_notifications(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=MAX_LIST_LIMIT),
    unread_only: bool = Query(False, alias="unreadOnly"),
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> NotificationListResponse:
    return await ctrl.list_notifications(
        session, current_user.id, limit=limit, unread_only=unread_only
    )


@router.put(
    "",
    response_model=UpdatedCountResponse,
    summary="Mark the given notifications read or unread",
)
async def set_read_state(
    body: BulkReadStateRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> UpdatedCountResponse:
    return await ctrl.set_read_state(session, current_user.id, body)


@router.patch(
    "/mark-all-read",
    response_model=UpdatedCountResponse,
    summary="Mark every unread notification read",
)
async def mark_all_read(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> UpdatedCountResponse:
    return await ctrl.mark_all_read(session, current_user.id)


@router.patch(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    summary="Mark one notification read",
)
async def mark_read(
    notification_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> NotificationResponse:
    return await ctrl.mark_read(session, current_user.id, notification_id)


@router.delete(
    "/{notification_id}",
    response_model=MessageResponse,
    summary="Delete one notification",
)
async def delete_notification(
    notification_id: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    return await ctrl.delete_notification(session, current_user.id, notification_id)
