"""EasyBuk: Pydantic V2 schemas for the notifications domain."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field, StrictBool

from easybuk.core.schemas import RequestModel, ResponseModel
from easybuk.notifications.constants import NotificationType


class BulkReadStateRequest(RequestModel):
    """Body for PUT /notifications: ``{"notificationIds": [...], "markAsRead": true}``."""

    notification_ids: list[uuid.UUID] = Field(max_length=500)
    mark_as_read: StrictBool


class NotificationView(ResponseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    type: NotificationType
    title: str
    message: str
    data: dict[str, Any] | None = None
    is_read: bool
    read_at: datetime | None = None
    expires_at: datetime | None = None
    created_at: datetime


class NotificationListResponse(ResponseModel):
    success: bool = True
    notifications: list[NotificationView]
    unread_count: int
    total: int


class NotificationResponse(ResponseModel):
    success: bool = True
    notification: NotificationView


class UpdatedCountResponse(ResponseModel):
    success: bool = True
    updated_count: int
