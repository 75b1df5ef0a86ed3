import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from easybuk.notifications.constants import NotificationType
from easybuk.notifications.service import create_notification

from conftest import bearer, signup


async def _user_id(client: AsyncClient, token: str) -> uuid.UUID:
    response = await client.get("/api/auth/me", headers=bearer(token))
    return uuid.UUID(response.json()["user"]["id"])


async def _seed(
    session_factory: async_sessionmaker[AsyncSession], user_id: uuid.UUID, count: int = 1
) -> list[uuid.UUID]:
    async with session_factory() as session:
        ids = []
        for i in range(count):
            notification = await create_notification(
                session,
                user_id=user_id,
                type=NotificationType.BOOKING_REQUEST,
                title=f"Booking request {i}",
                message="You have a new booking request.",
                data={"bookingId": f"bk-{i}"},
            )
            ids.append(notification.id)
        await session.commit()
        return ids


@pytest.mark.asyncio
async def test_list_notifications(
    client: AsyncClient, session_factory: async_sessionmaker[AsyncSession]
) -> None:
    token = await signup(client, "list@example.com")
    await _seed(session_factory, await _user_id(client, token), count=3)

    response = await client.get(
        "/api/notifications", params={"limit": 2}, headers=bearer(token)
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 2
    assert body["unreadCount"] == 3
    assert body["notifications"][0]["isRead"] is False
    assert body["notifications"][0]["data"]["bookingId"].startswith("bk-")


@pytest.mark.asyncio
async def test_list_requires_session(client: AsyncClient) -> None:
    response = await client.get("/api/notifications")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_mark_read_of_another_user_is_403(
    client: AsyncClient, session_factory: async_sessionmaker[AsyncSession]
) -> None:
    owner = await signup(client, "owner@example.com")
    intruder = await signup(client, "intruder@example.com")
    [notification_id] = await _seed(session_factory, await _user_id(client, owner))

    response = await client.patch(
        f"/api/notifications/{notification_id}/read", headers=bearer(intruder)
    )
    assert response.status_code == 403

    response = await client.delete(
        f"/api/notifications/{notification_id}", headers=bearer(intruder)
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_mark_read_and_delete_own(
    client: AsyncClient, session_factory: async_sessionmaker[AsyncSession]
) -> None:
    token = await signup(client, "own@example.com")
    [notification_id] = await _seed(session_factory, await _user_id(client, token))

    response = await client.patch(
        f"/api/notifications/{notification_id}/read", headers=bearer(token)
    )
    assert response.status_code == 200
    notification = response.json()["notification"]
    assert notification["isRead"] is True
    assert notification["readAt"] is not None

    response = await client.delete(
        f"/api/notifications/{notification_id}", headers=bearer(token)
    )
    assert response.status_code == 200

    response = await client.delete(
        f"/api/notifications/{notification_id}", headers=bearer(token)
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_mark_unknown_notification_is_404(client: AsyncClient) -> None:
    token = await signup(client, "nobody@example.com")
    response = await client.patch(
        f"/api/notifications/{uuid.uuid4()}/read", headers=bearer(token)
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_malformed_notification_id_is_404(client: AsyncClient) -> None:
    token = await signup(client, "malformed@example.com")

    marked = await client.patch("/api/notifications/not-a-uuid/read", headers=bearer(token))
    deleted = await client.delete("/api/notifications/12345", headers=bearer(token))

    assert marked.status_code == 404
    assert marked.json()["detail"] == "Notification not found."
    assert deleted.status_code == 404


@pytest.mark.asyncio
async def test_mark_all_read_twice(
    client: AsyncClient, session_factory: async_sessionmaker[AsyncSession]
) -> None:
    token = await signup(client, "bulk@example.com")
    await _seed(session_factory, await _user_id(client, token), count=2)

    first = await client.patch("/api/notifications/mark-all-read", headers=bearer(token))
    second = await client.patch("/api/notifications/mark-all-read", headers=bearer(token))

    assert first.json()["updatedCount"] == 2
    assert second.status_code == 200
    assert second.json()["updatedCount"] == 0


@pytest.mark.asyncio
async def test_bulk_read_state(
    client: AsyncClient, session_factory: async_sessionmaker[AsyncSession]
) -> None:
    token = await signup(client, "put@example.com")
    ids = await _seed(session_factory, await _user_id(client, token), count=2)

    response = await client.put(
        "/api/notifications",
        json={"notificationIds": [str(i) for i in ids], "markAsRead": True},
        headers=bearer(token),
    )

    assert response.status_code == 200
    assert response.json()["updatedCount"] == 2


@pytest.mark.asyncio
async def test_bulk_read_state_rejects_bad_body(client: AsyncClient) -> None:
    token = await signup(client, "badput@example.com")
    response = await client.put(
        "/api/notifications",
        json={"notificationIds": "not-a-list", "markAsRead": "yes"},
        headers=bearer(token),
    )
    assert response.status_code == 400
