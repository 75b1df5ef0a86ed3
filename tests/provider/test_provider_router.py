import uuid
from decimal import Decimal

import pytest
from httpx import AsyncClient

from conftest import bearer, signup


async def _publish(client: AsyncClient, token: str, **overrides) -> dict:
    payload = {
        "title": "House cleaning",
        "description": "Two cleaners, all equipment supplied.",
        "price": "150.00",
        **overrides,
    }
    response = await client.post(
        "/api/provider/services", json=payload, headers=bearer(token)
    )
    assert response.status_code == 201, response.text
    return response.json()["service"]


@pytest.mark.asyncio
async def test_create_service_defaults(client: AsyncClient) -> None:
    token = await signup(client, "cleaner@example.com", role="PROVIDER")

    service = await _publish(client, token)

    assert service["title"] == "House cleaning"
    assert Decimal(service["price"]) == Decimal("150.00")
    assert service["currency"] == "GHS"
    assert service["isActive"] is True
    assert service["status"] == "ACTIVE"
    assert service["category"] == "TECHNICAL_SERVICES"


@pytest.mark.asyncio
async def test_list_services_only_returns_own(client: AsyncClient) -> None:
    first = await signup(client, "first@example.com", role="PROVIDER")
    second = await signup(client, "second@example.com", role="PROVIDER")
    await _publish(client, first, title="Plumbing")
    await _publish(client, first, title="Tiling", category="HOME_SERVICES")
    await _publish(client, second, title="Tutoring")

    response = await client.get("/api/provider/services", headers=bearer(first))

    assert response.status_code == 200
    titles = {s["title"] for s in response.json()["services"]}
    assert titles == {"Plumbing", "Tiling"}


@pytest.mark.asyncio
async def test_client_without_provider_profile_gets_404(client: AsyncClient) -> None:
    token = await signup(client, "client@example.com")

    listed = await client.get("/api/provider/services", headers=bearer(token))
    created = await client.post(
        "/api/provider/services",
        json={"title": "Anything", "price": "10"},
        headers=bearer(token),
    )

    assert listed.status_code == 404
    assert listed.json()["detail"] == "Provider profile not found."
    assert created.status_code == 404


@pytest.mark.asyncio
async def test_services_require_session(client: AsyncClient) -> None:
    response = await client.get("/api/provider/services")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_service_rejects_bad_price(client: AsyncClient) -> None:
    token = await signup(client, "cheap@example.com", role="PROVIDER")

    response = await client.post(
        "/api/provider/services",
        json={"title": "Free work", "price": "0"},
        headers=bearer(token),
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_deactivate_and_reactivate_service(client: AsyncClient) -> None:
    token = await signup(client, "toggle@example.com", role="PROVIDER")
    service = await _publish(client, token)
    url = f"/api/provider/services/{service['id']}/status"

    off = await client.patch(url, json={"status": "INACTIVE"}, headers=bearer(token))
    assert off.status_code == 200
    assert off.json()["service"]["status"] == "INACTIVE"

    on = await client.patch(url, json={"status": "ACTIVE"}, headers=bearer(token))
    assert on.status_code == 200
    assert on.json()["service"]["status"] == "ACTIVE"

    listed = await client.get("/api/provider/services", headers=bearer(token))
    assert listed.json()["services"][0]["isActive"] is True


@pytest.mark.asyncio
async def test_update_status_of_foreign_service_is_not_found(client: AsyncClient) -> None:
    owner = await signup(client, "owner@example.com", role="PROVIDER")
    other = await signup(client, "other@example.com", role="PROVIDER")
    service = await _publish(client, owner)

    response = await client.patch(
        f"/api/provider/services/{service['id']}/status",
        json={"status": "INACTIVE"},
        headers=bearer(other),
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Service not found."


@pytest.mark.asyncio
async def test_update_status_unknown_service(client: AsyncClient) -> None:
    token = await signup(client, "ghost@example.com", role="PROVIDER")

    response = await client.patch(
        f"/api/provider/services/{uuid.uuid4()}/status",
        json={"status": "INACTIVE"},
        headers=bearer(token),
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_status_rejects_unknown_value(client: AsyncClient) -> None:
    token = await signup(client, "weird@example.com", role="PROVIDER")
    service = await _publish(client, token)

    response = await client.patch(
        f"/api/provider/services/{service['id']}/status",
        json={"status": "PAUSED"},
        headers=bearer(token),
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_get_own_service(client: AsyncClient) -> None:
    token = await signup(client, "single@example.com", role="PROVIDER")
    service = await _publish(client, token, title="Catering")

    response = await client.get(
        f"/api/provider/services/{service['id']}", headers=bearer(token)
    )

    assert response.status_code == 200
    assert response.json()["service"]["title"] == "Catering"


@pytest.mark.asyncio
async def test_get_foreign_service_is_not_found(client: AsyncClient) -> None:
    owner = await signup(client, "mine@example.com", role="PROVIDER")
    other = await signup(client, "theirs@example.com", role="PROVIDER")
    service = await _publish(client, owner)

    response = await client.get(
        f"/api/provider/services/{service['id']}", headers=bearer(other)
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_update_service_changes_only_sent_fields(client: AsyncClient) -> None:
    token = await signup(client, "editor@example.com", role="PROVIDER")
    service = await _publish(client, token, title="Painting", price="80.00")

    response = await client.put(
        f"/api/provider/services/{service['id']}",
        json={"price": "95.50", "status": "INACTIVE", "category": "CREATIVE_SERVICES"},
        headers=bearer(token),
    )

    assert response.status_code == 200, response.text
    updated = response.json()["service"]
    assert updated["title"] == "Painting"
    assert updated["description"] == service["description"]
    assert Decimal(updated["price"]) == Decimal("95.50")
    assert updated["category"] == "CREATIVE_SERVICES"
    assert updated["status"] == "INACTIVE"
    assert updated["isActive"] is False


@pytest.mark.asyncio
async def test_update_service_rejects_null_title(client: AsyncClient) -> None:
    token = await signup(client, "nulltitle@example.com", role="PROVIDER")
    service = await _publish(client, token)

    response = await client.put(
        f"/api/provider/services/{service['id']}",
        json={"title": None},
        headers=bearer(token),
    )

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_foreign_service_is_not_found(client: AsyncClient) -> None:
    owner = await signup(client, "keeper@example.com", role="PROVIDER")
    other = await signup(client, "meddler@example.com", role="PROVIDER")
    service = await _publish(client, owner)

    response = await client.put(
        f"/api/provider/services/{service['id']}",
        json={"title": "Hijacked"},
        headers=bearer(other),
    )

    assert response.status_code == 404
    kept = await client.get(f"/api/provider/services/{service['id']}", headers=bearer(owner))
    assert kept.json()["service"]["title"] == "House cleaning"


@pytest.mark.asyncio
async def test_delete_service(client: AsyncClient) -> None:
    owner = await signup(client, "remover@example.com", role="PROVIDER")
    other = await signup(client, "bystander@example.com", role="PROVIDER")
    service = await _publish(client, owner)
    url = f"/api/provider/services/{service['id']}"

    foreign = await client.delete(url, headers=bearer(other))
    assert foreign.status_code == 404

    deleted = await client.delete(url, headers=bearer(owner))
    assert deleted.status_code == 200
    assert deleted.json()["message"] == "Service deleted successfully."

    assert (await client.get(url, headers=bearer(owner))).status_code == 404
    listed = await client.get("/api/provider/services", headers=bearer(owner))
    assert listed.json()["services"] == []


@pytest.mark.asyncio
async def test_malformed_service_id_is_not_found(client: AsyncClient) -> None:
    token = await signup(client, "typo@example.com", role="PROVIDER")

    fetched = await client.get("/api/provider/services/not-a-uuid", headers=bearer(token))
    patched = await client.patch(
        "/api/provider/services/not-a-uuid/status",
        json={"status": "ACTIVE"},
        headers=bearer(token),
    )

    assert fetched.status_code == 404
    assert fetched.json()["detail"] == "Service not found."
    assert patched.status_code == 404
