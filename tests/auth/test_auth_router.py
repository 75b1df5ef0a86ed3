import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from easybuk.auth.models import User
from easybuk.auth.tokens import create_access_token
from easybuk.config import Settings

from conftest import bearer, signup


def _set_cookies(response) -> dict[str, str]:
    """Map cookie name -> raw Set-Cookie header."""
    return {
        header.split("=", 1)[0]: header
        for header in response.headers.get_list("set-cookie")
    }


async def _login(client: AsyncClient, email: str, password: str = "secret123"):
    return await client.post(
        "/api/auth/login", json={"email": email, "password": password}
    )


@pytest.mark.asyncio
async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "easybuk"}
    assert response.headers["X-Request-ID"]


# ── Signup ────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_signup_returns_session_view(client: AsyncClient) -> None:
    response = await client.post(
        "/api/auth/signup",
        json={
            "email": "kwame@example.com",
            "password": "secret123",
            "name": "Kwame Boateng",
            "role": "PROVIDER",
            "phone": "+233201234567",
        },
    )

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["email"] == "kwame@example.com"
    assert user["roles"] == ["PROVIDER"]
    assert user["activeRole"] == "PROVIDER"
    assert user["emailVerified"] is False
    assert user["providerProfile"]["verificationStatus"] == "PENDING"
    assert user["clientProfile"] is None
    assert "passwordHash" not in user
    assert set(_set_cookies(response)) == {"auth-token", "refresh-token"}


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient) -> None:
    await signup(client, "dup@example.com")
    response = await client.post(
        "/api/auth/signup",
        json={"email": "DUP@example.com", "password": "secret123", "name": "Dup", "role": "CLIENT"},
    )
    assert response.status_code == 409


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@example.com", "password": "12345", "name": "Short", "role": "CLIENT"},
        {"email": "a@example.com", "password": "secret123", "name": "Admin", "role": "ADMIN"},
        {"email": "not-an-email", "password": "secret123", "name": "Bad", "role": "CLIENT"},
        {"email": "a@example.com", "password": "secret123", "role": "CLIENT"},
    ],
)
async def test_signup_validation_is_400(client: AsyncClient, payload: dict) -> None:
    response = await client.post("/api/auth/signup", json=payload)
    assert response.status_code == 400


# ── Login ─────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_login_sets_session_cookies(client: AsyncClient) -> None:
    await signup(client, "login@example.com")

    response = await _login(client, "login@example.com")

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "login@example.com"
    cookies = _set_cookies(response)
    access, refresh = cookies["auth-token"], cookies["refresh-token"]
    assert "Max-Age=604800" in access
    assert "Max-Age=2592000" in refresh
    for header in (access, refresh):
        assert "HttpOnly" in header
        assert "Path=/" in header
        assert "samesite=lax" in header.lower()
        assert "; secure" not in header.lower()


@pytest.mark.asyncio
async def test_login_cookies_are_secure_in_production(
    client: AsyncClient, settings: Settings
) -> None:
    await signup(client, "prod@example.com")
    settings.env_name = "production"

    response = await _login(client, "prod@example.com")

    for header in _set_cookies(response).values():
        assert "; secure" in header.lower()


@pytest.mark.asyncio
async def test_login_failures_are_identical(client: AsyncClient) -> None:
    await signup(client, "real@example.com")

    wrong_password = await _login(client, "real@example.com", "wrong-password")
    unknown_email = await _login(client, "ghost@example.com")

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json()["detail"] == unknown_email.json()["detail"]
    assert "set-cookie" not in wrong_password.headers


@pytest.mark.asyncio
async def test_signup_then_login_returns_linked_profiles(client: AsyncClient) -> None:
    await signup(client, "profiles@example.com", role="PROVIDER")

    response = await _login(client, "profiles@example.com")

    assert response.status_code == 200, response.text
    user = response.json()["user"]
    assert user["providerProfile"]["id"]
    assert user["clientProfile"] is None
    assert user["adminProfile"] is None


@pytest.mark.asyncio
async def test_password_whitespace_is_significant(client: AsyncClient) -> None:
    await signup(client, "spaces@example.com", password="  padded secret  ")

    exact = await _login(client, "spaces@example.com", "  padded secret  ")
    client.cookies.clear()
    stripped = await _login(client, "spaces@example.com", "padded secret")

    assert exact.status_code == 200
    assert stripped.status_code == 401


@pytest.mark.asyncio
async def test_login_missing_fields_is_400(client: AsyncClient) -> None:
    response = await client.post("/api/auth/login", json={"email": "a@example.com"})
    assert response.status_code == 400


# ── Session ───────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_me_with_cookie(client: AsyncClient) -> None:
    await signup(client, "cookie@example.com")
    await _login(client, "cookie@example.com")

    response = await client.get("/api/auth/me")

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "cookie@example.com"


@pytest.mark.asyncio
async def test_me_with_bearer_header(client: AsyncClient) -> None:
    token = await signup(client, "header@example.com")
    response = await client.get("/api/auth/me", headers=bearer(token))
    assert response.status_code == 200


@pytest.mark.asyncio
@pytest.mark.parametrize("headers", [{}, {"Authorization": "Bearer garbage"}])
async def test_me_requires_valid_token(client: AsyncClient, headers: dict) -> None:
    response = await client.get("/api/auth/me", headers=headers)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me_for_deleted_user_is_404(
    client: AsyncClient, session_factory: async_sessionmaker[AsyncSession]
) -> None:
    token = await signup(client, "gone@example.com")
    async with session_factory() as session:
        await session.execute(delete(User).where(User.email == "gone@example.com"))
        await session.commit()

    response = await client.get("/api/auth/me", headers=bearer(token))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_me_for_unknown_user_id_is_404(client: AsyncClient, settings: Settings) -> None:
    token = create_access_token(uuid.uuid4(), "nobody@example.com", ["CLIENT"], settings)
    response = await client.get("/api/auth/me", headers=bearer(token))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_refresh_reissues_cookies(client: AsyncClient) -> None:
    await signup(client, "refresh@example.com")
    await _login(client, "refresh@example.com")

    response = await client.post("/api/auth/refresh")

    assert response.status_code == 200
    assert set(_set_cookies(response)) == {"auth-token", "refresh-token"}


@pytest.mark.asyncio
async def test_refresh_rejects_access_token(client: AsyncClient) -> None:
    token = await signup(client, "mixup@example.com")
    response = await client.post(
        "/api/auth/refresh", headers={"Cookie": f"refresh-token={token}"}
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_refresh_without_cookie(client: AsyncClient) -> None:
    response = await client.post("/api/auth/refresh")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_logout_clears_cookies(client: AsyncClient) -> None:
    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    cookies = _set_cookies(response)
    assert set(cookies) == {"auth-token", "refresh-token"}
    for header in cookies.values():
        assert "Max-Age=0" in header


# ── Roles ─────────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_add_role(client: AsyncClient) -> None:
    token = await signup(client, "grow@example.com")

    response = await client.post(
        "/api/auth/add-role", json={"role": "PROVIDER"}, headers=bearer(token)
    )

    assert response.status_code == 200
    user = response.json()["user"]
    assert user["roles"] == ["CLIENT", "PROVIDER"]
    assert user["activeRole"] == "CLIENT"
    assert user["providerProfile"] is not None
    assert set(_set_cookies(response)) == {"auth-token"}


@pytest.mark.asyncio
async def test_add_role_already_held(client: AsyncClient) -> None:
    token = await signup(client, "same@example.com")
    response = await client.post(
        "/api/auth/add-role", json={"role": "CLIENT"}, headers=bearer(token)
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_add_role_requires_session(client: AsyncClient) -> None:
    response = await client.post("/api/auth/add-role", json={"role": "PROVIDER"})
    assert response.status_code == 401
