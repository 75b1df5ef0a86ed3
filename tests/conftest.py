from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import easybuk.models  # noqa: F401 - register every table with Base
from easybuk.config import Settings
from easybuk.core.database import Base, get_async_session_factory
from easybuk.database import get_db
from easybuk.main import create_app
from easybuk.rate_limit import limiter

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

limiter.enabled = False


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url=TEST_DATABASE_URL,
        jwt_secret="test-secret",
        app_base_url="http://localhost:3000",
        google_client_id="test-google-client-id",
        env_name="test",
        smtp_host="",
    )


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return get_async_session_factory(engine)


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncClient, None]:
    app = create_app(settings)

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ── Helpers ───────────────────────────────────────────────────────────────────

async def signup(
    client: AsyncClient,
    email: str,
    *,
    role: str = "CLIENT",
    password: str = "secret123",
    name: str = "Test User",
) -> str:
    """Create an account through the API and return its access token.

    The client's cookie jar is cleared so callers choose the identity per
    request with ``bearer(token)``.
    """
    response = await client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "name": name, "role": role},
    )
    assert response.status_code == 201, response.text
    token = response.cookies["auth-token"]
    client.cookies.clear()
    return token


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
