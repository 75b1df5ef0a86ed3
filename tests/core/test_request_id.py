import pytest
from httpx import AsyncClient

from easybuk.core.middleware.request_id import resolve_request_id


def test_resolve_request_id_keeps_safe_value() -> None:
    assert resolve_request_id("abc-123_x.y") == "abc-123_x.y"


@pytest.mark.parametrize("incoming", [None, "", "has space", "x" * 129, "line\nbreak"])
def test_resolve_request_id_replaces_unsafe_value(incoming) -> None:
    generated = resolve_request_id(incoming)
    assert generated != incoming
    assert len(generated) == 32


@pytest.mark.asyncio
async def test_request_id_echoed_on_success_and_error(client: AsyncClient) -> None:
    ok = await client.get("/health", headers={"X-Request-ID": "trace-1"})
    unauthorized = await client.get("/api/auth/me", headers={"X-Request-ID": "trace-2"})

    assert ok.headers["X-Request-ID"] == "trace-1"
    assert unauthorized.status_code == 401
    assert unauthorized.headers["X-Request-ID"] == "trace-2"
