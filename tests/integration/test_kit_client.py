"""End-to-end tests of the Kit facade against a mocked API.

Each scenario runs the full stack: environment resolution, the auth
provider, the request engine with its retry loop, and the handlers.
"""

import httpx
import pytest

from kit_sdk import Kit, ServerError
from kit_sdk.models import Pagination

pytestmark = pytest.mark.integration


@pytest.mark.asyncio
async def test_retry_then_success(make_kit, fake_sleep):
    """GET /some/route recovers from one 500."""
    kit, recorder = make_kit(
        httpx.Response(500, json={"error": "boom"}),
        httpx.Response(200, json={"success": True}),
        max_retries=2,
        retry_delay=10,
    )
    async with kit:
        result = await kit.get("/some/route")

    assert result == {"success": True}
    assert len(recorder.requests) == 2
    assert len(fake_sleep.calls) == 1
    assert 7 <= fake_sleep.delays_ms[0] <= 12


@pytest.mark.asyncio
async def test_retries_exhausted(make_kit):
    """Four consecutive 500s with three retries end in ServerError."""
    kit, recorder = make_kit(httpx.Response(500, text="Internal"), max_retries=3)
    async with kit:
        with pytest.raises(ServerError) as exc_info:
            await kit.get("/some/route")

    assert len(recorder.requests) == 4
    assert exc_info.value.status_code == 500
    assert "Status: 500" in str(exc_info.value)


@pytest.mark.asyncio
async def test_not_found_is_none(make_kit, fake_sleep):
    kit, recorder = make_kit(httpx.Response(404, json={"errors": ["Not Found"]}))
    async with kit:
        assert await kit.get("/some/route") is None

    assert len(recorder.requests) == 1
    assert fake_sleep.calls == []


@pytest.mark.asyncio
async def test_environment_configured_client(monkeypatch, fake_sleep):
    monkeypatch.setenv("KIT_API_KEY", "env-oauth-token")
    monkeypatch.setenv("KIT_AUTH_TYPE", "oauth")
    monkeypatch.setenv("KIT_BASE_URL", "https://api.kit.test/v4/")

    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "subscribers": [{"id": 1, "email_address": "a@example.com"}],
                "pagination": {
                    "has_previous_page": False,
                    "has_next_page": True,
                    "start_cursor": "WzFd",
                    "end_cursor": "WzFd",
                    "per_page": 1,
                },
            },
        )

    async with Kit(transport=httpx.MockTransport(handler), sleep=fake_sleep) as kit:
        page = await kit.subscribers.list(per_page=1)

    request = seen[0]
    assert str(request.url) == "https://api.kit.test/v4/subscribers?per_page=1"
    assert request.headers["Authorization"] == "Bearer env-oauth-token"
    assert Pagination.from_response(page).end_cursor == "WzFd"


@pytest.mark.asyncio
async def test_caller_headers_override_auth(make_kit):
    kit, recorder = make_kit(httpx.Response(200, json={}))
    async with kit:
        await kit.post(
            "/custom/route",
            headers={"X-Kit-Api-Key": "per-call-key"},
            body='{"a": 1}',
        )

    assert recorder.last.headers["X-Kit-Api-Key"] == "per-call-key"
    assert recorder.last.content == b'{"a": 1}'


@pytest.mark.asyncio
async def test_connection_failures_recover(make_kit, fake_sleep):
    kit, recorder = make_kit(
        httpx.ConnectError("refused"),
        httpx.ConnectError("refused"),
        httpx.Response(200, json={"tags": []}),
        max_retries=3,
        retry_delay=100,
    )
    async with kit:
        assert await kit.tags.list() == {"tags": []}

    assert len(recorder.requests) == 3
    assert len(fake_sleep.delays_ms) == 2
    assert 75 <= fake_sleep.delays_ms[0] <= 125
    assert 150 <= fake_sleep.delays_ms[1] <= 250
