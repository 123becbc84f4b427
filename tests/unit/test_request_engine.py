"""Unit tests for the request engine.

These tests drive :class:`ApiClient` through ``httpx.MockTransport``
with an injected sleep, so retry sequences run instantly and the
requested backoff delays can be asserted exactly.
"""

import asyncio
import logging

import httpx
import pytest

from kit_sdk.auth import BaseAuthProvider
from kit_sdk.config import ClientConfig
from kit_sdk.exceptions import (
    AuthenticationError,
    InvalidRequestError,
    RateLimitError,
    ResponseDecodeError,
    ServerError,
    UnknownAPIError,
)
from kit_sdk.utils.http import ApiClient


def _server_error():
    return httpx.Response(500, json={"error": "boom"})


class TestBuildUrl:
    """URL joining and query assembly."""

    @pytest.mark.parametrize(
        "base_url,path",
        [
            ("http://h/", "/x"),
            ("http://h", "x"),
            ("http://h", "/x"),
            ("http://h/", "x"),
        ],
    )
    def test_single_separator(self, make_api, base_url, path):
        api, _ = make_api(base_url=base_url)
        assert api.build_url(path) == "http://h/x"

    @pytest.mark.parametrize("query", [None, {}, [], {"after": None}])
    def test_empty_query_adds_no_question_mark(self, make_api, query):
        api, _ = make_api(base_url="http://h")
        assert api.build_url("/x", query) == "http://h/x"

    def test_query_appends_exactly_one_question_mark(self, make_api):
        api, _ = make_api(base_url="http://h")
        url = api.build_url("/x", {"per_page": 50, "after": "abc", "before": None})
        assert url == "http://h/x?per_page=50&after=abc"
        assert url.count("?") == 1

    def test_ordered_pairs_repeat_keys(self, make_api):
        api, _ = make_api(base_url="http://h")
        url = api.build_url("/x", [("tag_id", "1"), ("tag_id", "2")])
        assert url == "http://h/x?tag_id=1&tag_id=2"

    def test_query_values_are_encoded(self, make_api):
        api, _ = make_api(base_url="http://h")
        url = api.build_url("/x", {"email_address": "a+b@example.com"})
        assert url == "http://h/x?email_address=a%2Bb%40example.com"


class TestHeaders:
    """Default, auth and per-call header layering."""

    @pytest.mark.asyncio
    async def test_default_headers_and_api_key(self, make_api):
        api, recorder = make_api()
        await api.get("/account")

        headers = recorder.last.headers
        assert headers["Accept"] == "application/json"
        assert headers["Content-Type"] == "application/json"
        assert headers["User-Agent"].startswith("kit-sdk-python/")
        assert headers["X-Kit-Api-Key"] == "test-api-key"
        assert "Authorization" not in headers

    @pytest.mark.asyncio
    @pytest.mark.auth
    async def test_oauth_uses_bearer_token(self, make_api):
        api, recorder = make_api(auth_type="oauth")
        await api.get("/account")

        headers = recorder.last.headers
        assert headers["Authorization"] == "Bearer test-api-key"
        assert "X-Kit-Api-Key" not in headers

    @pytest.mark.asyncio
    async def test_caller_headers_override_case_insensitively(self, make_api):
        api, recorder = make_api()
        await api.get(
            "/account",
            headers={"x-kit-api-key": "override", "accept": "text/plain"},
        )

        headers = recorder.last.headers
        assert headers.get_list("X-Kit-Api-Key") == ["override"]
        assert headers.get_list("Accept") == ["text/plain"]

    @pytest.mark.asyncio
    @pytest.mark.auth
    async def test_custom_auth_provider(self, make_api):
        class PartnerProvider(BaseAuthProvider):
            @property
            def provider_type(self):
                return "partner"

            def get_headers(self):
                return {"X-Partner-Token": self._credential}

        api, recorder = make_api(auth_provider=PartnerProvider("partner-secret"))
        await api.get("/account")

        headers = recorder.last.headers
        assert headers["X-Partner-Token"] == "partner-secret"
        assert "X-Kit-Api-Key" not in headers


class TestDispatch:
    """Method, body and timeout handling."""

    @pytest.mark.asyncio
    async def test_method_is_upper_cased(self, make_api):
        api, recorder = make_api()
        await api.request("patch", "/subscribers/1")
        assert recorder.last.method == "PATCH"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "verb,method", [("get", "GET"), ("post", "POST"), ("put", "PUT"), ("delete", "DELETE")]
    )
    async def test_verb_helpers(self, make_api, verb, method):
        api, recorder = make_api()
        await getattr(api, verb)("/tags")
        assert recorder.last.method == method
        assert recorder.last.url == httpx.URL("https://api.kit.test/v4/tags")

    @pytest.mark.asyncio
    async def test_body_sent_verbatim(self, make_api):
        api, recorder = make_api()
        await api.post("/tags", body='{"name": "Vip"}')
        assert recorder.last.content == b'{"name": "Vip"}'

    @pytest.mark.asyncio
    async def test_per_call_timeout_is_forwarded(self, make_api):
        api, recorder = make_api()
        await api.get("/account", timeout=5.0)
        assert recorder.last.extensions["timeout"]["read"] == 5.0


class TestResponseHandling:
    """Terminal outcomes that never retry."""

    @pytest.mark.asyncio
    async def test_success_returns_decoded_json(self, make_api, fake_sleep):
        api, recorder = make_api(httpx.Response(200, json={"success": True}))
        assert await api.get("/some/route") == {"success": True}
        assert len(recorder.requests) == 1
        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_204_returns_empty_dict_without_decoding(self, make_api):
        api, _ = make_api(httpx.Response(204, content=b"not json"))
        assert await api.delete("/broadcasts/1") == {}

    @pytest.mark.asyncio
    async def test_404_returns_none_without_retry(self, make_api, fake_sleep):
        api, recorder = make_api(httpx.Response(404, json={"errors": ["Not Found"]}))
        assert await api.get("/subscribers/999") is None
        assert len(recorder.requests) == 1
        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_undecodable_success_body_raises(self, make_api):
        api, recorder = make_api(httpx.Response(200, content=b"<html>"))
        with pytest.raises(ResponseDecodeError) as exc_info:
            await api.get("/account")
        assert exc_info.value.status_code == 200
        assert exc_info.value.response_body == "<html>"
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status,error_class",
        [
            (400, UnknownAPIError),
            (401, AuthenticationError),
            (403, UnknownAPIError),
            (422, InvalidRequestError),
        ],
    )
    async def test_client_errors_never_retry(
        self, make_api, fake_sleep, status, error_class
    ):
        api, recorder = make_api(
            httpx.Response(status, json={"errors": ["nope"]}), max_retries=5
        )
        with pytest.raises(error_class) as exc_info:
            await api.get("/account")

        assert exc_info.value.status_code == status
        assert exc_info.value.detail == "Errors: nope"
        assert len(recorder.requests) == 1
        assert fake_sleep.calls == []


class TestRetry:
    """Retry of 5xx, 429 and transport failures."""

    @pytest.mark.asyncio
    async def test_500_then_success(self, make_api, fake_sleep):
        api, recorder = make_api(
            _server_error(),
            httpx.Response(200, json={"success": True}),
            max_retries=2,
            retry_delay=10,
        )
        assert await api.get("/some/route") == {"success": True}
        assert len(recorder.requests) == 2
        assert len(fake_sleep.calls) == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_retries", [0, 1, 3])
    async def test_always_500_makes_n_plus_one_attempts(
        self, make_api, fake_sleep, max_retries
    ):
        api, recorder = make_api(_server_error(), max_retries=max_retries)
        with pytest.raises(ServerError) as exc_info:
            await api.get("/some/route")

        assert exc_info.value.status_code == 500
        assert len(recorder.requests) == max_retries + 1
        assert len(fake_sleep.calls) == max_retries

    @pytest.mark.asyncio
    async def test_429_retries_like_500(self, make_api):
        api, recorder = make_api(
            httpx.Response(429, headers={"Retry-After": "3"}, json={"errors": ["slow down"]}),
            max_retries=2,
        )
        with pytest.raises(RateLimitError) as exc_info:
            await api.get("/subscribers")

        assert len(recorder.requests) == 3
        assert exc_info.value.retry_after == 3.0

    @pytest.mark.asyncio
    async def test_each_attempt_is_a_fresh_request(self, make_api):
        api, recorder = make_api(
            _server_error(), httpx.Response(200, json={}), max_retries=1
        )
        await api.post("/tags", body='{"name": "a"}', query={"x": "1"})

        first, second = recorder.requests
        assert first is not second
        assert first.url == second.url
        assert first.content == second.content == b'{"name": "a"}'

    @pytest.mark.asyncio
    async def test_transport_error_then_success(self, make_api, fake_sleep):
        api, recorder = make_api(
            httpx.ConnectError("connection refused"),
            httpx.Response(200, json={"ok": True}),
        )
        assert await api.get("/account") == {"ok": True}
        assert len(recorder.requests) == 2
        assert len(fake_sleep.calls) == 1

    @pytest.mark.asyncio
    async def test_exhausted_transport_error_is_reraised_unchanged(
        self, make_api, fake_sleep
    ):
        error = httpx.ReadTimeout("timed out")
        api, recorder = make_api(error, max_retries=2)
        with pytest.raises(httpx.ReadTimeout) as exc_info:
            await api.get("/account")

        assert exc_info.value is error
        assert len(recorder.requests) == 3
        assert len(fake_sleep.calls) == 2

    @pytest.mark.asyncio
    async def test_transport_error_with_status_like_message_still_retries(
        self, make_api
    ):
        api, recorder = make_api(
            httpx.ConnectError("upstream said 404"),
            httpx.Response(200, json={}),
        )
        assert await api.get("/account") == {}
        assert len(recorder.requests) == 2

    @pytest.mark.asyncio
    async def test_cancellation_is_not_retried(self, make_api, fake_sleep):
        api, recorder = make_api(asyncio.CancelledError(), max_retries=3)
        with pytest.raises(asyncio.CancelledError):
            await api.get("/account")

        assert len(recorder.requests) == 1
        assert fake_sleep.calls == []

    @pytest.mark.asyncio
    async def test_backoff_delays_stay_within_jitter_bounds(self, make_api, fake_sleep):
        api, _ = make_api(_server_error(), max_retries=3, retry_delay=100)
        with pytest.raises(ServerError):
            await api.get("/account")

        assert len(fake_sleep.delays_ms) == 3
        for attempt, delay in enumerate(fake_sleep.delays_ms):
            base = 100 * 2**attempt
            assert int(base * 0.75) <= delay <= int(base * 1.25)

    @pytest.mark.asyncio
    async def test_zero_retry_delay_never_waits(self, make_api, fake_sleep):
        api, _ = make_api(_server_error(), max_retries=2, retry_delay=0)
        with pytest.raises(ServerError):
            await api.get("/account")
        assert fake_sleep.calls == [0, 0]

    @pytest.mark.asyncio
    async def test_retry_is_logged_at_warning(self, make_api, caplog):
        api, _ = make_api(_server_error(), httpx.Response(200, json={}), max_retries=1)
        with caplog.at_level(logging.WARNING, logger="kit_sdk"):
            await api.get("/account")
        assert "Retrying GET https://api.kit.test/v4/account" in caplog.text
        assert "status 500" in caplog.text


class TestLogging:
    @pytest.mark.asyncio
    async def test_debug_log_redacts_credentials(self, make_api, caplog):
        api, _ = make_api(api_key="super-secret-key-value")
        with caplog.at_level(logging.DEBUG, logger="kit_sdk"):
            await api.get("/account")

        assert "GET https://api.kit.test/v4/account" in caplog.text
        assert "super-secret-key-value" not in caplog.text
        assert "<REDACTED:length=22>" in caplog.text


class TestLifecycle:
    """Ownership of the underlying httpx client."""

    @pytest.mark.asyncio
    async def test_owned_client_closed_on_exit(self, make_api):
        api, _ = make_api()
        async with api:
            await api.get("/account")
        assert api._client.is_closed

    @pytest.mark.asyncio
    async def test_external_client_left_open(self):
        external = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200, json={}))
        )
        api = ApiClient(
            ClientConfig(api_key="k", base_url="http://h"), http_client=external
        )
        async with api:
            assert await api.get("/x") == {}

        assert not external.is_closed
        await external.aclose()
