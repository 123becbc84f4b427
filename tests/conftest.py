import os
import random
import sys
from pathlib import Path

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from kit_sdk import ApiClient, ClientConfig, Kit  # noqa: E402

TEST_API_KEY = "test-api-key"
TEST_BASE_URL = "https://api.kit.test/v4"


def pytest_configure(config):
    # Register the asyncio marker so pytest doesn't warn when it's used.
    config.addinivalue_line(
        "markers", "asyncio: mark test to run in an asyncio event loop"
    )
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line("markers", "auth: mark test as testing authentication")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep the developer's KIT_* variables and .env out of tests.

    Settings read the process environment and a ``.env`` file in the
    working directory, so both are neutralised for every test.
    """
    for name in list(os.environ):
        if name.upper().startswith("KIT_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    yield


class FakeSleep:
    """Awaitable stand-in for ``asyncio.sleep`` that records requested waits."""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)

    @property
    def delays_ms(self):
        return [round(s * 1000) for s in self.calls]


class SequenceTransport:
    """Serve queued outcomes in order and record every request.

    Each outcome is an ``httpx.Response`` or an exception to raise. The
    last outcome is repeated once the queue is down to one item.
    """

    def __init__(self, *outcomes):
        self._outcomes = list(outcomes)
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        outcome = self._outcomes.pop(0) if len(self._outcomes) > 1 else self._outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    @property
    def last(self):
        return self.requests[-1]


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def make_api(fake_sleep):
    """Build an ApiClient whose transport replays the given outcomes."""

    def _make(*outcomes, auth_provider=None, **config_overrides):
        recorder = SequenceTransport(*(outcomes or (httpx.Response(200, json={}),)))
        values = {"api_key": TEST_API_KEY, "base_url": TEST_BASE_URL}
        values.update(config_overrides)
        api = ApiClient(
            ClientConfig(**values),
            auth_provider=auth_provider,
            transport=httpx.MockTransport(recorder),
            sleep=fake_sleep,
            rng=random.Random(1234),
        )
        return api, recorder

    return _make


@pytest.fixture
def make_kit(fake_sleep):
    """Build a Kit facade whose transport replays the given outcomes."""

    def _make(*outcomes, **kwargs):
        recorder = SequenceTransport(*(outcomes or (httpx.Response(200, json={}),)))
        kwargs.setdefault("api_key", TEST_API_KEY)
        kwargs.setdefault("base_url", TEST_BASE_URL)
        kit = Kit(
            transport=httpx.MockTransport(recorder),
            sleep=fake_sleep,
            rng=random.Random(1234),
            **kwargs,
        )
        return kit, recorder

    return _make


# Rely on pytest-asyncio for async test handling; no custom hook needed.
