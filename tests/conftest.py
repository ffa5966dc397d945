"""
Global test configuration and shared fixtures.
"""

from collections.abc import Callable
from contextlib import suppress
import logging
import os

import httpx
import pytest

from policy_assist.config import resolve_config
from policy_assist.transport import ApiTransport

BASE_URL = "http://backend.test"


# --- Environment Isolation (Autouse) ---
@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-in escape hatch: mark a test with @pytest.mark.allow_dotenv
    to permit .env loading for that specific test.
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "dotenv.load_dotenv", lambda *_args, **_kwargs: False, raising=False
        )


@pytest.fixture(autouse=True)
def isolate_policy_assist_env(request, monkeypatch):
    """Ensure a clean POLICY_ASSIST_* environment for each test.

    Escape hatch: @pytest.mark.allow_env_pollution keeps the current env.
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.upper().startswith("POLICY_ASSIST_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.delenv("DEBUG", raising=False)


# --- Logging Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Sets the log level for noisy external libraries to WARNING."""
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


# --- Test Environment Markers ---
def pytest_configure(config):
    """Configure custom markers for test organization."""
    markers = [
        "unit: Fast, isolated unit tests",
        "integration: Component integration tests with a mocked backend",
        "allow_dotenv: Permit .env loading for this test",
        "allow_env_pollution: Keep POLICY_ASSIST_* variables from the real env",
    ]
    for marker in markers:
        config.addinivalue_line("markers", marker)


# --- Core Fixtures ---

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def make_transport():
    """Build an `ApiTransport` backed by an in-process handler.

    Usage:
        transport = make_transport(handler, timeout_seconds=0.05)
    """

    def _make(
        handler: Handler,
        *,
        token: str | None = None,
        **overrides: object,
    ) -> ApiTransport:
        config = resolve_config({"base_url": BASE_URL, **overrides}).to_frozen()
        return ApiTransport(
            config,
            token_provider=(lambda: token),
            transport=httpx.MockTransport(handler),
        )

    return _make


@pytest.fixture
def json_handler():
    """Handler factory that answers every request with one JSON payload.

    Requests are appended to the returned list for inspection.
    """

    def _factory(
        payload: object, status_code: int = 200
    ) -> tuple[Handler, list[httpx.Request]]:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(status_code, json=payload)

        return handler, seen

    return _factory
