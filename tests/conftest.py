import os

import httpx
import pytest
from hypothesis import HealthCheck, settings

from adapters import http_client

# The autouse isolation fixture below is safe to share between examples.
settings.register_profile(
    "ci",
    max_examples=200,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
    print_blob=True,
)

# Fast, reproducible profile for local iteration.
settings.register_profile(
    "dev",
    max_examples=25,
    deadline=None,
    derandomize=True,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep `TOOLBELT_*` variables and a project `.env` out of the tests."""

    for key in list(os.environ):
        if key.startswith("TOOLBELT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def mock_server(monkeypatch):
    """Route every client built by the HTTP adapter through a handler.

    Call the fixture with `handler(request) -> httpx.Response`; it returns
    the list of requests seen so far.
    """

    seen: list[httpx.Request] = []
    state = {"handler": None}

    def transport_handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return state["handler"](request)

    real_builder = http_client.build_async_client

    def fake_builder(settings=None, *, extra_headers=None, transport=None):
        return real_builder(
            settings,
            extra_headers=extra_headers,
            transport=httpx.MockTransport(transport_handler),
        )

    monkeypatch.setattr(http_client, "build_async_client", fake_builder)

    def install(handler):
        state["handler"] = handler
        return seen

    return install
