"""Shared test fixtures."""

from collections.abc import AsyncIterator
from typing import Any

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import settings
from src.lo_common.http_client import get_http_client
from src.main import app

TEST_API_KEY = "test-key-0123456789abcdef"


class UpstreamStub:
    """Stands in for api.1inch.dev behind httpx.MockTransport.

    Set status/body (or text) before the call; every request is recorded.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status = 200
        self.body: Any = {}
        self.text: str | None = None
        self.error: Exception | None = None

    def respond(self, status: int = 200, body: Any = None, text: str | None = None) -> None:
        self.status = status
        self.body = {} if body is None else body
        self.text = text

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.text is not None:
            return httpx.Response(self.status, text=self.text)
        return httpx.Response(self.status, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setattr(settings, "ONEINCH_API_KEY", TEST_API_KEY)
    return TEST_API_KEY


@pytest.fixture
def no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "ONEINCH_API_KEY", None)


@pytest.fixture
async def upstream() -> AsyncIterator[UpstreamStub]:
    """Route every upstream call of the app to an in-process stub."""
    stub = UpstreamStub()
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(stub), base_url=settings.ONEINCH_API_BASE_URL
    )

    async def _override() -> httpx.AsyncClient:
        return http

    app.dependency_overrides[get_http_client] = _override
    yield stub
    app.dependency_overrides.pop(get_http_client, None)
    await http.aclose()
