"""Shared fixtures: a scripted upstream STT service behind httpx.MockTransport."""

from __future__ import annotations

import asyncio
from pathlib import Path
import sys

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from app.main import app  # noqa: E402
from app.services import SttProxyService, get_stt_proxy_service  # noqa: E402

UPSTREAM_URL = "http://stt-upstream.test/v1/audio/transcriptions"


class FakeUpstream:
    """Records forwarded requests and answers each with a fresh canned response."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self.status_code = 200
        self.headers: dict[str, str] = {"Content-Type": "text/plain; charset=utf-8"}
        self.content = b"hello world"
        self.delay: float | None = None
        self.error: Exception | None = None
        self.cancelled = False

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.delay is not None:
            try:
                await asyncio.sleep(self.delay)
            except asyncio.CancelledError:
                self.cancelled = True
                raise
        return httpx.Response(
            self.status_code,
            headers=self.headers,
            content=self.content,
        )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def proxy_service(upstream: FakeUpstream) -> SttProxyService:
    client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    return SttProxyService(timeout_seconds=5.0, client=client)


@pytest.fixture(autouse=True)
def override_dependencies(monkeypatch: pytest.MonkeyPatch, proxy_service: SttProxyService):
    """Point the proxy at the fake upstream instead of the network."""

    monkeypatch.setenv("STT_API_ENDPOINT", UPSTREAM_URL)
    app.dependency_overrides[get_stt_proxy_service] = lambda: proxy_service

    yield

    app.dependency_overrides.clear()
