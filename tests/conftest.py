"""Shared fixtures: an in-memory catalog backend behind httpx.MockTransport."""

from collections.abc import AsyncIterator, Callable
from dataclasses import dataclass
from typing import Any

import httpx
import pytest
import pytest_asyncio

from service_catalog.http import ApiClient

BASE_URL = "http://catalog.test"


@dataclass
class Reply:
    """A scripted response, or a transport error to raise."""

    status: int = 200
    json: Any = None
    text: str | None = None
    error: type[httpx.TransportError] | None = None

    def build(self, request: httpx.Request) -> httpx.Response:
        if self.error is not None:
            raise self.error(self.text if self.text is not None else "transport failure", request=request)
        if self.json is not None:
            return httpx.Response(self.status, json=self.json)
        if self.text is not None:
            return httpx.Response(self.status, text=self.text)
        return httpx.Response(self.status)


class FakeBackend:
    """Scripted backend: replies are queued per (method, path) and requests are recorded.

    The last reply queued for a route keeps being served once the others are used up.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[Reply]] = {}
        self.requests: list[httpx.Request] = []
        self.on_request: Callable[[httpx.Request], None] | None = None

    def add(self, method: str, path: str, status: int = 200, json: Any = None, text: str | None = None) -> None:
        self.routes.setdefault((method, path), []).append(Reply(status=status, json=json, text=text))

    def fail_with(self, method: str, path: str, error: type[httpx.TransportError], message: str) -> None:
        self.routes.setdefault((method, path), []).append(Reply(text=message, error=error))

    def calls(self, method: str | None = None) -> list[httpx.Request]:
        return [r for r in self.requests if method is None or r.method == method]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)
        queue = self.routes.get((request.method, request.url.path))
        if not queue:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        reply = queue.pop(0) if len(queue) > 1 else queue[0]
        return reply.build(request)


@pytest.fixture
def backend() -> FakeBackend:
    """Create an empty scripted backend."""
    return FakeBackend()


@pytest_asyncio.fixture
async def api(backend: FakeBackend) -> AsyncIterator[ApiClient]:
    """Create an API client wired to the scripted backend."""
    async with ApiClient(BASE_URL, transport=httpx.MockTransport(backend.handler)) as client:
        yield client
