"""Shared fixtures: a test config and a client wired to a scripted server."""

import os
from collections.abc import Callable
from typing import Any

import httpx
import orjson
import pytest

from blandango.client.client_config import Config
from blandango.client.client_transport import Client


class FakeArango:
    """Scripted server for ``httpx.MockTransport``.

    Responses are queued with :meth:`reply` and served in order; every
    request is recorded for later assertions.
    """

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._replies: list[httpx.Response | Exception] = []

    def reply(self, status_code: int = 200, json: Any = None) -> "FakeArango":
        content = b"" if json is None else orjson.dumps(json)
        self._replies.append(
            httpx.Response(
                status_code,
                content=content,
                headers={"Content-Type": "application/json"},
            )
        )
        return self

    def fail(self, exc: Exception) -> "FakeArango":
        self._replies.append(exc)
        return self

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self._replies:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        reply = self._replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def body(self, index: int = -1) -> Any:
        return orjson.loads(self.requests[index].content)


@pytest.fixture
def config() -> Config:
    return Config(
        host="http://localhost:8529",
        database="test_db",
        user="root",
        password="secret",
    )


@pytest.fixture
def server() -> FakeArango:
    return FakeArango()


@pytest.fixture
def client(config: Config, server: FakeArango) -> Client:
    return Client(config, transport=httpx.MockTransport(server))


@pytest.fixture
def make_client(config: Config) -> Callable[[Callable[[httpx.Request], httpx.Response]], Client]:
    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> Client:
        return Client(config, transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all ARANGO-related environment variables."""
    for key in list(os.environ.keys()):
        if key.startswith("ARANGO"):
            monkeypatch.delenv(key, raising=False)
    yield
