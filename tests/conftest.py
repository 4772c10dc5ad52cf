"""
Shared pytest fixtures.

HTTP is never real here: every client gets an `httpx.MockTransport` and
records the requests it sees.
"""

from __future__ import annotations

import os
from typing import Callable

import httpx
import pytest

from hornbill_apilib.adapters.xmlmc import Xmlmc

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep `.env` files and HORNBILL_* variables out of the tests."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    for key in list(os.environ):
        if key.upper().startswith("HORNBILL_"):
            monkeypatch.delenv(key, raising=False)


class Recorder:
    """MockTransport handler that stores requests and replays a response."""

    def __init__(self, handler: Handler | None = None) -> None:
        self.requests: list[httpx.Request] = []
        self._handler = handler or (lambda request: httpx.Response(200, text="<methodCallResult status=\"ok\"/>"))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return self._handler(request)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest.fixture
def make_client():
    """Build an `Xmlmc` bound to a Recorder-backed MockTransport."""

    clients: list[Xmlmc] = []

    def factory(handler: Handler | None = None, url: str = "http://host/demo/xmlmc") -> tuple[Xmlmc, Recorder]:
        rec = Recorder(handler)
        client = Xmlmc(url, transport=httpx.MockTransport(rec))
        clients.append(client)
        return client, rec

    yield factory

    for client in clients:
        client.close()
