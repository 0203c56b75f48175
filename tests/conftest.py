"""Shared fixtures: client config, mock-transport clients, context."""

from typing import Callable, Optional

import httpx
import pytest

from status_gateway.gateway import Context, Response, StatusClient, StatusRouter


@pytest.fixture
def client_config() -> dict:
    return {
        "timeout_seconds": 5.0,
        "max_connections": None,
        "follow_redirects": True,
        "error_format": "status_prefixed",
    }


@pytest.fixture
def ctx() -> Context:
    return Context(status_url="http://status.test")


@pytest.fixture
def make_client(client_config):
    """Factory: StatusClient backed by httpx.MockTransport(handler). Closed at teardown."""
    clients = []

    def _make(handler: Callable[[httpx.Request], httpx.Response], **overrides) -> StatusClient:
        cfg = dict(client_config, **overrides)
        c = StatusClient(cfg, transport=httpx.MockTransport(handler))
        clients.append(c)
        return c

    yield _make
    for c in clients:
        c.close()


@pytest.fixture
def make_router(make_client):
    def _make(handler: Callable[[httpx.Request], httpx.Response], **overrides) -> StatusRouter:
        return StatusRouter(make_client(handler, **overrides))

    return _make


def assert_envelope(resp: Response, expect_ok: Optional[bool] = None) -> None:
    """Exactly one of error / result is populated."""
    assert isinstance(resp, Response)
    assert bool(resp.error) != (resp.result is not None), resp
    if expect_ok is not None:
        assert resp.ok is expect_ok
