"""Dispatch API: operation listing, envelope serialization, unknown operations."""

import httpx
import pytest
from fastapi.testclient import TestClient

from status_gateway.gateway import Context
from status_gateway.server.app import create_app


def _remote(request: httpx.Request) -> httpx.Response:
    path = request.url.raw_path
    if path == b"/status/get_machines":
        return httpx.Response(200, content=b'["m1","m2"]')
    if path.startswith(b"/status/get_sysinfo/m1/"):
        return httpx.Response(200, content=b'{"ok":true}')
    if path == b"/status/get_planners/plain":
        return httpx.Response(200, content=b"not-json")
    return httpx.Response(404, content=b"not found")


@pytest.fixture
def api(make_router):
    app = create_app(make_router(_remote), Context(status_url="http://status.test"))
    with TestClient(app) as c:
        yield c


def test_health(api):
    r = api.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "status_url": "http://status.test"}


def test_operations_sorted(api):
    r = api.get("/operations")
    assert r.json() == {"operations": ["get_machines", "get_netinfo", "get_planners", "get_sysinfo"]}


def test_success_envelope(api):
    r = api.post("/monitoring/get_sysinfo", content=b'{"MachineUuid": "m1", "Limit": 5}')
    assert r.status_code == 200
    assert r.json() == {"error": "", "result": {"ok": True}}


def test_machines_without_body(api):
    r = api.post("/monitoring/get_machines")
    assert r.json() == {"error": "", "result": ["m1", "m2"]}


def test_remote_error_is_still_200(api):
    r = api.post("/monitoring/get_netinfo", content=b'{"MachineUuid": "missing"}')
    assert r.status_code == 200
    assert r.json() == {"error": "Storage Response: [HTTP 404] not found", "result": None}


def test_decode_error_is_reported(api):
    r = api.post("/monitoring/get_netinfo", content=b"{broken")
    body = r.json()
    assert body["result"] is None
    assert body["error"] == "Storage Response: [HTTP 404] not found"
    assert body["decode_error"].startswith("invalid JSON")


def test_non_json_result_relayed_as_text(api):
    r = api.post("/monitoring/get_planners", content=b'{"MachineUuid": "plain"}')
    assert r.json() == {"error": "", "result": "not-json"}


def test_unknown_operation(api):
    r = api.post("/monitoring/get_everything", content=b"{}")
    assert r.status_code == 404
    assert r.json() == {"error": "unknown operation: get_everything", "result": None}
