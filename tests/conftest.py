"""Shared fixtures for the arubaswitch test suite."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from arubaswitch.cache import ResponseCache
from arubaswitch.config import SwitchConfig
from arubaswitch.exceptions import ApiError
from arubaswitch.models.response import ApiResult


def make_response(body: Any = None, status_code: int = 200, text: str | None = None) -> MagicMock:
    """A ``requests.Response`` stand-in with ``text`` and ``status_code``."""
    response = MagicMock()
    response.status_code = status_code
    if text is None:
        text = "" if body is None else json.dumps(body)
    response.text = text
    return response


@pytest.fixture()
def config():
    return SwitchConfig("switch01.example.net", "api", "secret")


@pytest.fixture()
def cache():
    return ResponseCache()


@pytest.fixture()
def mock_transport(config):
    """MagicMock of ArubaRESTTransport; every call answers with an empty result."""
    transport = MagicMock()
    transport.config = config
    transport.get.return_value = ApiResult.empty()
    transport.post.return_value = ApiResult.empty()
    transport.put.return_value = ApiResult.empty()
    transport.delete.return_value = ApiResult.empty()
    return transport


class FakeSwitch:
    """In-memory switch speaking the subset of the REST API the VLAN manager uses.

    Every call is appended to ``calls`` as ``(method, path, body)``.
    ``failures`` maps ``(method, path)`` to an exception raised instead of
    answering; ``echoes`` maps ``(method, path)`` to a payload returned
    instead of the normal echo (the state change still happens).
    """

    def __init__(self, config: SwitchConfig):
        self.config = config
        self.vlans: dict[int, str] = {1: "DEFAULT_VLAN"}
        self.assocs: list[dict[str, Any]] = []
        self.calls: list[tuple[str, str, Any]] = []
        self.failures: dict[tuple[str, str], Exception] = {}
        self.echoes: dict[tuple[str, str], Any] = {}
        self.ignore_deletes = False

    def add_assoc(self, vlan_id: int, port_id: str, mode: str) -> None:
        self.assocs.append({"vlan_id": vlan_id, "port_id": port_id, "port_mode": mode})

    def requests(self, method: str) -> list[tuple[str, str, Any]]:
        return [c for c in self.calls if c[0] == method]

    def _record(self, method: str, path: str, body: Any = None) -> None:
        self.calls.append((method, path, body))
        if (method, path) in self.failures:
            raise self.failures[(method, path)]

    def _echo(self, method: str, path: str, payload: Any) -> ApiResult:
        return ApiResult.ok(self.echoes.get((method, path), payload))

    def get(self, path: str) -> ApiResult:
        self._record("GET", path)
        if path == "/vlans":
            elements = [{"vlan_id": v, "name": n} for v, n in sorted(self.vlans.items())]
            return ApiResult.ok({"collection_result": {"total_elements_count": len(elements)}, "vlan_element": elements})
        if path == "/vlans-ports":
            return ApiResult.ok({"vlan_port_element": [dict(a) for a in self.assocs]})
        raise ApiError(f"GET {path}: API returned error: Not found", status_code=404)

    def post(self, path: str, body: Any = None, timeout_ms: int | None = None) -> ApiResult:
        self._record("POST", path, body)
        if path == "/vlans":
            self.vlans[body["vlan_id"]] = body["name"]
            return self._echo("POST", path, dict(body))
        if path.startswith("/vlans/"):
            self.vlans[int(path.rsplit("/", 1)[1])] = body["name"]
            return self._echo("POST", path, {"vlan_id": int(path.rsplit("/", 1)[1]), **body})
        if path == "/vlans-ports":
            if body["port_mode"] == "POM_UNTAGGED":
                self.assocs = [
                    a for a in self.assocs if not (a["port_id"] == body["port_id"] and a["port_mode"] == "POM_UNTAGGED")
                ]
            self.assocs.append(dict(body))
            return self._echo("POST", path, dict(body))
        raise ApiError(f"POST {path}: API returned error: Not found", status_code=404)

    def put(self, path: str, body: Any = None) -> ApiResult:
        self._record("PUT", path, body)
        return self._echo("PUT", path, dict(body or {}))

    def delete(self, path: str) -> ApiResult:
        self._record("DELETE", path)
        if self.ignore_deletes:
            return ApiResult.empty()
        if path.startswith("/vlans-ports/"):
            vlan_id, port_id = path[len("/vlans-ports/") :].split("-", 1)
            self.assocs = [a for a in self.assocs if not (a["vlan_id"] == int(vlan_id) and a["port_id"] == port_id)]
        elif path.startswith("/vlans/"):
            self.vlans.pop(int(path.rsplit("/", 1)[1]), None)
        if ("DELETE", path) in self.echoes:
            return ApiResult.ok(self.echoes[("DELETE", path)])
        return ApiResult.empty()


@pytest.fixture()
def fake_switch(config):
    return FakeSwitch(config)


@pytest.fixture()
def response_factory():
    """Factory fixture building fake ``requests.Response`` objects."""
    return make_response
