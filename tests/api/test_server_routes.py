"""Integration tests for the server API routes.

The bridge talks to FakeDaemons; the app is exercised with TestClient.
"""

from __future__ import annotations

import httpx
import pytest
from fastapi import Request
from fastapi.testclient import TestClient

from daemon_bridge.api import create_app
from daemon_bridge.api.authorization import Ability
from daemon_bridge.bridge import DaemonBridge
from daemon_bridge.constants import EDITABLE_EXTENSIONS
from daemon_bridge.files.browser import DIRECTORY_ERROR_MESSAGE, SAVE_ERROR_MESSAGE
from tests.fakes import NODE_ONE_HOST, FakeDaemons, raise_error

LISTING = {
    "files": [{"name": "config.yml", "size": 12, "date": "2016-01-01T00:00:00Z"}],
    "folders": [{"name": "data", "size": 4096, "date": "2016-01-01T00:00:00Z"}],
}


@pytest.fixture
def client(bridge: DaemonBridge) -> TestClient:
    return TestClient(create_app(bridge))


class DenyAuthorizer:
    """Refuses one ability, allows the rest."""

    def __init__(self, denied: Ability) -> None:
        self.denied = denied
        self.calls: list[tuple[Ability, str]] = []

    async def authorize(self, request: Request, ability: Ability, target: str) -> bool:
        self.calls.append((ability, target))
        return ability != self.denied


class TestStatusRoute:
    """Tests for GET /api/servers/{id}/status."""

    def test_running(self, client: TestClient, daemons: FakeDaemons) -> None:
        daemons.add(NODE_ONE_HOST, "GET", "/server", httpx.Response(200, json={"status": 1}))

        response = client.get("/api/servers/srv-a/status")

        assert response.status_code == 200
        assert response.json() == {"running": True}

    def test_daemon_down_is_not_an_error(self, client: TestClient, daemons: FakeDaemons) -> None:
        """Status is always 200; failures read as not running."""
        daemons.add(NODE_ONE_HOST, "GET", "/server", raise_error(httpx.ConnectError))

        response = client.get("/api/servers/srv-a/status")

        assert response.status_code == 200
        assert response.json() == {"running": False}

    def test_unknown_server_is_not_running(self, client: TestClient) -> None:
        response = client.get("/api/servers/nope/status")

        assert response.status_code == 200
        assert response.json() == {"running": False}


class TestDirectoryRoute:
    """Tests for POST /api/servers/{id}/directory."""

    def test_nested_listing_with_breadcrumb(self, client: TestClient, daemons: FakeDaemons) -> None:
        # Arrange
        daemons.add(NODE_ONE_HOST, "GET", "/server/directory/plugins/essentials", httpx.Response(200, json=LISTING))

        # Act
        response = client.post("/api/servers/srv-a/directory", json={"directory": "%2Fplugins%2Fessentials%2F"})

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert [f["name"] for f in body["files"]] == ["config.yml"]
        assert [f["name"] for f in body["folders"]] == ["data"]
        assert body["directory"] == {
            "header": "/plugins/essentials",
            "first": True,
            "show_back": True,
            "back_link": "/plugins",
            "back_link_display": "plugins",
        }
        assert body["editable_extensions"] == list(EDITABLE_EXTENSIONS)

    def test_defaults_to_root(self, client: TestClient, daemons: FakeDaemons) -> None:
        daemons.add(NODE_ONE_HOST, "GET", "/server/directory/", httpx.Response(200, json=LISTING))

        response = client.post("/api/servers/srv-a/directory", json={})

        assert response.status_code == 200
        assert response.json()["directory"]["header"] == ""

    def test_traversal_is_400(self, client: TestClient, daemons: FakeDaemons) -> None:
        response = client.post("/api/servers/srv-a/directory", json={"directory": "../../etc"})

        assert response.status_code == 400
        assert response.json()["detail"]["code"] == "PATH_INVALID"
        assert daemons.requests == []

    def test_unknown_server_is_404(self, client: TestClient) -> None:
        response = client.post("/api/servers/nope/directory", json={"directory": "/"})

        assert response.status_code == 404
        assert response.json()["detail"] == {"code": "SERVER_NOT_FOUND", "message": "Server 'nope' not found"}

    def test_daemon_detail_is_shown(self, client: TestClient, daemons: FakeDaemons) -> None:
        daemons.add(NODE_ONE_HOST, "GET", "/server/directory/x", httpx.Response(404, json={"error": "No such directory."}))

        response = client.post("/api/servers/srv-a/directory", json={"directory": "/x"})

        assert response.status_code == 500
        assert response.json()["detail"] == {"code": "FILE_OPERATION_FAILED", "message": "No such directory."}

    def test_unreachable_daemon_is_502_with_generic_message(self, client: TestClient, daemons: FakeDaemons) -> None:
        """Transport detail is logged, never returned."""
        daemons.add(NODE_ONE_HOST, "GET", "/server/directory/", raise_error(httpx.ConnectError, "10.0.0.5 refused"))

        response = client.post("/api/servers/srv-a/directory", json={"directory": "/"})

        assert response.status_code == 502
        detail = response.json()["detail"]
        assert detail == {"code": "DAEMON_UNAVAILABLE", "message": DIRECTORY_ERROR_MESSAGE}
        assert "10.0.0.5" not in response.text


class TestFileRoutes:
    """Tests for GET/POST /api/servers/{id}/file."""

    def test_read(self, client: TestClient, daemons: FakeDaemons) -> None:
        daemons.add(NODE_ONE_HOST, "GET", "/server/file/eula.txt", httpx.Response(200, json={"contents": "eula=true"}))

        response = client.get("/api/servers/srv-a/file", params={"path": "/eula.txt"})

        assert response.status_code == 200
        assert response.json() == {"path": "/eula.txt", "contents": "eula=true"}

    def test_read_requires_path(self, client: TestClient) -> None:
        response = client.get("/api/servers/srv-a/file")

        assert response.status_code == 422
        assert response.json()["detail"]["code"] == "VALIDATION_ERROR"

    def test_save(self, client: TestClient, daemons: FakeDaemons) -> None:
        daemons.add(NODE_ONE_HOST, "POST", "/server/file/eula.txt", httpx.Response(204))

        response = client.post("/api/servers/srv-a/file", json={"file": "eula.txt", "contents": "eula=true"})

        assert response.status_code == 204
        assert daemons.last_request.headers["X-Access-Server"] == "srv-a"

    def test_save_failure_uses_generic_message(self, client: TestClient, daemons: FakeDaemons) -> None:
        daemons.add(NODE_ONE_HOST, "POST", "/server/file/eula.txt", httpx.Response(500))

        response = client.post("/api/servers/srv-a/file", json={"file": "eula.txt", "contents": "x"})

        assert response.status_code == 500
        assert response.json()["detail"]["message"] == SAVE_ERROR_MESSAGE

    def test_save_traversal_is_400(self, client: TestClient, daemons: FakeDaemons) -> None:
        response = client.post("/api/servers/srv-a/file", json={"file": "../../srv-b/x", "contents": "x"})

        assert response.status_code == 400
        assert daemons.requests == []


class TestCapabilityChecks:
    """Routes consult the Authorizer before any bridge call."""

    def test_refused_ability_is_403(self, bridge: DaemonBridge, daemons: FakeDaemons) -> None:
        # Arrange
        authorizer = DenyAuthorizer(Ability.SAVE_FILES)
        client = TestClient(create_app(bridge, authorizer=authorizer))

        # Act
        response = client.post("/api/servers/srv-a/file", json={"file": "a.txt", "contents": "x"})

        # Assert
        assert response.status_code == 403
        assert response.json()["detail"]["code"] == "AUTH_FORBIDDEN"
        assert authorizer.calls == [(Ability.SAVE_FILES, "srv-a")]
        assert daemons.requests == []

    def test_other_abilities_still_allowed(self, bridge: DaemonBridge, daemons: FakeDaemons) -> None:
        daemons.add(NODE_ONE_HOST, "GET", "/server", httpx.Response(200, json={"status": 1}))
        client = TestClient(create_app(bridge, authorizer=DenyAuthorizer(Ability.SAVE_FILES)))

        response = client.get("/api/servers/srv-a/status")

        assert response.json() == {"running": True}
