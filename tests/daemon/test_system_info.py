"""Unit tests for node system information."""

from __future__ import annotations

import httpx
import pytest

from daemon_bridge.bridge import DaemonBridge
from daemon_bridge.exceptions import DaemonConnectionError, NotFoundError
from tests.fakes import NODE_TWO_HOST, NODE_TWO_TOKEN, FakeDaemons, raise_error

SYSTEM_INFO = {"version": "0.6.13", "system": {"type": "linux", "arch": "x64", "cpus": 8}}


class TestGetNodeSystemInfo:
    """Tests for DaemonBridge.get_node_system_info_by_name()."""

    async def test_returns_daemon_body_unchanged(self, bridge: DaemonBridge, daemons: FakeDaemons) -> None:
        # Arrange
        daemons.add(NODE_TWO_HOST, "GET", "/api/system", httpx.Response(200, json=SYSTEM_INFO))

        # Act
        info = await bridge.get_node_system_info_by_name("node-2")

        # Assert
        assert info == SYSTEM_INFO
        request = daemons.last_request
        assert str(request.url) == f"http://{NODE_TWO_HOST}:8081/api/system"
        assert request.headers["Authorization"] == f"Bearer {NODE_TWO_TOKEN}"
        assert "X-Access-Server" not in request.headers

    async def test_direct_connection(self, bridge: DaemonBridge, daemons: FakeDaemons) -> None:
        """A NodeConnection can be queried without going through the store."""
        daemons.add(NODE_TWO_HOST, "GET", "/api/system", httpx.Response(200, json=SYSTEM_INFO))
        connection = bridge.resolver.resolve_node("node-2")

        assert await bridge.get_node_system_info(connection) == SYSTEM_INFO

    @pytest.mark.parametrize("status_code", [401, 403, 500])
    async def test_non_200_raises(self, bridge: DaemonBridge, daemons: FakeDaemons, status_code: int) -> None:
        """A rejected credential or daemon failure raises DaemonConnectionError."""
        daemons.add(NODE_TWO_HOST, "GET", "/api/system", httpx.Response(status_code))

        with pytest.raises(DaemonConnectionError) as exc_info:
            await bridge.get_node_system_info_by_name("node-2")

        assert exc_info.value.reason == f"http_{status_code}"
        assert exc_info.value.node == "node-2"

    @pytest.mark.parametrize(
        "response",
        [httpx.Response(200, content=b"not json"), httpx.Response(200, json=["not", "an", "object"])],
        ids=["invalid-json", "not-object"],
    )
    async def test_malformed_body_raises(
        self, bridge: DaemonBridge, daemons: FakeDaemons, response: httpx.Response
    ) -> None:
        daemons.add(NODE_TWO_HOST, "GET", "/api/system", response)

        with pytest.raises(DaemonConnectionError) as exc_info:
            await bridge.get_node_system_info_by_name("node-2")

        assert exc_info.value.reason == "malformed_body"

    async def test_unreachable_raises(self, bridge: DaemonBridge, daemons: FakeDaemons) -> None:
        daemons.add(NODE_TWO_HOST, "GET", "/api/system", raise_error(httpx.ConnectError))

        with pytest.raises(DaemonConnectionError):
            await bridge.get_node_system_info_by_name("node-2")

    async def test_unknown_node_raises_not_found(self, bridge: DaemonBridge) -> None:
        with pytest.raises(NotFoundError):
            await bridge.get_node_system_info_by_name("node-9")
