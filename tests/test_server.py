"""Unit tests for the punycode_mcp_server.server module.

This test suite covers the PunycodeMCPServer class including:
- Initialization and configuration loading
- Tool, prompt and resource registration
- Server start/stop lifecycle
- Calling tools through an in-memory MCP client
"""

import asyncio
import json
import os
import signal
import tempfile
from unittest.mock import AsyncMock, patch

import pytest
from fastmcp import Client

from punycode_mcp_server.server import PunycodeMCPServer, load_config

# Default config for testing
DEFAULT_TEST_CONFIG = """
server:
  host: "127.0.0.1"
  port: 3000

features:
  raw_punycode: true
  hostname_validation: true
"""


def _write_config(content: str) -> str:
    config = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False, encoding="utf-8")
    config.write(content)
    config.close()
    return config.name


@pytest.fixture
def server():
    """Create a test server with every feature enabled."""
    path = _write_config(DEFAULT_TEST_CONFIG)
    try:
        yield PunycodeMCPServer(config_path=path)
    finally:
        os.unlink(path)


@pytest.fixture
def minimal_server():
    """Create a test server with every optional feature disabled."""
    path = _write_config("features: {}")
    try:
        yield PunycodeMCPServer(config_path=path)
    finally:
        os.unlink(path)


class TestPunycodeMCPServerConfiguration:
    """Test suite for configuration handling."""

    @pytest.mark.server
    @pytest.mark.unit
    def test_initialization_with_valid_config(self, server):
        """Test that server initializes successfully with valid config."""
        assert server.config["server"]["port"] == 3000
        assert server.config["features"]["raw_punycode"] is True
        assert hasattr(server, "server")
        assert hasattr(server, "logger")

    @pytest.mark.server
    @pytest.mark.unit
    def test_missing_config_file(self):
        """Test that a missing config file yields the defaults."""
        server = PunycodeMCPServer(config_path="/nonexistent/path/config.yaml")

        assert server.config == {}

    @pytest.mark.server
    @pytest.mark.unit
    def test_invalid_yaml(self):
        """Test that invalid YAML is ignored."""
        path = _write_config("features: [unclosed")
        try:
            assert load_config(path) == {}
        finally:
            os.unlink(path)

    @pytest.mark.server
    @pytest.mark.unit
    @pytest.mark.parametrize("content", ["", "- a\n- b\n", "just a string"])
    def test_non_mapping_config(self, content):
        """Test that empty or non-mapping YAML documents are ignored."""
        path = _write_config(content)
        try:
            assert load_config(path) == {}
        finally:
            os.unlink(path)

    @pytest.mark.server
    @pytest.mark.unit
    def test_multiple_servers_isolated(self, server, minimal_server):
        """Test that multiple server instances don't interfere."""
        assert server.config != minimal_server.config
        assert server.server is not minimal_server.server


class TestPunycodeMCPServerLifecycle:
    """Test suite for server start/stop lifecycle."""

    @pytest.mark.server
    @pytest.mark.asyncio
    async def test_start_uses_explicit_host_port(self, server):
        """Test that start() passes host and port to run_async."""
        with patch.object(server.server, "run_async", new_callable=AsyncMock) as mock_run:
            mock_run.side_effect = asyncio.TimeoutError("Test timeout")

            with pytest.raises(asyncio.TimeoutError):
                await server.start(host="127.0.0.1", port=9999)

            mock_run.assert_called_once_with(transport="http", host="127.0.0.1", port=9999)
        server.remove_signal_handlers()

    @pytest.mark.server
    @pytest.mark.asyncio
    async def test_start_uses_config_defaults(self, minimal_server):
        """Test that start() falls back to the built-in host and port."""
        with patch.object(minimal_server.server, "run_async", new_callable=AsyncMock) as mock_run:
            await minimal_server.start()

            mock_run.assert_called_once_with(transport="http", host="127.0.0.1", port=3000)
        minimal_server.remove_signal_handlers()

    @pytest.mark.server
    @pytest.mark.asyncio
    async def test_start_stdio_transport(self):
        """Test that the stdio transport is started without host and port."""
        path = _write_config("server:\n  transport: stdio\n")
        try:
            stdio_server = PunycodeMCPServer(config_path=path)
        finally:
            os.unlink(path)

        with patch.object(stdio_server.server, "run_async", new_callable=AsyncMock) as mock_run:
            await stdio_server.start()

            mock_run.assert_called_once_with(transport="stdio")
        stdio_server.remove_signal_handlers()

    @pytest.mark.server
    @pytest.mark.asyncio
    async def test_start_error_stops_server(self, server):
        """Test that a failing start stops the server and re-raises."""
        with patch.object(server.server, "run_async", new_callable=AsyncMock) as mock_run, \
                patch.object(server, "stop", new_callable=AsyncMock) as mock_stop:
            mock_run.side_effect = OSError("address in use")

            with pytest.raises(OSError):
                await server.start()

            mock_stop.assert_called_once()
        server.remove_signal_handlers()

    @pytest.mark.server
    @pytest.mark.asyncio
    async def test_signal_handler_calls_stop(self, server):
        """Test that signal handler calls stop."""
        with patch.object(server, "stop", new_callable=AsyncMock) as mock_stop:
            await server._signal_handler(signal.SIGINT)
            mock_stop.assert_called_once()

    @pytest.mark.server
    @pytest.mark.asyncio
    async def test_stop_cancels_pending_tasks(self, server):
        """Test that stop() cancels other tasks on the loop."""
        task = asyncio.create_task(asyncio.sleep(60))

        await server.stop()

        assert task.cancelled()


class TestPunycodeMCPServerResources:
    """Test suite for resource implementations."""

    @pytest.mark.server
    @pytest.mark.asyncio
    async def test_punycode_parameters(self, server):
        """Test the codec parameter resource."""
        params = await server._get_punycode_parameters_impl()

        assert params["base"] == 36
        assert params["tmin"] == 1
        assert params["tmax"] == 26
        assert params["skew"] == 38
        assert params["damp"] == 700
        assert params["initial_bias"] == 72
        assert params["initial_n"] == 128
        assert params["delimiter"] == "-"
        assert params["alphabet"] == "abcdefghijklmnopqrstuvwxyz0123456789"

    @pytest.mark.server
    @pytest.mark.asyncio
    async def test_ace_prefix(self, server):
        """Test the ACE prefix resource."""
        info = await server._get_ace_prefix_impl()

        assert info["prefix"] == "xn--"
        assert "-" in info["host_allowed_chars"]
        assert "." in info["host_allowed_chars"]


class TestPunycodeMCPServerIntegration:
    """Integration tests that talk to the server through an in-memory client."""

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_all_tools_listed(self, server):
        """Test that every tool is registered when all features are enabled."""
        async with Client(server.server) as client:
            tools = {tool.name for tool in await client.list_tools()}

        assert {
            "idna_encode",
            "idna_decode",
            "punycode_encode",
            "punycode_decode",
            "hostname_check",
        } <= tools

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_optional_tools_disabled(self, minimal_server):
        """Test that feature flags hide the optional tools."""
        async with Client(minimal_server.server) as client:
            tools = {tool.name for tool in await client.list_tools()}

        assert {"idna_encode", "idna_decode"} <= tools
        assert "punycode_encode" not in tools
        assert "hostname_check" not in tools

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_call_idna_encode(self, server):
        """Test calling the idna_encode tool end to end."""
        async with Client(server.server) as client:
            result = await client.call_tool("idna_encode", {"hostname": "погода-в-египте.рф"})

        assert result.structured_content["success"] is True
        assert result.structured_content["output"]["punycode"] == "xn-----6kcjcecmb3a1dbkl9b.xn--p1ai"

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_call_idna_decode_failure(self, server):
        """Test that conversion errors come back as unsuccessful results."""
        async with Client(server.server) as client:
            result = await client.call_tool("idna_decode", {"hostname": "xn--ABC.com"})

        assert result.structured_content["success"] is False
        assert result.structured_content["error"].startswith("Hostname conversion failed")
        assert result.structured_content["details"] == {"label": "xn--ABC", "index": 0}

    @pytest.mark.integration
    @pytest.mark.asyncio
    async def test_read_parameters_resource(self, server):
        """Test reading the codec parameter resource."""
        async with Client(server.server) as client:
            contents = await client.read_resource("resource://punycode_parameters")

        assert json.loads(contents[0].text)["initial_bias"] == 72
