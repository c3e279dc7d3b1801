"""Unit tests for DockerMCPServer, including in-memory MCP protocol tests."""

import json
from unittest.mock import Mock

import pytest
from docker.errors import NotFound
from fastmcp import Client

from docker_mcp_server.config import Config
from docker_mcp_server.server import DockerMCPServer
from docker_mcp_server.utils.errors import DockerConnectionError, DockerHealthCheckError

EXPECTED_TOOLS = {
    "list_containers",
    "create_container",
    "run_container",
    "recreate_container",
    "start_container",
    "fetch_container_logs",
    "stop_container",
    "remove_container",
    "list_images",
    "pull_image",
    "push_image",
    "build_image",
    "remove_image",
    "list_networks",
    "create_network",
    "remove_network",
    "list_volumes",
    "create_volume",
    "remove_volume",
}


@pytest.fixture
def server(config: Config, mock_wrapper: Mock) -> DockerMCPServer:
    """Create a server backed by a mock Docker client."""
    return DockerMCPServer(config, docker_client=mock_wrapper)


class TestDockerMCPServer:
    """Test server construction and lifecycle."""

    def test_registers_all_tools(self, server: DockerMCPServer) -> None:
        """Test that every category is registered."""
        assert set(server.registered_tools) == {"container", "image", "network", "volume"}
        names = {name for names in server.registered_tools.values() for name in names}
        assert names == EXPECTED_TOOLS

    def test_get_app(self, server: DockerMCPServer) -> None:
        """Test that the FastMCP app carries the configured name."""
        assert server.get_app() is server.app
        assert server.app.name == "docker-mcp-server-test"

    @pytest.mark.asyncio
    async def test_start_healthy(self, server: DockerMCPServer, mock_wrapper: Mock) -> None:
        """Test startup with a reachable daemon."""
        mock_wrapper.health_check.return_value = {
            "status": "healthy",
            "daemon_info": {"server_version": "24.0.0", "api_version": "1.43"},
        }

        await server.start()

        mock_wrapper.health_check.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_start_unreachable(self, server: DockerMCPServer, mock_wrapper: Mock) -> None:
        """Test startup fails when the daemon cannot be reached."""
        mock_wrapper.health_check.side_effect = DockerHealthCheckError("Health check failed")

        with pytest.raises(DockerConnectionError, match="not reachable"):
            await server.start()

    @pytest.mark.asyncio
    async def test_stop_closes_client(self, server: DockerMCPServer, mock_wrapper: Mock) -> None:
        """Test that stopping closes the Docker client."""
        await server.stop()

        mock_wrapper.close.assert_called_once_with()


class TestProtocol:
    """Test the MCP surface through an in-memory client."""

    @pytest.mark.asyncio
    async def test_list_tools_catalog(self, server: DockerMCPServer) -> None:
        """Test that exactly the Docker tools are advertised."""
        async with Client(server.get_app()) as client:
            tools = await client.list_tools()

        assert {tool.name for tool in tools} == EXPECTED_TOOLS

    @pytest.mark.asyncio
    async def test_tool_annotations(self, server: DockerMCPServer) -> None:
        """Test advertised annotation hints."""
        async with Client(server.get_app()) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        assert tools["list_containers"].annotations.readOnlyHint is True
        assert tools["remove_container"].annotations.destructiveHint is True
        assert tools["pull_image"].annotations.openWorldHint is True
        assert tools["create_volume"].annotations.readOnlyHint is False

    @pytest.mark.asyncio
    async def test_input_schema_uses_wire_names(self, server: DockerMCPServer) -> None:
        """Test argument names and required fields in the schemas."""
        async with Client(server.get_app()) as client:
            tools = {tool.name: tool for tool in await client.list_tools()}

        run_schema = tools["run_container"].inputSchema
        assert {"workingDir", "autoRemove", "detach"} <= set(run_schema["properties"])
        assert set(run_schema["required"]) == {"name", "image"}
        assert "buildArgs" in tools["build_image"].inputSchema["properties"]
        assert tools["build_image"].inputSchema["required"] == ["tag"]

    @pytest.mark.asyncio
    async def test_call_tool_returns_json(
        self, server: DockerMCPServer, mock_wrapper: Mock
    ) -> None:
        """Test a successful call returns the payload as JSON text."""
        mock_wrapper.client.api.networks.return_value = [
            {"Id": "n1", "Name": "bridge", "Driver": "bridge", "Scope": "local"}
        ]

        async with Client(server.get_app()) as client:
            result = await client.call_tool_mcp("list_networks", {})

        assert result.isError is False
        payload = json.loads(result.content[0].text)
        assert payload[0]["name"] == "bridge"

    @pytest.mark.asyncio
    async def test_json_string_filters_accepted(
        self, server: DockerMCPServer, mock_wrapper: Mock
    ) -> None:
        """Test that object arguments sent as JSON strings are parsed."""
        mock_wrapper.client.api.containers.return_value = []

        async with Client(server.get_app()) as client:
            result = await client.call_tool_mcp(
                "list_containers", {"all": True, "filters": '{"status": "exited"}'}
            )

        assert result.isError is False
        mock_wrapper.client.api.containers.assert_called_once_with(
            all=True, filters={"status": "exited"}
        )

    @pytest.mark.asyncio
    async def test_unknown_tool_is_error(
        self, server: DockerMCPServer, mock_wrapper: Mock
    ) -> None:
        """Test that an unknown tool yields an error result."""
        async with Client(server.get_app()) as client:
            result = await client.call_tool_mcp("explode_container", {})

        assert result.isError is True
        assert "Unknown tool" in result.content[0].text
        assert not mock_wrapper.client.mock_calls

    @pytest.mark.asyncio
    async def test_missing_required_argument_is_error(
        self, server: DockerMCPServer, mock_wrapper: Mock
    ) -> None:
        """Test that schema violations never reach Docker."""
        async with Client(server.get_app()) as client:
            result = await client.call_tool_mcp("create_container", {"name": "web"})

        assert result.isError is True
        mock_wrapper.client.api.create_container.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_port_is_error(
        self, server: DockerMCPServer, mock_wrapper: Mock
    ) -> None:
        """Test that a validation failure in the handler becomes an error result."""
        async with Client(server.get_app()) as client:
            result = await client.call_tool_mcp(
                "run_container", {"name": "web", "image": "nginx", "ports": {"80": 99999}}
            )

        assert result.isError is True
        assert "Invalid port" in result.content[0].text
        mock_wrapper.client.api.create_container.assert_not_called()

    @pytest.mark.asyncio
    async def test_docker_failure_message_passed_through(
        self, server: DockerMCPServer, mock_wrapper: Mock
    ) -> None:
        """Test that the original Docker error message reaches the client."""
        mock_wrapper.client.containers.get.side_effect = NotFound("No such container: ghost")

        async with Client(server.get_app()) as client:
            result = await client.call_tool_mcp("stop_container", {"id": "ghost"})

        assert result.isError is True
        assert "Failed to stop container: No such container: ghost" in result.content[0].text
