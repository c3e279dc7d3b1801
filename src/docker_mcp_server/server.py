"""Docker MCP server.

Wraps the FastMCP app with middleware, the Docker tool catalog and the shared
Docker client.
"""

import asyncio

from fastmcp import FastMCP

from docker_mcp_server.config import Config
from docker_mcp_server.docker_wrapper.client import DockerClientWrapper
from docker_mcp_server.middleware import DebugLoggingMiddleware, ErrorHandlerMiddleware
from docker_mcp_server.tools import register_all_tools
from docker_mcp_server.utils.errors import DockerConnectionError, MCPDockerError
from docker_mcp_server.utils.fastmcp_helpers import create_fastmcp_app
from docker_mcp_server.utils.logger import get_logger

logger = get_logger(__name__)


class DockerMCPServer:
    """FastMCP-based MCP server for Docker operations."""

    def __init__(self, config: Config, docker_client: DockerClientWrapper | None = None) -> None:
        """Initialize the Docker MCP server.

        Args:
            config: Server configuration
            docker_client: Docker client wrapper (created from ``config.docker`` if omitted)
        """
        self.config = config
        self.docker_client = docker_client or DockerClientWrapper(config.docker)

        logger.info("Initializing Docker MCP server")

        self.app = create_fastmcp_app(name=config.server.server_name)

        # First added = outermost wrapper
        # - DebugLoggingMiddleware: logs MCP requests/responses at DEBUG level
        # - ErrorHandlerMiddleware: logs failed operations and re-raises
        self.debug_middleware = DebugLoggingMiddleware(debug_enabled=config.server.debug_mode)
        self.error_middleware = ErrorHandlerMiddleware(debug_mode=config.server.debug_mode)
        # NOTE: Middleware classes are protocol-compatible but don't inherit from base class
        self.app.add_middleware(self.debug_middleware)  # type: ignore[arg-type]
        self.app.add_middleware(self.error_middleware)  # type: ignore[arg-type]

        self.registered_tools = register_all_tools(self.app, self.docker_client)
        total_tools = sum(len(tools) for tools in self.registered_tools.values())
        logger.info(f"Registered {total_tools} tools")

    async def start(self) -> None:
        """Check that the Docker daemon is reachable.

        Raises:
            DockerConnectionError: If the daemon cannot be reached
        """
        logger.info("Starting Docker MCP server")

        try:
            health_status = await asyncio.to_thread(self.docker_client.health_check)
        except MCPDockerError as e:
            logger.error(f"Docker daemon health check failed: {e}")
            raise DockerConnectionError(f"Docker daemon is not reachable: {e}") from e

        daemon_info = health_status.get("daemon_info", {})
        logger.info(
            f"Docker daemon is healthy (version={daemon_info.get('server_version')}, "
            f"api={daemon_info.get('api_version')})"
        )

    async def stop(self) -> None:
        """Stop the server and close the Docker client."""
        logger.info("Stopping Docker MCP server")
        await asyncio.to_thread(self.docker_client.close)

    def get_app(self) -> FastMCP:
        """Get the underlying FastMCP application.

        Returns:
            FastMCP application instance
        """
        return self.app
