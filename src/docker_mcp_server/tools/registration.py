"""Tool registration.

Registers every Docker tool with the FastMCP application.
"""

from typing import Any

from docker_mcp_server.docker_wrapper.client import DockerClientWrapper
from docker_mcp_server.tools.container import register_container_tools
from docker_mcp_server.tools.image import register_image_tools
from docker_mcp_server.tools.network import register_network_tools
from docker_mcp_server.tools.volume import register_volume_tools
from docker_mcp_server.utils.logger import get_logger

logger = get_logger(__name__)


def register_all_tools(app: Any, docker_client: DockerClientWrapper) -> dict[str, list[str]]:
    """Register all tools with the application.

    Args:
        app: FastMCP application instance
        docker_client: Docker client wrapper

    Returns:
        Dictionary mapping category to list of registered tool names

    Example:
        ```python
        from docker_mcp_server.config import Config
        from docker_mcp_server.docker_wrapper.client import DockerClientWrapper
        from docker_mcp_server.tools import register_all_tools
        from docker_mcp_server.utils.fastmcp_helpers import create_fastmcp_app

        config = Config()
        docker_client = DockerClientWrapper(config.docker)
        app = create_fastmcp_app()

        registered = register_all_tools(app, docker_client)
        print(f"Registered {sum(len(v) for v in registered.values())} tools")
        ```
    """
    logger.info("Registering tools...")

    registered: dict[str, list[str]] = {}

    registered["container"] = register_container_tools(app, docker_client)
    registered["image"] = register_image_tools(app, docker_client)
    registered["network"] = register_network_tools(app, docker_client)
    registered["volume"] = register_volume_tools(app, docker_client)

    total_tools = sum(len(tools) for tools in registered.values())
    logger.info(f"Successfully registered {total_tools} tools across {len(registered)} categories")

    return registered
