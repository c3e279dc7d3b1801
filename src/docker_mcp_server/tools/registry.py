"""Tool registration helper shared by the tool modules.

Kept separate from registration.py to avoid circular imports.
"""

from typing import Any

from docker_mcp_server.tools.common import ToolDefinition
from docker_mcp_server.utils.fastmcp_helpers import get_mcp_annotations
from docker_mcp_server.utils.logger import get_logger

logger = get_logger(__name__)


def register_tools(app: Any, tools: list[ToolDefinition]) -> list[str]:
    """Register tool definitions with a FastMCP application.

    Args:
        app: FastMCP application instance
        tools: List of (name, description, safety_level, idempotent, open_world, func) tuples

    Returns:
        List of registered tool names
    """
    registered_names = []

    for name, description, safety_level, idempotent, open_world, func in tools:
        annotations = get_mcp_annotations(safety_level, idempotent, open_world)

        app.tool(name=name, description=description, annotations=annotations)(func)

        registered_names.append(name)
        logger.debug(f"Registered tool: {name} (safety: {safety_level.value})")

    return registered_names
