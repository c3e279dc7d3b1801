"""Helper functions for FastMCP integration."""

from typing import Any

from fastmcp import FastMCP

from docker_mcp_server.utils.safety import OperationSafety
from docker_mcp_server.version import __version__


def create_fastmcp_app(name: str = "docker-mcp-server") -> FastMCP:
    """Create and configure a FastMCP application instance.

    Error details are not masked: a failed tool call returns the original
    error message to the client.

    Args:
        name: Application name

    Returns:
        Configured FastMCP instance
    """
    return FastMCP(
        name=name,
        version=__version__,
        mask_error_details=False,
    )


def get_mcp_annotations(
    safety_level: OperationSafety,
    idempotent: bool,
    open_world: bool,
) -> dict[str, Any]:
    """Get MCP annotations for a tool.

    Args:
        safety_level: The safety level of the operation
        idempotent: Whether repeating the call has no additional effect
        open_world: Whether the tool reaches beyond the local daemon (registries)

    Returns:
        Dictionary of MCP tool annotation hints

    Example:
        >>> get_mcp_annotations(OperationSafety.SAFE, True, False)["readOnlyHint"]
        True
    """
    return {
        "readOnlyHint": safety_level == OperationSafety.SAFE,
        "destructiveHint": safety_level == OperationSafety.DESTRUCTIVE,
        "idempotentHint": idempotent,
        "openWorldHint": open_world,
    }
