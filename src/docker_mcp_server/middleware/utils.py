"""Utility functions for middleware operations."""

from typing import Any

from fastmcp.server.middleware import MiddlewareContext

TOOL_CALL_PREFIX = "tool_call:"


def get_operation_type(context: MiddlewareContext[Any]) -> str:
    """Determine the type of MCP operation from context.

    Args:
        context: FastMCP middleware context

    Returns:
        Operation type string (e.g., "tool_call:list_containers", "tools/list")
    """
    message = context.message

    # Tool calls carry the tool name and its arguments
    tool_name = getattr(message, "name", None)
    if tool_name and hasattr(message, "arguments"):
        return f"{TOOL_CALL_PREFIX}{tool_name}"

    method = getattr(context, "method", None) or getattr(message, "method", None)
    if method:
        return str(method)

    message_type = type(message).__name__
    return message_type if message_type not in ["object", "dict"] else "mcp_protocol"


def get_operation_name(context: MiddlewareContext[Any]) -> str:
    """Get a human-readable operation name from context.

    Same as get_operation_type, without the "tool_call:" prefix.

    Args:
        context: FastMCP middleware context

    Returns:
        Operation name string (e.g., "list_containers", "tools/list")
    """
    operation_type = get_operation_type(context)
    return operation_type.removeprefix(TOOL_CALL_PREFIX)
