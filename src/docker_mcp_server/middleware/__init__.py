"""FastMCP middleware for the Docker MCP server.

This package provides FastMCP-compatible middleware for error logging and
debug request/response logging.
"""

from docker_mcp_server.middleware.debug_logging import DebugLoggingMiddleware
from docker_mcp_server.middleware.error_handler import ErrorHandlerMiddleware
from docker_mcp_server.middleware.utils import get_operation_name, get_operation_type

__all__ = [
    "DebugLoggingMiddleware",
    "ErrorHandlerMiddleware",
    "get_operation_type",
    "get_operation_name",
]
