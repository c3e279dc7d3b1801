"""Debug logging middleware for MCP protocol operations.

Logs every incoming MCP request (tools/list, tool calls, ...) and its
response at DEBUG level, when enabled.
"""

import json
from typing import Any

from fastmcp.server.middleware import CallNext, MiddlewareContext

from docker_mcp_server.middleware.utils import get_operation_type
from docker_mcp_server.utils.logger import get_logger

logger = get_logger(__name__)

SEPARATOR = "=" * 80


class DebugLoggingMiddleware:
    """FastMCP middleware for debug-level request/response logging.

    When ``debug_enabled`` is False the middleware passes the call straight
    through without serializing anything.

    Example:
        ```python
        from docker_mcp_server.middleware import DebugLoggingMiddleware

        app.add_middleware(DebugLoggingMiddleware(debug_enabled=True))
        ```
    """

    def __init__(self, debug_enabled: bool = False) -> None:
        self._debug_enabled = debug_enabled
        state = "ENABLED" if debug_enabled else "disabled"
        logger.debug(f"DebugLoggingMiddleware initialized (debug logging {state})")

    @staticmethod
    def _truncate_if_needed(data: Any, max_length: int = 5000) -> str:
        """Convert data to string and truncate if too long.

        Args:
            data: Data to convert to string
            max_length: Maximum length before truncation

        Returns:
            String representation, possibly truncated
        """
        if isinstance(data, (dict, list)):
            try:
                data_str = json.dumps(data, indent=2)
            except (TypeError, ValueError):
                data_str = str(data)
        else:
            data_str = str(data)

        if len(data_str) > max_length:
            return data_str[:max_length] + f"\n... (truncated, {len(data_str)} total bytes)"
        return data_str

    async def __call__(
        self,
        context: MiddlewareContext[Any],
        call_next: CallNext[Any, Any],
    ) -> Any:
        """Log MCP protocol request and response at DEBUG level.

        Args:
            context: FastMCP middleware context
            call_next: Next middleware/handler in the chain

        Returns:
            Result from next handler
        """
        if not self._debug_enabled:
            return await call_next(context)

        operation_type = get_operation_type(context)
        arguments = getattr(context.message, "arguments", None)

        logger.debug(SEPARATOR)
        logger.debug(f"MCP Request: {operation_type}")
        if arguments:
            logger.debug(f"Arguments:\n{self._truncate_if_needed(arguments, max_length=2000)}")

        try:
            result = await call_next(context)
        except Exception as e:
            logger.debug(f"MCP Response: {operation_type} - ERROR")
            logger.debug(f"Error: {type(e).__name__}: {e}")
            logger.debug(SEPARATOR)
            raise

        logger.debug(f"MCP Response: {operation_type} - SUCCESS")
        logger.debug(f"Result:\n{self._truncate_if_needed(result)}")
        logger.debug(SEPARATOR)
        return result
