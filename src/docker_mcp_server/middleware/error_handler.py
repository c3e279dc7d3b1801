"""Error logging middleware for the Docker MCP server.

Tool failures reach the client with their original message (the FastMCP app
is created with ``mask_error_details=False``); this middleware only records
them server-side.
"""

from typing import Any

from fastmcp.server.middleware import CallNext, MiddlewareContext

from docker_mcp_server.middleware.utils import get_operation_name
from docker_mcp_server.utils.logger import get_logger

logger = get_logger(__name__)


class ErrorHandlerMiddleware:
    """FastMCP middleware that logs failed operations and re-raises them.

    With ``debug_mode`` enabled the full traceback is logged as well.
    """

    def __init__(self, debug_mode: bool = False):
        """Initialize error handler middleware.

        Args:
            debug_mode: If True, failures are logged with their traceback
        """
        self.debug_mode = debug_mode
        logger.debug(f"ErrorHandlerMiddleware: Initialized (debug_mode={debug_mode})")

    async def __call__(
        self,
        context: MiddlewareContext[Any],
        call_next: CallNext[Any, Any],
    ) -> Any:
        """Log errors raised by inner middleware and handlers.

        Args:
            context: FastMCP middleware context
            call_next: Next middleware/handler in the chain

        Returns:
            Result from next handler

        Raises:
            Exception: The original exception, unchanged
        """
        try:
            return await call_next(context)
        except Exception as e:
            operation_name = get_operation_name(context)
            if self.debug_mode:
                logger.exception(f"Error in {operation_name}: {type(e).__name__}: {e}")
            else:
                logger.error(f"Error in {operation_name}: {type(e).__name__}: {e}")
            raise
