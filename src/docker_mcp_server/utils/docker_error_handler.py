"""Docker error handling utilities.

Tool handlers run docker-py calls through :func:`run_docker_operation`, which
moves the blocking call off the event loop and maps client failures to
:class:`DockerOperationError` carrying the original message.
"""

import asyncio
from collections.abc import Callable
from typing import Any, TypeVar

from docker.errors import DockerException

from docker_mcp_server.utils.errors import DockerConnectionError, DockerOperationError
from docker_mcp_server.utils.logger import get_logger
from docker_mcp_server.utils.messages import ERROR_OPERATION_FAILED

logger = get_logger(__name__)

T = TypeVar("T")


async def run_docker_operation(
    operation: str,
    func: Callable[..., T],
    *args: Any,
    **kwargs: Any,
) -> T:
    """Run a blocking Docker call in a worker thread with consistent error handling.

    Args:
        operation: Operation description for messages (e.g., "list containers")
        func: Callable performing the Docker client calls
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Whatever func returns

    Raises:
        DockerOperationError: If the Docker client or daemon reports a failure
    """
    try:
        return await asyncio.to_thread(func, *args, **kwargs)
    except (DockerException, DockerConnectionError) as e:
        logger.error(f"Failed to {operation}: {e}")
        raise DockerOperationError(ERROR_OPERATION_FAILED.format(operation, e)) from e


__all__ = ["run_docker_operation"]
