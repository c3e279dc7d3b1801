"""Unit tests for run_docker_operation."""

import threading

import pytest
from docker.errors import APIError, NotFound

from docker_mcp_server.utils.docker_error_handler import run_docker_operation
from docker_mcp_server.utils.errors import (
    DockerConnectionError,
    DockerOperationError,
    ValidationError,
)


class TestRunDockerOperation:
    """Test blocking-call execution and error mapping."""

    @pytest.mark.asyncio
    async def test_returns_result_from_worker_thread(self) -> None:
        """Test that the callable runs off the event loop thread."""
        main_thread = threading.get_ident()

        def _work(a: int, b: int = 0) -> tuple[int, bool]:
            return a + b, threading.get_ident() != main_thread

        result = await run_docker_operation("add numbers", _work, 2, b=3)

        assert result == (5, True)

    @pytest.mark.parametrize(
        "error",
        [NotFound("No such container: x"), APIError("conflict")],
    )
    @pytest.mark.asyncio
    async def test_docker_errors_wrapped(self, error: Exception) -> None:
        """Test that docker-py errors keep their message."""

        def _fail() -> None:
            raise error

        with pytest.raises(DockerOperationError) as exc_info:
            await run_docker_operation("inspect container", _fail)

        assert str(exc_info.value) == f"Failed to inspect container: {error}"
        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_connection_error_wrapped(self) -> None:
        """Test that a lazy connection failure becomes an operation failure."""

        def _fail() -> None:
            raise DockerConnectionError("Cannot connect to Docker daemon")

        with pytest.raises(DockerOperationError, match="Failed to list images: Cannot connect"):
            await run_docker_operation("list images", _fail)

    @pytest.mark.asyncio
    async def test_other_errors_propagate(self) -> None:
        """Test that non-Docker errors are not rewrapped."""

        def _fail() -> None:
            raise ValidationError("bad input")

        with pytest.raises(ValidationError, match="bad input"):
            await run_docker_operation("create container", _fail)
