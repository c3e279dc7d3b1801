"""Utility modules for the Docker MCP server."""

from docker_mcp_server.utils.errors import (
    DockerConnectionError,
    DockerHealthCheckError,
    DockerOperationError,
    MCPDockerError,
    ValidationError,
)
from docker_mcp_server.utils.logger import setup_logger
from docker_mcp_server.utils.validation import (
    parse_restart_policy,
    split_command,
    validate_container_name,
    validate_port_mapping,
)

__all__ = [
    "DockerConnectionError",
    "DockerHealthCheckError",
    "DockerOperationError",
    "MCPDockerError",
    "ValidationError",
    "setup_logger",
    "parse_restart_policy",
    "split_command",
    "validate_container_name",
    "validate_port_mapping",
]
