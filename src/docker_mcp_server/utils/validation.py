"""Input validation utilities for Docker operations."""

import re
import shlex

from docker_mcp_server.utils.errors import ValidationError

# Docker naming patterns based on Docker documentation
CONTAINER_NAME_PATTERN = re.compile(r"^/?[a-zA-Z0-9][a-zA-Z0-9_.-]*\Z")

# Docker length limits
MAX_CONTAINER_NAME_LENGTH = 255  # Maximum container name length in Docker

# Input size limits (prevent resource exhaustion)
MAX_COMMAND_LENGTH = 65536  # 64 KB - maximum command string length

# Network port range
MIN_PORT = 1
MAX_PORT = 65535

PORT_PROTOCOLS = ("tcp", "udp", "sctp")

# Restart policies accepted by the Docker Engine API
RESTART_POLICIES = ("no", "always", "unless-stopped", "on-failure")


def validate_container_name(name: str) -> str:
    """Validate Docker container name.

    Args:
        name: Container name to validate

    Returns:
        Validated container name

    Raises:
        ValidationError: If name is invalid

    """
    if not name:
        raise ValidationError("Container name cannot be empty")

    if len(name) > MAX_CONTAINER_NAME_LENGTH:
        raise ValidationError(
            f"Container name cannot exceed {MAX_CONTAINER_NAME_LENGTH} characters"
        )

    if not CONTAINER_NAME_PATTERN.match(name):
        raise ValidationError(
            f"Invalid container name: {name}. "
            "Must contain only alphanumeric characters, underscores, periods, and hyphens. "
            "Cannot start with a hyphen or period."
        )

    return name


def validate_port(port: int | str) -> int:
    """Validate port number.

    Args:
        port: Port number to validate

    Returns:
        Validated port number as integer

    Raises:
        ValidationError: If port is invalid

    """
    try:
        port_int = int(port)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"Invalid port: {port}. Must be an integer.") from e

    if not MIN_PORT <= port_int <= MAX_PORT:
        raise ValidationError(f"Invalid port: {port}. Must be between {MIN_PORT} and {MAX_PORT}.")

    return port_int


def validate_port_mapping(container_port: str, host_port: int | str) -> tuple[str, str]:
    """Validate a container-to-host port mapping.

    Args:
        container_port: Container port, optionally with protocol ("80", "80/udp")
        host_port: Host port number, or an empty string to let Docker pick one

    Returns:
        Tuple of (container_port, host_port) as strings

    Raises:
        ValidationError: If port mapping is invalid

    """
    host_port_str = "" if host_port == "" else str(validate_port(host_port))

    if "/" in container_port:
        port_str, protocol = container_port.split("/", 1)
        if protocol not in PORT_PROTOCOLS:
            raise ValidationError(
                f"Invalid protocol: {protocol}. Must be 'tcp', 'udp', or 'sctp'."
            )
        validate_port(port_str)
    else:
        validate_port(container_port)

    return container_port, host_port_str


def split_command(command: str | list[str]) -> list[str]:
    """Normalize a command into an argv list.

    Lists are used as-is; strings are split with shell quoting rules, so
    ``sh -c "echo hi"`` becomes ``["sh", "-c", "echo hi"]``.

    Args:
        command: Command string or argv list

    Returns:
        Command as a list of arguments

    Raises:
        ValidationError: If command is empty, too long or has unbalanced quotes

    """
    if isinstance(command, list):
        if not command:
            raise ValidationError("Command list cannot be empty")
        total_length = sum(len(part) for part in command)
        if total_length > MAX_COMMAND_LENGTH:
            raise ValidationError(
                f"Command too long: {total_length} bytes (max: {MAX_COMMAND_LENGTH})"
            )
        return command

    if len(command) > MAX_COMMAND_LENGTH:
        raise ValidationError(
            f"Command too long: {len(command)} bytes (max: {MAX_COMMAND_LENGTH})"
        )
    if not command.strip():
        raise ValidationError("Command cannot be empty")

    try:
        return shlex.split(command)
    except ValueError as e:
        raise ValidationError(f"Command has invalid shell syntax: {e}") from e


def parse_restart_policy(restart: str) -> dict[str, str | int]:
    """Parse a restart policy into the Docker ``RestartPolicy`` structure.

    Args:
        restart: Policy name, or ``on-failure:N`` to cap retries

    Returns:
        Dict with ``Name`` and, for ``on-failure:N``, ``MaximumRetryCount``

    Raises:
        ValidationError: If the policy is unknown or the retry count is invalid

    """
    name, _, retries = restart.partition(":")
    if name not in RESTART_POLICIES:
        raise ValidationError(
            f"Invalid restart policy: {restart}. Must be one of {', '.join(RESTART_POLICIES)}."
        )

    if not retries:
        return {"Name": name}

    if name != "on-failure":
        raise ValidationError(f"Retry count is only valid for 'on-failure', got: {restart}")
    if not retries.isdigit():
        raise ValidationError(f"Invalid retry count in restart policy: {restart}")
    return {"Name": name, "MaximumRetryCount": int(retries)}
