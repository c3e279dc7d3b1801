"""Helper utilities for building Docker API requests and reading responses.

The Docker Engine API describes a container with two structures: the
container ``Config`` (image, command, env, ``ExposedPorts``, ``Volumes``) and
its ``HostConfig`` (``PortBindings``, ``Binds``, ``RestartPolicy``,
``AutoRemove``). Tool arguments are flattened, friendlier versions of these.
"""

from collections.abc import Iterable
from typing import Any

from docker_mcp_server.utils.validation import (
    parse_restart_policy,
    split_command,
    validate_port_mapping,
)


def safe_get_list(data: dict[str, Any], *keys: str) -> list[Any]:
    """Get nested value as list, returning [] if None or missing.

    Docker API responses may carry null values (e.g., ``Env: null`` on
    minimal containers).

    Args:
        data: Source dictionary
        *keys: Nested keys to traverse

    Returns:
        List value if found and is a list, otherwise []

    Examples:
        >>> safe_get_list({"Env": ["PATH=/usr/bin"]}, "Env")
        ['PATH=/usr/bin']

        >>> safe_get_list({"Env": None}, "Env")
        []
    """
    result: Any = data
    for key in keys:
        if not isinstance(result, dict):
            return []
        result = result.get(key)
        if result is None:
            return []
    return result if isinstance(result, list) else []


def safe_get_dict(data: dict[str, Any], *keys: str) -> dict[str, Any]:
    """Get nested value as dict, returning {} if None or missing.

    Args:
        data: Source dictionary
        *keys: Nested keys to traverse

    Returns:
        Dict value if found and is a dict, otherwise {}

    Examples:
        >>> safe_get_dict({"Config": {"ExposedPorts": {"80/tcp": {}}}}, "Config", "ExposedPorts")
        {'80/tcp': {}}

        >>> safe_get_dict({"Config": {"Volumes": None}}, "Config", "Volumes")
        {}
    """
    result: Any = data
    for key in keys:
        if not isinstance(result, dict):
            return {}
        result = result.get(key)
        if result is None:
            return {}
    return result if isinstance(result, dict) else {}


def normalize_port_key(container_port: str) -> str:
    """Return a container port in ``port/protocol`` form (protocol defaults to tcp)."""
    return container_port if "/" in container_port else f"{container_port}/tcp"


def parse_port_bindings(
    ports: dict[str, str | int] | None,
) -> tuple[dict[str, dict[str, Any]], dict[str, list[dict[str, str]]]]:
    """Split a ``{containerPort: hostPort}`` map into Docker port structures.

    Args:
        ports: Port mappings, e.g. ``{"80": "8080", "53/udp": 5353}``

    Returns:
        Tuple of (ExposedPorts, PortBindings)

    Raises:
        ValidationError: If a port or protocol is invalid

    Examples:
        >>> parse_port_bindings({"80": "8080"})
        ({'80/tcp': {}}, {'80/tcp': [{'HostPort': '8080'}]})
    """
    exposed_ports: dict[str, dict[str, Any]] = {}
    port_bindings: dict[str, list[dict[str, str]]] = {}
    if not ports:
        return exposed_ports, port_bindings

    for container_port, host_port in ports.items():
        container_port, host_port_str = validate_port_mapping(container_port, host_port)
        key = normalize_port_key(container_port)
        exposed_ports[key] = {}
        port_bindings[key] = [{"HostPort": host_port_str}]

    return exposed_ports, port_bindings


def parse_volumes(volumes: list[str] | None) -> tuple[list[str], dict[str, dict[str, Any]]]:
    """Split volume entries into bind mounts and anonymous volumes.

    An entry containing a colon (``/host:/container[:mode]`` or
    ``named:/container``) is a bind; anything else is a container path that
    gets an anonymous volume.

    Args:
        volumes: Volume entries

    Returns:
        Tuple of (Binds, Volumes)

    Examples:
        >>> parse_volumes(["/srv/data:/data:ro", "/cache"])
        (['/srv/data:/data:ro'], {'/cache': {}})
    """
    binds: list[str] = []
    anonymous: dict[str, dict[str, Any]] = {}
    for volume in volumes or []:
        if ":" in volume:
            binds.append(volume)
        else:
            anonymous[volume] = {}
    return binds, anonymous


def build_container_config(  # noqa: PLR0913
    image: str,
    name: str,
    env: list[str] | None = None,
    ports: dict[str, str | int] | None = None,
    volumes: list[str] | None = None,
    command: str | list[str] | None = None,
    working_dir: str | None = None,
    restart: str | None = None,
    auto_remove: bool | None = None,
) -> dict[str, Any]:
    """Build keyword arguments for ``APIClient.create_container``.

    ``ports`` and ``volumes`` are passed as raw ``ExposedPorts``/``Volumes``
    dicts and ``host_config`` as a raw ``HostConfig`` dict, which the client
    forwards to the daemon unchanged.

    Returns:
        Keyword arguments for the low-level create call

    Raises:
        ValidationError: If ports, command or restart policy are invalid
    """
    exposed_ports, port_bindings = parse_port_bindings(ports)
    binds, anonymous_volumes = parse_volumes(volumes)

    host_config: dict[str, Any] = {"PortBindings": port_bindings, "Binds": binds}
    if restart:
        host_config["RestartPolicy"] = parse_restart_policy(restart)
    if auto_remove is not None:
        host_config["AutoRemove"] = auto_remove

    kwargs: dict[str, Any] = {
        "image": image,
        "name": name,
        "ports": exposed_ports,
        "volumes": anonymous_volumes,
        "host_config": host_config,
    }
    if env:
        kwargs["environment"] = env
    if command:
        kwargs["command"] = split_command(command)
    if working_dir:
        kwargs["working_dir"] = working_dir

    return kwargs


def build_recreate_config(details: dict[str, Any]) -> dict[str, Any]:
    """Build ``create_container`` keyword arguments from inspect output.

    Carries over image, name, command, env, working directory, exposed
    ports, volumes and the complete ``HostConfig``.

    Args:
        details: ``inspect_container`` response

    Returns:
        Keyword arguments for the low-level create call
    """
    config = safe_get_dict(details, "Config")
    kwargs: dict[str, Any] = {
        "image": config.get("Image"),
        "name": str(details.get("Name", "")).lstrip("/") or None,
        "command": safe_get_list(config, "Cmd") or None,
        "environment": safe_get_list(config, "Env") or None,
        "working_dir": config.get("WorkingDir") or None,
        "ports": safe_get_dict(config, "ExposedPorts"),
        "volumes": safe_get_dict(config, "Volumes"),
        "host_config": safe_get_dict(details, "HostConfig"),
    }
    return kwargs


def collect_progress(events: Iterable[dict[str, Any]]) -> tuple[list[dict[str, Any]], str | None]:
    """Drain a decoded pull/push/build progress stream.

    The daemon reports failures inside the stream (``error``/``errorDetail``)
    while the HTTP call itself succeeds.

    Args:
        events: Decoded JSON progress events

    Returns:
        Tuple of (all events, error message or None)
    """
    collected: list[dict[str, Any]] = []
    for event in events:
        collected.append(event)
        if "error" in event:
            return collected, str(event["error"])
        if "errorDetail" in event:
            detail = event["errorDetail"]
            message = detail.get("message") if isinstance(detail, dict) else detail
            return collected, str(message)
    return collected, None
