"""Container tools: list, create, run, recreate, start, logs, stop, remove."""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from docker_mcp_server.docker_wrapper.client import DockerClientWrapper
from docker_mcp_server.tools.common import DESC_CONTAINER_ID, FiltersArg, ToolDefinition
from docker_mcp_server.tools.registry import register_tools
from docker_mcp_server.utils.docker_error_handler import run_docker_operation
from docker_mcp_server.utils.docker_helpers import build_container_config, build_recreate_config
from docker_mcp_server.utils.json_parsing import parse_json_string_field
from docker_mcp_server.utils.logger import get_logger
from docker_mcp_server.utils.messages import (
    MSG_CONTAINER_CREATED,
    MSG_CONTAINER_RECREATED,
    MSG_CONTAINER_REMOVED,
    MSG_CONTAINER_RUN,
    MSG_CONTAINER_STARTED,
    MSG_CONTAINER_STOPPED,
)
from docker_mcp_server.utils.safety import OperationSafety
from docker_mcp_server.utils.validation import validate_container_name

logger = get_logger(__name__)

# Argument types shared by create_container and run_container
NameArg = Annotated[str, Field(description="Container name")]
ImageArg = Annotated[str, Field(description="Docker image to use")]
EnvArg = Annotated[
    list[str] | None,
    Field(description="Environment variables as KEY=value strings"),
]
PortsArg = Annotated[
    dict[str, str | int] | None,
    BeforeValidator(parse_json_string_field),
    Field(
        description=(
            "Port mappings from container port to host port. "
            "Example: {'80': '8080', '53/udp': '5353'}"
        )
    ),
]
VolumesArg = Annotated[
    list[str] | None,
    Field(
        description=(
            "Volume mounts. 'source:/container/path[:mode]' binds a host path or named "
            "volume; a bare '/container/path' creates an anonymous volume"
        )
    ),
]
CommandArg = Annotated[
    str | list[str] | None,
    Field(description="Command to run, as a shell-style string or an argv list"),
]
WorkingDirArg = Annotated[str | None, Field(description="Working directory")]
RestartArg = Annotated[
    str | None,
    Field(description="Restart policy: no, always, unless-stopped, on-failure[:max-retries]"),
]
ContainerIdArg = Annotated[str, Field(description=DESC_CONTAINER_ID)]


class ContainerSummary(BaseModel):
    """Container entry returned by list_containers."""

    id: str = Field(description="Container ID")
    names: list[str] = Field(default_factory=list, description="Container names")
    image: str = Field(default="", description="Image the container was created from")
    command: str = Field(default="", description="Command the container runs")
    created: int = Field(default=0, description="Creation time (Unix timestamp)")
    status: str = Field(default="", description="Human-readable status")
    state: str = Field(default="", description="Container state")
    ports: list[dict[str, Any]] = Field(default_factory=list, description="Published ports")


class ContainerOperationOutput(BaseModel):
    """Output for container state-changing operations."""

    id: str = Field(description="Container ID or name")
    message: str = Field(description="Result message")


class ContainerLogsOutput(BaseModel):
    """Output for fetching container logs."""

    id: str = Field(description="Container ID or name")
    logs: str = Field(description="Combined stdout and stderr output")


def _container_summary(entry: dict[str, Any]) -> dict[str, Any]:
    """Reshape a Docker container list entry."""
    return ContainerSummary(
        id=entry.get("Id", ""),
        names=entry.get("Names") or [],
        image=entry.get("Image", ""),
        command=entry.get("Command", ""),
        created=entry.get("Created", 0),
        status=entry.get("Status", ""),
        state=entry.get("State", ""),
        ports=entry.get("Ports") or [],
    ).model_dump()


def _decode_logs(logs: bytes | str) -> str:
    """Decode log output, replacing undecodable bytes."""
    if isinstance(logs, bytes):
        return logs.decode("utf-8", errors="replace")
    return str(logs)


def create_list_containers_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the list_containers tool.

    Args:
        docker_client: Docker client wrapper

    Returns:
        Tuple of (name, description, safety_level, idempotent, open_world, function)
    """

    async def list_containers(
        all: Annotated[  # noqa: A002 - wire name of the argument
            bool, Field(description="Show all containers (default shows only running)")
        ] = False,
        filters: FiltersArg = None,
    ) -> list[dict[str, Any]]:
        """List Docker containers with optional filtering.

        Raises:
            DockerOperationError: If listing fails
        """
        logger.info(f"Listing containers (all={all}, filters={filters})")

        def _list() -> list[dict[str, Any]]:
            return docker_client.client.api.containers(all=all, filters=filters)

        containers = await run_docker_operation("list containers", _list)
        logger.info(f"Found {len(containers)} containers")
        return [_container_summary(entry) for entry in containers]

    return (
        "list_containers",
        "List Docker containers with optional filtering",
        OperationSafety.SAFE,
        True,  # idempotent
        False,  # not open_world
        list_containers,
    )


def create_create_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the create_container tool.

    Args:
        docker_client: Docker client wrapper

    Returns:
        Tuple of (name, description, safety_level, idempotent, open_world, function)
    """

    async def create_container(  # noqa: PLR0913 - Docker API requires these parameters
        name: NameArg,
        image: ImageArg,
        env: EnvArg = None,
        ports: PortsArg = None,
        volumes: VolumesArg = None,
        command: CommandArg = None,
        workingDir: WorkingDirArg = None,  # noqa: N803 - wire name of the argument
        restart: RestartArg = None,
    ) -> dict[str, Any]:
        """Create a new Docker container without starting it.

        Raises:
            ValidationError: If name, ports, command or restart policy are invalid
            DockerOperationError: If creation fails
        """
        validate_container_name(name)
        config = build_container_config(
            image=image,
            name=name,
            env=env,
            ports=ports,
            volumes=volumes,
            command=command,
            working_dir=workingDir,
            restart=restart,
        )

        logger.info(f"Creating container {name} from image {image}")

        def _create() -> dict[str, Any]:
            return docker_client.client.api.create_container(**config)

        result = await run_docker_operation("create container", _create)
        container_id = str(result.get("Id", ""))
        for warning in result.get("Warnings") or []:
            logger.warning(f"Docker warning creating {name}: {warning}")

        logger.info(f"Successfully created container: {container_id}")
        return ContainerOperationOutput(
            id=container_id,
            message=MSG_CONTAINER_CREATED.format(name),
        ).model_dump()

    return (
        "create_container",
        "Create a new Docker container",
        OperationSafety.MODERATE,
        False,  # not idempotent (name conflict on repeat)
        False,  # not open_world
        create_container,
    )


def create_run_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the run_container tool.

    Args:
        docker_client: Docker client wrapper

    Returns:
        Tuple of (name, description, safety_level, idempotent, open_world, function)
    """

    async def run_container(  # noqa: PLR0913 - Docker API requires these parameters
        name: NameArg,
        image: ImageArg,
        env: EnvArg = None,
        ports: PortsArg = None,
        volumes: VolumesArg = None,
        command: CommandArg = None,
        workingDir: WorkingDirArg = None,  # noqa: N803 - wire name of the argument
        restart: RestartArg = None,
        detach: Annotated[
            bool, Field(description="Run in detached mode (containers always run detached)")
        ] = True,
        autoRemove: Annotated[  # noqa: N803 - wire name of the argument
            bool, Field(description="Automatically remove container when it exits")
        ] = False,
    ) -> dict[str, Any]:
        """Create and start a Docker container.

        Raises:
            ValidationError: If name, ports, command or restart policy are invalid
            DockerOperationError: If creation or start fails
        """
        validate_container_name(name)
        config = build_container_config(
            image=image,
            name=name,
            env=env,
            ports=ports,
            volumes=volumes,
            command=command,
            working_dir=workingDir,
            restart=restart,
            auto_remove=autoRemove,
        )

        logger.info(
            f"Running container {name} from image {image} "
            f"(detach={detach}, autoRemove={autoRemove})"
        )

        def _run() -> str:
            api = docker_client.client.api
            result = api.create_container(**config)
            container_id = str(result.get("Id", ""))
            api.start(container_id)
            return container_id

        container_id = await run_docker_operation("run container", _run)

        logger.info(f"Successfully started container: {container_id}")
        return ContainerOperationOutput(
            id=container_id,
            message=MSG_CONTAINER_RUN.format(name),
        ).model_dump()

    return (
        "run_container",
        "Create and start a Docker container",
        OperationSafety.MODERATE,
        False,  # not idempotent (creates a new container each time)
        False,  # not open_world
        run_container,
    )


def create_recreate_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the recreate_container tool.

    Args:
        docker_client: Docker client wrapper

    Returns:
        Tuple of (name, description, safety_level, idempotent, open_world, function)
    """

    async def recreate_container(id: ContainerIdArg) -> dict[str, Any]:  # noqa: A002
        """Recreate an existing container with the same configuration.

        The container is stopped and removed, then created again from its
        inspected Config and HostConfig under the same name and started.

        Raises:
            DockerOperationError: If any step fails
        """
        logger.info(f"Recreating container: {id}")

        def _recreate() -> str:
            api = docker_client.client.api
            details = api.inspect_container(id)
            config = build_recreate_config(details)

            api.stop(id)
            api.remove_container(id)

            result = api.create_container(**config)
            new_id = str(result.get("Id", ""))
            api.start(new_id)
            return new_id

        new_id = await run_docker_operation("recreate container", _recreate)

        logger.info(f"Successfully recreated container {id} as {new_id}")
        return ContainerOperationOutput(id=new_id, message=MSG_CONTAINER_RECREATED).model_dump()

    return (
        "recreate_container",
        "Recreate an existing container with same configuration",
        OperationSafety.DESTRUCTIVE,
        False,  # not idempotent (new container ID each time)
        False,  # not open_world
        recreate_container,
    )


def create_start_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the start_container tool."""

    async def start_container(id: ContainerIdArg) -> dict[str, Any]:  # noqa: A002
        """Start a stopped container.

        Raises:
            DockerOperationError: If start fails
        """
        logger.info(f"Starting container: {id}")

        def _start() -> None:
            docker_client.client.containers.get(id).start()

        await run_docker_operation("start container", _start)

        logger.info(f"Successfully started container: {id}")
        return ContainerOperationOutput(id=id, message=MSG_CONTAINER_STARTED).model_dump()

    return (
        "start_container",
        "Start a stopped container",
        OperationSafety.MODERATE,
        True,  # idempotent (starting a running container is a no-op)
        False,  # not open_world
        start_container,
    )


def create_fetch_container_logs_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the fetch_container_logs tool.

    Args:
        docker_client: Docker client wrapper

    Returns:
        Tuple of (name, description, safety_level, idempotent, open_world, function)
    """

    async def fetch_container_logs(
        id: ContainerIdArg,  # noqa: A002
        tail: Annotated[
            int, Field(description="Number of lines to show from end of logs", ge=0)
        ] = 100,
        follow: Annotated[
            bool, Field(description="Follow log output (ignored: logs are returned as a snapshot)")
        ] = False,
        timestamps: Annotated[bool, Field(description="Show timestamps")] = False,
    ) -> dict[str, Any]:
        """Fetch stdout and stderr logs from a container.

        Raises:
            DockerOperationError: If fetching logs fails
        """
        logger.info(f"Fetching logs for container {id} (tail={tail}, timestamps={timestamps})")
        if follow:
            logger.debug("follow=True requested; returning a snapshot of current logs")

        def _logs() -> bytes | str:
            container = docker_client.client.containers.get(id)
            return container.logs(
                stdout=True,
                stderr=True,
                tail=tail,
                follow=False,
                timestamps=timestamps,
            )

        logs = await run_docker_operation("fetch container logs", _logs)
        return ContainerLogsOutput(id=id, logs=_decode_logs(logs)).model_dump()

    return (
        "fetch_container_logs",
        "Fetch logs from a container",
        OperationSafety.SAFE,
        True,  # idempotent
        False,  # not open_world
        fetch_container_logs,
    )


def create_stop_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the stop_container tool."""

    async def stop_container(id: ContainerIdArg) -> dict[str, Any]:  # noqa: A002
        """Stop a running container.

        Raises:
            DockerOperationError: If stop fails
        """
        logger.info(f"Stopping container: {id}")

        def _stop() -> None:
            docker_client.client.containers.get(id).stop()

        await run_docker_operation("stop container", _stop)

        logger.info(f"Successfully stopped container: {id}")
        return ContainerOperationOutput(id=id, message=MSG_CONTAINER_STOPPED).model_dump()

    return (
        "stop_container",
        "Stop a running container",
        OperationSafety.MODERATE,
        True,  # idempotent (stopping a stopped container is a no-op)
        False,  # not open_world
        stop_container,
    )


def create_remove_container_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the remove_container tool."""

    async def remove_container(id: ContainerIdArg) -> dict[str, Any]:  # noqa: A002
        """Force-remove a container, stopping it first if it is running.

        Raises:
            DockerOperationError: If removal fails
        """
        logger.info(f"Removing container: {id}")

        def _remove() -> None:
            docker_client.client.containers.get(id).remove(force=True)

        await run_docker_operation("remove container", _remove)

        logger.info(f"Successfully removed container: {id}")
        return ContainerOperationOutput(id=id, message=MSG_CONTAINER_REMOVED).model_dump()

    return (
        "remove_container",
        "Remove a container",
        OperationSafety.DESTRUCTIVE,
        False,  # not idempotent (container is gone after first removal)
        False,  # not open_world
        remove_container,
    )


def register_container_tools(app: Any, docker_client: DockerClientWrapper) -> list[str]:
    """Register all container tools with FastMCP.

    Args:
        app: FastMCP application instance
        docker_client: Docker client wrapper

    Returns:
        List of registered tool names
    """
    tools = [
        create_list_containers_tool(docker_client),
        create_create_container_tool(docker_client),
        create_run_container_tool(docker_client),
        create_recreate_container_tool(docker_client),
        create_start_container_tool(docker_client),
        create_fetch_container_logs_tool(docker_client),
        create_stop_container_tool(docker_client),
        create_remove_container_tool(docker_client),
    ]

    return register_tools(app, tools)
