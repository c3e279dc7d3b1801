"""Volume tools: list, create, remove."""

from typing import Annotated, Any

from pydantic import BaseModel, Field

from docker_mcp_server.docker_wrapper.client import DockerClientWrapper
from docker_mcp_server.tools.common import (
    DESC_FORCE,
    DESC_VOLUME_NAME,
    FiltersArg,
    OptionsArg,
    ToolDefinition,
)
from docker_mcp_server.tools.registry import register_tools
from docker_mcp_server.utils.docker_error_handler import run_docker_operation
from docker_mcp_server.utils.logger import get_logger
from docker_mcp_server.utils.messages import MSG_VOLUME_CREATED, MSG_VOLUME_REMOVED
from docker_mcp_server.utils.safety import OperationSafety

logger = get_logger(__name__)

# Reported when the daemon omits a volume's creation time
UNKNOWN_CREATED = "unknown"


class VolumeSummary(BaseModel):
    """Volume entry returned by list_volumes."""

    name: str = Field(description="Volume name")
    driver: str = Field(default="", description="Volume driver")
    mountpoint: str = Field(default="", description="Mount point on the host")
    created: str = Field(default=UNKNOWN_CREATED, description="Creation time, or 'unknown'")
    options: dict[str, str] = Field(default_factory=dict, description="Driver options")
    labels: dict[str, str] = Field(default_factory=dict, description="Volume labels")


class ListVolumesOutput(BaseModel):
    """Output for listing volumes."""

    volumes: list[VolumeSummary] = Field(description="Volumes known to the daemon")
    warnings: list[str] = Field(default_factory=list, description="Warnings from the daemon")


class CreateVolumeOutput(BaseModel):
    """Output for creating a volume."""

    name: str = Field(description="Volume name")
    driver: str = Field(description="Volume driver")
    mountpoint: str = Field(description="Mount point on the host")
    message: str = Field(description="Result message")


class RemoveVolumeOutput(BaseModel):
    """Output for removing a volume."""

    name: str = Field(description="Removed volume name")
    message: str = Field(description="Result message")


def create_list_volumes_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the list_volumes tool.

    Args:
        docker_client: Docker client wrapper

    Returns:
        Tuple of (name, description, safety_level, idempotent, open_world, function)
    """

    async def list_volumes(filters: FiltersArg = None) -> dict[str, Any]:
        """List Docker volumes along with any daemon warnings.

        Raises:
            DockerOperationError: If listing fails
        """
        logger.info(f"Listing volumes (filters={filters})")

        def _list() -> dict[str, Any]:
            return docker_client.client.api.volumes(filters=filters)

        response = await run_docker_operation("list volumes", _list) or {}
        volumes = response.get("Volumes") or []
        warnings = response.get("Warnings") or []

        logger.info(f"Found {len(volumes)} volumes")
        return ListVolumesOutput(
            volumes=[
                VolumeSummary(
                    name=entry.get("Name", ""),
                    driver=entry.get("Driver", ""),
                    mountpoint=entry.get("Mountpoint", ""),
                    created=entry.get("CreatedAt") or UNKNOWN_CREATED,
                    options=entry.get("Options") or {},
                    labels=entry.get("Labels") or {},
                )
                for entry in volumes
            ],
            warnings=warnings,
        ).model_dump()

    return (
        "list_volumes",
        "List Docker volumes",
        OperationSafety.SAFE,
        True,  # idempotent
        False,  # not open_world
        list_volumes,
    )


def create_create_volume_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the create_volume tool."""

    async def create_volume(
        name: Annotated[str, Field(description=DESC_VOLUME_NAME)],
        driver: Annotated[str, Field(description="Volume driver")] = "local",
        options: OptionsArg = None,
    ) -> dict[str, Any]:
        """Create a Docker volume.

        Raises:
            DockerOperationError: If creation fails
        """
        logger.info(f"Creating volume: {name} (driver={driver})")

        def _create() -> Any:
            return docker_client.client.volumes.create(
                name=name, driver=driver, driver_opts=options
            )

        volume = await run_docker_operation("create volume", _create)
        attrs = volume.attrs or {}

        logger.info(f"Successfully created volume: {volume.name}")
        return CreateVolumeOutput(
            name=volume.name,
            driver=attrs.get("Driver", driver),
            mountpoint=attrs.get("Mountpoint", ""),
            message=MSG_VOLUME_CREATED,
        ).model_dump()

    return (
        "create_volume",
        "Create a Docker volume",
        OperationSafety.MODERATE,
        True,  # idempotent (the daemon returns the existing volume)
        False,  # not open_world
        create_volume,
    )


def create_remove_volume_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the remove_volume tool."""

    async def remove_volume(
        name: Annotated[str, Field(description=DESC_VOLUME_NAME)],
        force: Annotated[bool, Field(description=DESC_FORCE)] = False,
    ) -> dict[str, Any]:
        """Remove a Docker volume.

        Raises:
            DockerOperationError: If removal fails
        """
        logger.info(f"Removing volume: {name} (force={force})")

        def _remove() -> None:
            docker_client.client.volumes.get(name).remove(force=force)

        await run_docker_operation("remove volume", _remove)

        logger.info(f"Successfully removed volume: {name}")
        return RemoveVolumeOutput(name=name, message=MSG_VOLUME_REMOVED).model_dump()

    return (
        "remove_volume",
        "Remove a Docker volume",
        OperationSafety.DESTRUCTIVE,
        False,  # not idempotent (volume is gone after first removal)
        False,  # not open_world
        remove_volume,
    )


def register_volume_tools(app: Any, docker_client: DockerClientWrapper) -> list[str]:
    """Register all volume tools with FastMCP.

    Args:
        app: FastMCP application instance
        docker_client: Docker client wrapper

    Returns:
        List of registered tool names
    """
    tools = [
        create_list_volumes_tool(docker_client),
        create_create_volume_tool(docker_client),
        create_remove_volume_tool(docker_client),
    ]

    return register_tools(app, tools)
