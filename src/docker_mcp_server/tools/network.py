"""Network tools: list, create, remove."""

from typing import Annotated, Any

from pydantic import BaseModel, Field

from docker_mcp_server.docker_wrapper.client import DockerClientWrapper
from docker_mcp_server.tools.common import DESC_NETWORK_ID, FiltersArg, OptionsArg, ToolDefinition
from docker_mcp_server.tools.registry import register_tools
from docker_mcp_server.utils.docker_error_handler import run_docker_operation
from docker_mcp_server.utils.logger import get_logger
from docker_mcp_server.utils.messages import MSG_NETWORK_CREATED, MSG_NETWORK_REMOVED
from docker_mcp_server.utils.safety import OperationSafety

logger = get_logger(__name__)


class NetworkSummary(BaseModel):
    """Network entry returned by list_networks."""

    id: str = Field(description="Network ID")
    name: str = Field(default="", description="Network name")
    driver: str = Field(default="", description="Network driver")
    scope: str = Field(default="", description="Network scope (local, swarm, global)")
    created: str = Field(default="", description="Creation time (RFC 3339)")
    options: dict[str, str] = Field(default_factory=dict, description="Driver options")


class CreateNetworkOutput(BaseModel):
    """Output for creating a network."""

    id: str = Field(description="Network ID")
    name: str = Field(description="Network name")
    message: str = Field(description="Result message")


class RemoveNetworkOutput(BaseModel):
    """Output for removing a network."""

    id: str = Field(description="Removed network ID or name")
    message: str = Field(description="Result message")


def create_list_networks_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the list_networks tool.

    Args:
        docker_client: Docker client wrapper

    Returns:
        Tuple of (name, description, safety_level, idempotent, open_world, function)
    """

    async def list_networks(filters: FiltersArg = None) -> list[dict[str, Any]]:
        """List Docker networks.

        Raises:
            DockerOperationError: If listing fails
        """
        logger.info(f"Listing networks (filters={filters})")

        def _list() -> list[dict[str, Any]]:
            return docker_client.client.api.networks(filters=filters)

        networks = await run_docker_operation("list networks", _list)
        logger.info(f"Found {len(networks)} networks")
        return [
            NetworkSummary(
                id=entry.get("Id", ""),
                name=entry.get("Name", ""),
                driver=entry.get("Driver", ""),
                scope=entry.get("Scope", ""),
                created=entry.get("Created", ""),
                options=entry.get("Options") or {},
            ).model_dump()
            for entry in networks
        ]

    return (
        "list_networks",
        "List Docker networks",
        OperationSafety.SAFE,
        True,  # idempotent
        False,  # not open_world
        list_networks,
    )


def create_create_network_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the create_network tool."""

    async def create_network(
        name: Annotated[str, Field(description="Network name")],
        driver: Annotated[str, Field(description="Network driver")] = "bridge",
        options: OptionsArg = None,
    ) -> dict[str, Any]:
        """Create a Docker network.

        Raises:
            DockerOperationError: If creation fails
        """
        logger.info(f"Creating network: {name} (driver={driver})")

        def _create() -> Any:
            return docker_client.client.networks.create(name, driver=driver, options=options)

        network = await run_docker_operation("create network", _create)

        logger.info(f"Successfully created network: {name} ({network.id})")
        return CreateNetworkOutput(
            id=network.id,
            name=name,
            message=MSG_NETWORK_CREATED,
        ).model_dump()

    return (
        "create_network",
        "Create a Docker network",
        OperationSafety.MODERATE,
        False,  # not idempotent (a second call fails or duplicates)
        False,  # not open_world
        create_network,
    )


def create_remove_network_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the remove_network tool."""

    async def remove_network(
        id: Annotated[str, Field(description=DESC_NETWORK_ID)],  # noqa: A002
    ) -> dict[str, Any]:
        """Remove a Docker network.

        Raises:
            DockerOperationError: If removal fails
        """
        logger.info(f"Removing network: {id}")

        def _remove() -> None:
            docker_client.client.networks.get(id).remove()

        await run_docker_operation("remove network", _remove)

        logger.info(f"Successfully removed network: {id}")
        return RemoveNetworkOutput(id=id, message=MSG_NETWORK_REMOVED).model_dump()

    return (
        "remove_network",
        "Remove a Docker network",
        OperationSafety.DESTRUCTIVE,
        False,  # not idempotent
        False,  # not open_world
        remove_network,
    )


def register_network_tools(app: Any, docker_client: DockerClientWrapper) -> list[str]:
    """Register all network tools with FastMCP.

    Args:
        app: FastMCP application instance
        docker_client: Docker client wrapper

    Returns:
        List of registered tool names
    """
    tools = [
        create_list_networks_tool(docker_client),
        create_create_network_tool(docker_client),
        create_remove_network_tool(docker_client),
    ]

    return register_tools(app, tools)
