"""Image tools: list, pull, push, build, remove."""

from pathlib import Path
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, Field

from docker_mcp_server.docker_wrapper.client import DockerClientWrapper
from docker_mcp_server.tools.common import DESC_FORCE, DESC_IMAGE_ID, FiltersArg, ToolDefinition
from docker_mcp_server.tools.registry import register_tools
from docker_mcp_server.utils.docker_error_handler import run_docker_operation
from docker_mcp_server.utils.docker_helpers import collect_progress
from docker_mcp_server.utils.errors import DockerOperationError, ValidationError
from docker_mcp_server.utils.json_parsing import parse_json_string_field
from docker_mcp_server.utils.logger import get_logger
from docker_mcp_server.utils.messages import (
    ERROR_OPERATION_FAILED,
    MSG_IMAGE_BUILT,
    MSG_IMAGE_PULLED,
    MSG_IMAGE_PUSHED,
    MSG_IMAGE_REMOVED,
)
from docker_mcp_server.utils.safety import OperationSafety

logger = get_logger(__name__)

ImageNameArg = Annotated[str, Field(description="Image name")]
TagArg = Annotated[str, Field(description="Image tag (default: latest)")]


class ImageSummary(BaseModel):
    """Image entry returned by list_images."""

    id: str = Field(description="Image ID")
    repoTags: list[str] = Field(default_factory=list, description="Repository tags")  # noqa: N815
    repoDigests: list[str] = Field(  # noqa: N815
        default_factory=list, description="Repository digests"
    )
    created: int = Field(default=0, description="Creation time (Unix timestamp)")
    size: int = Field(default=0, description="Image size in bytes")
    virtualSize: int | None = Field(  # noqa: N815
        default=None, description="Size including shared layers (older daemons only)"
    )


class ImageProgressOutput(BaseModel):
    """Output for pull and push operations."""

    image: str = Field(description="Image reference (name:tag)")
    message: str = Field(description="Result message")
    details: list[dict[str, Any]] = Field(description="Progress events reported by the daemon")


class BuildImageOutput(BaseModel):
    """Output for building an image."""

    tag: str = Field(description="Tag applied to the built image")
    message: str = Field(description="Result message")
    details: list[dict[str, Any]] = Field(description="Build events reported by the daemon")


class RemoveImageOutput(BaseModel):
    """Output for removing an image."""

    id: str = Field(description="Removed image ID or name")
    message: str = Field(description="Result message")


def _image_summary(entry: dict[str, Any]) -> dict[str, Any]:
    """Reshape a Docker image list entry."""
    return ImageSummary(
        id=entry.get("Id", ""),
        repoTags=entry.get("RepoTags") or [],
        repoDigests=entry.get("RepoDigests") or [],
        created=entry.get("Created", 0),
        size=entry.get("Size", 0),
        virtualSize=entry.get("VirtualSize"),
    ).model_dump()


def _drain(operation: str, events: Any) -> list[dict[str, Any]]:
    """Collect progress events, raising if the daemon reported an error."""
    details, error_message = collect_progress(events)
    if error_message:
        logger.error(f"Failed to {operation}: {error_message}")
        raise DockerOperationError(ERROR_OPERATION_FAILED.format(operation, error_message))
    return details


def create_list_images_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the list_images tool.

    Args:
        docker_client: Docker client wrapper

    Returns:
        Tuple of (name, description, safety_level, idempotent, open_world, function)
    """

    async def list_images(
        all: Annotated[  # noqa: A002 - wire name of the argument
            bool, Field(description="Show all images (including intermediate)")
        ] = False,
        filters: FiltersArg = None,
    ) -> list[dict[str, Any]]:
        """List Docker images.

        Raises:
            DockerOperationError: If listing fails
        """
        logger.info(f"Listing images (all={all}, filters={filters})")

        def _list() -> list[dict[str, Any]]:
            return docker_client.client.api.images(all=all, filters=filters)

        images = await run_docker_operation("list images", _list)
        logger.info(f"Found {len(images)} images")
        return [_image_summary(entry) for entry in images]

    return (
        "list_images",
        "List Docker images",
        OperationSafety.SAFE,
        True,  # idempotent
        False,  # not open_world
        list_images,
    )


def create_pull_image_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the pull_image tool."""

    async def pull_image(image: ImageNameArg, tag: TagArg = "latest") -> dict[str, Any]:
        """Pull an image from a registry.

        Raises:
            DockerOperationError: If the pull fails
        """
        image_ref = f"{image}:{tag}"
        logger.info(f"Pulling image: {image_ref}")

        def _pull() -> list[dict[str, Any]]:
            events = docker_client.client.api.pull(image, tag=tag, stream=True, decode=True)
            return _drain("pull image", events)

        details = await run_docker_operation("pull image", _pull)

        logger.info(f"Successfully pulled image: {image_ref}")
        return ImageProgressOutput(
            image=image_ref,
            message=MSG_IMAGE_PULLED,
            details=details,
        ).model_dump()

    return (
        "pull_image",
        "Pull an image from a registry",
        OperationSafety.MODERATE,
        True,  # idempotent (pulling same image multiple times is safe)
        True,  # open_world (talks to a registry)
        pull_image,
    )


def create_push_image_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the push_image tool."""

    async def push_image(image: ImageNameArg, tag: TagArg = "latest") -> dict[str, Any]:
        """Push an image to a registry.

        Raises:
            DockerOperationError: If the push fails
        """
        image_ref = f"{image}:{tag}"
        logger.info(f"Pushing image: {image_ref}")

        def _push() -> list[dict[str, Any]]:
            events = docker_client.client.api.push(image, tag=tag, stream=True, decode=True)
            return _drain("push image", events)

        details = await run_docker_operation("push image", _push)

        logger.info(f"Successfully pushed image: {image_ref}")
        return ImageProgressOutput(
            image=image_ref,
            message=MSG_IMAGE_PUSHED,
            details=details,
        ).model_dump()

    return (
        "push_image",
        "Push an image to a registry",
        OperationSafety.MODERATE,
        True,  # idempotent (re-pushing the same layers is a no-op)
        True,  # open_world (talks to a registry)
        push_image,
    )


def create_build_image_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the build_image tool.

    Args:
        docker_client: Docker client wrapper

    Returns:
        Tuple of (name, description, safety_level, idempotent, open_world, function)
    """

    async def build_image(
        tag: Annotated[str, Field(description="Image tag")],
        dockerfile: Annotated[
            str, Field(description="Path to Dockerfile, relative to the context")
        ] = "Dockerfile",
        context: Annotated[str, Field(description="Build context directory")] = ".",
        buildArgs: Annotated[  # noqa: N803 - wire name of the argument
            dict[str, str] | None,
            BeforeValidator(parse_json_string_field),
            Field(description="Build arguments"),
        ] = None,
    ) -> dict[str, Any]:
        """Build an image from a Dockerfile in a local context directory.

        Raises:
            ValidationError: If the context directory does not exist
            DockerOperationError: If the build fails
        """
        if not Path(context).is_dir():
            raise ValidationError(f"Build context directory not found: {context}")

        logger.info(f"Building image {tag} from {context} (dockerfile={dockerfile})")

        def _build() -> list[dict[str, Any]]:
            events = docker_client.client.api.build(
                path=context,
                dockerfile=dockerfile,
                tag=tag,
                buildargs=buildArgs,
                rm=True,
                decode=True,
            )
            return _drain("build image", events)

        details = await run_docker_operation("build image", _build)

        logger.info(f"Successfully built image: {tag}")
        return BuildImageOutput(tag=tag, message=MSG_IMAGE_BUILT, details=details).model_dump()

    return (
        "build_image",
        "Build an image from a Dockerfile",
        OperationSafety.MODERATE,
        False,  # not idempotent (each build may produce a new image)
        True,  # open_world (base images may be pulled)
        build_image,
    )


def create_remove_image_tool(docker_client: DockerClientWrapper) -> ToolDefinition:
    """Create the remove_image tool."""

    async def remove_image(
        id: Annotated[str, Field(description=DESC_IMAGE_ID)],  # noqa: A002
        force: Annotated[bool, Field(description=DESC_FORCE)] = False,
    ) -> dict[str, Any]:
        """Remove an image.

        Raises:
            DockerOperationError: If removal fails
        """
        logger.info(f"Removing image: {id} (force={force})")

        def _remove() -> None:
            docker_client.client.images.remove(image=id, force=force)

        await run_docker_operation("remove image", _remove)

        logger.info(f"Successfully removed image: {id}")
        return RemoveImageOutput(id=id, message=MSG_IMAGE_REMOVED).model_dump()

    return (
        "remove_image",
        "Remove an image",
        OperationSafety.DESTRUCTIVE,
        False,  # not idempotent (image is gone after first removal)
        False,  # not open_world
        remove_image,
    )


def register_image_tools(app: Any, docker_client: DockerClientWrapper) -> list[str]:
    """Register all image tools with FastMCP.

    Args:
        app: FastMCP application instance
        docker_client: Docker client wrapper

    Returns:
        List of registered tool names
    """
    tools = [
        create_list_images_tool(docker_client),
        create_pull_image_tool(docker_client),
        create_push_image_tool(docker_client),
        create_build_image_tool(docker_client),
        create_remove_image_tool(docker_client),
    ]

    return register_tools(app, tools)
