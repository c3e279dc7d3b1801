"""Shared argument types and descriptions for tool modules."""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from docker_mcp_server.utils.json_parsing import parse_json_string_field
from docker_mcp_server.utils.safety import OperationSafety

# Shared field description constants (avoids duplication per SonarCloud S1192)
DESC_CONTAINER_ID = "Container ID or name"
DESC_IMAGE_ID = "Image ID or name"
DESC_NETWORK_ID = "Network ID or name"
DESC_VOLUME_NAME = "Volume name"
DESC_FORCE = "Force removal"
DESC_DRIVER_OPTIONS = "Driver options"

# Tool factory result: (name, description, safety_level, idempotent, open_world, function)
ToolDefinition = tuple[str, str, OperationSafety, bool, bool, Any]

# Object-typed arguments accept a JSON string as well as an object
FiltersArg = Annotated[
    dict[str, str | list[str]] | None,
    BeforeValidator(parse_json_string_field),
    Field(
        description=(
            "Filters to apply as key-value pairs matching Docker API semantics "
            "(e.g., {'status': 'running'}, {'label': ['env=prod']})"
        )
    ),
]

OptionsArg = Annotated[
    dict[str, str] | None,
    BeforeValidator(parse_json_string_field),
    Field(description=DESC_DRIVER_OPTIONS),
]
