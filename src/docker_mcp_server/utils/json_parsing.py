"""JSON parsing utilities for tool inputs.

Some MCP hosts serialize object-typed arguments as JSON strings; these helpers
turn them back into objects before validation.
"""

import json
from typing import Any

from docker_mcp_server.utils.logger import get_logger

logger = get_logger(__name__)


def parse_json_string_field(v: Any, field_name: str = "field") -> Any:
    """Parse a JSON string into an object, leaving other values unchanged.

    Args:
        v: The value to parse (dict or JSON string)
        field_name: Name of the field for error messages

    Returns:
        Parsed object if v was a string, otherwise v unchanged

    Raises:
        ValueError: If v is a string but not valid JSON
    """
    if isinstance(v, str):
        try:
            parsed = json.loads(v)
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Received invalid JSON string for {field_name}: {v[:100]}... "
                f"Expected an object, not a string. Error: {e}"
            ) from e
        logger.warning(
            f"Received JSON string instead of object for {field_name}, auto-parsing. "
            "This is a workaround for MCP client serialization issues."
        )
        return parsed
    return v


__all__ = ["parse_json_string_field"]
