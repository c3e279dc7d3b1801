"""Tool implementations for the Docker MCP server.

Organization:
- container.py: Container listing, creation and lifecycle tools
- image.py: Image management tools
- network.py: Network management tools
- volume.py: Volume management tools
"""

from docker_mcp_server.tools.registration import register_all_tools

__all__ = ["register_all_tools"]
