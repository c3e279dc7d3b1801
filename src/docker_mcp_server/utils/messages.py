"""Centralized message templates for Docker operations.

Failure messages wrap the original client error; success messages are
returned to the MCP client in the ``message`` field of each result.
"""

# Failure prefix, formatted with the operation and the original error
ERROR_OPERATION_FAILED = "Failed to {}: {}"

# Container results
MSG_CONTAINER_CREATED = "Container {} created successfully"
MSG_CONTAINER_RUN = "Container {} created and started successfully"
MSG_CONTAINER_RECREATED = "Container recreated successfully"
MSG_CONTAINER_STARTED = "Container started successfully"
MSG_CONTAINER_STOPPED = "Container stopped successfully"
MSG_CONTAINER_REMOVED = "Container removed successfully"

# Image results
MSG_IMAGE_PULLED = "Image pulled successfully"
MSG_IMAGE_PUSHED = "Image pushed successfully"
MSG_IMAGE_BUILT = "Image built successfully"
MSG_IMAGE_REMOVED = "Image removed successfully"

# Network results
MSG_NETWORK_CREATED = "Network created successfully"
MSG_NETWORK_REMOVED = "Network removed successfully"

# Volume results
MSG_VOLUME_CREATED = "Volume created successfully"
MSG_VOLUME_REMOVED = "Volume removed successfully"
