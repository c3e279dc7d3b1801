"""Docker MCP server entry point.

Runs the server over stdio: stdout carries the MCP stream, logs go to stderr.
"""

import asyncio
from typing import Any

import typer
from pydantic import ValidationError as PydanticValidationError

from docker_mcp_server.config import Config, DaemonProtocol, ServerConfig
from docker_mcp_server.server import DockerMCPServer
from docker_mcp_server.utils.errors import MCPDockerError
from docker_mcp_server.utils.logger import get_logger, setup_logger
from docker_mcp_server.version import __version__

SHUTDOWN_COMPLETE_MSG = "Docker MCP server shutdown complete"


def run_stdio(logger: Any, docker_server: DockerMCPServer) -> None:
    """Run the MCP server with stdio transport until the input stream closes."""
    logger.info("Starting FastMCP server with stdio transport")

    async def _shutdown() -> None:
        await docker_server.stop()
        logger.info(SHUTDOWN_COMPLETE_MSG)

    try:
        # FastMCP's run() is synchronous and handles async internally
        docker_server.get_app().run(transport="stdio", show_banner=False)
    finally:
        asyncio.run(_shutdown())


def load_config(
    docker_host: str | None,
    docker_port: int | None,
    docker_protocol: DaemonProtocol | None,
    log_level: str | None,
) -> Config:
    """Load configuration, letting CLI options take precedence over the environment."""
    config = Config(
        daemon_host=docker_host,
        daemon_port=docker_port,
        daemon_protocol=docker_protocol,
    )
    if log_level:
        config.server = ServerConfig(log_level=log_level)
    return config


app = typer.Typer(
    name="docker-mcp-server",
    help="MCP server exposing Docker containers, images, networks and volumes",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"docker-mcp-server {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(  # noqa: B008
    docker_host: str | None = typer.Option(
        None,
        "--docker-host",
        help="Remote Docker daemon host (default: local socket)",
    ),
    docker_port: int | None = typer.Option(
        None,
        "--docker-port",
        help="Remote Docker daemon port (default: 2375 http, 2376 https, 22 ssh)",
    ),
    docker_protocol: DaemonProtocol | None = typer.Option(
        None,
        "--docker-protocol",
        help="Protocol for the remote Docker daemon",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    version: bool = typer.Option(  # noqa: ARG001
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """Run the Docker MCP server over stdio."""
    try:
        config = load_config(docker_host, docker_port, docker_protocol, log_level)
    except PydanticValidationError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=1) from e

    setup_logger(config.server)

    logger = get_logger(__name__)
    logger.info("=" * 60)
    logger.info(f"Docker MCP Server v{__version__}")
    logger.info("=" * 60)
    logger.info(f"Configuration: {config}")

    docker_server = DockerMCPServer(config)

    try:
        asyncio.run(docker_server.start())
    except MCPDockerError as e:
        logger.error(f"Failed to start server: {e}")
        asyncio.run(docker_server.stop())
        raise typer.Exit(code=1) from e

    try:
        run_stdio(logger, docker_server)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
    except Exception as e:
        logger.exception(f"Server error: {e}")
        raise


if __name__ == "__main__":
    app()
