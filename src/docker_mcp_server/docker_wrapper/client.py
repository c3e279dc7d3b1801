"""Docker client wrapper with connection management and health checks."""

from pathlib import Path
from typing import Any

import docker
from docker import DockerClient
from docker.errors import DockerException
from loguru import logger

from docker_mcp_server.config import DockerConfig
from docker_mcp_server.utils.errors import DockerConnectionError, DockerHealthCheckError


class DockerClientWrapper:
    """Single shared Docker client, connected lazily and reused across tool calls."""

    def __init__(self, config: DockerConfig) -> None:
        """Initialize Docker client wrapper.

        Args:
            config: Docker configuration settings

        """
        self.config = config
        self._client: DockerClient | None = None
        logger.debug(f"Initialized DockerClientWrapper with base_url={config.base_url}")

    @property
    def client(self) -> DockerClient:
        """Get Docker client with lazy initialization and health check.

        Returns:
            Initialized and healthy Docker client

        Raises:
            DockerConnectionError: If unable to connect to Docker daemon

        """
        if self._client is None:
            self._connect()
        assert self._client is not None  # _connect() raises on failure, so client is set
        return self._client

    def _build_tls_config(self) -> Any:
        """Build a TLS configuration when verification is enabled."""
        if not self.config.tls_verify:
            return None
        return docker.tls.TLSConfig(
            client_cert=(
                str(self.config.tls_client_cert),
                str(self.config.tls_client_key),
            )
            if self.config.tls_client_cert and self.config.tls_client_key
            else None,
            ca_cert=str(self.config.tls_ca_cert) if self.config.tls_ca_cert else None,
            verify=True,
        )

    def _connect(self) -> None:
        """Establish connection to Docker daemon with health check.

        Raises:
            DockerConnectionError: If connection fails

        """
        try:
            logger.info(f"Connecting to Docker daemon at {self.config.base_url}")

            if self.config.base_url.startswith("unix://"):
                socket_path = Path(self.config.base_url.replace("unix://", ""))
                if not socket_path.exists():
                    logger.error(f"Docker socket not found: {socket_path}")
                    raise DockerConnectionError(f"Docker socket not found: {socket_path}")

            self._client = docker.DockerClient(
                base_url=self.config.base_url,
                timeout=self.config.timeout,
                tls=self._build_tls_config(),
            )

            self._client.ping()  # type: ignore[no-untyped-call]
            logger.success("Successfully connected to Docker daemon")

        except DockerConnectionError:
            raise
        except DockerException as e:
            logger.error(f"Failed to connect to Docker daemon: {e}")
            self._client = None
            raise DockerConnectionError(f"Cannot connect to Docker daemon: {e}") from e
        except Exception as e:
            logger.error(f"Unexpected error connecting to Docker daemon: {e}")
            self._client = None
            raise DockerConnectionError(f"Unexpected error: {e}") from e

    def health_check(self) -> dict[str, Any]:
        """Ping the daemon and summarise its version.

        Returns:
            Health status dictionary with daemon info

        Raises:
            DockerHealthCheckError: If health check fails

        """
        try:
            self.client.ping()  # type: ignore[no-untyped-call]
            version = self.client.version()  # type: ignore[no-untyped-call]

            health_status = {
                "status": "healthy",
                "daemon_info": {
                    "server_version": version.get("Version"),
                    "api_version": version.get("ApiVersion"),
                    "os": version.get("Os"),
                    "architecture": version.get("Arch"),
                },
            }

            logger.debug("Docker health check passed")
            return health_status

        except DockerException as e:
            logger.error(f"Docker health check failed: {e}")
            raise DockerHealthCheckError(f"Health check failed: {e}") from e

    def close(self) -> None:
        """Close the Docker client connection."""
        if self._client is not None:
            try:
                self._client.close()  # type: ignore[no-untyped-call]
                logger.debug("Docker client connection closed")
            except Exception as e:
                logger.warning(f"Error closing Docker client: {e}")
            finally:
                self._client = None

    def __enter__(self) -> "DockerClientWrapper":
        """Enter context manager."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Exit context manager and close client."""
        self.close()

    def __repr__(self) -> str:
        """Return string representation."""
        status = "connected" if self._client is not None else "disconnected"
        return f"DockerClientWrapper(base_url={self.config.base_url}, status={status})"
