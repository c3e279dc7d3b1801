"""Configuration management for the Docker MCP server."""

import platform
import warnings
from enum import Enum
from pathlib import Path

from pydantic import AliasChoices, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docker_mcp_server.version import __version__

# Default daemon ports by protocol (Docker convention: 2375 plain, 2376 TLS)
DEFAULT_DAEMON_PORTS = {"http": 2375, "https": 2376, "ssh": 22}


class DaemonProtocol(str, Enum):
    """Protocols for reaching a remote Docker daemon."""

    http = "http"
    https = "https"
    ssh = "ssh"


def _get_default_docker_socket() -> str:
    """Detect OS and return appropriate Docker socket URL.

    Returns:
        str: Platform-specific Docker socket URL:
            - Windows: npipe:////./pipe/docker_engine
            - Linux/macOS/WSL: unix:///var/run/docker.sock
    """
    system = platform.system().lower()
    if system == "windows":
        return "npipe:////./pipe/docker_engine"
    # Linux, macOS, WSL all use Unix socket
    return "unix:///var/run/docker.sock"


class DockerConfig(BaseSettings):
    """Docker client configuration.

    The daemon endpoint is resolved in this order:

    1. ``daemon_host`` (with ``daemon_port`` and ``daemon_protocol``)
    2. ``base_url`` (``DOCKER_BASE_URL`` or the conventional ``DOCKER_HOST``)
    3. the platform's local socket
    """

    model_config = SettingsConfigDict(
        env_prefix="DOCKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    base_url: str = Field(
        default_factory=_get_default_docker_socket,
        validation_alias=AliasChoices("DOCKER_BASE_URL", "DOCKER_HOST"),
        description=(
            "Docker daemon URL (auto-detected based on OS, overridable via "
            "DOCKER_BASE_URL or DOCKER_HOST)"
        ),
    )
    daemon_host: str | None = Field(
        default=None,
        description="Remote daemon hostname; overrides base_url when set",
    )
    daemon_port: int | None = Field(
        default=None,
        description="Remote daemon port (default depends on protocol)",
        gt=0,
        le=65535,
    )
    daemon_protocol: DaemonProtocol = Field(
        default=DaemonProtocol.http,
        description="Protocol used to reach a remote daemon (http, https, ssh)",
    )
    timeout: int = Field(
        default=60,
        description="Default timeout for Docker operations in seconds",
        gt=0,
    )
    tls_verify: bool = Field(
        default=False,
        description="Enable TLS verification for Docker daemon",
    )
    tls_ca_cert: Path | None = Field(
        default=None,
        description="Path to CA certificate for TLS",
    )
    tls_client_cert: Path | None = Field(
        default=None,
        description="Path to client certificate for TLS",
    )
    tls_client_key: Path | None = Field(
        default=None,
        description="Path to client key for TLS",
    )

    @field_validator("tls_ca_cert", "tls_client_cert", "tls_client_key")
    @classmethod
    def validate_cert_paths(cls, cert_path: Path | None) -> Path | None:
        """Validate that certificate paths exist if provided."""
        if cert_path is not None and not cert_path.exists():
            raise ValueError(f"Certificate file not found: {cert_path}")
        return cert_path

    @model_validator(mode="after")
    def resolve_daemon_endpoint(self) -> "DockerConfig":
        """Derive base_url from host/port/protocol when a daemon host is given."""
        if self.daemon_host:
            protocol = self.daemon_protocol
            port = self.daemon_port or DEFAULT_DAEMON_PORTS[protocol.value]
            scheme = "ssh" if protocol == DaemonProtocol.ssh else "tcp"
            self.base_url = f"{scheme}://{self.daemon_host}:{port}"
            if protocol == DaemonProtocol.https:
                self.tls_verify = True

        url = self.base_url
        if (
            url.startswith("tcp://")
            and not self.tls_verify
            and not url.startswith(("tcp://127.0.0.1", "tcp://localhost"))
        ):
            warnings.warn(
                f"Docker daemon reached over plain TCP on the network: {url}. "
                "Traffic is unauthenticated and unencrypted. Use https or ssh.",
                UserWarning,
                stacklevel=2,
            )

        # Warn if certificates are provided without TLS verification
        if not self.tls_verify and (
            self.tls_ca_cert or self.tls_client_cert or self.tls_client_key
        ):
            warnings.warn(
                "TLS certificates configured but tls_verify=False. "
                "Set DOCKER_TLS_VERIFY=true to enable TLS verification.",
                UserWarning,
                stacklevel=2,
            )

        return self


class ServerConfig(BaseSettings):
    """MCP server configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    server_name: str = Field(
        default="docker-mcp-server",
        description="MCP server name",
    )
    server_version: str = Field(
        default=__version__,
        description="MCP server version",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_format: str = Field(
        default=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        description="Log format string for loguru",
    )
    json_logging: bool = Field(
        default=False,
        description="Enable JSON structured logging",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional log file (rotated at 10 MB)",
    )
    debug_mode: bool = Field(
        default=False,
        description="Log every MCP request/response and full tracebacks for failed tool calls",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, level: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level_upper = level.upper()
        if level_upper not in valid_levels:
            raise ValueError(f"Invalid log level: {level}. Must be one of {valid_levels}")
        return level_upper

    @field_validator("log_file")
    @classmethod
    def validate_log_path(cls, log_path: Path | None) -> Path | None:
        """Ensure parent directory exists for the log file."""
        if log_path is not None and not log_path.parent.exists():
            log_path.parent.mkdir(parents=True, exist_ok=True)
        return log_path


class Config:
    """Main configuration container."""

    def __init__(self, **docker_overrides: object) -> None:
        """Initialize configuration from environment and .env file.

        Args:
            **docker_overrides: DockerConfig fields taking precedence over the
                environment (used by CLI options)
        """
        overrides = {key: value for key, value in docker_overrides.items() if value is not None}
        self.docker = DockerConfig(**overrides)
        self.server = ServerConfig()

    def __repr__(self) -> str:
        """Return string representation of config."""
        return f"Config(docker={self.docker!r}, server={self.server!r})"
