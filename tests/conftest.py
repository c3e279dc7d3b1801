"""Pytest configuration and shared fixtures."""

from collections.abc import Generator
from typing import Any
from unittest.mock import MagicMock, Mock

import pytest
from docker import DockerClient

from docker_mcp_server.config import Config, DockerConfig, ServerConfig
from docker_mcp_server.docker_wrapper.client import DockerClientWrapper
from docker_mcp_server.version import __version__


@pytest.fixture(autouse=True)
def clean_docker_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's Docker and MCP environment out of unit tests."""
    for var in (
        "DOCKER_HOST",
        "DOCKER_BASE_URL",
        "DOCKER_DAEMON_HOST",
        "DOCKER_DAEMON_PORT",
        "DOCKER_DAEMON_PROTOCOL",
        "DOCKER_TLS_VERIFY",
        "MCP_LOG_LEVEL",
        "MCP_LOG_FILE",
        "MCP_DEBUG_MODE",
        "MCP_JSON_LOGGING",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def docker_config() -> DockerConfig:
    """Create test Docker configuration."""
    return DockerConfig(
        base_url="unix:///var/run/docker.sock",
        timeout=30,
    )


@pytest.fixture
def server_config() -> ServerConfig:
    """Create test server configuration."""
    return ServerConfig(
        server_name="docker-mcp-server-test",
        server_version=__version__,
        log_level="DEBUG",
    )


@pytest.fixture
def config(docker_config: DockerConfig, server_config: ServerConfig) -> Config:
    """Create complete test configuration."""
    test_config = Config.__new__(Config)
    test_config.docker = docker_config
    test_config.server = server_config
    return test_config


@pytest.fixture
def mock_docker_client() -> Mock:
    """Create mock Docker client."""
    mock_client = MagicMock(spec=DockerClient)
    mock_client.ping.return_value = True
    mock_client.version.return_value = {
        "Version": "24.0.0",
        "ApiVersion": "1.43",
        "Os": "linux",
        "Arch": "amd64",
    }
    return mock_client


@pytest.fixture
def docker_client_wrapper(
    docker_config: DockerConfig,
    mock_docker_client: Mock,
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[DockerClientWrapper, None, None]:
    """Create Docker client wrapper with mocked client."""

    def mock_docker_client_init(*args: Any, **kwargs: Any) -> Mock:
        return mock_docker_client

    monkeypatch.setattr("docker.DockerClient", mock_docker_client_init)

    wrapper = DockerClientWrapper(docker_config)
    yield wrapper
    wrapper.close()


@pytest.fixture
def mock_wrapper() -> Mock:
    """Create a mock DockerClientWrapper exposing a mock docker-py client."""
    wrapper = Mock(spec=DockerClientWrapper)
    wrapper.client = MagicMock()
    return wrapper


# Integration test fixtures
def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: Integration tests requiring Docker")
    config.addinivalue_line("markers", "slow: Slow running tests")


@pytest.fixture(scope="session")
def docker_available() -> bool:
    """Check if Docker is available for integration tests."""
    try:
        import docker

        client = docker.from_env()
        client.ping()
        client.close()
        return True
    except Exception:
        return False


@pytest.fixture
def skip_if_no_docker(docker_available: bool) -> None:
    """Skip test if Docker is not available."""
    if not docker_available:
        pytest.skip("Docker is required for integration tests but is not available")
