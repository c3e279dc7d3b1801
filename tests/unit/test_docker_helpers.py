"""Unit tests for Docker request/response helpers."""

import pytest

from docker_mcp_server.utils.docker_helpers import (
    build_container_config,
    build_recreate_config,
    collect_progress,
    normalize_port_key,
    parse_port_bindings,
    parse_volumes,
    safe_get_dict,
    safe_get_list,
)
from docker_mcp_server.utils.errors import ValidationError


class TestSafeGetters:
    """Test safe nested getters."""

    def test_safe_get_list(self) -> None:
        """Test nested list lookups."""
        data = {"Config": {"Env": ["A=1"], "Cmd": None, "Image": "nginx"}}
        assert safe_get_list(data, "Config", "Env") == ["A=1"]
        assert safe_get_list(data, "Config", "Cmd") == []
        assert safe_get_list(data, "Config", "Image") == []
        assert safe_get_list(data, "Missing", "Env") == []

    def test_safe_get_dict(self) -> None:
        """Test nested dict lookups."""
        data = {"HostConfig": {"PortBindings": {"80/tcp": []}, "Binds": None}}
        assert safe_get_dict(data, "HostConfig", "PortBindings") == {"80/tcp": []}
        assert safe_get_dict(data, "HostConfig", "Binds") == {}
        assert safe_get_dict(data, "HostConfig", "PortBindings", "x", "y") == {}


class TestPortBindings:
    """Test port mapping translation."""

    @pytest.mark.parametrize(
        "port,expected",
        [("80", "80/tcp"), ("80/tcp", "80/tcp"), ("53/udp", "53/udp")],
    )
    def test_normalize_port_key(self, port: str, expected: str) -> None:
        """Test protocol defaulting."""
        assert normalize_port_key(port) == expected

    def test_parse_port_bindings(self) -> None:
        """Test exposed ports and bindings are produced together."""
        exposed, bindings = parse_port_bindings({"80": "8080", "53/udp": 5353})

        assert exposed == {"80/tcp": {}, "53/udp": {}}
        assert bindings == {
            "80/tcp": [{"HostPort": "8080"}],
            "53/udp": [{"HostPort": "5353"}],
        }

    @pytest.mark.parametrize("ports", [None, {}])
    def test_parse_port_bindings_empty(self, ports: dict | None) -> None:
        """Test no ports."""
        assert parse_port_bindings(ports) == ({}, {})

    def test_parse_port_bindings_invalid(self) -> None:
        """Test invalid host port."""
        with pytest.raises(ValidationError):
            parse_port_bindings({"80": "not-a-port"})

    def test_parse_port_bindings_ephemeral(self) -> None:
        """Test an empty host port becomes an unbound HostPort."""
        exposed, bindings = parse_port_bindings({"80": ""})

        assert exposed == {"80/tcp": {}}
        assert bindings == {"80/tcp": [{"HostPort": ""}]}


class TestVolumes:
    """Test volume entry splitting."""

    def test_parse_volumes(self) -> None:
        """Test binds, named volumes and anonymous volumes."""
        binds, anonymous = parse_volumes(["/srv:/data:ro", "cache:/cache", "/tmp/scratch"])

        assert binds == ["/srv:/data:ro", "cache:/cache"]
        assert anonymous == {"/tmp/scratch": {}}

    def test_parse_volumes_none(self) -> None:
        """Test no volumes."""
        assert parse_volumes(None) == ([], {})


class TestBuildContainerConfig:
    """Test create_container keyword construction."""

    def test_minimal(self) -> None:
        """Test image and name only."""
        assert build_container_config(image="alpine", name="job") == {
            "image": "alpine",
            "name": "job",
            "ports": {},
            "volumes": {},
            "host_config": {"PortBindings": {}, "Binds": []},
        }

    def test_full(self) -> None:
        """Test every option."""
        kwargs = build_container_config(
            image="alpine",
            name="job",
            env=["A=1"],
            ports={"8080": 80},
            volumes=["/data"],
            command="echo hi",
            working_dir="/work",
            restart="always",
            auto_remove=True,
        )

        assert kwargs["environment"] == ["A=1"]
        assert kwargs["command"] == ["echo", "hi"]
        assert kwargs["working_dir"] == "/work"
        assert kwargs["volumes"] == {"/data": {}}
        assert kwargs["host_config"] == {
            "PortBindings": {"8080/tcp": [{"HostPort": "80"}]},
            "Binds": [],
            "RestartPolicy": {"Name": "always"},
            "AutoRemove": True,
        }


class TestBuildRecreateConfig:
    """Test recreate keyword construction from inspect output."""

    def test_recreate_config(self) -> None:
        """Test that configuration and host configuration are carried over."""
        details = {
            "Name": "/web",
            "Config": {
                "Image": "nginx:1.25",
                "Cmd": None,
                "Env": ["PATH=/usr/bin"],
                "WorkingDir": "/srv",
                "ExposedPorts": {"80/tcp": {}},
                "Volumes": {"/cache": {}},
            },
            "HostConfig": {"Binds": ["/a:/b"], "RestartPolicy": {"Name": "always"}},
        }

        assert build_recreate_config(details) == {
            "image": "nginx:1.25",
            "name": "web",
            "command": None,
            "environment": ["PATH=/usr/bin"],
            "working_dir": "/srv",
            "ports": {"80/tcp": {}},
            "volumes": {"/cache": {}},
            "host_config": {"Binds": ["/a:/b"], "RestartPolicy": {"Name": "always"}},
        }


class TestCollectProgress:
    """Test progress stream draining."""

    def test_success(self) -> None:
        """Test a stream without errors."""
        events = [{"status": "a"}, {"status": "b"}]
        assert collect_progress(iter(events)) == (events, None)

    def test_error_key(self) -> None:
        """Test an error event stops collection."""
        events = [{"status": "a"}, {"error": "boom"}, {"status": "never"}]
        collected, error = collect_progress(iter(events))

        assert error == "boom"
        assert collected == events[:2]

    def test_error_detail_only(self) -> None:
        """Test errorDetail without an error key."""
        collected, error = collect_progress([{"errorDetail": {"message": "denied"}}])

        assert error == "denied"
        assert len(collected) == 1
