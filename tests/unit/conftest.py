"""Unit test fixtures that keep testcontainers away from the Docker daemon."""

from unittest.mock import patch

import pytest
from testcontainers.community.postgres import PostgresContainer
from testcontainers.core.container import DockerContainer
from testcontainers.core.docker_client import DockerClient
from testcontainers.core.network import Network


@pytest.fixture(autouse=True)
def mock_docker_client():
    """Prevent DockerClient from connecting to a daemon on construction."""
    with patch.object(DockerClient, "__init__", return_value=None) as mock_init:
        yield mock_init


@pytest.fixture
def mock_network():
    """Mock network creation and removal."""
    with (
        patch.object(Network, "create", autospec=True) as create,
        patch.object(Network, "remove", autospec=True) as remove,
    ):
        yield create, remove


@pytest.fixture
def lifecycle_calls(mock_network):
    """
    Patch container start/stop and record the order in which they run.

    Returns a list of ``(action, class name)`` tuples.
    """
    calls: list[tuple[str, str]] = []

    def record(action):
        def side_effect(self, *args, **kwargs):
            calls.append((action, type(self).__name__))
            return self

        return side_effect

    with (
        patch.object(DockerContainer, "start", autospec=True, side_effect=record("start")),
        patch.object(PostgresContainer, "start", autospec=True, side_effect=record("start")),
        patch.object(DockerContainer, "stop", autospec=True, side_effect=record("stop")),
        patch.object(DockerContainer, "get_container_host_ip", return_value="localhost"),
        patch.object(DockerContainer, "get_exposed_port", return_value=32768),
    ):
        yield calls
