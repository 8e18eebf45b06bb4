"""Integration tests that start real Alfresco stacks.

These tests pull several large images and take minutes each.

To run:
    pytest tests/integration/ --run-docker -v
"""

import logging
import socket
import urllib.request

import pytest

from alfresco_testcontainers import AlfrescoContainer
from alfresco_testcontainers.options import DEFAULT_JAVA_OPTS, DEFAULT_JAVA_TOOL_OPTIONS

logger = logging.getLogger(__name__)

pytestmark = pytest.mark.docker


def _status(url: str) -> int:
    with urllib.request.urlopen(url, timeout=10) as resp:
        return resp.status


class TestAlfrescoVersions:
    """Default stacks report the expected repository version."""

    def test_alfresco_7(self):
        """Alfresco 7.4.1 starts, reports its version and stops cleanly."""
        container = AlfrescoContainer("7.4.1")
        try:
            logger.info("Starting Alfresco 7.4.1")
            container.start()

            assert container.get_server_version() == "7.4.1"
            assert container.get_exposed_port(8080)
            assert _status(container.get_readiness_url()) == 200
        finally:
            container.stop()

    def test_alfresco_23(self):
        """Alfresco 23.2.1 starts and stops cleanly."""
        container = AlfrescoContainer("23.2.1")
        try:
            container.start()

            # 23.2.1 reports itself as 23.2.0
            assert container.get_server_version() == "23.2.0"
            assert container.get_exposed_port(8080)
        finally:
            container.stop()


class TestAlfrescoConfiguration:
    """The running container carries the expected configuration."""

    def test_default_configuration(self):
        container = AlfrescoContainer("23.2.1")
        try:
            container.start()

            env = container.get_env_map()
            assert container.network is not None
            assert env["JAVA_TOOL_OPTIONS"] == DEFAULT_JAVA_TOOL_OPTIONS.render()
            assert env["JAVA_OPTS"] == DEFAULT_JAVA_OPTS.render()
        finally:
            container.stop()


class TestAlfrescoMessaging:
    """ActiveMQ is started alongside Alfresco when messaging is enabled."""

    def test_alfresco_with_activemq(self):
        container = AlfrescoContainer("23.2.1").with_messaging_enabled()
        try:
            container.start()

            broker = container.activemq_container
            assert broker is not None
            assert broker.get_exposed_port(61616)
            assert broker.get_exposed_port(8161)

            host = broker.get_container_host_ip()
            with socket.create_connection((host, int(broker.get_exposed_port(61616))), timeout=5):
                pass

            java_opts = container.get_env_map()["JAVA_OPTS"]
            assert "failover:(nio://activemq:61616)" in java_opts
        finally:
            container.stop()


def test_session_fixture(alfresco_container):
    """The pytest plugin fixture yields a ready stack."""
    assert _status(alfresco_container.get_readiness_url()) == 200
