"""Pytest fixtures for running tests against a disposable Alfresco stack.

Registered through the ``pytest11`` entry point, so installing the package
makes the fixtures available without importing anything:

    def test_repository_is_up(alfresco_container):
        assert alfresco_container.get_server_version()

The Alfresco version defaults to ``23.2.1`` and can be changed with
``--alfresco-version`` or the ``ALFRESCO_TC_VERSION`` environment variable.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from .config import AlfrescoConfig
from .container import AlfrescoContainer

DEFAULT_VERSION = "23.2.1"
VERSION_ENV_VAR = "ALFRESCO_TC_VERSION"


def pytest_addoption(parser):
    """Add --alfresco-version pytest option."""
    group = parser.getgroup("alfresco", "Alfresco testcontainers")
    group.addoption(
        "--alfresco-version",
        default=None,
        help=f"Alfresco Community version to start (default: ${VERSION_ENV_VAR} or {DEFAULT_VERSION})",
    )


def _run(container: AlfrescoContainer) -> Iterator[AlfrescoContainer]:
    try:
        container.start()
        yield container
    finally:
        container.stop()


@pytest.fixture(scope="session")
def alfresco_version(request) -> str:
    """Alfresco version selected for this session."""
    return (
        request.config.getoption("--alfresco-version")
        or os.environ.get(VERSION_ENV_VAR)
        or DEFAULT_VERSION
    )


@pytest.fixture(scope="session")
def alfresco_config() -> AlfrescoConfig:
    """Stack configuration, overridable through ALFRESCO_TC_* variables."""
    return AlfrescoConfig.from_environment()


@pytest.fixture(scope="session")
def alfresco_container(
    alfresco_version: str, alfresco_config: AlfrescoConfig
) -> Iterator[AlfrescoContainer]:
    """Running Alfresco + PostgreSQL stack shared by the session."""
    yield from _run(AlfrescoContainer(alfresco_version, config=alfresco_config))


@pytest.fixture(scope="session")
def alfresco_container_with_messaging(
    alfresco_version: str, alfresco_config: AlfrescoConfig
) -> Iterator[AlfrescoContainer]:
    """Running Alfresco + PostgreSQL + ActiveMQ stack shared by the session."""
    container = AlfrescoContainer(alfresco_version, config=alfresco_config)
    yield from _run(container.with_messaging_enabled())
