"""
alfresco-testcontainers: Alfresco Community in throwaway Docker containers.

Starts the Alfresco content repository with a PostgreSQL database and an
optional ActiveMQ broker on a private Docker network, for integration tests.

Example:
    from alfresco_testcontainers import AlfrescoContainer

    alfresco = AlfrescoContainer("23.2.1").with_messaging_enabled()
    alfresco.start()
    try:
        print(alfresco.get_base_url())
    finally:
        alfresco.stop()
"""

from .activemq import ActiveMQContainer
from .config import ActiveMQConfig, AlfrescoConfig, PostgresConfig
from .container import AlfrescoContainer
from .exceptions import (
    AlfrescoContainerError,
    InvalidImageReference,
    LifecycleError,
    StartupTimeout,
    StopFailure,
)
from .image import DockerImageName
from .models import ContainerState
from .options import DEFAULT_JAVA_OPTS, DEFAULT_JAVA_TOOL_OPTIONS, JavaOption, JavaOptions
from .postgres import create_postgres_container

__all__ = [
    # Containers
    "AlfrescoContainer",
    "ActiveMQContainer",
    "create_postgres_container",
    # Configuration
    "AlfrescoConfig",
    "ActiveMQConfig",
    "PostgresConfig",
    "DockerImageName",
    "JavaOption",
    "JavaOptions",
    "DEFAULT_JAVA_OPTS",
    "DEFAULT_JAVA_TOOL_OPTIONS",
    # Models
    "ContainerState",
    # Exceptions
    "AlfrescoContainerError",
    "InvalidImageReference",
    "LifecycleError",
    "StartupTimeout",
    "StopFailure",
]
