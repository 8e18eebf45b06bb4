"""Configuration models for the Alfresco container stack."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .options import DEFAULT_JAVA_OPTS, DEFAULT_JAVA_TOOL_OPTIONS, JavaOptions

ALFRESCO_IMAGE = "alfresco/alfresco-content-repository-community"
POSTGRES_IMAGE = "postgres:15.6"
ACTIVEMQ_IMAGE = "apache/activemq-classic:5.18.3"

READINESS_PATH = "/alfresco/api/-default-/public/alfresco/versions/1/probes/-ready-"
SERVER_INFO_PATH = "/alfresco/service/api/server"


@dataclass(frozen=True)
class PostgresConfig:
    """Settings for the default PostgreSQL dependent."""

    image: str = POSTGRES_IMAGE
    username: str = "alfresco"
    password: str = "alfresco"
    database: str = "alfresco"
    network_alias: str = "postgres"
    port: int = 5432
    startup_timeout: float = 120.0

    @classmethod
    def from_environment(cls) -> PostgresConfig:
        """Create PostgresConfig from environment variables."""
        return cls(
            image=os.environ.get("ALFRESCO_TC_POSTGRES_IMAGE", POSTGRES_IMAGE),
            startup_timeout=float(os.environ.get("ALFRESCO_TC_DEPENDENCY_TIMEOUT", "120")),
        )


@dataclass(frozen=True)
class ActiveMQConfig:
    """Settings for the optional ActiveMQ dependent."""

    image: str = ACTIVEMQ_IMAGE
    network_alias: str = "activemq"
    broker_port: int = 61616  # OpenWire
    management_port: int = 8161  # web console
    startup_timeout: float = 120.0

    @classmethod
    def from_environment(cls) -> ActiveMQConfig:
        """Create ActiveMQConfig from environment variables."""
        return cls(
            image=os.environ.get("ALFRESCO_TC_ACTIVEMQ_IMAGE", ACTIVEMQ_IMAGE),
            startup_timeout=float(os.environ.get("ALFRESCO_TC_DEPENDENCY_TIMEOUT", "120")),
        )


@dataclass(frozen=True)
class AlfrescoConfig:
    """Settings for the Alfresco container and its dependents."""

    # Repository family that every Alfresco image must be compatible with
    image: str = ALFRESCO_IMAGE
    network_alias: str = "alfresco"
    port: int = 8080
    readiness_path: str = READINESS_PATH
    readiness_status: int = 200
    startup_timeout: float = 180.0

    java_tool_options: JavaOptions = DEFAULT_JAVA_TOOL_OPTIONS
    java_opts: JavaOptions = DEFAULT_JAVA_OPTS

    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    activemq: ActiveMQConfig = field(default_factory=ActiveMQConfig)

    @classmethod
    def from_environment(cls) -> AlfrescoConfig:
        """Create AlfrescoConfig from environment variables."""
        return cls(
            image=os.environ.get("ALFRESCO_TC_IMAGE", ALFRESCO_IMAGE),
            startup_timeout=float(os.environ.get("ALFRESCO_TC_STARTUP_TIMEOUT", "180")),
            postgres=PostgresConfig.from_environment(),
            activemq=ActiveMQConfig.from_environment(),
        )
