"""Default PostgreSQL dependent for the Alfresco container."""

from __future__ import annotations

import logging
from datetime import timedelta

from testcontainers.core.network import Network
from testcontainers.core.wait_strategies import PortWaitStrategy
from testcontainers.community.postgres import PostgresContainer

from .config import PostgresConfig

logger = logging.getLogger(__name__)


def create_postgres_container(
    network: Network,
    config: PostgresConfig | None = None,
) -> PostgresContainer:
    """Create a PostgreSQL container reachable from Alfresco on the shared network.

    The container is configured but not started.

    Args:
        network: Network shared with the Alfresco container.
        config: Image, credentials and alias; defaults to ``PostgresConfig()``.

    Returns:
        Configured PostgresContainer.
    """
    config = config or PostgresConfig()
    logger.debug(
        "Creating PostgreSQL container %s (alias=%s, db=%s)",
        config.image,
        config.network_alias,
        config.database,
    )
    container = PostgresContainer(
        config.image,
        port=config.port,
        username=config.username,
        password=config.password,
        dbname=config.database,
    )
    return (
        container.with_network(network)
        .with_network_aliases(config.network_alias)
        .waiting_for(
            PortWaitStrategy(config.port).with_startup_timeout(
                timedelta(seconds=config.startup_timeout)
            )
        )
    )
