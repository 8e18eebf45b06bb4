"""ActiveMQ Classic container used as Alfresco's messaging broker."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from testcontainers.core.container import DockerContainer
from testcontainers.core.wait_strategies import PortWaitStrategy

from .config import ActiveMQConfig
from .options import broker_url


def first_network_alias(container: DockerContainer, default: str) -> str:
    """First alias given to ``container`` with ``with_network_aliases``, else ``default``."""
    aliases = getattr(container, "_network_aliases", None)
    return aliases[0] if aliases else default


class ActiveMQContainer(DockerContainer):
    """
    ActiveMQ Classic broker exposing the OpenWire and web console ports.

    Example:
        broker = ActiveMQContainer().with_network(network)
        broker.start()
        url = broker.get_broker_url()
    """

    def __init__(
        self,
        image: str | None = None,
        *,
        config: ActiveMQConfig | None = None,
        **kwargs: Any,
    ) -> None:
        self.config = config or ActiveMQConfig()
        super().__init__(image or self.config.image, **kwargs)
        self.with_exposed_ports(self.config.broker_port, self.config.management_port)
        self.with_network_aliases(self.config.network_alias)
        self.waiting_for(
            PortWaitStrategy(self.config.broker_port).with_startup_timeout(
                timedelta(seconds=self.config.startup_timeout)
            )
        )

    @property
    def network_alias(self) -> str:
        """First alias other containers on the network use to reach the broker."""
        return first_network_alias(self, self.config.network_alias)

    def get_internal_broker_url(self) -> str:
        """Failover URL for clients on the shared network."""
        return broker_url(self.network_alias, self.config.broker_port)

    def get_broker_url(self) -> str:
        """OpenWire URL reachable from the host. Requires a started container."""
        host = self.get_container_host_ip()
        port = self.get_exposed_port(self.config.broker_port)
        return f"tcp://{host}:{port}"

    def get_management_url(self) -> str:
        """Web console URL reachable from the host. Requires a started container."""
        host = self.get_container_host_ip()
        port = self.get_exposed_port(self.config.management_port)
        return f"http://{host}:{port}"
