"""Alfresco Community content repository container.

The container needs a PostgreSQL database and, when messaging is enabled, an
ActiveMQ broker. All three join one Docker network so Alfresco can reach its
dependents by alias. Dependents are created on first start unless supplied by
the caller, started before Alfresco, and stopped after it.

Example:
    from alfresco_testcontainers import AlfrescoContainer

    with AlfrescoContainer("23.2.1").with_messaging_enabled() as alfresco:
        base_url = alfresco.get_base_url()
        ...
"""

from __future__ import annotations

import json
import logging
import urllib.request
from datetime import timedelta
from typing import Any

import docker.errors
from testcontainers.community.postgres import PostgresContainer
from testcontainers.core.container import DockerContainer
from testcontainers.core.network import Network
from testcontainers.core.wait_strategies import HttpWaitStrategy

from .activemq import ActiveMQContainer, first_network_alias
from .config import SERVER_INFO_PATH, AlfrescoConfig
from .exceptions import InvalidImageReference, LifecycleError
from .image import DockerImageName
from .lifecycle import Step, start_in_order, stop_all
from .models import ContainerState
from .options import (
    JAVA_OPTS_ENV,
    JAVA_TOOL_OPTIONS_ENV,
    JavaOptions,
    database_options,
    messaging_java_opts,
)
from .postgres import create_postgres_container

logger = logging.getLogger(__name__)


def resolve_image(version_or_image: str | DockerImageName, family: str) -> DockerImageName:
    """
    Turn a version tag or full image reference into an image name.

    A plain string such as ``"23.2.1"`` is used as a tag on ``family``.
    Anything containing ``/``, ``:`` or ``@`` is parsed as a full reference
    and must be compatible with ``family``.

    Raises:
        InvalidImageReference: If the reference is malformed or incompatible
    """
    expected = DockerImageName.parse(family)

    if isinstance(version_or_image, DockerImageName):
        image = version_or_image
    elif any(c in version_or_image for c in "/:@"):
        image = DockerImageName.parse(version_or_image)
    else:
        version = version_or_image.strip()
        if not version:
            raise InvalidImageReference(version_or_image, expected=family, reason="empty version")
        image = expected.with_tag(version)

    image.assert_compatible_with(expected)
    return image


class AlfrescoContainer(DockerContainer):
    """
    Alfresco Community repository backed by PostgreSQL and optional ActiveMQ.

    Args:
        version_or_image: Version tag (``"7.4.1"``, ``"23.2.1"``) or a full
            image reference compatible with
            ``alfresco/alfresco-content-repository-community``.
        config: Overrides for images, credentials, timeouts and JVM options.
        **kwargs: Passed through to ``DockerContainer``.

    Raises:
        InvalidImageReference: If the image is not an Alfresco Community image.
            Raised before any Docker resource is created.
    """

    def __init__(
        self,
        version_or_image: str | DockerImageName,
        *,
        config: AlfrescoConfig | None = None,
        **kwargs: Any,
    ) -> None:
        self.config = config or AlfrescoConfig()
        self.image_name = resolve_image(version_or_image, self.config.image)
        super().__init__(str(self.image_name), **kwargs)

        self._shared_network = Network()
        self._network_created = False
        self._postgres: PostgresContainer | None = None
        self._activemq: DockerContainer | None = None
        self._owns_postgres = False
        self._owns_activemq = False
        self._state = ContainerState.UNCONFIGURED
        logger.debug("Created Alfresco container for %s", self.image_name)

    # -------------------------------------------------------------------------
    # Dependents
    # -------------------------------------------------------------------------

    def _require_mutable(self, operation: str) -> None:
        if not self._state.is_mutable:
            raise LifecycleError(operation, self._state.value)

    def with_messaging_enabled(self) -> AlfrescoContainer:
        """Attach the default ActiveMQ broker. Calling it again has no effect."""
        self._require_mutable("enable messaging")
        if self._activemq is None:
            self.create_default_activemq_container()
        return self

    def with_postgres_container(self, container: PostgresContainer) -> AlfrescoContainer:
        """Use a caller-configured PostgreSQL container instead of the default."""
        self._require_mutable("replace the PostgreSQL container")
        self._postgres = container
        self._owns_postgres = False
        return self

    def with_activemq_container(self, container: DockerContainer) -> AlfrescoContainer:
        """Use a caller-configured broker container instead of the default."""
        self._require_mutable("replace the ActiveMQ container")
        self._activemq = container
        self._owns_activemq = False
        return self

    def create_default_postgres_container(self) -> PostgresContainer:
        """Create the default PostgreSQL dependent on the shared network."""
        self._require_mutable("create the PostgreSQL container")
        self._postgres = create_postgres_container(self._shared_network, self.config.postgres)
        self._owns_postgres = True
        return self._postgres

    def create_default_activemq_container(self) -> ActiveMQContainer:
        """Create the default ActiveMQ dependent on the shared network."""
        self._require_mutable("create the ActiveMQ container")
        broker = ActiveMQContainer(config=self.config.activemq).with_network(self._shared_network)
        self._activemq = broker
        self._owns_activemq = True
        return broker

    @property
    def network(self) -> Network:
        """Network shared by Alfresco and its dependents."""
        return self._shared_network

    @property
    def postgres_container(self) -> PostgresContainer | None:
        return self._postgres

    @property
    def activemq_container(self) -> DockerContainer | None:
        return self._activemq

    @property
    def state(self) -> ContainerState:
        return self._state

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def _ensure_postgres(self) -> PostgresContainer:
        if self._postgres is None:
            return self.create_default_postgres_container()
        return self._postgres

    def _database_options(self) -> JavaOptions:
        cfg = self.config.postgres
        database = self._postgres
        if database is None:
            return database_options(
                cfg.username, cfg.password, cfg.database, cfg.network_alias, cfg.port
            )
        return database_options(
            database.username,
            database.password,
            database.dbname,
            first_network_alias(database, cfg.network_alias),
            database.port,
        )

    def build_java_opts(self) -> JavaOptions:
        """JAVA_OPTS pointing at the current database and, if enabled, broker."""
        java_opts = self.config.java_opts.with_options(
            (option.key, option.value) for option in self._database_options()
        )
        if self._activemq is None:
            return java_opts
        broker_alias = first_network_alias(self._activemq, self.config.activemq.network_alias)
        return messaging_java_opts(java_opts, broker_alias, self.config.activemq.broker_port)

    def configure(self) -> AlfrescoContainer:
        """
        Resolve dependents and apply environment, network, ports and readiness probe.

        Called by ``start()``. Safe to call more than once.
        """
        self._ensure_postgres()

        java_opts = self.build_java_opts()
        logger.debug("JAVA_OPTS=%s", java_opts)

        self.with_env(JAVA_TOOL_OPTIONS_ENV, self.config.java_tool_options.render())
        self.with_env(JAVA_OPTS_ENV, java_opts.render())
        self.with_network(self._shared_network)
        self.with_network_aliases(self.config.network_alias)
        self.with_exposed_ports(self.config.port)

        expected_status = self.config.readiness_status
        self.waiting_for(
            HttpWaitStrategy(self.config.port, self.config.readiness_path)
            .for_status_code_matching(lambda status: status == expected_status)
            .with_startup_timeout(timedelta(seconds=self.config.startup_timeout))
        )

        if self._state is ContainerState.UNCONFIGURED:
            self._state = ContainerState.CONFIGURED
        return self

    def get_env_map(self) -> dict[str, str]:
        """Copy of the environment passed to the Alfresco container."""
        return dict(self.env)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> AlfrescoContainer:
        """
        Start PostgreSQL, then ActiveMQ (if enabled), then Alfresco.

        Blocks until Alfresco answers its readiness probe. Containers started
        before a failure keep running; call ``stop()`` to release them.

        Raises:
            StartupTimeout: If any container misses its readiness deadline
            LifecycleError: If the stack is already running
        """
        if self._state is ContainerState.STARTED:
            raise LifecycleError("start", self._state.value)

        self.configure()
        postgres = self._ensure_postgres()

        if not self._network_created:
            logger.debug("Creating network %s", self._shared_network.name)
            self._shared_network.create()
            self._network_created = True

        steps = [
            Step(
                "postgres",
                postgres.start,
                self.config.postgres.startup_timeout if self._owns_postgres else None,
            )
        ]
        if self._activemq is not None:
            steps.append(
                Step(
                    "activemq",
                    self._activemq.start,
                    self.config.activemq.startup_timeout if self._owns_activemq else None,
                )
            )
        steps.append(Step("alfresco", super().start, self.config.startup_timeout))

        start_in_order(steps)
        self._state = ContainerState.STARTED
        logger.info("Alfresco %s is ready at %s", self.image_name.version_part, self.get_base_url())
        return self

    def _remove_network(self) -> None:
        if not self._network_created:
            return
        try:
            self._shared_network.remove()
        except docker.errors.NotFound:
            pass  # Already removed
        self._network_created = False

    def stop(self, force: bool = True, delete_volume: bool = True) -> None:
        """
        Stop Alfresco, then ActiveMQ, then PostgreSQL, then remove the network.

        Every step is attempted even if an earlier one fails.

        Raises:
            StopFailure: If any step failed
        """
        stop_alfresco = super().stop
        steps = [Step("alfresco", lambda: stop_alfresco(force, delete_volume))]
        if self._activemq is not None:
            steps.append(Step("activemq", self._activemq.stop))
        if self._postgres is not None:
            steps.append(Step("postgres", self._postgres.stop))
        steps.append(Step("network", self._remove_network))

        try:
            stop_all(steps)
        finally:
            self._state = ContainerState.STOPPED

    # -------------------------------------------------------------------------
    # Endpoints
    # -------------------------------------------------------------------------

    def get_base_url(self) -> str:
        """Host-reachable base URL. Requires a started container."""
        host = self.get_container_host_ip()
        port = self.get_exposed_port(self.config.port)
        return f"http://{host}:{port}"

    def get_readiness_url(self) -> str:
        return self.get_base_url() + self.config.readiness_path

    def get_server_url(self) -> str:
        return self.get_base_url() + SERVER_INFO_PATH

    def get_server_version(self, timeout: float = 10) -> str:
        """Version reported by the repository, e.g. ``"7.4.1"``."""
        with urllib.request.urlopen(self.get_server_url(), timeout=timeout) as resp:
            data = json.loads(resp.read())
        return str(data["data"]["version"]).split(" ")[0]
