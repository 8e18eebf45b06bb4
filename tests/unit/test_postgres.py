"""Tests for the default PostgreSQL dependent."""

from unittest.mock import patch

from testcontainers.community.postgres import PostgresContainer
from testcontainers.core.network import Network

from alfresco_testcontainers.config import PostgresConfig
from alfresco_testcontainers.postgres import create_postgres_container


class TestCreatePostgresContainer:
    """Tests for create_postgres_container."""

    def test_defaults(self) -> None:
        network = Network()

        with patch.object(PostgresContainer, "with_network", autospec=True) as with_network:
            with_network.side_effect = lambda self, n: self
            container = create_postgres_container(network)

        assert isinstance(container, PostgresContainer)
        assert container.image == "postgres:15.6"
        assert container.username == "alfresco"
        assert container.password == "alfresco"
        assert container.dbname == "alfresco"
        assert "5432" in container.ports
        with_network.assert_called_once_with(container, network)

    def test_custom_config(self) -> None:
        config = PostgresConfig(image="postgres:16", username="repo", password="secret")

        container = create_postgres_container(Network(), config)

        assert container.image == "postgres:16"
        assert container.username == "repo"
        assert container.password == "secret"

    def test_alias_and_readiness(self) -> None:
        with (
            patch.object(PostgresContainer, "with_network_aliases", autospec=True) as aliases,
            patch("alfresco_testcontainers.postgres.PortWaitStrategy") as strategy_cls,
        ):
            aliases.side_effect = lambda self, *a: self
            create_postgres_container(Network(), PostgresConfig(startup_timeout=45))

        assert aliases.call_args.args[1:] == ("postgres",)
        strategy_cls.assert_called_once_with(5432)
        timeout = strategy_cls.return_value.with_startup_timeout.call_args.args[0]
        assert timeout.total_seconds() == 45
