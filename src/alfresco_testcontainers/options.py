"""JVM option sets passed to the Alfresco container.

Alfresco reads its repository settings from ``-D`` system properties in the
``JAVA_OPTS`` and ``JAVA_TOOL_OPTIONS`` environment variables. Options are
kept as ordered key/value entries so that toggling a setting never depends
on the exact text of the rendered string.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

JAVA_TOOL_OPTIONS_ENV = "JAVA_TOOL_OPTIONS"
JAVA_OPTS_ENV = "JAVA_OPTS"

# Properties that keep eventing and the messaging subsystem switched off
EVENTING_DISABLED_KEYS = ("repo.event2.enabled", "messaging.subsystem.autoStart")

BROKER_URL_KEY = "messaging.broker.url"
BROKER_URL_TEMPLATE = '"failover:(nio://{host}:{port})?timeout=3000&jms.useCompression=true"'


@dataclass(frozen=True)
class JavaOption:
    """A single JVM option.

    ``key`` is a system property name rendered as ``-Dkey=value``, unless it
    starts with ``-`` in which case it is a raw JVM flag such as ``-Xmx2g``.
    """

    key: str
    value: str | None = None

    @classmethod
    def parse(cls, token: str) -> JavaOption:
        if not token.startswith("-D"):
            return cls(token)
        key, sep, value = token[2:].partition("=")
        return cls(key, value if sep else None)

    def render(self) -> str:
        if self.key.startswith("-"):
            return self.key
        if self.value is None:
            return f"-D{self.key}"
        return f"-D{self.key}={self.value}"


@dataclass(frozen=True)
class JavaOptions:
    """Immutable, ordered set of JVM options."""

    options: tuple[JavaOption, ...] = ()

    @classmethod
    def of(cls, *pairs: tuple[str, str | None]) -> JavaOptions:
        """Build from ``(key, value)`` pairs."""
        return cls(tuple(JavaOption(key, value) for key, value in pairs))

    @classmethod
    def parse(cls, text: str) -> JavaOptions:
        """Parse a whitespace separated option string."""
        return cls(tuple(JavaOption.parse(token) for token in text.split()))

    def keys(self) -> list[str]:
        return [option.key for option in self.options]

    def get(self, key: str, default: str | None = None) -> str | None:
        for option in self.options:
            if option.key == key:
                return option.value
        return default

    def with_option(self, key: str, value: str | None = None) -> JavaOptions:
        """Set ``key``, replacing it in place if present or appending it otherwise."""
        updated = JavaOption(key, value)
        if key in self:
            return JavaOptions(tuple(updated if o.key == key else o for o in self.options))
        return JavaOptions((*self.options, updated))

    def with_options(self, pairs: Iterable[tuple[str, str | None]]) -> JavaOptions:
        result = self
        for key, value in pairs:
            result = result.with_option(key, value)
        return result

    def without(self, *keys: str) -> JavaOptions:
        """Drop every option whose key is in ``keys``. Missing keys are ignored."""
        return JavaOptions(tuple(o for o in self.options if o.key not in keys))

    def render(self) -> str:
        return " ".join(option.render() for option in self.options)

    def __contains__(self, key: object) -> bool:
        return any(option.key == key for option in self.options)

    def __iter__(self) -> Iterator[JavaOption]:
        return iter(self.options)

    def __len__(self) -> int:
        return len(self.options)

    def __str__(self) -> str:
        return self.render()


def database_options(
    username: str,
    password: str,
    database: str,
    host: str = "postgres",
    port: int = 5432,
) -> JavaOptions:
    """Connection settings for a PostgreSQL database reachable on the shared network."""
    return JavaOptions.of(
        ("db.driver", "org.postgresql.Driver"),
        ("db.username", username),
        ("db.password", password),
        ("db.url", f"jdbc:postgresql://{host}:{port}/{database}"),
    )


def broker_url(host: str, port: int = 61616) -> str:
    """Failover broker URL for an ActiveMQ broker at ``host:port``."""
    return BROKER_URL_TEMPLATE.format(host=host, port=port)


def messaging_java_opts(base: JavaOptions, broker_host: str, broker_port: int = 61616) -> JavaOptions:
    """Enable eventing and point the messaging subsystem at a broker."""
    return base.without(*EVENTING_DISABLED_KEYS).with_option(
        BROKER_URL_KEY, broker_url(broker_host, broker_port)
    )


DEFAULT_JAVA_TOOL_OPTIONS = JavaOptions.of(
    ("encryption.keystore.type", "JCEKS"),
    ("encryption.cipherAlgorithm", "DESede/CBC/PKCS5Padding"),
    ("encryption.keyAlgorithm", "DESede"),
    (
        "encryption.keystore.location",
        "/usr/local/tomcat/shared/classes/alfresco/extension/keystore/keystore",
    ),
    ("metadata-keystore.password", "mp6yc0UD9e"),
    ("metadata-keystore.aliases", "metadata"),
    ("metadata-keystore.metadata.password", "oKIWzVdEdA"),
    ("metadata-keystore.metadata.algorithm", "DESede"),
)

DEFAULT_JAVA_OPTS = JavaOptions(
    database_options("alfresco", "alfresco", "alfresco").options
    + JavaOptions.of(
        ("index.subsystem.name", "noindex"),
        ("local.transform.service.enabled", "false"),
        ("repo.event2.enabled", "false"),
        ("messaging.subsystem.autoStart", "false"),
        ("csrf.filter.enabled", "false"),
    ).options
)
