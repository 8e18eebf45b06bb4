"""Docker image reference parsing and compatibility checks.

Image references have the form ``[registry/]repository[:tag][@digest]``.
Two references are compatible when they point at the same repository
(ignoring the tag and the implicit Docker Hub registry), or when one was
explicitly declared a substitute for the other with
:meth:`DockerImageName.as_compatible_substitute_for`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from .exceptions import InvalidImageReference

DEFAULT_TAG = "latest"

# Registries that are equivalent to omitting the registry entirely
DOCKER_HUB_REGISTRIES = frozenset({"docker.io", "index.docker.io", "registry-1.docker.io"})

_PATH_COMPONENT = r"[a-z0-9]+(?:(?:[._]|__|-+)[a-z0-9]+)*"
REPOSITORY_PATTERN = re.compile(rf"^{_PATH_COMPONENT}(?:/{_PATH_COMPONENT})*$")
TAG_PATTERN = re.compile(r"^[\w][\w.-]{0,127}$")
DIGEST_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9]*(?:[-_+.][A-Za-z][A-Za-z0-9]*)*:[0-9a-fA-F]{32,}$")  # noqa: E501


@dataclass(frozen=True)
class DockerImageName:
    """Parsed Docker image reference."""

    repository: str
    registry: str | None = None
    tag: str | None = None
    digest: str | None = None
    compatible_substitute_for: DockerImageName | None = None

    @classmethod
    def parse(cls, reference: str) -> DockerImageName:
        """
        Parse an image reference string.

        Handles formats like:
        - "postgres"
        - "postgres:15.6"
        - "alfresco/alfresco-content-repository-community:23.2.1"
        - "quay.io/org/image@sha256:..."
        - "localhost:5000/image:tag"

        Args:
            reference: Image reference to parse

        Returns:
            DockerImageName

        Raises:
            InvalidImageReference: If the reference is malformed
        """
        text = (reference or "").strip()
        if not text:
            raise InvalidImageReference(reference or "", reason="empty image reference")

        name, _, digest = text.partition("@")

        registry: str | None = None
        first, slash, rest = name.partition("/")
        if slash and ("." in first or ":" in first or first == "localhost"):
            registry = first
            name = rest

        tag: str | None = None
        last_segment_start = name.rfind("/") + 1
        colon = name.find(":", last_segment_start)
        if colon != -1:
            name, tag = name[:colon], name[colon + 1 :]

        if not REPOSITORY_PATTERN.match(name):
            raise InvalidImageReference(reference, reason=f"invalid repository '{name}'")
        if tag is not None and not TAG_PATTERN.match(tag):
            raise InvalidImageReference(reference, reason=f"invalid tag '{tag}'")
        if digest and not DIGEST_PATTERN.match(digest):
            raise InvalidImageReference(reference, reason=f"invalid digest '{digest}'")

        return cls(repository=name, registry=registry, tag=tag, digest=digest or None)

    @property
    def unversioned_part(self) -> str:
        """Registry and repository without tag or digest."""
        if self.registry:
            return f"{self.registry}/{self.repository}"
        return self.repository

    @property
    def version_part(self) -> str:
        """Tag or digest, defaulting to ``latest``."""
        return self.tag or self.digest or DEFAULT_TAG

    @property
    def canonical_repository(self) -> str:
        """Repository with Docker Hub registry and ``library/`` prefix normalized away."""
        if self.registry is None or self.registry in DOCKER_HUB_REGISTRIES:
            return self.repository.removeprefix("library/")
        return f"{self.registry}/{self.repository}"

    def with_tag(self, tag: str) -> DockerImageName:
        """Return a copy pointing at ``tag`` (any digest is dropped)."""
        if not tag or not TAG_PATTERN.match(tag):
            raise InvalidImageReference(
                f"{self.unversioned_part}:{tag}", reason=f"invalid tag '{tag}'"
            )
        return replace(self, tag=tag, digest=None)

    def as_compatible_substitute_for(self, other: DockerImageName | str) -> DockerImageName:
        """Declare this image a drop-in replacement for ``other``.

        Useful for mirrored or rebuilt images that live under a different
        repository name.
        """
        if isinstance(other, str):
            other = DockerImageName.parse(other)
        return replace(self, compatible_substitute_for=other)

    def is_compatible_with(self, other: DockerImageName | str) -> bool:
        """Check whether this image can stand in for ``other``."""
        if isinstance(other, str):
            other = DockerImageName.parse(other)
        if self.canonical_repository == other.canonical_repository:
            return True
        if self.compatible_substitute_for is not None:
            return self.compatible_substitute_for.is_compatible_with(other)
        return False

    def assert_compatible_with(self, other: DockerImageName | str) -> None:
        """
        Raise unless this image is compatible with ``other``.

        Raises:
            InvalidImageReference: If the images are not compatible
        """
        if isinstance(other, str):
            other = DockerImageName.parse(other)
        if not self.is_compatible_with(other):
            raise InvalidImageReference(str(self), expected=other.unversioned_part)

    def __str__(self) -> str:
        if self.digest:
            base = f"{self.unversioned_part}:{self.tag}" if self.tag else self.unversioned_part
            return f"{base}@{self.digest}"
        return f"{self.unversioned_part}:{self.version_part}"
