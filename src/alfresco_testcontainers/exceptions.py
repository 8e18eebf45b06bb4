"""Exceptions for alfresco-testcontainers."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Base Exception
# ---------------------------------------------------------------------------


class AlfrescoContainerError(Exception):
    """
    Base exception for all alfresco-testcontainers errors.

    All exceptions raised by this library inherit from this class,
    allowing callers to catch all library-specific errors with a single
    except clause.
    """

    pass


# ---------------------------------------------------------------------------
# Construction Exceptions
# ---------------------------------------------------------------------------


class InvalidImageReference(AlfrescoContainerError):  # noqa: N818
    """
    Raised when an image reference cannot be used for a container.

    Construction fails before any Docker resource is created.

    Attributes:
        image: The rejected image reference
        expected: The repository the image should be compatible with
    """

    def __init__(self, image: str, expected: str | None = None, reason: str | None = None) -> None:
        self.image = image
        self.expected = expected
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Invalid image reference '{self.image}'"
        if self.expected:
            msg += f": not compatible with '{self.expected}'"
        if self.reason:
            msg += f" ({self.reason})"
        return msg


class LifecycleError(AlfrescoContainerError):
    """Raised when a container is reconfigured after it has been started."""

    def __init__(self, operation: str, state: str) -> None:
        self.operation = operation
        self.state = state
        super().__init__(f"Cannot {operation} while container is {state}")


# ---------------------------------------------------------------------------
# Runtime Exceptions
# ---------------------------------------------------------------------------


class StartupTimeout(AlfrescoContainerError):  # noqa: N818
    """
    Raised when a container does not pass its readiness check in time.

    Containers started before the failing one are left running; call
    ``stop()`` to release them.

    Attributes:
        container: Name of the container that failed to become ready
        timeout: Startup timeout in seconds, if known
    """

    def __init__(self, container: str, timeout: float | None = None) -> None:
        self.container = container
        self.timeout = timeout
        msg = f"Container {container} did not become ready"
        if timeout is not None:
            msg += f" within {timeout:g}s"
        super().__init__(msg)


class StopFailure(AlfrescoContainerError):  # noqa: N818
    """
    Raised after a stop cascade in which at least one step failed.

    Every step is attempted before this is raised.

    Attributes:
        errors: ``(name, exception)`` pairs in the order they occurred
    """

    def __init__(self, errors: list[tuple[str, BaseException]]) -> None:
        if not errors:
            raise ValueError("StopFailure requires at least one error")
        self.errors = errors
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        details = "; ".join(f"{name}: {err}" for name, err in self.errors)
        return f"Failed to stop {len(self.errors)} resource(s): {details}"

    @property
    def failed(self) -> list[str]:
        """Names of the steps that failed."""
        return [name for name, _ in self.errors]
