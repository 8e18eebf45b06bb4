"""Core models for alfresco-testcontainers."""

from enum import Enum


class ContainerState(Enum):
    """Lifecycle of an Alfresco container stack.

    UNCONFIGURED -> CONFIGURED -> STARTED -> STOPPED. A stopped stack may be
    started again.
    """

    UNCONFIGURED = "unconfigured"
    CONFIGURED = "configured"
    STARTED = "started"
    STOPPED = "stopped"

    @property
    def is_mutable(self) -> bool:
        """Whether dependents may still be attached or replaced."""
        return self is not ContainerState.STARTED
