"""Start and stop sequencing for dependent containers.

Containers are started one at a time in the given order. Stopping runs every
step exactly once even when earlier steps fail, then reports all failures
together.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass

import docker.errors

from .exceptions import StartupTimeout, StopFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Step:
    """A named lifecycle action."""

    name: str
    action: Callable[[], object]
    timeout: float | None = None


def start_in_order(steps: Iterable[Step]) -> None:
    """
    Run start steps sequentially, stopping at the first failure.

    Steps already completed are not rolled back.

    Raises:
        StartupTimeout: If a step times out waiting for readiness
    """
    for step in steps:
        logger.info("Starting %s", step.name)
        try:
            step.action()
        except TimeoutError as e:
            logger.error("%s did not become ready: %s", step.name, e)
            raise StartupTimeout(step.name, step.timeout) from e
        logger.info("%s is ready", step.name)


def stop_all(steps: Iterable[Step]) -> None:
    """
    Run every stop step once, regardless of earlier failures.

    A step whose Docker resource no longer exists counts as stopped.

    Raises:
        StopFailure: If at least one step raised; chained from the last error
    """
    errors: list[tuple[str, BaseException]] = []
    for step in steps:
        logger.info("Stopping %s", step.name)
        try:
            step.action()
        except docker.errors.NotFound:
            logger.debug("%s was already removed", step.name)
        except Exception as e:
            logger.warning("Failed to stop %s: %s", step.name, e)
            errors.append((step.name, e))

    if errors:
        raise StopFailure(errors) from errors[-1][1]
