"""Pytest configuration for alfresco-testcontainers tests."""

import pytest

# Pytest hooks for --run-docker flag


def pytest_addoption(parser):
    """Add --run-docker pytest option."""
    parser.addoption(
        "--run-docker",
        action="store_true",
        default=False,
        help="Run tests that start real containers (requires a Docker daemon)",
    )


def pytest_collection_modifyitems(config, items):
    """Skip Docker tests unless --run-docker flag is provided."""
    if not config.getoption("--run-docker"):
        skip_docker = pytest.mark.skip(reason="Need --run-docker option to run")
        for item in items:
            if "docker" in item.keywords:
                item.add_marker(skip_docker)
