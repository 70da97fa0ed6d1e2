"""Pytest configuration for the CLI integration tests."""

import pytest


def pytest_collection_modifyitems(items):
    """Mark everything collected here as ``integration``."""
    for item in items:
        if "integration_tests" in item.path.parts:
            item.add_marker(pytest.mark.integration)
