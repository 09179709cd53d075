"""Integration test configuration.

Scenario tests run the consultation service against the in-memory
stubs; no external services are required.
"""

import pytest

from src.bootstrap.consultation import reset_consultation_dependencies


@pytest.fixture(autouse=True)
def _reset_bootstrap():
    """Reset process-wide consultation singletons around each test."""
    reset_consultation_dependencies()
    yield
    reset_consultation_dependencies()
