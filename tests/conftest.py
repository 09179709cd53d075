"""
Pytest configuration and shared fixtures for consultation tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Unit tests go in tests/unit/
- Scenario tests go in tests/integration/
"""

import pytest

from src.domain.models.consultation import CallContext
from src.domain.services.consultation_lifecycle import ConsultationLifecycleManager
from tests.helpers.consultation_data import CREATOR
from tests.helpers.fake_logical_clock import FakeLogicalClock


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from src import __version__

    return __version__


@pytest.fixture
def fake_clock() -> FakeLogicalClock:
    """Logical clock starting at height 0."""
    return FakeLogicalClock()


@pytest.fixture
def manager() -> ConsultationLifecycleManager:
    """Uninitialized consultation owned by CREATOR."""
    return ConsultationLifecycleManager(creator=CREATOR)


@pytest.fixture
def active_manager(manager: ConsultationLifecycleManager) -> ConsultationLifecycleManager:
    """Consultation initialized at height 0 with deadline 100 and pool 500."""
    manager.initialize(
        CallContext(CREATOR, 0), 1, "Topic", "Description", 100, 500
    )
    return manager
