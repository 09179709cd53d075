"""Test helpers for consultation tests.

This package contains reusable test utilities and fake implementations
for dependency injection in unit tests.

Helpers:
    FakeLogicalClock: Controllable logical clock for deterministic tests
    consultation_data: Shared identities and digest_of()

Usage:
    from tests.helpers import FakeLogicalClock
"""

from tests.helpers.fake_logical_clock import FakeLogicalClock

__all__ = ["FakeLogicalClock"]
