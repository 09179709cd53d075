"""Logical Clock Protocol - interface for current-height provisioning.

The consultation core compares deadlines against a logical height
supplied by the host (for example a ledger block height). Services that
need the current height MUST inject a LogicalClockProtocol implementation
instead of reading any clock directly.
"""

from abc import ABC, abstractmethod


class LogicalClockProtocol(ABC):
    """Abstract interface for the logical clock source.

    Example usage:
        class MyService:
            def __init__(self, clock: LogicalClockProtocol) -> None:
                self._clock = clock

            def process(self) -> None:
                height = self._clock.current_height()
                ...

    For development:
        Use LogicalClockStub from src/infrastructure/stubs/

    For testing:
        Use FakeLogicalClock from tests/helpers/fake_logical_clock.py
    """

    @abstractmethod
    def current_height(self) -> int:
        """Return the current logical height.

        Returns:
            Non-negative integer that never decreases between calls.
        """
        ...
