"""FakeLogicalClock - Controllable logical clock for deterministic tests.

Usage Patterns:
--------------

1. Fixed Height:
    >>> clock = FakeLogicalClock(height=10)
    >>> assert clock.current_height() == 10

2. Advancing:
    >>> clock = FakeLogicalClock()
    >>> clock.advance(20)
    >>> assert clock.current_height() == 20

3. Pytest Fixture:
    def test_deadline(fake_clock):
        fake_clock.set_height(101)
        result = await service.submit(...)
        assert result.error == ConsultationErrorCode.CLOSED
"""

from __future__ import annotations

from src.application.ports.logical_clock import LogicalClockProtocol


class FakeLogicalClock(LogicalClockProtocol):
    """Controllable logical clock for deterministic tests.

    Unlike LogicalClockStub, set_height() may move backwards so tests can
    rewind between phases.
    """

    def __init__(self, height: int = 0) -> None:
        self._height = height

    def current_height(self) -> int:
        return self._height

    def advance(self, blocks: int = 1) -> None:
        """Advance the height.

        Raises:
            ValueError: If blocks is negative.
        """
        if blocks < 0:
            raise ValueError(
                f"Cannot advance height backwards. Got {blocks}. "
                "Use set_height() for explicit changes."
            )
        self._height += blocks

    def set_height(self, height: int) -> None:
        self._height = height

    def __repr__(self) -> str:
        return f"FakeLogicalClock(height={self._height})"
