"""In-memory stub for LogicalClockProtocol.

Development stand-in for the host's height source (for example a ledger
block height). The height only moves when set_height() or advance() is
called, and never moves backwards.
"""

from __future__ import annotations

from src.application.ports.logical_clock import LogicalClockProtocol


class LogicalClockStub(LogicalClockProtocol):
    """Settable logical clock."""

    def __init__(self, height: int = 0) -> None:
        if height < 0:
            raise ValueError(f"height must be non-negative, got {height}")
        self._height = height

    def current_height(self) -> int:
        return self._height

    def set_height(self, height: int) -> None:
        """Move the clock to an explicit height.

        Raises:
            ValueError: If height is lower than the current height.
        """
        if height < self._height:
            raise ValueError(
                f"Logical height cannot decrease ({self._height} -> {height})"
            )
        self._height = height

    def advance(self, blocks: int = 1) -> int:
        """Advance the clock and return the new height."""
        self.set_height(self._height + blocks)
        return self._height
