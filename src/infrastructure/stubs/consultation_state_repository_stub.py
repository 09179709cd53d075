"""In-memory stub for ConsultationStateRepositoryProtocol.

Keeps the latest exported state plus a history of every saved snapshot,
so tests can check that exactly one snapshot follows each accepted
mutation.
"""

from __future__ import annotations

import copy
from typing import Any


class ConsultationStateRepositoryStub:
    """In-memory snapshot store.

    Thread-safety note: This stub is NOT thread-safe. For concurrent
    tests, use separate instances.
    """

    def __init__(self) -> None:
        self._history: list[dict[str, Any]] = []

    async def save(self, state: dict[str, Any]) -> None:
        # Deep copy so later mutations of the caller's dict are not stored
        self._history.append(copy.deepcopy(state))

    async def load(self) -> dict[str, Any] | None:
        if not self._history:
            return None
        return copy.deepcopy(self._history[-1])

    # Test helper methods

    @property
    def save_count(self) -> int:
        return len(self._history)

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._history.clear()
