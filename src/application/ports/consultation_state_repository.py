"""Consultation State Repository Port.

The host environment is the system of record for consultation state. The
core holds state in memory only; after each accepted mutation the
ConsultationService hands the full exported state to this port.

Stored payloads are the dictionaries produced by
ConsultationLifecycleManager.export_state() and are accepted back by
ConsultationLifecycleManager.from_state().
"""

from __future__ import annotations

from typing import Any, Protocol


class ConsultationStateRepositoryProtocol(Protocol):
    """Protocol for persisting consultation state snapshots."""

    async def save(self, state: dict[str, Any]) -> None:
        """Persist the latest state snapshot, replacing the previous one.

        Args:
            state: Output of ConsultationLifecycleManager.export_state().
        """
        ...

    async def load(self) -> dict[str, Any] | None:
        """Return the latest persisted snapshot, or None if nothing is stored."""
        ...
