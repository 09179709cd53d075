"""Stub implementation of ConsultationEventEmitterProtocol for testing.

This stub captures emitted events for test assertions without
requiring a real ledger or message bus.

Usage in tests:
    stub = ConsultationEventEmitterStub()
    service = ConsultationService(..., event_emitter=stub)

    await service.submit(caller="alice", input_digest=digest, category_tags=[])

    assert len(stub.emitted_events) == 1
    assert stub.emitted_events[0].owner == "alice"
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from structlog import get_logger

if TYPE_CHECKING:
    from src.domain.events.consultation import ConsultationEvent

logger = get_logger(__name__)


class ConsultationEventEmitterStub:
    """Records emitted consultation events in memory."""

    def __init__(self) -> None:
        self.emitted_events: list[ConsultationEvent] = []

    async def emit(self, event: ConsultationEvent) -> None:
        self.emitted_events.append(event)
        logger.debug("consultation_event_captured", event_type=event.event_type)

    def events_of_type(self, event_type: str) -> list[ConsultationEvent]:
        """Return captured events with a given event_type."""
        return [e for e in self.emitted_events if e.event_type == event_type]

    def reset(self) -> None:
        self.emitted_events.clear()
