"""Consultation Event Emitter Port.

This module defines the protocol for publishing consultation events after
each accepted mutation. The host environment decides where events go
(ledger, message bus, audit log).

Developer Golden Rules:
1. EMIT AFTER COMMIT - Only accepted mutations produce events
2. ONE EVENT PER MUTATION - Rejected calls never emit
3. FAIL LOUD - Emission errors propagate to the caller
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.domain.events.consultation import ConsultationEvent


class ConsultationEventEmitterProtocol(Protocol):
    """Protocol for consultation event emission.

    Example:
        emitter = ConsultationEventEmitterStub()
        await emitter.emit(
            InputSubmittedEvent(
                consultation_id=1,
                owner="alice",
                input_digest=digest.hex(),
                category_tags=("region:EU",),
                submission_count=1,
                height=10,
            )
        )
    """

    async def emit(self, event: ConsultationEvent) -> None:
        """Publish one consultation event.

        Args:
            event: The event payload for the accepted mutation.
        """
        ...
