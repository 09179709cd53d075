"""
Domain events for the consultation core.

One immutable payload is published per accepted mutation.
"""

from src.domain.events.consultation import (
    ConsultationClosedEvent,
    ConsultationEvent,
    ConsultationInitializedEvent,
    InputSubmittedEvent,
    RewardPoolUpdatedEvent,
    VoteCastEvent,
)

__all__: list[str] = [
    "ConsultationClosedEvent",
    "ConsultationEvent",
    "ConsultationInitializedEvent",
    "InputSubmittedEvent",
    "RewardPoolUpdatedEvent",
    "VoteCastEvent",
]
