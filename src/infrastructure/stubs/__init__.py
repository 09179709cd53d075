"""Infrastructure stubs for development and testing.

Available stubs:
- LogicalClockStub: Settable, monotonic logical height
- ConsultationEventEmitterStub: Captures emitted events in memory
- ConsultationStateRepositoryStub: Keeps snapshot history in memory

WARNING: These stubs are NOT for production use. Hosts supply real
adapters through src.bootstrap.consultation.
"""

from src.infrastructure.stubs.consultation_event_emitter_stub import (
    ConsultationEventEmitterStub,
)
from src.infrastructure.stubs.consultation_state_repository_stub import (
    ConsultationStateRepositoryStub,
)
from src.infrastructure.stubs.logical_clock_stub import LogicalClockStub

__all__: list[str] = [
    "ConsultationEventEmitterStub",
    "ConsultationStateRepositoryStub",
    "LogicalClockStub",
]
