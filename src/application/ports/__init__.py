"""Application ports - Abstract interfaces for infrastructure adapters.

This module defines the contracts that host adapters must implement.

Available ports:
- LogicalClockProtocol: Source of the current logical height
- ConsultationEventEmitterProtocol: Publisher for accepted mutations
- ConsultationStateRepositoryProtocol: System of record for snapshots
"""

from src.application.ports.consultation_event_emitter import (
    ConsultationEventEmitterProtocol,
)
from src.application.ports.consultation_state_repository import (
    ConsultationStateRepositoryProtocol,
)
from src.application.ports.logical_clock import LogicalClockProtocol

__all__: list[str] = [
    "ConsultationEventEmitterProtocol",
    "ConsultationStateRepositoryProtocol",
    "LogicalClockProtocol",
]
