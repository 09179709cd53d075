"""Bootstrap wiring for consultation dependencies.

Holds the process-wide consultation instance and its collaborators.
Stub adapters are used until the host supplies real ones through the
set_* functions (for example a ledger-backed clock).
"""

from __future__ import annotations

from src.application.ports.consultation_event_emitter import (
    ConsultationEventEmitterProtocol,
)
from src.application.ports.consultation_state_repository import (
    ConsultationStateRepositoryProtocol,
)
from src.application.ports.logical_clock import LogicalClockProtocol
from src.application.services.consultation_service import ConsultationService
from src.config.consultation_config import ConsultationConfig
from src.domain.services.consultation_lifecycle import ConsultationLifecycleManager
from src.infrastructure.stubs.consultation_event_emitter_stub import (
    ConsultationEventEmitterStub,
)
from src.infrastructure.stubs.consultation_state_repository_stub import (
    ConsultationStateRepositoryStub,
)
from src.infrastructure.stubs.logical_clock_stub import LogicalClockStub

_config: ConsultationConfig | None = None
_clock: LogicalClockProtocol | None = None
_event_emitter: ConsultationEventEmitterProtocol | None = None
_state_repository: ConsultationStateRepositoryProtocol | None = None
_consultation_service: ConsultationService | None = None


def get_consultation_config() -> ConsultationConfig:
    """Get consultation config, loaded from the environment once."""
    global _config
    if _config is None:
        _config = ConsultationConfig.from_environment()
    return _config


def get_logical_clock() -> LogicalClockProtocol:
    """Get logical clock instance."""
    global _clock
    if _clock is None:
        _clock = LogicalClockStub()
    return _clock


def get_consultation_event_emitter() -> ConsultationEventEmitterProtocol:
    """Get consultation event emitter instance."""
    global _event_emitter
    if _event_emitter is None:
        _event_emitter = ConsultationEventEmitterStub()
    return _event_emitter


def get_consultation_state_repository() -> ConsultationStateRepositoryProtocol:
    """Get consultation state repository instance."""
    global _state_repository
    if _state_repository is None:
        _state_repository = ConsultationStateRepositoryStub()
    return _state_repository


def get_consultation_service() -> ConsultationService:
    """Get the process-wide consultation service.

    Builds a fresh consultation from config on first use. Hosts that
    persist state should call set_consultation_service() at startup with
    a service built by ConsultationService.from_repository().
    """
    global _consultation_service
    if _consultation_service is None:
        config = get_consultation_config()
        _consultation_service = ConsultationService(
            manager=ConsultationLifecycleManager(
                creator=config.creator,
                max_submissions=config.max_submissions,
            ),
            clock=get_logical_clock(),
            event_emitter=get_consultation_event_emitter(),
            state_repository=get_consultation_state_repository(),
        )
    return _consultation_service


def set_consultation_config(config: ConsultationConfig) -> None:
    global _config
    _config = config


def set_logical_clock(clock: LogicalClockProtocol) -> None:
    global _clock
    _clock = clock


def set_consultation_service(service: ConsultationService) -> None:
    global _consultation_service
    _consultation_service = service


def reset_consultation_dependencies() -> None:
    """Reset all singletons (for testing)."""
    global _config, _clock, _event_emitter, _state_repository, _consultation_service
    _config = None
    _clock = None
    _event_emitter = None
    _state_repository = None
    _consultation_service = None
