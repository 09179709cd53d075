"""Health check endpoint for the consultation API."""

from fastapi import APIRouter, Depends

from src import __version__
from src.api.dependencies.consultation import (
    get_consultation_service,
    get_logical_clock,
)
from src.api.models.health import HealthResponse
from src.application.ports.logical_clock import LogicalClockProtocol
from src.application.services.consultation_service import ConsultationService

router = APIRouter(prefix="/v1", tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: ConsultationService = Depends(get_consultation_service),
    clock: LogicalClockProtocol = Depends(get_logical_clock),
) -> HealthResponse:
    """Return health status with the consultation state and clock height."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        consultation_state=service.manager.state.value,
        current_height=clock.current_height(),
    )
