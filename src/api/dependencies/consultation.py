"""Consultation API dependencies.

Dependency injection for the consultation routes. Services come from the
bootstrap module so tests can swap them with set_consultation_service().

Caller identity is taken from the X-Caller-Identity header and trusted as
supplied; authenticating it is the job of the host in front of this API.
"""

from fastapi import Header

from src.application.ports.logical_clock import LogicalClockProtocol
from src.application.services.consultation_service import ConsultationService
from src.bootstrap.consultation import get_consultation_service as _get_service
from src.bootstrap.consultation import get_logical_clock as _get_clock

CALLER_HEADER = "X-Caller-Identity"


def get_consultation_service() -> ConsultationService:
    """Get the consultation service instance."""
    return _get_service()


def get_logical_clock() -> LogicalClockProtocol:
    """Get the logical clock used to classify the submission window."""
    return _get_clock()


async def get_caller_identity(
    x_caller_identity: str = Header(..., alias=CALLER_HEADER, min_length=1),
) -> str:
    """Return the trusted caller identity from the request header."""
    return x_caller_identity
