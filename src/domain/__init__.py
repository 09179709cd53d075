"""
Domain layer - Pure business logic for the consultation core.

This layer contains:
- Domain models (call context, submissions, votes, metrics)
- Domain services (lifecycle manager, registry, ledger, aggregator)
- Domain events (payloads for accepted mutations)
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or api.
"""

from src.domain.errors import ConsultationError, ConsultationErrorCode
from src.domain.exceptions import ConsultationCoreError
from src.domain.models import CallContext

__all__: list[str] = [
    "CallContext",
    "ConsultationCoreError",
    "ConsultationError",
    "ConsultationErrorCode",
]
