"""
Application layer - Use cases and orchestration for the consultation core.

This layer contains:
- ConsultationService (host-facing call and result adapter)
- Port definitions (clock, event emitter, state repository)
- Result DTOs

IMPORT RULES:
- CAN import from: domain, infrastructure.observability
- CANNOT import from: api
"""

__all__: list[str] = []
