"""
Infrastructure layer - Adapters for the consultation core.

This layer contains:
- Observability (structlog configuration, correlation IDs)
- In-memory stubs for the application ports

IMPORT RULES:
- CAN import from: domain, application
- Implements ports defined in application layer
"""

__all__: list[str] = []
