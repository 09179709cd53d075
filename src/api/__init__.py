"""
API layer - FastAPI routes and HTTP concerns for the consultation core.

This layer contains:
- FastAPI route definitions
- Request/Response DTOs
- HTTP middleware

IMPORT RULES:
- CAN import from: application, domain
- Reaches infrastructure only through src.bootstrap
"""

__all__: list[str] = []
