"""FastAPI dependencies for the consultation API."""

from src.api.dependencies.consultation import (
    get_caller_identity,
    get_consultation_service,
    get_logical_clock,
)

__all__: list[str] = [
    "get_caller_identity",
    "get_consultation_service",
    "get_logical_clock",
]
