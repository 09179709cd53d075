"""Application DTOs (Data Transfer Objects).

Architecture Note:
The application layer defines its own DTOs to maintain independence
from the API layer. API routes convert them to Pydantic responses.
"""

from src.application.dtos.consultation import ConsultationResult

__all__ = ["ConsultationResult"]
