"""Application services - Use case orchestration.

Available services:
- ConsultationService: Builds call contexts, runs core operations,
  publishes events and persists snapshots
"""

from src.application.services.consultation_service import ConsultationService

__all__ = ["ConsultationService"]
