"""
API models (Pydantic DTOs) for the consultation API.
"""

from src.api.models.consultation import (
    AcknowledgementResponse,
    CastVoteRequest,
    ConsultationDetailsResponse,
    ConsultationErrorResponse,
    DiversityMetricResponse,
    InitializeConsultationRequest,
    SubmissionResponse,
    SubmitInputRequest,
    UpdateRewardPoolRequest,
    VoteResponse,
)
from src.api.models.health import HealthResponse

__all__: list[str] = [
    "AcknowledgementResponse",
    "CastVoteRequest",
    "ConsultationDetailsResponse",
    "ConsultationErrorResponse",
    "DiversityMetricResponse",
    "HealthResponse",
    "InitializeConsultationRequest",
    "SubmissionResponse",
    "SubmitInputRequest",
    "UpdateRewardPoolRequest",
    "VoteResponse",
]
