"""Domain models for the consultation core.

Contains value objects and records that represent core business
concepts. These models are immutable and contain no infrastructure
dependencies.
"""

from src.domain.models.consultation import (
    CallContext,
    ConsultationDetails,
    ConsultationState,
    SubmissionWindow,
)
from src.domain.models.consultation_submission import (
    DiversityMetric,
    Submission,
    Vote,
    compute_input_digest,
)

__all__: list[str] = [
    "CallContext",
    "ConsultationDetails",
    "ConsultationState",
    "DiversityMetric",
    "Submission",
    "SubmissionWindow",
    "Vote",
    "compute_input_digest",
]
