"""Consultation API request/response models.

Pydantic models for the consultation endpoints. Request models only check
wire shape (types, hex encoding); every domain rule (lengths, ranges,
uniqueness, deadlines) is enforced by the consultation core so that the
HTTP surface reports the same error codes as any other host.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from src.domain.models.consultation import ConsultationDetails
from src.domain.models.consultation_submission import DiversityMetric, Submission


class InitializeConsultationRequest(BaseModel):
    """Request to open a new activation (creator only)."""

    consultation_id: int = Field(..., description="Identifier for this activation")
    topic: str = Field(..., description="Consultation topic (1-200 UTF-16 code units)")
    description: str = Field(
        ..., description="Consultation description (1-1000 UTF-16 code units)"
    )
    deadline: int = Field(..., description="Logical height at which the window closes")
    reward_pool: int = Field(..., description="Initial reward pool (positive)")


class UpdateRewardPoolRequest(BaseModel):
    """Request to raise the reward pool (creator only)."""

    new_pool: int = Field(..., description="New pool, strictly above the current one")


class SubmitInputRequest(BaseModel):
    """Request to record the caller's submission.

    Attributes:
        input_digest: Hex-encoded content digest (64 hex chars for 32 bytes).
        category_tags: Ordered category tags (0-5, each 1-50 UTF-16 code units).
    """

    input_digest: str = Field(..., description="Hex-encoded 32-byte content digest")
    category_tags: list[str] = Field(default_factory=list)

    @field_validator("input_digest")
    @classmethod
    def _must_be_hex(cls, value: str) -> str:
        try:
            bytes.fromhex(value)
        except ValueError as exc:
            raise ValueError("input_digest must be hex-encoded") from exc
        return value

    def digest_bytes(self) -> bytes:
        return bytes.fromhex(self.input_digest)


class CastVoteRequest(BaseModel):
    """Request to vote on another participant's submission."""

    value: int = Field(..., description="Score from 1 to 5")


class AcknowledgementResponse(BaseModel):
    """Boolean acknowledgment of an accepted mutation."""

    ok: bool = True


class ConsultationDetailsResponse(BaseModel):
    """Consultation metadata snapshot."""

    consultation_id: int
    creator: str
    topic: str
    description: str
    deadline: int
    is_active: bool
    reward_pool: int
    submission_count: int
    max_submissions: int
    state: str
    window: str

    @classmethod
    def from_details(
        cls, details: ConsultationDetails, window: str
    ) -> ConsultationDetailsResponse:
        return cls(**details.to_dict(), window=window)


class SubmissionResponse(BaseModel):
    """A submission and its tally."""

    owner: str
    input_digest: str
    category_tags: list[str]
    submitted_at: int
    vote_count: int
    quality_score: int

    @classmethod
    def from_submission(cls, submission: Submission) -> SubmissionResponse:
        return cls(**submission.to_dict())


class VoteResponse(BaseModel):
    """Cast vote value; 0 means no vote exists."""

    submission_owner: str
    voter: str
    value: int


class DiversityMetricResponse(BaseModel):
    """Occurrence count for one category tag."""

    tag: str
    count: int

    @classmethod
    def from_metric(cls, metric: DiversityMetric) -> DiversityMetricResponse:
        return cls(tag=metric.tag, count=metric.count)


class ConsultationErrorResponse(BaseModel):
    """RFC 7807 error response with consultation extensions."""

    type: str
    title: str
    status: int
    detail: str
    error_code: str
    ledger_code: int
    instance: str | None = None
