"""Domain errors for the consultation core.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ConsultationCoreError.
"""

from src.domain.errors.consultation import (
    ERROR_CLASSES_BY_CODE,
    AlreadyActiveError,
    AlreadySubmittedError,
    ConsultationClosedError,
    ConsultationError,
    ConsultationErrorCode,
    DuplicateDigestError,
    InvalidCategoryTagsError,
    InvalidDeadlineError,
    InvalidDescriptionError,
    InvalidDigestError,
    InvalidRewardPoolError,
    InvalidRewardPoolUpdateError,
    InvalidTopicError,
    InvalidVoteValueError,
    NotActiveError,
    NotAuthorizedError,
    SelfVoteNotAllowedError,
    SubmissionCapExceededError,
    SubmissionNotFoundError,
    VoteAlreadyCastError,
    problem_details,
)

__all__: list[str] = [
    "ERROR_CLASSES_BY_CODE",
    "AlreadyActiveError",
    "AlreadySubmittedError",
    "ConsultationClosedError",
    "ConsultationError",
    "ConsultationErrorCode",
    "DuplicateDigestError",
    "InvalidCategoryTagsError",
    "InvalidDeadlineError",
    "InvalidDescriptionError",
    "InvalidDigestError",
    "InvalidRewardPoolError",
    "InvalidRewardPoolUpdateError",
    "InvalidTopicError",
    "InvalidVoteValueError",
    "NotActiveError",
    "NotAuthorizedError",
    "SelfVoteNotAllowedError",
    "SubmissionCapExceededError",
    "SubmissionNotFoundError",
    "VoteAlreadyCastError",
    "problem_details",
]
