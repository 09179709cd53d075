"""Consultation domain errors.

This module provides the exception classes raised by the consultation
lifecycle, the submission registry and the voting ledger. Every rejection
is a normal, expected outcome of invalid input or a state conflict, never
a defect, and every one is raised before any state is touched.

Each error carries:
- code: the stable taxonomy name (ConsultationErrorCode)
- ledger_code: the numeric code used by the on-ledger contract
- http_status: the status used by the HTTP surface

Error groups:
- Authorization: NotAuthorized
- Lifecycle state: AlreadyActive, NotActive, Closed
- Input validation: InvalidTopic, InvalidDescription, InvalidDeadline,
  InvalidRewardPool, InvalidRewardPoolUpdate, InvalidDigest,
  InvalidCategoryTags, InvalidVoteValue
- Uniqueness/state conflicts: AlreadySubmitted, DuplicateDigest,
  VoteAlreadyCast, SelfVoteNotAllowed
- Not-found: SubmissionNotFound
- Capacity: SubmissionCapExceeded
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar

from src.domain.exceptions import ConsultationCoreError


class ConsultationErrorCode(str, Enum):
    """Stable error taxonomy for consultation operations."""

    NOT_AUTHORIZED = "NotAuthorized"
    ALREADY_ACTIVE = "AlreadyActive"
    NOT_ACTIVE = "NotActive"
    CLOSED = "Closed"
    INVALID_TOPIC = "InvalidTopic"
    INVALID_DESCRIPTION = "InvalidDescription"
    INVALID_DEADLINE = "InvalidDeadline"
    INVALID_REWARD_POOL = "InvalidRewardPool"
    INVALID_REWARD_POOL_UPDATE = "InvalidRewardPoolUpdate"
    INVALID_DIGEST = "InvalidDigest"
    INVALID_CATEGORY_TAGS = "InvalidCategoryTags"
    INVALID_VOTE_VALUE = "InvalidVoteValue"
    ALREADY_SUBMITTED = "AlreadySubmitted"
    DUPLICATE_DIGEST = "DuplicateDigest"
    VOTE_ALREADY_CAST = "VoteAlreadyCast"
    SELF_VOTE_NOT_ALLOWED = "SelfVoteNotAllowed"
    SUBMISSION_NOT_FOUND = "SubmissionNotFound"
    SUBMISSION_CAP_EXCEEDED = "SubmissionCapExceeded"


class ConsultationError(ConsultationCoreError):
    """Base error for consultation operations.

    Subclasses pin code, ledger_code, http_status and title. Extra keyword
    context is kept on the instance and echoed in the problem document.

    Attributes:
        context: Structured details about the rejected call.
    """

    code: ClassVar[ConsultationErrorCode]
    ledger_code: ClassVar[int]
    http_status: ClassVar[int] = 400
    title: ClassVar[str] = "Consultation Error"

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error description.
            **context: Structured details about the rejected call.
        """
        self.context: dict[str, Any] = context
        super().__init__(message)

    def to_rfc7807_dict(self) -> dict[str, Any]:
        """Serialize to RFC 7807 problem details.

        Returns:
            Dictionary with type/title/status/detail plus the error code,
            the ledger code and the structured context.
        """
        result = problem_details(self.code, str(self))
        for key, value in self.context.items():
            result[key] = value.hex() if isinstance(value, bytes) else value
        return result


class NotAuthorizedError(ConsultationError):
    """Raised when a creator-only action is called by someone else."""

    code = ConsultationErrorCode.NOT_AUTHORIZED
    ledger_code = 100
    http_status = 403
    title = "Not Authorized"

    def __init__(self, caller: str, creator: str) -> None:
        self.caller = caller
        self.creator = creator
        super().__init__(
            f"Caller {caller} is not the consultation creator", caller=caller
        )


class AlreadyActiveError(ConsultationError):
    """Raised when initialize is called while an activation is live."""

    code = ConsultationErrorCode.ALREADY_ACTIVE
    ledger_code = 108
    http_status = 409
    title = "Consultation Already Active"

    def __init__(self, consultation_id: int) -> None:
        self.consultation_id = consultation_id
        super().__init__(
            f"Consultation {consultation_id} is still active; close it first",
            consultation_id=consultation_id,
        )


class NotActiveError(ConsultationError):
    """Raised when close is called on a consultation that is not active."""

    code = ConsultationErrorCode.NOT_ACTIVE
    ledger_code = 108
    http_status = 409
    title = "Consultation Not Active"

    def __init__(self, state: str) -> None:
        self.state = state
        super().__init__(f"Consultation is not active (state={state})", state=state)


class ConsultationClosedError(ConsultationError):
    """Raised when a mutation arrives while inactive or at/after the deadline.

    Both conditions share this error. The reason attribute says which one
    applied so logs and problem documents can tell them apart.

    Attributes:
        reason: "inactive" or "deadline_passed".
        current_height: Logical time of the rejected call.
        deadline: Deadline of the activation (0 if never initialized).
    """

    code = ConsultationErrorCode.CLOSED
    ledger_code = 101
    http_status = 409
    title = "Consultation Closed"

    def __init__(self, reason: str, current_height: int, deadline: int) -> None:
        self.reason = reason
        self.current_height = current_height
        self.deadline = deadline
        super().__init__(
            f"Consultation is closed ({reason}) at height {current_height}",
            reason=reason,
            current_height=current_height,
            deadline=deadline,
        )


class InvalidTopicError(ConsultationError):
    """Raised when the topic is empty or too long."""

    code = ConsultationErrorCode.INVALID_TOPIC
    ledger_code = 106
    title = "Invalid Topic"

    def __init__(self, length: int, max_length: int) -> None:
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Topic must be 1..{max_length} UTF-16 code units, got {length}",
            length=length,
            max_length=max_length,
        )


class InvalidDescriptionError(ConsultationError):
    """Raised when the description is empty or too long."""

    code = ConsultationErrorCode.INVALID_DESCRIPTION
    ledger_code = 107
    title = "Invalid Description"

    def __init__(self, length: int, max_length: int) -> None:
        self.length = length
        self.max_length = max_length
        super().__init__(
            f"Description must be 1..{max_length} UTF-16 code units, got {length}",
            length=length,
            max_length=max_length,
        )


class InvalidDeadlineError(ConsultationError):
    """Raised when the deadline is not strictly after the current height."""

    code = ConsultationErrorCode.INVALID_DEADLINE
    ledger_code = 105
    title = "Invalid Deadline"

    def __init__(self, deadline: int, current_height: int) -> None:
        self.deadline = deadline
        self.current_height = current_height
        super().__init__(
            f"Deadline {deadline} must be greater than current height "
            f"{current_height}",
            deadline=deadline,
            current_height=current_height,
        )


class InvalidRewardPoolError(ConsultationError):
    """Raised when the initial reward pool is not positive."""

    code = ConsultationErrorCode.INVALID_REWARD_POOL
    ledger_code = 120
    title = "Invalid Reward Pool"

    def __init__(self, reward_pool: int) -> None:
        self.reward_pool = reward_pool
        super().__init__(
            f"Reward pool must be positive, got {reward_pool}",
            reward_pool=reward_pool,
        )


class InvalidRewardPoolUpdateError(ConsultationError):
    """Raised when a reward pool update does not strictly increase the pool."""

    code = ConsultationErrorCode.INVALID_REWARD_POOL_UPDATE
    ledger_code = 120
    title = "Invalid Reward Pool Update"

    def __init__(self, new_pool: int, current_pool: int) -> None:
        self.new_pool = new_pool
        self.current_pool = current_pool
        super().__init__(
            f"New reward pool {new_pool} must exceed current pool {current_pool}",
            new_pool=new_pool,
            current_pool=current_pool,
        )


class InvalidDigestError(ConsultationError):
    """Raised when the input digest is not exactly 32 bytes."""

    code = ConsultationErrorCode.INVALID_DIGEST
    ledger_code = 116
    title = "Invalid Input Digest"

    def __init__(self, length: int | None, expected: int) -> None:
        self.length = length
        self.expected = expected
        super().__init__(
            f"Input digest must be exactly {expected} bytes, got {length}",
            length=length,
            expected=expected,
        )


class InvalidCategoryTagsError(ConsultationError):
    """Raised when the tag list is too long or a tag has a bad length."""

    code = ConsultationErrorCode.INVALID_CATEGORY_TAGS
    ledger_code = 118
    title = "Invalid Category Tags"

    def __init__(self, message: str, tag_count: int) -> None:
        self.tag_count = tag_count
        super().__init__(message, tag_count=tag_count)


class InvalidVoteValueError(ConsultationError):
    """Raised when a vote value falls outside the allowed range."""

    code = ConsultationErrorCode.INVALID_VOTE_VALUE
    ledger_code = 110
    title = "Invalid Vote Value"

    def __init__(self, value: object, minimum: int, maximum: int) -> None:
        self.value = value
        super().__init__(
            f"Vote value must be an integer in [{minimum}, {maximum}], got {value!r}",
            minimum=minimum,
            maximum=maximum,
        )


class AlreadySubmittedError(ConsultationError):
    """Raised when an identity submits a second time in one activation."""

    code = ConsultationErrorCode.ALREADY_SUBMITTED
    ledger_code = 102
    http_status = 409
    title = "Already Submitted"

    def __init__(self, owner: str, submitted_at: int) -> None:
        self.owner = owner
        self.submitted_at = submitted_at
        super().__init__(
            f"Identity {owner} already submitted at height {submitted_at}",
            owner=owner,
            submitted_at=submitted_at,
        )


class DuplicateDigestError(ConsultationError):
    """Raised when an input digest was already recorded in this activation."""

    code = ConsultationErrorCode.DUPLICATE_DIGEST
    ledger_code = 117
    http_status = 409
    title = "Duplicate Input Digest"

    def __init__(self, input_digest: bytes) -> None:
        self.input_digest = input_digest
        super().__init__(
            f"Input digest {input_digest.hex()[:16]}... was already submitted",
            input_digest=input_digest,
        )


class VoteAlreadyCastError(ConsultationError):
    """Raised when a voter votes twice on the same submission."""

    code = ConsultationErrorCode.VOTE_ALREADY_CAST
    ledger_code = 109
    http_status = 409
    title = "Vote Already Cast"

    def __init__(self, submission_owner: str, voter: str, existing_value: int) -> None:
        self.submission_owner = submission_owner
        self.voter = voter
        self.existing_value = existing_value
        super().__init__(
            f"Voter {voter} already voted on submission of {submission_owner}",
            submission_owner=submission_owner,
            voter=voter,
        )


class SelfVoteNotAllowedError(ConsultationError):
    """Raised when a voter targets their own submission."""

    code = ConsultationErrorCode.SELF_VOTE_NOT_ALLOWED
    ledger_code = 111
    http_status = 403
    title = "Self Vote Not Allowed"

    def __init__(self, voter: str) -> None:
        self.voter = voter
        super().__init__(f"Identity {voter} may not vote on its own submission")


class SubmissionNotFoundError(ConsultationError):
    """Raised when a vote targets an identity with no submission."""

    code = ConsultationErrorCode.SUBMISSION_NOT_FOUND
    ledger_code = 104
    http_status = 404
    title = "Submission Not Found"

    def __init__(self, submission_owner: str) -> None:
        self.submission_owner = submission_owner
        super().__init__(
            f"No submission found for identity {submission_owner}",
            submission_owner=submission_owner,
        )


class SubmissionCapExceededError(ConsultationError):
    """Raised when the activation already holds the maximum submissions."""

    code = ConsultationErrorCode.SUBMISSION_CAP_EXCEEDED
    ledger_code = 119
    http_status = 409
    title = "Submission Cap Exceeded"

    def __init__(self, max_submissions: int) -> None:
        self.max_submissions = max_submissions
        super().__init__(
            f"Submission cap of {max_submissions} reached",
            max_submissions=max_submissions,
        )


def _error_classes() -> dict[ConsultationErrorCode, type[ConsultationError]]:
    return {cls.code: cls for cls in ConsultationError.__subclasses__()}


ERROR_CLASSES_BY_CODE: dict[ConsultationErrorCode, type[ConsultationError]] = (
    _error_classes()
)


def problem_details(code: ConsultationErrorCode, detail: str) -> dict[str, Any]:
    """Build the RFC 7807 core fields for an error code.

    Args:
        code: The error code.
        detail: Human-readable failure detail.

    Returns:
        Dictionary with type/title/status/detail/error_code/ledger_code.
    """
    error_cls = ERROR_CLASSES_BY_CODE[code]
    slug = "".join(f"-{ch.lower()}" if ch.isupper() else ch for ch in code.value)
    return {
        "type": f"urn:consultation:error:{slug.lstrip('-')}",
        "title": error_cls.title,
        "status": error_cls.http_status,
        "detail": detail,
        "error_code": code.value,
        "ledger_code": error_cls.ledger_code,
    }
