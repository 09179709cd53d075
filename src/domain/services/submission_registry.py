"""Submission registry for one consultation activation.

Keeps one Submission per participant identity and the global set of
digests seen in the activation. The lifecycle manager applies the
activity and deadline gate before calling register(); the registry owns
the remaining checks, evaluated in this order:

1. Caller has no existing submission    -> AlreadySubmittedError
2. Digest is exactly 32 bytes           -> InvalidDigestError
3. At most 5 tags, each 1..50 code units -> InvalidCategoryTagsError
4. Digest not already recorded          -> DuplicateDigestError
5. Submission count below the cap       -> SubmissionCapExceededError

All checks run before any mutation, so a rejected call leaves the
registry and the diversity aggregator untouched.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from structlog import get_logger

from src.domain.errors.consultation import (
    AlreadySubmittedError,
    DuplicateDigestError,
    InvalidCategoryTagsError,
    InvalidDigestError,
    SubmissionCapExceededError,
)
from src.domain.models.consultation import DEFAULT_MAX_SUBMISSIONS, code_unit_length
from src.domain.models.consultation_submission import (
    INPUT_DIGEST_LENGTH,
    MAX_CATEGORY_TAGS,
    MAX_TAG_LENGTH,
    Submission,
)
from src.domain.services.diversity_aggregator import DiversityAggregator

logger = get_logger(__name__)


class SubmissionRegistry:
    """Owned collection of submissions keyed by identity and by digest.

    Invariants:
    - An identity owns at most one submission
    - A digest appears in at most one submission
    - len(self) never exceeds max_submissions
    """

    def __init__(
        self,
        aggregator: DiversityAggregator,
        max_submissions: int = DEFAULT_MAX_SUBMISSIONS,
    ) -> None:
        """Initialize an empty registry.

        Args:
            aggregator: Diversity aggregator notified on each accepted submission.
            max_submissions: Hard cap for this activation.
        """
        self._aggregator = aggregator
        self._max_submissions = max_submissions
        self._submissions: dict[str, Submission] = {}
        self._digests: set[bytes] = set()

    @property
    def max_submissions(self) -> int:
        return self._max_submissions

    def __len__(self) -> int:
        return len(self._submissions)

    def __contains__(self, owner: object) -> bool:
        return owner in self._submissions

    def get(self, owner: str) -> Submission | None:
        """Return the submission of an identity, or None."""
        return self._submissions.get(owner)

    def register(
        self,
        owner: str,
        input_digest: bytes,
        category_tags: Sequence[str],
        submitted_at: int,
    ) -> Submission:
        """Validate and record a new submission.

        Args:
            owner: Caller identity.
            input_digest: 32-byte content digest.
            category_tags: Ordered category tags.
            submitted_at: Logical height of the call.

        Returns:
            The stored Submission.

        Raises:
            AlreadySubmittedError: Owner already has a submission.
            InvalidDigestError: Digest is not 32 bytes.
            InvalidCategoryTagsError: Too many tags or a bad tag length.
            DuplicateDigestError: Digest already recorded.
            SubmissionCapExceededError: Cap reached.
        """
        existing = self._submissions.get(owner)
        if existing is not None:
            raise AlreadySubmittedError(owner, existing.submitted_at)

        if not isinstance(input_digest, (bytes, bytearray)):
            raise InvalidDigestError(None, INPUT_DIGEST_LENGTH)
        if len(input_digest) != INPUT_DIGEST_LENGTH:
            raise InvalidDigestError(len(input_digest), INPUT_DIGEST_LENGTH)
        digest = bytes(input_digest)

        if isinstance(category_tags, str):
            raise InvalidCategoryTagsError(
                "Category tags must be a list of strings, not a string",
                tag_count=1,
            )
        try:
            tags = tuple(category_tags)
        except TypeError:
            raise InvalidCategoryTagsError(
                "Category tags must be a list of strings, "
                f"got {type(category_tags).__name__}",
                tag_count=0,
            ) from None
        self._validate_tags(tags)

        if digest in self._digests:
            raise DuplicateDigestError(digest)

        if len(self._submissions) >= self._max_submissions:
            raise SubmissionCapExceededError(self._max_submissions)

        submission = Submission(
            owner=owner,
            input_digest=digest,
            category_tags=tags,
            submitted_at=submitted_at,
        )
        self._submissions[owner] = submission
        self._digests.add(digest)
        self._aggregator.record(tags)

        logger.debug(
            "submission_registered",
            owner=owner,
            input_digest=digest.hex()[:16] + "...",
            tag_count=len(tags),
            submission_count=len(self._submissions),
        )
        return submission

    def replace(self, submission: Submission) -> None:
        """Store an updated tally for an existing submission.

        Raises:
            KeyError: If the owner has no submission.
        """
        if submission.owner not in self._submissions:
            raise KeyError(submission.owner)
        self._submissions[submission.owner] = submission

    @staticmethod
    def _validate_tags(tags: tuple[str, ...]) -> None:
        if len(tags) > MAX_CATEGORY_TAGS:
            raise InvalidCategoryTagsError(
                f"At most {MAX_CATEGORY_TAGS} category tags allowed, got {len(tags)}",
                tag_count=len(tags),
            )
        for tag in tags:
            if not isinstance(tag, str) or not 1 <= code_unit_length(tag) <= MAX_TAG_LENGTH:
                raise InvalidCategoryTagsError(
                    f"Category tags must be strings of 1..{MAX_TAG_LENGTH} "
                    f"UTF-16 code units, got {tag!r}",
                    tag_count=len(tags),
                )

    def to_dict(self) -> dict[str, Any]:
        return {
            "max_submissions": self._max_submissions,
            "submissions": [s.to_dict() for s in self._submissions.values()],
        }

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], aggregator: DiversityAggregator
    ) -> SubmissionRegistry:
        """Rebuild a registry from to_dict() output.

        The aggregator is restored separately and is not re-notified.
        """
        registry = cls(aggregator, max_submissions=int(data["max_submissions"]))
        for raw in data["submissions"]:
            submission = Submission.from_dict(raw)
            registry._submissions[submission.owner] = submission
            registry._digests.add(submission.input_digest)
        return registry
