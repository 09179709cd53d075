"""Consultation submission domain models.

This module defines the records kept per activation:
- Submission: One participant's content-addressed input and its tally
- Vote: One voter's score on one submission
- DiversityMetric: Occurrence count for one category tag

Only the 32-byte digest of a submission's content is tracked; the
content itself never enters the core. compute_input_digest() is the
helper hosts use to fingerprint content before submitting.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

import blake3

# Digest and tag limits
INPUT_DIGEST_LENGTH: int = 32
MAX_CATEGORY_TAGS: int = 5
MAX_TAG_LENGTH: int = 50

# Vote score range (inclusive)
MIN_VOTE_VALUE: int = 1
MAX_VOTE_VALUE: int = 5


def compute_input_digest(content: bytes) -> bytes:
    """Compute the BLAKE3 digest used to identify submitted content.

    Args:
        content: Raw submission content.

    Returns:
        32-byte BLAKE3 digest.
    """
    return blake3.blake3(content).digest()


@dataclass(frozen=True, eq=True)
class Submission:
    """A participant's submission in the current activation.

    Immutable except for the tally, which only changes by producing a new
    record through with_vote().

    Attributes:
        owner: Identity that submitted.
        input_digest: 32-byte content fingerprint.
        category_tags: Ordered category tags (0-5).
        submitted_at: Logical height of submission.
        vote_count: Number of accepted votes.
        quality_score: Sum of accepted vote values.
    """

    owner: str
    input_digest: bytes
    category_tags: tuple[str, ...]
    submitted_at: int
    vote_count: int = 0
    quality_score: int = 0

    def __post_init__(self) -> None:
        """Validate record fields.

        Raises:
            ValueError: If the digest length or the tally is invalid.
        """
        if len(self.input_digest) != INPUT_DIGEST_LENGTH:
            raise ValueError(
                f"input_digest must be {INPUT_DIGEST_LENGTH} bytes, "
                f"got {len(self.input_digest)}"
            )
        if self.vote_count < 0 or self.quality_score < 0:
            raise ValueError("vote_count and quality_score must be non-negative")

    def with_vote(self, value: int) -> Submission:
        """Return a copy with one more vote folded into the tally."""
        return replace(
            self,
            vote_count=self.vote_count + 1,
            quality_score=self.quality_score + value,
        )

    @property
    def average_score(self) -> float:
        """Mean vote value, or 0.0 with no votes."""
        if self.vote_count == 0:
            return 0.0
        return self.quality_score / self.vote_count

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary (digest hex-encoded).

        Returns:
            Dictionary representation suitable for snapshots and responses.
        """
        return {
            "owner": self.owner,
            "input_digest": self.input_digest.hex(),
            "category_tags": list(self.category_tags),
            "submitted_at": self.submitted_at,
            "vote_count": self.vote_count,
            "quality_score": self.quality_score,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Submission:
        """Deserialize from dictionary produced by to_dict()."""
        return cls(
            owner=data["owner"],
            input_digest=bytes.fromhex(data["input_digest"]),
            category_tags=tuple(data["category_tags"]),
            submitted_at=data["submitted_at"],
            vote_count=data.get("vote_count", 0),
            quality_score=data.get("quality_score", 0),
        )


@dataclass(frozen=True, eq=True)
class Vote:
    """A single vote, immutable once cast.

    Attributes:
        submission_owner: Identity whose submission was scored.
        voter: Identity that cast the vote.
        value: Score in [MIN_VOTE_VALUE, MAX_VOTE_VALUE].
        cast_at: Logical height of the vote.
    """

    submission_owner: str
    voter: str
    value: int
    cast_at: int

    @property
    def key(self) -> tuple[str, str]:
        return (self.submission_owner, self.voter)

    def to_dict(self) -> dict[str, Any]:
        return {
            "submission_owner": self.submission_owner,
            "voter": self.voter,
            "value": self.value,
            "cast_at": self.cast_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Vote:
        return cls(
            submission_owner=data["submission_owner"],
            voter=data["voter"],
            value=data["value"],
            cast_at=data["cast_at"],
        )


@dataclass(frozen=True, eq=True)
class DiversityMetric:
    """Occurrence count for one category tag."""

    tag: str
    count: int

    def to_dict(self) -> dict[str, Any]:
        return {"tag": self.tag, "count": self.count}
