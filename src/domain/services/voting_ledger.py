"""Voting ledger for one consultation activation.

Keeps one Vote per (submission owner, voter) pair and folds accepted
votes into the owner's submission tally. The lifecycle manager applies
the activity and deadline gate before calling cast(); the ledger owns the
remaining checks, evaluated in this order:

1. A submission exists for the owner   -> SubmissionNotFoundError
2. Voter is not the owner              -> SelfVoteNotAllowedError
3. No vote yet for the pair            -> VoteAlreadyCastError
4. Value is an integer in [1, 5]       -> InvalidVoteValueError

Votes are never updated or retracted.
"""

from __future__ import annotations

from typing import Any

from structlog import get_logger

from src.domain.errors.consultation import (
    InvalidVoteValueError,
    SelfVoteNotAllowedError,
    SubmissionNotFoundError,
    VoteAlreadyCastError,
)
from src.domain.models.consultation_submission import (
    MAX_VOTE_VALUE,
    MIN_VOTE_VALUE,
    Submission,
    Vote,
)
from src.domain.services.submission_registry import SubmissionRegistry

logger = get_logger(__name__)


class VotingLedger:
    """Owned collection of votes keyed by (submission owner, voter)."""

    def __init__(self, registry: SubmissionRegistry) -> None:
        """Initialize an empty ledger.

        Args:
            registry: Registry holding the submissions being voted on.
        """
        self._registry = registry
        self._votes: dict[tuple[str, str], Vote] = {}

    def __len__(self) -> int:
        return len(self._votes)

    def get(self, submission_owner: str, voter: str) -> Vote | None:
        return self._votes.get((submission_owner, voter))

    def get_value(self, submission_owner: str, voter: str) -> int:
        """Return the cast value for the pair, or 0 if no vote exists."""
        vote = self._votes.get((submission_owner, voter))
        return vote.value if vote is not None else 0

    def votes_for(self, submission_owner: str) -> list[Vote]:
        """Return every vote on one submission in casting order."""
        return [v for v in self._votes.values() if v.submission_owner == submission_owner]

    def cast(
        self,
        submission_owner: str,
        voter: str,
        value: int,
        cast_at: int,
    ) -> Submission:
        """Validate and record a vote.

        Args:
            submission_owner: Identity whose submission is scored.
            voter: Caller identity.
            value: Score in [1, 5].
            cast_at: Logical height of the call.

        Returns:
            The submission with its updated tally.

        Raises:
            SubmissionNotFoundError: Owner has no submission.
            SelfVoteNotAllowedError: Voter is the owner.
            VoteAlreadyCastError: Voter already voted on this submission.
            InvalidVoteValueError: Value outside [1, 5] or not an integer.
        """
        submission = self._registry.get(submission_owner)
        if submission is None:
            raise SubmissionNotFoundError(submission_owner)

        if voter == submission_owner:
            raise SelfVoteNotAllowedError(voter)

        existing = self._votes.get((submission_owner, voter))
        if existing is not None:
            raise VoteAlreadyCastError(submission_owner, voter, existing.value)

        # bool is an int subclass; a True vote is not a score
        if (
            not isinstance(value, int)
            or isinstance(value, bool)
            or not MIN_VOTE_VALUE <= value <= MAX_VOTE_VALUE
        ):
            raise InvalidVoteValueError(value, MIN_VOTE_VALUE, MAX_VOTE_VALUE)

        vote = Vote(
            submission_owner=submission_owner,
            voter=voter,
            value=value,
            cast_at=cast_at,
        )
        updated = submission.with_vote(value)
        self._registry.replace(updated)
        self._votes[vote.key] = vote

        logger.debug(
            "vote_recorded",
            submission_owner=submission_owner,
            voter=voter,
            value=value,
            vote_count=updated.vote_count,
            quality_score=updated.quality_score,
        )
        return updated

    def to_dict(self) -> dict[str, Any]:
        return {"votes": [v.to_dict() for v in self._votes.values()]}

    @classmethod
    def from_dict(
        cls, data: dict[str, Any], registry: SubmissionRegistry
    ) -> VotingLedger:
        """Rebuild a ledger from to_dict() output.

        Submission tallies are restored by the registry, not recomputed here.
        """
        ledger = cls(registry)
        for raw in data["votes"]:
            vote = Vote.from_dict(raw)
            ledger._votes[vote.key] = vote
        return ledger
