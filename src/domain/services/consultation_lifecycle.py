"""Consultation lifecycle manager.

Top-level state machine that authorizes and validates every call, owns the
consultation metadata and the per-activation collections, and delegates
submissions and votes to the SubmissionRegistry and the VotingLedger.

Lifecycle:
    UNINITIALIZED --initialize--> ACTIVE --close--> CLOSED
    CLOSED --initialize--> ACTIVE (fresh registry, ledger and aggregator)

Submissions and votes are only accepted while the SubmissionWindow is
OPEN: state ACTIVE and current height strictly before the deadline. An
ACTIVE consultation past its deadline is EXPIRED; it keeps reporting
is_active=True but rejects mutations with ConsultationClosedError.

initialize() checks, in order:
1. Caller is the creator                -> NotAuthorizedError
2. State is not ACTIVE                  -> AlreadyActiveError
3. Topic is 1..200 code units           -> InvalidTopicError
4. Description is 1..1000 code units    -> InvalidDescriptionError
5. Deadline > current height            -> InvalidDeadlineError
6. Reward pool > 0                      -> InvalidRewardPoolError

Every operation is a single atomic transition: all checks run before any
field is written.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from structlog import get_logger

from src.domain.errors.consultation import (
    AlreadyActiveError,
    ConsultationClosedError,
    InvalidDeadlineError,
    InvalidDescriptionError,
    InvalidRewardPoolError,
    InvalidRewardPoolUpdateError,
    InvalidTopicError,
    NotActiveError,
    NotAuthorizedError,
)
from src.domain.models.consultation import (
    DEFAULT_MAX_SUBMISSIONS,
    MAX_DESCRIPTION_LENGTH,
    MAX_TOPIC_LENGTH,
    CallContext,
    ConsultationDetails,
    ConsultationState,
    SubmissionWindow,
    code_unit_length,
)
from src.domain.models.consultation_submission import DiversityMetric, Submission
from src.domain.services.diversity_aggregator import DiversityAggregator
from src.domain.services.submission_registry import SubmissionRegistry
from src.domain.services.voting_ledger import VotingLedger

logger = get_logger(__name__)

# Schema version of export_state() payloads
STATE_SCHEMA_VERSION: int = 1


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class ConsultationLifecycleManager:
    """Single consultation instance and its current activation.

    Example:
        >>> manager = ConsultationLifecycleManager(creator="creator")
        >>> ctx = CallContext(caller="creator", current_height=0)
        >>> manager.initialize(ctx, 1, "Topic", "Description", 100, 500)
        >>> manager.submit(CallContext("alice", 10), digest, ["region:EU"])
        >>> manager.cast_vote(CallContext("bob", 20), "alice", 3)
    """

    def __init__(
        self,
        creator: str,
        max_submissions: int = DEFAULT_MAX_SUBMISSIONS,
    ) -> None:
        """Initialize an uninitialized consultation.

        Args:
            creator: Identity allowed to initialize, close and fund.
            max_submissions: Submission cap applied to each activation.

        Raises:
            ValueError: If creator is empty or max_submissions is not positive.
        """
        if not creator:
            raise ValueError("creator must be a non-empty identity")
        if max_submissions < 1:
            raise ValueError(f"max_submissions must be positive, got {max_submissions}")

        self._creator = creator
        self._max_submissions = max_submissions
        self._consultation_id = 0
        self._topic = ""
        self._description = ""
        self._deadline = 0
        self._reward_pool = 0
        self._state = ConsultationState.UNINITIALIZED
        self._reset_activation()

    def _reset_activation(self) -> None:
        self._aggregator = DiversityAggregator()
        self._registry = SubmissionRegistry(
            self._aggregator, max_submissions=self._max_submissions
        )
        self._ledger = VotingLedger(self._registry)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def creator(self) -> str:
        return self._creator

    @property
    def state(self) -> ConsultationState:
        return self._state

    @property
    def is_active(self) -> bool:
        return self._state is ConsultationState.ACTIVE

    # =========================================================================
    # Creator-only operations
    # =========================================================================

    def initialize(
        self,
        ctx: CallContext,
        consultation_id: int,
        topic: str,
        description: str,
        deadline: int,
        reward_pool: int,
    ) -> ConsultationDetails:
        """Open a new activation.

        Args:
            ctx: Caller identity and current height.
            consultation_id: Identifier for this activation.
            topic: Topic, 1..200 UTF-16 code units.
            description: Description, 1..1000 UTF-16 code units.
            deadline: Logical height at which the window closes.
            reward_pool: Initial reward pool, positive.

        Returns:
            Details of the new activation.

        Raises:
            NotAuthorizedError: Caller is not the creator.
            AlreadyActiveError: An activation is live.
            InvalidTopicError: Topic empty or too long.
            InvalidDescriptionError: Description empty or too long.
            InvalidDeadlineError: Deadline not after the current height.
            InvalidRewardPoolError: Reward pool not positive.
        """
        self._require_creator(ctx)
        if self.is_active:
            raise AlreadyActiveError(self._consultation_id)
        if (
            not isinstance(topic, str)
            or not 1 <= code_unit_length(topic) <= MAX_TOPIC_LENGTH
        ):
            raise InvalidTopicError(
                code_unit_length(topic) if isinstance(topic, str) else 0,
                MAX_TOPIC_LENGTH,
            )
        if (
            not isinstance(description, str)
            or not 1 <= code_unit_length(description) <= MAX_DESCRIPTION_LENGTH
        ):
            raise InvalidDescriptionError(
                (
                    code_unit_length(description)
                    if isinstance(description, str)
                    else 0
                ),
                MAX_DESCRIPTION_LENGTH,
            )
        if not _is_int(deadline) or deadline <= ctx.current_height:
            raise InvalidDeadlineError(deadline, ctx.current_height)
        if not _is_int(reward_pool) or reward_pool <= 0:
            raise InvalidRewardPoolError(reward_pool)

        self._consultation_id = consultation_id
        self._topic = topic
        self._description = description
        self._deadline = deadline
        self._reward_pool = reward_pool
        self._reset_activation()
        self._state = ConsultationState.ACTIVE

        logger.info(
            "consultation_initialized",
            consultation_id=consultation_id,
            deadline=deadline,
            reward_pool=reward_pool,
            current_height=ctx.current_height,
        )
        return self.get_details()

    def close(self, ctx: CallContext) -> ConsultationDetails:
        """Close the live activation permanently.

        Raises:
            NotAuthorizedError: Caller is not the creator.
            NotActiveError: No activation is live.
        """
        self._require_creator(ctx)
        if not self.is_active:
            raise NotActiveError(self._state.value)

        self._state = ConsultationState.CLOSED
        logger.info(
            "consultation_closed",
            consultation_id=self._consultation_id,
            submission_count=len(self._registry),
            current_height=ctx.current_height,
        )
        return self.get_details()

    def update_reward_pool(self, ctx: CallContext, new_pool: int) -> ConsultationDetails:
        """Raise the reward pool of the live activation.

        The pool may only increase. Passing the deadline does not block
        funding; only close() does.

        Raises:
            NotAuthorizedError: Caller is not the creator.
            ConsultationClosedError: No activation is live.
            InvalidRewardPoolUpdateError: new_pool not greater than current.
        """
        self._require_creator(ctx)
        if not self.is_active:
            raise ConsultationClosedError(
                "inactive", ctx.current_height, self._deadline
            )
        if not _is_int(new_pool) or new_pool <= self._reward_pool:
            raise InvalidRewardPoolUpdateError(new_pool, self._reward_pool)

        previous = self._reward_pool
        self._reward_pool = new_pool
        logger.info(
            "reward_pool_updated",
            consultation_id=self._consultation_id,
            previous_pool=previous,
            new_pool=new_pool,
        )
        return self.get_details()

    # =========================================================================
    # Participant operations
    # =========================================================================

    def submit(
        self,
        ctx: CallContext,
        input_digest: bytes,
        category_tags: Sequence[str],
    ) -> Submission:
        """Record the caller's submission.

        Raises:
            ConsultationClosedError: Window is not OPEN.
            AlreadySubmittedError, InvalidDigestError, InvalidCategoryTagsError,
            DuplicateDigestError, SubmissionCapExceededError: see SubmissionRegistry.
        """
        self._require_open(ctx)
        return self._registry.register(
            owner=ctx.caller,
            input_digest=input_digest,
            category_tags=category_tags,
            submitted_at=ctx.current_height,
        )

    def cast_vote(self, ctx: CallContext, submission_owner: str, value: int) -> Submission:
        """Record the caller's vote on another participant's submission.

        Returns:
            The scored submission with its updated tally.

        Raises:
            ConsultationClosedError: Window is not OPEN.
            SubmissionNotFoundError, SelfVoteNotAllowedError,
            VoteAlreadyCastError, InvalidVoteValueError: see VotingLedger.
        """
        self._require_open(ctx)
        return self._ledger.cast(
            submission_owner=submission_owner,
            voter=ctx.caller,
            value=value,
            cast_at=ctx.current_height,
        )

    # =========================================================================
    # Reads (never fail)
    # =========================================================================

    def get_details(self) -> ConsultationDetails:
        return ConsultationDetails(
            consultation_id=self._consultation_id,
            creator=self._creator,
            topic=self._topic,
            description=self._description,
            deadline=self._deadline,
            is_active=self.is_active,
            reward_pool=self._reward_pool,
            submission_count=len(self._registry),
            max_submissions=self._registry.max_submissions,
            state=self._state,
        )

    def get_submission(self, identity: str) -> Submission | None:
        return self._registry.get(identity)

    def get_vote(self, submission_owner: str, voter: str) -> int:
        return self._ledger.get_value(submission_owner, voter)

    def get_metric(self, tag: str) -> int:
        return self._aggregator.get_metric(tag)

    def get_metrics(self) -> list[DiversityMetric]:
        return self._aggregator.metrics()

    def window_at(self, current_height: int) -> SubmissionWindow:
        """Classify whether mutations are accepted at a given height."""
        if self._state is ConsultationState.UNINITIALIZED:
            return SubmissionWindow.NOT_OPEN
        if self._state is ConsultationState.CLOSED:
            return SubmissionWindow.CLOSED
        if current_height >= self._deadline:
            return SubmissionWindow.EXPIRED
        return SubmissionWindow.OPEN

    # =========================================================================
    # Guards
    # =========================================================================

    def _require_creator(self, ctx: CallContext) -> None:
        if ctx.caller != self._creator:
            raise NotAuthorizedError(ctx.caller, self._creator)

    def _require_open(self, ctx: CallContext) -> None:
        window = self.window_at(ctx.current_height)
        if window is SubmissionWindow.OPEN:
            return
        reason = "deadline_passed" if window is SubmissionWindow.EXPIRED else "inactive"
        raise ConsultationClosedError(reason, ctx.current_height, self._deadline)

    # =========================================================================
    # Snapshot / replay
    # =========================================================================

    def export_state(self) -> dict[str, Any]:
        """Export the full state for the host's system of record.

        Returns:
            JSON-compatible dictionary accepted by from_state().
        """
        return {
            "schema_version": STATE_SCHEMA_VERSION,
            "creator": self._creator,
            "max_submissions": self._max_submissions,
            "consultation_id": self._consultation_id,
            "topic": self._topic,
            "description": self._description,
            "deadline": self._deadline,
            "reward_pool": self._reward_pool,
            "state": self._state.value,
            "registry": self._registry.to_dict(),
            "votes": self._ledger.to_dict(),
            "diversity_metrics": self._aggregator.to_dict(),
        }

    @classmethod
    def from_state(cls, data: dict[str, Any]) -> ConsultationLifecycleManager:
        """Rebuild a manager from export_state() output.

        Raises:
            ValueError: If the schema version is unsupported.
        """
        version = data.get("schema_version")
        if version != STATE_SCHEMA_VERSION:
            raise ValueError(f"Unsupported consultation state schema: {version}")

        manager = cls(creator=data["creator"], max_submissions=data["max_submissions"])
        manager._consultation_id = data["consultation_id"]
        manager._topic = data["topic"]
        manager._description = data["description"]
        manager._deadline = data["deadline"]
        manager._reward_pool = data["reward_pool"]
        manager._state = ConsultationState(data["state"])
        manager._aggregator = DiversityAggregator.from_dict(data["diversity_metrics"])
        manager._registry = SubmissionRegistry.from_dict(
            data["registry"], manager._aggregator
        )
        manager._ledger = VotingLedger.from_dict(data["votes"], manager._registry)
        return manager
