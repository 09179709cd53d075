"""Consultation service implementation.

Host-facing adapter around ConsultationLifecycleManager. For every call
the service:

1. Reads the current logical height from the injected clock
2. Builds an explicit CallContext (caller identity + height); an empty
   caller is rejected as NotAuthorized
3. Runs the core operation, which validates fully before mutating
4. On success, publishes the matching event and persists a state snapshot
5. Returns a tagged ConsultationResult (success value or error code)

Domain errors never escape this service: every ConsultationError becomes
a failure result and is logged at warning level with its code. Errors
from the event emitter or the state repository are not domain outcomes
and propagate unchanged.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, TypeVar

from structlog import get_logger

from src.application.dtos.consultation import ConsultationResult
from src.domain.errors.consultation import ConsultationError, NotAuthorizedError
from src.domain.events.consultation import (
    ConsultationClosedEvent,
    ConsultationEvent,
    ConsultationInitializedEvent,
    InputSubmittedEvent,
    RewardPoolUpdatedEvent,
    VoteCastEvent,
)
from src.domain.models.consultation import CallContext, ConsultationDetails
from src.domain.models.consultation_submission import DiversityMetric, Submission
from src.domain.services.consultation_lifecycle import ConsultationLifecycleManager
from src.infrastructure.observability.logging import get_logger_for_consultation

if TYPE_CHECKING:
    from src.application.ports.consultation_event_emitter import (
        ConsultationEventEmitterProtocol,
    )
    from src.application.ports.consultation_state_repository import (
        ConsultationStateRepositoryProtocol,
    )
    from src.application.ports.logical_clock import LogicalClockProtocol

logger = get_logger(__name__)

T = TypeVar("T")


class ConsultationService:
    """Service exposing consultation operations to the host environment.

    Example:
        >>> service = ConsultationService(
        ...     manager=ConsultationLifecycleManager(creator="creator"),
        ...     clock=clock,
        ...     event_emitter=emitter,
        ...     state_repository=repo,
        ... )
        >>> result = await service.initialize(
        ...     caller="creator",
        ...     consultation_id=1,
        ...     topic="Transit plan",
        ...     description="Routes for 2027",
        ...     deadline=100,
        ...     reward_pool=500,
        ... )
        >>> assert result.ok
    """

    def __init__(
        self,
        manager: ConsultationLifecycleManager,
        clock: LogicalClockProtocol,
        event_emitter: ConsultationEventEmitterProtocol | None = None,
        state_repository: ConsultationStateRepositoryProtocol | None = None,
    ) -> None:
        """Initialize the consultation service.

        Args:
            manager: The consultation core.
            clock: Source of the current logical height.
            event_emitter: Optional publisher for accepted mutations.
                          If not provided, events are only logged.
            state_repository: Optional snapshot store (host system of record).
                             If not provided, state lives in memory only.
        """
        self._manager = manager
        self._clock = clock
        self._event_emitter = event_emitter
        self._state_repository = state_repository

    @classmethod
    async def from_repository(
        cls,
        creator: str,
        max_submissions: int,
        clock: LogicalClockProtocol,
        state_repository: ConsultationStateRepositoryProtocol,
        event_emitter: ConsultationEventEmitterProtocol | None = None,
    ) -> ConsultationService:
        """Build a service, restoring the latest snapshot if one exists.

        Args:
            creator: Creator identity for a fresh consultation.
            max_submissions: Submission cap for a fresh consultation.
            clock: Source of the current logical height.
            state_repository: Snapshot store to restore from and save to.
            event_emitter: Optional publisher for accepted mutations.

        Returns:
            A service over the restored (or a fresh) consultation.
        """
        state = await state_repository.load()
        if state is None:
            manager = ConsultationLifecycleManager(
                creator=creator, max_submissions=max_submissions
            )
            logger.info("consultation_state_created", creator=creator)
        else:
            manager = ConsultationLifecycleManager.from_state(state)
            logger.info(
                "consultation_state_restored",
                consultation_id=state.get("consultation_id"),
                state=state.get("state"),
            )
        return cls(
            manager=manager,
            clock=clock,
            event_emitter=event_emitter,
            state_repository=state_repository,
        )

    @property
    def manager(self) -> ConsultationLifecycleManager:
        return self._manager

    # =========================================================================
    # Mutations
    # =========================================================================

    async def initialize(
        self,
        caller: str,
        consultation_id: int,
        topic: str,
        description: str,
        deadline: int,
        reward_pool: int,
    ) -> ConsultationResult[bool]:
        """Open a new activation (creator only)."""
        return await self._mutate(
            "initialize",
            caller,
            lambda ctx: self._manager.initialize(
                ctx, consultation_id, topic, description, deadline, reward_pool
            ),
            lambda ctx, details: ConsultationInitializedEvent(
                consultation_id=details.consultation_id,
                creator=details.creator,
                topic=details.topic,
                deadline=details.deadline,
                reward_pool=details.reward_pool,
                height=ctx.current_height,
            ),
        )

    async def close(self, caller: str) -> ConsultationResult[bool]:
        """Close the live activation (creator only)."""
        return await self._mutate(
            "close",
            caller,
            lambda ctx: self._manager.close(ctx),
            lambda ctx, details: ConsultationClosedEvent(
                consultation_id=details.consultation_id,
                submission_count=details.submission_count,
                height=ctx.current_height,
            ),
        )

    async def update_reward_pool(
        self, caller: str, new_pool: int
    ) -> ConsultationResult[bool]:
        """Raise the reward pool (creator only, strictly increasing)."""
        previous_pool = self._manager.get_details().reward_pool
        return await self._mutate(
            "update_reward_pool",
            caller,
            lambda ctx: self._manager.update_reward_pool(ctx, new_pool),
            lambda ctx, details: RewardPoolUpdatedEvent(
                consultation_id=details.consultation_id,
                previous_pool=previous_pool,
                new_pool=details.reward_pool,
                height=ctx.current_height,
            ),
        )

    async def submit(
        self,
        caller: str,
        input_digest: bytes,
        category_tags: Sequence[str],
    ) -> ConsultationResult[bool]:
        """Record the caller's content digest and category tags."""
        return await self._mutate(
            "submit",
            caller,
            lambda ctx: self._manager.submit(ctx, input_digest, category_tags),
            lambda ctx, submission: InputSubmittedEvent(
                consultation_id=self._manager.get_details().consultation_id,
                owner=submission.owner,
                input_digest=submission.input_digest.hex(),
                category_tags=submission.category_tags,
                submission_count=self._manager.get_details().submission_count,
                height=ctx.current_height,
            ),
        )

    async def cast_vote(
        self,
        caller: str,
        submission_owner: str,
        value: int,
    ) -> ConsultationResult[bool]:
        """Record the caller's vote on another participant's submission."""
        return await self._mutate(
            "cast_vote",
            caller,
            lambda ctx: self._manager.cast_vote(ctx, submission_owner, value),
            lambda ctx, submission: VoteCastEvent(
                consultation_id=self._manager.get_details().consultation_id,
                submission_owner=submission.owner,
                voter=ctx.caller,
                value=value,
                vote_count=submission.vote_count,
                quality_score=submission.quality_score,
                height=ctx.current_height,
            ),
        )

    # =========================================================================
    # Reads (always succeed)
    # =========================================================================

    def get_details(self) -> ConsultationResult[ConsultationDetails]:
        return ConsultationResult.success(self._manager.get_details())

    def get_submission(self, identity: str) -> ConsultationResult[Submission | None]:
        return ConsultationResult.success(self._manager.get_submission(identity))

    def get_vote(self, submission_owner: str, voter: str) -> ConsultationResult[int]:
        return ConsultationResult.success(
            self._manager.get_vote(submission_owner, voter)
        )

    def get_metric(self, tag: str) -> ConsultationResult[int]:
        return ConsultationResult.success(self._manager.get_metric(tag))

    def get_metrics(self) -> ConsultationResult[list[DiversityMetric]]:
        return ConsultationResult.success(self._manager.get_metrics())

    # =========================================================================
    # Internals
    # =========================================================================

    def _context(self, caller: str) -> CallContext:
        if not isinstance(caller, str) or not caller:
            raise NotAuthorizedError(str(caller), self._manager.creator)
        return CallContext(caller=caller, current_height=self._clock.current_height())

    async def _mutate(
        self,
        operation: str,
        caller: str,
        apply: Callable[[CallContext], T],
        make_event: Callable[[CallContext, T], ConsultationEvent],
    ) -> ConsultationResult[bool]:
        log = get_logger_for_consultation(
            self._manager.get_details().consultation_id
        ).bind(operation=operation, caller=caller)

        try:
            ctx = self._context(caller)
            log = log.bind(current_height=ctx.current_height)
            log.debug("consultation_call_started")
            outcome = apply(ctx)
        except ConsultationError as e:
            log.warning(
                "consultation_call_rejected",
                error_code=e.code.value,
                ledger_code=e.ledger_code,
                detail=str(e),
            )
            return ConsultationResult.failure(e)

        event = make_event(ctx, outcome)
        if self._event_emitter is not None:
            await self._event_emitter.emit(event)
        if self._state_repository is not None:
            await self._state_repository.save(self._manager.export_state())

        log.info("consultation_call_accepted", event_type=event.event_type)
        return ConsultationResult.success(True)
