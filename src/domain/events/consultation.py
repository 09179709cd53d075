"""Consultation event payloads.

One event is published by the host after every accepted mutation:
- ConsultationInitializedEvent: A new activation opened
- ConsultationClosedEvent: The live activation was closed
- RewardPoolUpdatedEvent: The reward pool was raised
- InputSubmittedEvent: A participant's submission was recorded
- VoteCastEvent: A vote was recorded and folded into a tally

Every payload is immutable, serializes with schema_version, and exposes
signable_content() as canonical sorted-key JSON for witnessing.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar

# Schema version for consultation events
CONSULTATION_EVENT_SCHEMA_VERSION: str = "1.0.0"

# Event type constants
CONSULTATION_INITIALIZED_EVENT_TYPE: str = "consultation.initialized"
CONSULTATION_CLOSED_EVENT_TYPE: str = "consultation.closed"
REWARD_POOL_UPDATED_EVENT_TYPE: str = "consultation.reward_pool.updated"
INPUT_SUBMITTED_EVENT_TYPE: str = "consultation.input.submitted"
VOTE_CAST_EVENT_TYPE: str = "consultation.vote.cast"


class _ConsultationEvent(ABC):
    """Shared serialization for consultation events."""

    event_type: ClassVar[str]

    @abstractmethod
    def _payload(self) -> dict[str, Any]:
        """Return the event fields, without type or schema version."""

    def signable_content(self) -> bytes:
        """Return canonical UTF-8 JSON bytes with sorted keys."""
        return json.dumps(self._payload(), sort_keys=True).encode("utf-8")

    def to_dict(self) -> dict[str, Any]:
        """Convert payload to dict for event storage."""
        return {
            **self._payload(),
            "event_type": self.event_type,
            "schema_version": CONSULTATION_EVENT_SCHEMA_VERSION,
        }


@dataclass(frozen=True, eq=True)
class ConsultationInitializedEvent(_ConsultationEvent):
    """Payload emitted when initialize() is accepted."""

    event_type: ClassVar[str] = CONSULTATION_INITIALIZED_EVENT_TYPE

    consultation_id: int
    creator: str
    topic: str
    deadline: int
    reward_pool: int
    height: int

    def _payload(self) -> dict[str, Any]:
        return {
            "consultation_id": self.consultation_id,
            "creator": self.creator,
            "topic": self.topic,
            "deadline": self.deadline,
            "reward_pool": self.reward_pool,
            "height": self.height,
        }


@dataclass(frozen=True, eq=True)
class ConsultationClosedEvent(_ConsultationEvent):
    """Payload emitted when close() is accepted."""

    event_type: ClassVar[str] = CONSULTATION_CLOSED_EVENT_TYPE

    consultation_id: int
    submission_count: int
    height: int

    def _payload(self) -> dict[str, Any]:
        return {
            "consultation_id": self.consultation_id,
            "submission_count": self.submission_count,
            "height": self.height,
        }


@dataclass(frozen=True, eq=True)
class RewardPoolUpdatedEvent(_ConsultationEvent):
    """Payload emitted when update_reward_pool() is accepted."""

    event_type: ClassVar[str] = REWARD_POOL_UPDATED_EVENT_TYPE

    consultation_id: int
    previous_pool: int
    new_pool: int
    height: int

    def _payload(self) -> dict[str, Any]:
        return {
            "consultation_id": self.consultation_id,
            "previous_pool": self.previous_pool,
            "new_pool": self.new_pool,
            "height": self.height,
        }


@dataclass(frozen=True, eq=True)
class InputSubmittedEvent(_ConsultationEvent):
    """Payload emitted when submit() is accepted.

    Attributes:
        input_digest: Hex-encoded 32-byte digest.
    """

    event_type: ClassVar[str] = INPUT_SUBMITTED_EVENT_TYPE

    consultation_id: int
    owner: str
    input_digest: str
    category_tags: tuple[str, ...]
    submission_count: int
    height: int

    def _payload(self) -> dict[str, Any]:
        return {
            "consultation_id": self.consultation_id,
            "owner": self.owner,
            "input_digest": self.input_digest,
            "category_tags": list(self.category_tags),
            "submission_count": self.submission_count,
            "height": self.height,
        }


@dataclass(frozen=True, eq=True)
class VoteCastEvent(_ConsultationEvent):
    """Payload emitted when cast_vote() is accepted."""

    event_type: ClassVar[str] = VOTE_CAST_EVENT_TYPE

    consultation_id: int
    submission_owner: str
    voter: str
    value: int
    vote_count: int
    quality_score: int
    height: int

    def _payload(self) -> dict[str, Any]:
        return {
            "consultation_id": self.consultation_id,
            "submission_owner": self.submission_owner,
            "voter": self.voter,
            "value": self.value,
            "vote_count": self.vote_count,
            "quality_score": self.quality_score,
            "height": self.height,
        }


ConsultationEvent = (
    ConsultationInitializedEvent
    | ConsultationClosedEvent
    | RewardPoolUpdatedEvent
    | InputSubmittedEvent
    | VoteCastEvent
)
