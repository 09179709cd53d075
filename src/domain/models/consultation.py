"""Consultation domain models.

This module defines the consultation-level value types:
- CallContext: Caller identity and logical time supplied with every call
- ConsultationState: Stored lifecycle state (UNINITIALIZED/ACTIVE/CLOSED)
- SubmissionWindow: Derived acceptance window at a given height
- ConsultationDetails: Read-only snapshot of consultation metadata

Lifecycle:
    UNINITIALIZED --initialize--> ACTIVE --close--> CLOSED
    CLOSED --initialize--> ACTIVE

An ACTIVE consultation whose deadline has passed still reports
is_active=True, but its SubmissionWindow is EXPIRED and it accepts no
submissions or votes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

# Field limits
MAX_TOPIC_LENGTH: int = 200
MAX_DESCRIPTION_LENGTH: int = 1000

# Submission cap for one activation
DEFAULT_MAX_SUBMISSIONS: int = 1000


def code_unit_length(text: str) -> int:
    """Return the length of text in UTF-16 code units.

    Text limits are measured in code units, so a character outside the
    Basic Multilingual Plane (most emoji) counts as two.
    """
    return len(text.encode("utf-16-le", errors="surrogatepass")) // 2


@dataclass(frozen=True)
class CallContext:
    """Environment-provided inputs for a single call.

    The core never reads identity or time from anywhere else.

    Attributes:
        caller: Opaque, trusted caller identity.
        current_height: Logical time of the call (monotonic, host-supplied).
    """

    caller: str
    current_height: int

    def __post_init__(self) -> None:
        if not self.caller:
            raise ValueError("caller must be a non-empty identity")
        if self.current_height < 0:
            raise ValueError(
                f"current_height must be non-negative, got {self.current_height}"
            )


class ConsultationState(str, Enum):
    """Stored lifecycle state of the consultation."""

    UNINITIALIZED = "UNINITIALIZED"
    ACTIVE = "ACTIVE"
    CLOSED = "CLOSED"


class SubmissionWindow(str, Enum):
    """Whether submissions and votes are accepted at a given height.

    OPEN is the only window that accepts mutations. EXPIRED is the
    active-but-past-deadline case.
    """

    NOT_OPEN = "NOT_OPEN"
    OPEN = "OPEN"
    EXPIRED = "EXPIRED"
    CLOSED = "CLOSED"

    @property
    def accepts_mutations(self) -> bool:
        return self is SubmissionWindow.OPEN


@dataclass(frozen=True, eq=True)
class ConsultationDetails:
    """Snapshot of consultation metadata returned by get_details().

    Attributes:
        consultation_id: Identifier supplied at initialize (0 before).
        creator: Identity allowed to run creator-only actions.
        topic: Consultation topic.
        description: Consultation description.
        deadline: Logical height at which the window closes.
        is_active: True from initialize until close, even past the deadline.
        reward_pool: Current reward pool.
        submission_count: Accepted submissions in this activation.
        max_submissions: Submission cap for this activation.
        state: Stored lifecycle state.
    """

    consultation_id: int
    creator: str
    topic: str
    description: str
    deadline: int
    is_active: bool
    reward_pool: int
    submission_count: int
    max_submissions: int
    state: ConsultationState

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for API responses and events.

        Returns:
            Dictionary representation of the snapshot.
        """
        return {
            "consultation_id": self.consultation_id,
            "creator": self.creator,
            "topic": self.topic,
            "description": self.description,
            "deadline": self.deadline,
            "is_active": self.is_active,
            "reward_pool": self.reward_pool,
            "submission_count": self.submission_count,
            "max_submissions": self.max_submissions,
            "state": self.state.value,
        }
