"""Unit tests for ConsultationLifecycleManager.

Tests the consultation state machine, the creator-only operations and
their check order, the deadline gate on submissions and votes, and
snapshot export/restore.
"""

import pytest

from src.domain.errors import (
    AlreadyActiveError,
    AlreadySubmittedError,
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
    CallContext,
    ConsultationState,
    SubmissionWindow,
)
from src.domain.services.consultation_lifecycle import ConsultationLifecycleManager
from tests.helpers.consultation_data import ALICE, BOB, CAROL, CREATOR, digest_of


def _init(manager: ConsultationLifecycleManager, height: int = 0, **overrides):
    args = {
        "consultation_id": 1,
        "topic": "Topic",
        "description": "Description",
        "deadline": 100,
        "reward_pool": 500,
    }
    args.update(overrides)
    return manager.initialize(CallContext(CREATOR, height), **args)


class TestConstruction:
    """Tests for manager construction."""

    def test_starts_uninitialized(self, manager: ConsultationLifecycleManager) -> None:
        """A new consultation is uninitialized with zeroed metadata."""
        details = manager.get_details()

        assert manager.state == ConsultationState.UNINITIALIZED
        assert details.is_active is False
        assert details.creator == CREATOR
        assert details.submission_count == 0
        assert details.reward_pool == 0

    def test_empty_creator_rejected(self) -> None:
        """A consultation needs a creator."""
        with pytest.raises(ValueError, match="creator"):
            ConsultationLifecycleManager(creator="")

    def test_non_positive_cap_rejected(self) -> None:
        """The submission cap is positive."""
        with pytest.raises(ValueError, match="max_submissions"):
            ConsultationLifecycleManager(creator=CREATOR, max_submissions=0)


class TestInitialize:
    """Tests for initialize()."""

    def test_initialize_activates(self, manager: ConsultationLifecycleManager) -> None:
        """Successful initialize sets every metadata field."""
        details = _init(manager, topic="Transit", deadline=100, reward_pool=500)

        assert manager.state == ConsultationState.ACTIVE
        assert details.is_active is True
        assert details.topic == "Transit"
        assert details.deadline == 100
        assert details.reward_pool == 500
        assert details.submission_count == 0

    def test_non_creator_rejected(self, manager: ConsultationLifecycleManager) -> None:
        """Only the creator initializes."""
        with pytest.raises(NotAuthorizedError):
            manager.initialize(CallContext(ALICE, 0), 1, "Topic", "Description", 100, 500)

    def test_authorization_checked_first(
        self, manager: ConsultationLifecycleManager
    ) -> None:
        """Non-creator with bad inputs still gets NotAuthorized."""
        with pytest.raises(NotAuthorizedError):
            manager.initialize(CallContext(ALICE, 50), 1, "", "", 10, 0)

    def test_already_active(self, active_manager: ConsultationLifecycleManager) -> None:
        """A live activation blocks a second initialize."""
        with pytest.raises(AlreadyActiveError):
            _init(active_manager)

    def test_already_active_checked_before_inputs(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """AlreadyActive wins over an invalid topic."""
        with pytest.raises(AlreadyActiveError):
            _init(active_manager, topic="")

    def test_already_active_after_deadline(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """An expired but unclosed activation is still active."""
        with pytest.raises(AlreadyActiveError):
            _init(active_manager, height=150, deadline=300)

    @pytest.mark.parametrize("topic", ["", "t" * 201])
    def test_invalid_topic(
        self, manager: ConsultationLifecycleManager, topic: str
    ) -> None:
        """Topic is 1..200 characters."""
        with pytest.raises(InvalidTopicError):
            _init(manager, topic=topic)

    def test_topic_at_limit(self, manager: ConsultationLifecycleManager) -> None:
        """A 200-character topic is accepted."""
        assert _init(manager, topic="t" * 200).topic == "t" * 200

    def test_topic_counts_utf16_code_units(
        self, manager: ConsultationLifecycleManager
    ) -> None:
        """Emoji outside the BMP count twice toward the topic limit."""
        with pytest.raises(InvalidTopicError) as exc_info:
            _init(manager, topic="\U0001F600" * 101)

        assert exc_info.value.length == 202
        assert _init(manager, topic="\U0001F600" * 100).is_active is True

    def test_description_counts_utf16_code_units(
        self, manager: ConsultationLifecycleManager
    ) -> None:
        """501 emoji exceed the 1000 code unit description limit."""
        with pytest.raises(InvalidDescriptionError):
            _init(manager, description="\U0001F600" * 501)

    def test_topic_checked_before_description(
        self, manager: ConsultationLifecycleManager
    ) -> None:
        """Topic is validated before description."""
        with pytest.raises(InvalidTopicError):
            _init(manager, topic="", description="")

    @pytest.mark.parametrize("description", ["", "d" * 1001])
    def test_invalid_description(
        self, manager: ConsultationLifecycleManager, description: str
    ) -> None:
        """Description is 1..1000 characters."""
        with pytest.raises(InvalidDescriptionError):
            _init(manager, description=description)

    @pytest.mark.parametrize("deadline", [10, 9])
    def test_deadline_must_be_in_future(
        self, manager: ConsultationLifecycleManager, deadline: int
    ) -> None:
        """Deadline strictly greater than the current height."""
        with pytest.raises(InvalidDeadlineError):
            _init(manager, height=10, deadline=deadline)

    def test_deadline_checked_before_pool(
        self, manager: ConsultationLifecycleManager
    ) -> None:
        """Deadline is validated before the reward pool."""
        with pytest.raises(InvalidDeadlineError):
            _init(manager, height=10, deadline=5, reward_pool=0)

    @pytest.mark.parametrize("pool", [0, -5])
    def test_invalid_reward_pool(
        self, manager: ConsultationLifecycleManager, pool: int
    ) -> None:
        """Reward pool is positive."""
        with pytest.raises(InvalidRewardPoolError):
            _init(manager, reward_pool=pool)

    def test_failed_initialize_changes_nothing(
        self, manager: ConsultationLifecycleManager
    ) -> None:
        """A rejected initialize leaves the consultation untouched."""
        with pytest.raises(InvalidRewardPoolError):
            _init(manager, topic="New", reward_pool=0)

        assert manager.state == ConsultationState.UNINITIALIZED
        assert manager.get_details().topic == ""

    def test_reinitialize_after_close_resets_activation(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """A new activation starts with no submissions, votes or metrics."""
        active_manager.submit(CallContext(ALICE, 10), digest_of(1), ["region:EU"])
        active_manager.cast_vote(CallContext(BOB, 20), ALICE, 4)
        active_manager.close(CallContext(CREATOR, 30))

        details = _init(active_manager, height=40, consultation_id=2, deadline=200)

        assert details.consultation_id == 2
        assert details.submission_count == 0
        assert active_manager.get_submission(ALICE) is None
        assert active_manager.get_vote(ALICE, BOB) == 0
        assert active_manager.get_metric("region:EU") == 0
        active_manager.submit(CallContext(ALICE, 50), digest_of(1), [])


class TestClose:
    """Tests for close()."""

    def test_close(self, active_manager: ConsultationLifecycleManager) -> None:
        """Creator closes the live activation."""
        details = active_manager.close(CallContext(CREATOR, 10))

        assert details.is_active is False
        assert active_manager.state == ConsultationState.CLOSED

    def test_non_creator_close(self, active_manager: ConsultationLifecycleManager) -> None:
        """Only the creator closes."""
        with pytest.raises(NotAuthorizedError):
            active_manager.close(CallContext(ALICE, 10))

        assert active_manager.is_active is True

    def test_close_uninitialized(self, manager: ConsultationLifecycleManager) -> None:
        """Nothing to close before initialize."""
        with pytest.raises(NotActiveError):
            manager.close(CallContext(CREATOR, 0))

    def test_close_twice(self, active_manager: ConsultationLifecycleManager) -> None:
        """A closed consultation cannot be closed again."""
        active_manager.close(CallContext(CREATOR, 10))

        with pytest.raises(NotActiveError):
            active_manager.close(CallContext(CREATOR, 11))

    def test_close_after_deadline(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """Expired activations can still be closed."""
        active_manager.close(CallContext(CREATOR, 500))

        assert active_manager.state == ConsultationState.CLOSED


class TestUpdateRewardPool:
    """Tests for update_reward_pool()."""

    def test_increase(self, active_manager: ConsultationLifecycleManager) -> None:
        """The pool can be raised."""
        details = active_manager.update_reward_pool(CallContext(CREATOR, 10), 1000)

        assert details.reward_pool == 1000

    @pytest.mark.parametrize("new_pool", [500, 400])
    def test_must_strictly_increase(
        self, active_manager: ConsultationLifecycleManager, new_pool: int
    ) -> None:
        """Equal or lower pools are rejected."""
        with pytest.raises(InvalidRewardPoolUpdateError):
            active_manager.update_reward_pool(CallContext(CREATOR, 10), new_pool)

        assert active_manager.get_details().reward_pool == 500

    def test_non_creator(self, active_manager: ConsultationLifecycleManager) -> None:
        """Only the creator funds."""
        with pytest.raises(NotAuthorizedError):
            active_manager.update_reward_pool(CallContext(ALICE, 10), 1000)

    def test_inactive(self, manager: ConsultationLifecycleManager) -> None:
        """Funding needs a live activation."""
        with pytest.raises(ConsultationClosedError) as exc_info:
            manager.update_reward_pool(CallContext(CREATOR, 0), 1000)

        assert exc_info.value.reason == "inactive"

    def test_allowed_after_deadline(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """The deadline gates submissions and votes, not funding."""
        details = active_manager.update_reward_pool(CallContext(CREATOR, 150), 900)

        assert details.reward_pool == 900


class TestSubmissionGate:
    """Tests for the window gate on submit() and cast_vote()."""

    def test_submit_before_initialize(
        self, manager: ConsultationLifecycleManager
    ) -> None:
        """Submissions need a live activation."""
        with pytest.raises(ConsultationClosedError) as exc_info:
            manager.submit(CallContext(ALICE, 0), digest_of(1), [])

        assert exc_info.value.reason == "inactive"

    def test_submit_at_deadline(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """The deadline height itself is already closed."""
        with pytest.raises(ConsultationClosedError) as exc_info:
            active_manager.submit(CallContext(ALICE, 100), digest_of(1), [])

        assert exc_info.value.reason == "deadline_passed"

    def test_submit_just_before_deadline(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """Height deadline - 1 is still open."""
        submission = active_manager.submit(CallContext(ALICE, 99), digest_of(1), [])

        assert submission.submitted_at == 99

    def test_closed_wins_over_invalid_input(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """The window gate runs before input validation."""
        with pytest.raises(ConsultationClosedError):
            active_manager.submit(CallContext(ALICE, 100), b"bad", ["x"] * 9)

    def test_vote_after_close(self, active_manager: ConsultationLifecycleManager) -> None:
        """Votes stop once the consultation closes."""
        active_manager.submit(CallContext(ALICE, 10), digest_of(1), [])
        active_manager.close(CallContext(CREATOR, 20))

        with pytest.raises(ConsultationClosedError):
            active_manager.cast_vote(CallContext(BOB, 21), ALICE, 3)

    def test_vote_after_deadline(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """Votes stop at the deadline."""
        active_manager.submit(CallContext(ALICE, 10), digest_of(1), [])

        with pytest.raises(ConsultationClosedError):
            active_manager.cast_vote(CallContext(BOB, 100), ALICE, 3)

    def test_submit_and_vote_update_reads(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """Accepted calls are visible through every read."""
        active_manager.submit(CallContext(ALICE, 10), digest_of(1), ["region:EU"])
        active_manager.submit(CallContext(BOB, 11), digest_of(2), ["region:EU", "x"])
        active_manager.cast_vote(CallContext(CAROL, 12), ALICE, 5)

        assert active_manager.get_details().submission_count == 2
        assert active_manager.get_submission(ALICE).quality_score == 5  # type: ignore[union-attr]
        assert active_manager.get_vote(ALICE, CAROL) == 5
        assert active_manager.get_metric("region:EU") == 2
        assert [m.tag for m in active_manager.get_metrics()] == ["region:EU", "x"]


class TestWindow:
    """Tests for window_at()."""

    def test_not_open_before_initialize(
        self, manager: ConsultationLifecycleManager
    ) -> None:
        assert manager.window_at(0) == SubmissionWindow.NOT_OPEN

    def test_open_and_expired(self, active_manager: ConsultationLifecycleManager) -> None:
        """OPEN before the deadline, EXPIRED at and after it."""
        assert active_manager.window_at(99) == SubmissionWindow.OPEN
        assert active_manager.window_at(100) == SubmissionWindow.EXPIRED
        assert active_manager.get_details().is_active is True

    def test_closed(self, active_manager: ConsultationLifecycleManager) -> None:
        active_manager.close(CallContext(CREATOR, 1))

        assert active_manager.window_at(5) == SubmissionWindow.CLOSED


class TestSnapshot:
    """Tests for export_state()/from_state()."""

    def test_restore_reproduces_state(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """A restored manager answers every read identically."""
        active_manager.submit(CallContext(ALICE, 10), digest_of(1), ["a", "b"])
        active_manager.cast_vote(CallContext(BOB, 11), ALICE, 4)

        restored = ConsultationLifecycleManager.from_state(active_manager.export_state())

        assert restored.get_details() == active_manager.get_details()
        assert restored.get_submission(ALICE) == active_manager.get_submission(ALICE)
        assert restored.get_vote(ALICE, BOB) == 4
        assert restored.get_metrics() == active_manager.get_metrics()
        assert restored.export_state() == active_manager.export_state()

    def test_restored_manager_enforces_uniqueness(
        self, active_manager: ConsultationLifecycleManager
    ) -> None:
        """Restored registries still reject repeats."""
        active_manager.submit(CallContext(ALICE, 10), digest_of(1), [])

        restored = ConsultationLifecycleManager.from_state(active_manager.export_state())

        with pytest.raises(AlreadySubmittedError):
            restored.submit(CallContext(ALICE, 11), digest_of(2), [])

    def test_unsupported_schema(self, manager: ConsultationLifecycleManager) -> None:
        """Unknown snapshot versions are refused."""
        state = manager.export_state()
        state["schema_version"] = 99

        with pytest.raises(ValueError, match="schema"):
            ConsultationLifecycleManager.from_state(state)
