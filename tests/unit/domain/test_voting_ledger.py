"""Unit tests for VotingLedger.

Tests vote check order, tally updates and vote immutability.
"""

import pytest

from src.domain.errors import (
    InvalidVoteValueError,
    SelfVoteNotAllowedError,
    SubmissionNotFoundError,
    VoteAlreadyCastError,
)
from src.domain.services.diversity_aggregator import DiversityAggregator
from src.domain.services.submission_registry import SubmissionRegistry
from src.domain.services.voting_ledger import VotingLedger
from tests.helpers.consultation_data import digest_of


@pytest.fixture
def registry() -> SubmissionRegistry:
    registry = SubmissionRegistry(DiversityAggregator())
    registry.register("alice", digest_of(1), ["region:EU"], 10)
    return registry


@pytest.fixture
def ledger(registry: SubmissionRegistry) -> VotingLedger:
    return VotingLedger(registry)


class TestCast:
    """Tests for VotingLedger.cast."""

    def test_vote_updates_tally(
        self, ledger: VotingLedger, registry: SubmissionRegistry
    ) -> None:
        """An accepted vote increments count and score."""
        updated = ledger.cast("alice", "bob", 3, 20)

        assert updated.vote_count == 1
        assert updated.quality_score == 3
        assert registry.get("alice") == updated
        assert ledger.get_value("alice", "bob") == 3

    def test_tally_sums_votes(self, ledger: VotingLedger) -> None:
        """quality_score is the sum of accepted values."""
        ledger.cast("alice", "bob", 3, 20)
        updated = ledger.cast("alice", "carol", 5, 21)

        assert updated.vote_count == 2
        assert updated.quality_score == 8
        assert [v.voter for v in ledger.votes_for("alice")] == ["bob", "carol"]

    def test_missing_submission(self, ledger: VotingLedger) -> None:
        """Votes need a target submission."""
        with pytest.raises(SubmissionNotFoundError):
            ledger.cast("nobody", "bob", 3, 20)

    def test_missing_submission_checked_first(self, ledger: VotingLedger) -> None:
        """A missing target wins over a bad value."""
        with pytest.raises(SubmissionNotFoundError):
            ledger.cast("nobody", "nobody", 9, 20)

    def test_self_vote(self, ledger: VotingLedger) -> None:
        """Owners may not score their own submission."""
        with pytest.raises(SelfVoteNotAllowedError):
            ledger.cast("alice", "alice", 5, 20)

    def test_self_vote_checked_before_value(self, ledger: VotingLedger) -> None:
        """Self-vote wins over an out-of-range value."""
        with pytest.raises(SelfVoteNotAllowedError):
            ledger.cast("alice", "alice", 0, 20)

    def test_second_vote_rejected(self, ledger: VotingLedger) -> None:
        """Votes are never updated."""
        ledger.cast("alice", "bob", 3, 20)

        with pytest.raises(VoteAlreadyCastError) as exc_info:
            ledger.cast("alice", "bob", 5, 21)

        assert exc_info.value.existing_value == 3
        assert ledger.get_value("alice", "bob") == 3

    def test_duplicate_checked_before_value(self, ledger: VotingLedger) -> None:
        """An existing vote wins over an invalid new value."""
        ledger.cast("alice", "bob", 3, 20)

        with pytest.raises(VoteAlreadyCastError):
            ledger.cast("alice", "bob", 6, 21)

    @pytest.mark.parametrize("value", [0, 6, -1, True, 2.5, "3"])
    def test_invalid_values(self, ledger: VotingLedger, value: object) -> None:
        """Values are integers from 1 to 5."""
        with pytest.raises(InvalidVoteValueError):
            ledger.cast("alice", "bob", value, 20)  # type: ignore[arg-type]

        assert len(ledger) == 0

    @pytest.mark.parametrize("value", [1, 5])
    def test_boundary_values(self, ledger: VotingLedger, value: int) -> None:
        """1 and 5 are accepted."""
        assert ledger.cast("alice", "bob", value, 20).quality_score == value


class TestReads:
    """Tests for ledger reads."""

    def test_absent_vote_reads_zero(self, ledger: VotingLedger) -> None:
        """No vote reads as 0."""
        assert ledger.get_value("alice", "bob") == 0
        assert ledger.get("alice", "bob") is None

    def test_dict_conversion(
        self, ledger: VotingLedger, registry: SubmissionRegistry
    ) -> None:
        """Restored ledgers keep votes and block repeats."""
        ledger.cast("alice", "bob", 4, 20)

        restored = VotingLedger.from_dict(ledger.to_dict(), registry)

        assert restored.get_value("alice", "bob") == 4
        with pytest.raises(VoteAlreadyCastError):
            restored.cast("alice", "bob", 4, 21)
