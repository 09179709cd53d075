"""Unit tests for DiversityAggregator.

Category tags are counted per occurrence across accepted submissions.
"""

from src.domain.models.consultation_submission import DiversityMetric
from src.domain.services.diversity_aggregator import DiversityAggregator


class TestDiversityAggregator:
    """Tests for DiversityAggregator."""

    def test_unknown_tag_is_zero(self) -> None:
        """Tags never seen report zero."""
        assert DiversityAggregator().get_metric("region:EU") == 0

    def test_record_counts_each_tag(self) -> None:
        """Each recorded tag increments its count."""
        aggregator = DiversityAggregator()

        aggregator.record(["region:EU", "topic:transit"])
        aggregator.record(["region:EU"])

        assert aggregator.get_metric("region:EU") == 2
        assert aggregator.get_metric("topic:transit") == 1

    def test_duplicate_tags_counted_per_occurrence(self) -> None:
        """A tag repeated within one submission counts twice."""
        aggregator = DiversityAggregator()

        aggregator.record(["a", "a"])

        assert aggregator.get_metric("a") == 2

    def test_empty_tag_list_changes_nothing(self) -> None:
        """Submissions without tags leave metrics untouched."""
        aggregator = DiversityAggregator()

        aggregator.record([])

        assert aggregator.metrics() == []

    def test_metrics_sorted_by_tag(self) -> None:
        """metrics() lists every tag in sorted order."""
        aggregator = DiversityAggregator()
        aggregator.record(["b", "a", "b"])

        assert aggregator.metrics() == [DiversityMetric("a", 1), DiversityMetric("b", 2)]

    def test_dict_conversion(self) -> None:
        """to_dict/from_dict preserve counts."""
        aggregator = DiversityAggregator()
        aggregator.record(["x", "y", "x"])

        restored = DiversityAggregator.from_dict(aggregator.to_dict())

        assert restored.metrics() == aggregator.metrics()
