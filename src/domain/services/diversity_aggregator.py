"""Diversity aggregator for category tag counts.

Pure accumulator: counts only grow, and only as a side effect of an
accepted submission. A tag repeated inside one submission's tag list is
counted once per occurrence.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from src.domain.models.consultation_submission import DiversityMetric


class DiversityAggregator:
    """Per-activation mapping from category tag to submission count."""

    def __init__(self) -> None:
        self._counts: Counter[str] = Counter()

    def record(self, tags: Iterable[str]) -> None:
        """Increment the counter of every tag occurrence."""
        for tag in tags:
            self._counts[tag] += 1

    def get_metric(self, tag: str) -> int:
        """Return the count for a tag, 0 if never seen."""
        return self._counts.get(tag, 0)

    def metrics(self) -> list[DiversityMetric]:
        """Return every counter, sorted by tag."""
        return [
            DiversityMetric(tag=tag, count=count)
            for tag, count in sorted(self._counts.items())
        ]

    def to_dict(self) -> dict[str, int]:
        return dict(self._counts)

    @classmethod
    def from_dict(cls, data: dict[str, int]) -> DiversityAggregator:
        aggregator = cls()
        aggregator._counts.update(data)
        return aggregator
