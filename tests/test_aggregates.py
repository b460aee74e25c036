"""
Tests for community averages.
"""

import itertools

import pytest

from stability.aggregates import ScoreRecord, community_averages, mean_score
from stability.indicators import AgeRange, Region


class TestMeanScore:
    """Arithmetic mean over stored composite scores."""

    def test_single_record_is_its_own_mean(self):
        assert mean_score([63.5]) == 63.5

    def test_empty_history_uses_own_score(self):
        assert mean_score([], own_score=42.0) == 42.0

    def test_empty_history_without_own_score(self):
        with pytest.raises(ValueError):
            mean_score([])

    def test_two_then_three(self):
        assert mean_score([10, 90]) == 50.0
        assert mean_score([10, 90, 50]) == 50.0

    def test_growing_history_matches_batch(self):
        """Recomputing after each new submission gives the batch mean."""
        history = []
        for score in [10, 90, 50]:
            history.append(score)
            latest = mean_score(history)
        assert latest == mean_score([50, 10, 90]) == 50.0

    def test_order_independent(self):
        scores = [12.5, 99.0, 33.3, 47.1, 0.0]
        expected = mean_score(scores)
        for perm in itertools.permutations(scores):
            assert mean_score(perm) == pytest.approx(expected)


class TestCommunityAverages:
    """Overall and per-bucket breakdowns."""

    def test_breakdowns(self):
        records = [
            ScoreRecord(10, AgeRange.AGE_18_24, Region.WEST),
            ScoreRecord(30, AgeRange.AGE_18_24, Region.MIDWEST),
            ScoreRecord(80, AgeRange.AGE_65_PLUS, None),
            ScoreRecord(40, None, Region.WEST),
        ]
        averages = community_averages(records)
        assert averages.overall == 40.0
        assert averages.respondents == 4
        assert averages.by_age == {AgeRange.AGE_18_24: 20.0, AgeRange.AGE_65_PLUS: 80.0}
        assert averages.by_region == {Region.WEST: 25.0, Region.MIDWEST: 30.0}

    def test_display_rounding_keeps_precision(self):
        averages = community_averages([ScoreRecord(10), ScoreRecord(10), ScoreRecord(11)])
        assert averages.overall == pytest.approx(31 / 3)
        assert averages.overall_display == 10.3

    def test_no_history(self):
        averages = community_averages([], own_score=70.0)
        assert averages.overall == 70.0
        assert averages.respondents == 1
        assert averages.by_age == {}
