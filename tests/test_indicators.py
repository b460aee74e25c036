"""
Tests for indicator definitions and the session indicator set.
"""

import math

import pytest

from stability.errors import InvalidInput, InvalidWeights, MissingIndicator
from stability.indicators import (
    INDICATOR_DEFINITIONS,
    IndicatorDefinition,
    IndicatorId,
    IndicatorSet,
    indicators_from_scores,
    validate_definitions,
)


class TestDefinitions:
    """The five fixed indicators."""

    def test_ids_are_the_closed_set(self):
        assert [d.id.value for d in INDICATOR_DEFINITIONS] == ["immigration", "economy", "foreign", "domestic", "social"]

    def test_weights_sum_to_one(self):
        assert math.isclose(sum(d.weight for d in INDICATOR_DEFINITIONS), 1.0)
        validate_definitions(INDICATOR_DEFINITIONS)

    def test_bad_weight_sum_rejected(self):
        defs = INDICATOR_DEFINITIONS[:-1] + (
            IndicatorDefinition(IndicatorId.SOCIAL, "Social", "", 0.5, "social_policy_rate"),
        )
        with pytest.raises(InvalidWeights):
            validate_definitions(defs)


class TestIndicatorSet:
    """Session-owned indicator state."""

    def test_defaults_to_worst_score(self):
        snapshot = IndicatorSet().snapshot()
        assert len(snapshot) == 5
        assert all(ind.score == 100 and ind.grade == "F" for ind in snapshot)

    def test_set_score_updates_derived_grade(self):
        indicators = IndicatorSet()
        updated = indicators.set_score("economy", 35)
        assert updated.score == 35
        assert updated.grade == "B"

    def test_set_grade_writes_anchor_score(self):
        indicators = IndicatorSet()
        updated = indicators.set_grade(IndicatorId.FOREIGN, "C")
        assert updated.score == 41
        assert updated.grade == "C"

    def test_last_write_wins(self):
        indicators = IndicatorSet()
        indicators.set_grade("social", "A")
        indicators.set_score("social", 77)
        assert indicators.get("social").score == 77
        assert indicators.get("social").grade == "D"

    def test_unknown_indicator(self):
        with pytest.raises(MissingIndicator):
            IndicatorSet().set_score("healthcare", 10)

    def test_invalid_score_leaves_state_unchanged(self):
        indicators = IndicatorSet()
        with pytest.raises(InvalidInput):
            indicators.set_score("domestic", 101)
        assert indicators.get("domestic").score == 100

    def test_snapshot_is_detached(self):
        indicators = IndicatorSet()
        before = indicators.snapshot()
        indicators.set_score("immigration", 0)
        assert before[0].score == 100


class TestFromScores:
    """Rebuilding indicators from stored scores."""

    def test_missing_score(self):
        scores = {i: 50.0 for i in IndicatorId}
        del scores[IndicatorId.DOMESTIC]
        with pytest.raises(MissingIndicator):
            indicators_from_scores(scores)

    def test_complete_scores(self):
        snapshot = indicators_from_scores({i: 10.0 for i in IndicatorId})
        assert [ind.score for ind in snapshot] == [10.0] * 5
