"""
Tests for result assembly.
"""

import dataclasses

import pytest

from stability.classification import classify
from stability.errors import IncompleteResult
from stability.indicators import Demographics, IndicatorSet
from stability.results import assemble_results


class TestAssembleResults:
    """Assembly is a constructor, not a computation."""

    def test_carries_inputs_unchanged(self):
        snapshot = IndicatorSet().snapshot()
        results = assemble_results(100.0, classify(100.0), snapshot, submission_id=7)
        assert results.composite_score == 100.0
        assert results.label == "Extreme Instability"
        assert results.indicators == snapshot
        assert results.submission_id == 7
        assert results.demographics == Demographics()
        assert results.community_averages is None

    def test_missing_score(self):
        with pytest.raises(IncompleteResult):
            assemble_results(None, classify(10), IndicatorSet().snapshot())

    def test_missing_band(self):
        with pytest.raises(IncompleteResult):
            assemble_results(10.0, None, IndicatorSet().snapshot())

    def test_immutable(self):
        results = assemble_results(10.0, classify(10), IndicatorSet().snapshot())
        with pytest.raises(dataclasses.FrozenInstanceError):
            results.composite_score = 20.0
