"""
Tests for the evaluation session state machine.
"""

from unittest.mock import MagicMock

import pytest

from stability import session as registry
from stability.errors import SessionClosed, StoreUnavailable
from stability.indicators import AgeRange, Demographics, IndicatorId
from stability.session import EvaluationSession, SessionState, lookup_results, rebuild_results, start_session
from stability.store import SurveyStore


class TestLifecycle:
    """Editing -> Submitted -> Finalized, once."""

    def test_new_session_is_editing_with_defaults(self):
        s = EvaluationSession()
        assert s.state is SessionState.EDITING
        assert s.preview()[0] == pytest.approx(100.0)

    def test_submit_finalizes(self, db):
        s = EvaluationSession(Demographics(age_range=AgeRange.AGE_35_44))
        for ind in IndicatorId:
            s.set_score(ind, 50)
        results = s.submit(SurveyStore(db))
        assert s.state is SessionState.FINALIZED
        assert results.composite_score == pytest.approx(50.0)
        assert results.band.index == 3
        assert results.submission_id is not None
        assert results.community_averages.overall == pytest.approx(50.0)
        assert results.community_averages.respondents == 1
        assert results.store_error is None

    def test_no_edits_after_submit(self, db):
        s = EvaluationSession()
        s.submit(SurveyStore(db))
        with pytest.raises(SessionClosed):
            s.set_score("economy", 10)
        with pytest.raises(SessionClosed):
            s.set_grade("economy", "A")
        with pytest.raises(SessionClosed):
            s.submit(SurveyStore(db))

    def test_take_again_starts_fresh(self, db):
        first = start_session()
        first.set_score("social", 0)
        first.submit(SurveyStore(db))
        second = start_session()
        assert second.session_id != first.session_id
        assert second.indicators.get("social").score == 100

    def test_average_includes_other_respondents(self, db):
        store = SurveyStore(db)
        low = EvaluationSession()
        for ind in IndicatorId:
            low.set_score(ind, 10)
        low.submit(store)
        high = EvaluationSession()
        for ind in IndicatorId:
            high.set_score(ind, 90)
        results = high.submit(store)
        assert results.community_averages.overall == pytest.approx(50.0)
        assert results.community_averages.respondents == 2


class TestStoreDegradation:
    """A failing store never hides the respondent's own score."""

    def test_insert_failure(self):
        store = MagicMock(spec=SurveyStore)
        store.insert.side_effect = StoreUnavailable("could not save the submission")
        results = EvaluationSession().submit(store)
        assert results.composite_score == pytest.approx(100.0)
        assert results.band.index == 5
        assert results.community_averages is None
        assert results.submission_id is None
        assert results.store_error == "could not save the submission"

    def test_select_failure_keeps_submission_id(self):
        store = MagicMock(spec=SurveyStore)
        store.insert.return_value = 12
        store.select_all.side_effect = StoreUnavailable("could not read stored submissions")
        results = EvaluationSession().submit(store)
        assert results.submission_id == 12
        assert results.community_averages is None
        assert results.store_error

    def test_no_store(self):
        results = EvaluationSession().submit(None)
        assert results.store_error
        assert results.band.index == 5


class TestResultLookup:
    """Finished results are cached, and rebuilt from the store otherwise."""

    def test_cached_after_submit(self, db):
        store = SurveyStore(db)
        results = EvaluationSession().submit(store)
        assert lookup_results(store, results.submission_id) is results

    def test_rebuilt_after_restart(self, db):
        store = SurveyStore(db)
        s = EvaluationSession()
        s.set_grade("domestic", "A")
        original = s.submit(store)
        registry.reset()
        rebuilt = lookup_results(store, original.submission_id)
        assert rebuilt is not original
        assert rebuilt.composite_score == pytest.approx(original.composite_score)
        assert rebuilt.band == original.band
        assert [i.score for i in rebuilt.indicators] == [i.score for i in original.indicators]

    def test_partial_result_rebuilt_once_store_recovers(self, db):
        class FlakyStore(SurveyStore):
            reads_failing = True

            def select_all(self):
                if self.reads_failing:
                    raise StoreUnavailable("could not read stored submissions")
                return super().select_all()

        store = FlakyStore(db)
        partial = EvaluationSession().submit(store)
        assert partial.submission_id is not None
        assert partial.community_averages is None
        store.reads_failing = False
        recovered = lookup_results(store, partial.submission_id)
        assert recovered.community_averages is not None
        assert recovered.community_averages.overall == pytest.approx(100.0)
        assert recovered.store_error is None

    def test_unknown_submission(self, db):
        assert rebuild_results(SurveyStore(db), 404) is None
