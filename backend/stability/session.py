"""Evaluation sessions: edit indicators, submit once, keep the finished result."""
from __future__ import annotations

import uuid
from collections import OrderedDict
from enum import Enum
from typing import Optional, Tuple

from .aggregates import community_averages
from .classification import Band, classify
from .errors import SessionClosed, StoreUnavailable
from .indicators import Demographics, Indicator, IndicatorId, IndicatorSet, indicators_from_scores
from .logging_config import get_logger
from .results import Results, assemble_results
from .scoring import composite_score
from .store import EvaluationSubmission, SurveyStore, submission_from_row

log = get_logger(__name__)


class SessionState(str, Enum):
	EDITING = "editing"
	SUBMITTED = "submitted"
	FINALIZED = "finalized"


class EvaluationSession:
	def __init__(self, demographics: Optional[Demographics] = None) -> None:
		self.session_id: str = uuid.uuid4().hex
		self.state: SessionState = SessionState.EDITING
		self.indicators: IndicatorSet = IndicatorSet()
		self.demographics: Demographics = demographics or Demographics()
		self.results: Optional[Results] = None

	def _ensure_editing(self) -> None:
		if self.state is not SessionState.EDITING:
			raise SessionClosed(f"evaluation {self.session_id} was already submitted; start a new one")

	def set_score(self, indicator_id: IndicatorId | str, score: float) -> Indicator:
		self._ensure_editing()
		return self.indicators.set_score(indicator_id, score)

	def set_grade(self, indicator_id: IndicatorId | str, grade: str) -> Indicator:
		self._ensure_editing()
		return self.indicators.set_grade(indicator_id, grade)

	def set_demographics(self, demographics: Demographics) -> None:
		self._ensure_editing()
		self.demographics = demographics

	def preview(self) -> Tuple[float, Band]:
		score = composite_score(self.indicators.snapshot())
		return score, classify(score)

	def submit(self, store: Optional[SurveyStore]) -> Results:
		"""Score, persist and assemble the result.

		Scoring errors leave the session editable. Once scored, the session is
		submitted exactly once; a failing store only costs the community
		averages and is reported through ``Results.store_error``.
		"""
		self._ensure_editing()
		snapshot = self.indicators.snapshot()
		score = composite_score(snapshot)
		band = classify(score)
		self.state = SessionState.SUBMITTED

		submission_id: Optional[int] = None
		averages = None
		store_error: Optional[str] = None
		if store is None:
			store_error = "record store is not configured"
		else:
			try:
				submission_id = store.insert(EvaluationSubmission(
					demographics=self.demographics,
					scores={ind.id: ind.score for ind in snapshot},
					composite_score=score,
				))
				averages = community_averages(store.select_all(), own_score=score)
			except StoreUnavailable as e:
				log.warning("Evaluation %s scored without community averages: %s", self.session_id, e)
				store_error = str(e)

		self.results = assemble_results(
			score,
			band,
			snapshot,
			demographics=self.demographics,
			community_averages=averages,
			submission_id=submission_id,
			store_error=store_error,
		)
		self.state = SessionState.FINALIZED
		# a partial result is rebuilt from the store on the next lookup
		if submission_id is not None and store_error is None:
			remember_results(self.results)
		log.info("Evaluation %s finalized: %.1f (%s)", self.session_id, score, band.label)
		return self.results


MAX_SESSIONS = 10_000

_sessions: "OrderedDict[str, EvaluationSession]" = OrderedDict()
_finalized: "OrderedDict[int, Results]" = OrderedDict()


def _bounded_put(cache: OrderedDict, key, value) -> None:
	cache[key] = value
	cache.move_to_end(key)
	while len(cache) > MAX_SESSIONS:
		cache.popitem(last=False)


def start_session(demographics: Optional[Demographics] = None) -> EvaluationSession:
	session = EvaluationSession(demographics)
	_bounded_put(_sessions, session.session_id, session)
	return session


def get_session(session_id: str) -> Optional[EvaluationSession]:
	return _sessions.get(session_id)


def remember_results(results: Results) -> None:
	_bounded_put(_finalized, results.submission_id, results)


def rebuild_results(store: SurveyStore, submission_id: int) -> Optional[Results]:
	"""Reassemble a result from its stored record, with fresh community averages."""
	row = store.get(submission_id)
	if row is None:
		return None
	submission = submission_from_row(row)
	indicators = indicators_from_scores(submission.scores)
	averages = community_averages(store.select_all(), own_score=submission.composite_score)
	results = assemble_results(
		submission.composite_score,
		classify(submission.composite_score),
		indicators,
		demographics=submission.demographics,
		community_averages=averages,
		submission_id=submission_id,
	)
	remember_results(results)
	return results


def lookup_results(store: SurveyStore, submission_id: int) -> Optional[Results]:
	cached = _finalized.get(submission_id)
	if cached is not None:
		return cached
	return rebuild_results(store, submission_id)


def reset() -> None:
	_sessions.clear()
	_finalized.clear()
