"""Record store for survey submissions, backed by SQLAlchemy."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .aggregates import ScoreRecord
from .errors import StoreUnavailable
from .indicators import AgeRange, Demographics, IndicatorId, INDICATOR_DEFINITIONS, Region
from .logging_config import get_logger
from .models import SurveyResponse

log = get_logger(__name__)

_COLUMNS: Dict[IndicatorId, str] = {d.id: d.column for d in INDICATOR_DEFINITIONS}


@dataclass(frozen=True)
class EvaluationSubmission:
	demographics: Demographics
	scores: Dict[IndicatorId, float] = field(default_factory=dict)
	composite_score: float = 0.0


def _age(value: Optional[str]) -> Optional[AgeRange]:
	try:
		return AgeRange(value) if value else None
	except ValueError:
		return None


def _region(value: Optional[str]) -> Optional[Region]:
	try:
		return Region(value) if value else None
	except ValueError:
		return None


def submission_from_row(row: SurveyResponse) -> EvaluationSubmission:
	return EvaluationSubmission(
		demographics=Demographics(age_range=_age(row.age_range), region=_region(row.region)),
		scores={key: getattr(row, column) for key, column in _COLUMNS.items()},
		composite_score=row.instability_ratio,
	)


class SurveyStore:
	def __init__(self, db: Session) -> None:
		self.db = db

	def insert(self, submission: EvaluationSubmission) -> int:
		demo = submission.demographics
		row = SurveyResponse(
			age_range=demo.age_range.value if demo.age_range else None,
			region=demo.region.value if demo.region else None,
			instability_ratio=submission.composite_score,
		)
		for key, column in _COLUMNS.items():
			setattr(row, column, submission.scores.get(key))
		try:
			self.db.add(row)
			self.db.commit()
			self.db.refresh(row)
		except SQLAlchemyError as e:
			self.db.rollback()
			log.error("Insert into survey_responses failed: %s", e)
			raise StoreUnavailable("could not save the submission") from e
		log.info("Stored submission %s (composite %.1f)", row.id, submission.composite_score)
		return row.id

	def select_all(self) -> List[ScoreRecord]:
		stmt = select(SurveyResponse.instability_ratio, SurveyResponse.age_range, SurveyResponse.region)
		try:
			rows = self.db.execute(stmt).all()
		except SQLAlchemyError as e:
			self.db.rollback()
			log.error("Reading survey_responses failed: %s", e)
			raise StoreUnavailable("could not read stored submissions") from e
		return [
			ScoreRecord(composite_score=ratio, age_range=_age(age), region=_region(region))
			for ratio, age, region in rows
			if ratio is not None
		]

	def get(self, submission_id: int) -> Optional[SurveyResponse]:
		try:
			return self.db.get(SurveyResponse, submission_id)
		except SQLAlchemyError as e:
			self.db.rollback()
			log.error("Loading submission %s failed: %s", submission_id, e)
			raise StoreUnavailable("could not load the submission") from e

	def update_contact(self, submission_id: int, *, first_name: str, last_name: str, email: str) -> bool:
		"""Attach contact fields to an existing submission. Returns False when no row matches."""
		try:
			row = self.db.get(SurveyResponse, submission_id)
			if row is None:
				log.warning("No submission with id %s; contact update skipped", submission_id)
				return False
			row.first_name = first_name
			row.last_name = last_name
			row.email = email
			self.db.add(row)
			self.db.commit()
		except SQLAlchemyError as e:
			self.db.rollback()
			log.error("Updating contact fields for submission %s failed: %s", submission_id, e)
			raise StoreUnavailable("could not save contact information") from e
		log.info("Saved contact information for submission %s", submission_id)
		return True
