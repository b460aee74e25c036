"""Indicator definitions and the session-owned indicator state."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import InvalidInput, InvalidWeights, MissingIndicator
from .grades import grade_to_score, score_to_grade, validate_score


class IndicatorId(str, Enum):
	IMMIGRATION = "immigration"
	ECONOMY = "economy"
	FOREIGN = "foreign"
	DOMESTIC = "domestic"
	SOCIAL = "social"


class AgeRange(str, Enum):
	AGE_18_24 = "18-24"
	AGE_25_34 = "25-34"
	AGE_35_44 = "35-44"
	AGE_45_54 = "45-54"
	AGE_55_64 = "55-64"
	AGE_65_PLUS = "65+"


class Region(str, Enum):
	NORTHEAST = "northeast"
	SOUTHEAST = "southeast"
	MIDWEST = "midwest"
	SOUTHWEST = "southwest"
	WEST = "west"


@dataclass(frozen=True)
class Demographics:
	age_range: Optional[AgeRange] = None
	region: Optional[Region] = None


@dataclass(frozen=True)
class IndicatorDefinition:
	id: IndicatorId
	name: str
	description: str
	weight: float
	# Column holding this indicator's score in the survey_responses table
	column: str


@dataclass(frozen=True)
class Indicator:
	"""Immutable view of one indicator at a point in time."""

	id: IndicatorId
	name: str
	description: str
	weight: float
	score: float

	@property
	def grade(self) -> str:
		return score_to_grade(self.score)


DEFAULT_SCORE: float = 100.0

INDICATOR_DEFINITIONS: Tuple[IndicatorDefinition, ...] = (
	IndicatorDefinition(
		id=IndicatorId.IMMIGRATION,
		name="Immigration Policy - How the government handles immigrants in the U.S.",
		description="How would you grade the administration on Immigration Policy?",
		weight=0.20,
		column="immigration_policy_rate",
	),
	IndicatorDefinition(
		id=IndicatorId.ECONOMY,
		name="Economic Management - How the government manages the economy",
		description="How would you grade the administration on Economic Management?",
		weight=0.15,
		column="economic_management_rate",
	),
	IndicatorDefinition(
		id=IndicatorId.FOREIGN,
		name="Foreign Policy - How the U.S. interacts with other countries",
		description="How would you grade the administration on Foreign Policy?",
		weight=0.20,
		column="foreign_policy_rate",
	),
	IndicatorDefinition(
		id=IndicatorId.DOMESTIC,
		name="Domestic Policy - How the government acts within the U.S.",
		description="How would you grade the administration on Domestic Policy?",
		weight=0.25,
		column="domestic_policy_rate",
	),
	IndicatorDefinition(
		id=IndicatorId.SOCIAL,
		name="Social Policy - How the government ensures & promotes citizen's rights",
		description="How would you grade the administration on Social Policy?",
		weight=0.20,
		column="social_policy_rate",
	),
)

REQUIRED_INDICATORS: Tuple[IndicatorId, ...] = tuple(d.id for d in INDICATOR_DEFINITIONS)


def parse_indicator_id(value: str) -> IndicatorId:
	try:
		return IndicatorId(value)
	except ValueError:
		raise MissingIndicator(f"unknown indicator '{value}'") from None


def validate_definitions(definitions: Iterable[IndicatorDefinition], tolerance: float = 1e-6) -> None:
	defs = list(definitions)
	for d in defs:
		if not (0 < d.weight <= 1):
			raise InvalidWeights(f"weight for '{d.id.value}' must be in (0, 1], got {d.weight}")
	total = math.fsum(d.weight for d in defs)
	if abs(total - 1.0) > tolerance:
		raise InvalidWeights(f"indicator weights sum to {total}, expected 1.0")


class IndicatorSet:
	"""Mutable indicator scores owned by a single evaluation session.

	Edits are last-write-wins per indicator id. The grade is never stored;
	setting a grade writes that grade's anchor score.
	"""

	def __init__(self, definitions: Iterable[IndicatorDefinition] = INDICATOR_DEFINITIONS, default_score: float = DEFAULT_SCORE) -> None:
		self._definitions: Dict[IndicatorId, IndicatorDefinition] = {d.id: d for d in definitions}
		start = validate_score(default_score)
		self._scores: Dict[IndicatorId, float] = {i: start for i in self._definitions}

	def _require(self, indicator_id: IndicatorId | str) -> IndicatorId:
		key = indicator_id if isinstance(indicator_id, IndicatorId) else parse_indicator_id(indicator_id)
		if key not in self._definitions:
			raise MissingIndicator(f"indicator '{key.value}' is not part of this evaluation")
		return key

	def set_score(self, indicator_id: IndicatorId | str, score: float) -> Indicator:
		key = self._require(indicator_id)
		self._scores[key] = validate_score(score)
		return self.get(key)

	def set_grade(self, indicator_id: IndicatorId | str, grade: str) -> Indicator:
		key = self._require(indicator_id)
		self._scores[key] = float(grade_to_score(grade))
		return self.get(key)

	def get(self, indicator_id: IndicatorId | str) -> Indicator:
		key = self._require(indicator_id)
		d = self._definitions[key]
		return Indicator(id=d.id, name=d.name, description=d.description, weight=d.weight, score=self._scores[key])

	def snapshot(self) -> Tuple[Indicator, ...]:
		return tuple(self.get(key) for key in self._definitions)

	def scores(self) -> Dict[IndicatorId, float]:
		return dict(self._scores)


def indicators_from_scores(scores: Dict[IndicatorId, float], definitions: Iterable[IndicatorDefinition] = INDICATOR_DEFINITIONS) -> Tuple[Indicator, ...]:
	"""Build an indicator snapshot from a mapping of scores (e.g. a stored record)."""
	out: List[Indicator] = []
	for d in definitions:
		if d.id not in scores or scores[d.id] is None:
			raise MissingIndicator(f"no score for indicator '{d.id.value}'")
		try:
			score = validate_score(scores[d.id])
		except InvalidInput as exc:
			raise InvalidInput(f"{d.id.value}: {exc}") from None
		out.append(Indicator(id=d.id, name=d.name, description=d.description, weight=d.weight, score=score))
	return tuple(out)
