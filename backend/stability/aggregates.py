"""Cross-respondent statistics over stored composite scores."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .indicators import AgeRange, Region


@dataclass(frozen=True)
class ScoreRecord:
	"""The slice of a stored submission the statistics need."""

	composite_score: float
	age_range: Optional[AgeRange] = None
	region: Optional[Region] = None


@dataclass(frozen=True)
class CommunityAverages:
	overall: float
	respondents: int
	by_age: Dict[AgeRange, float] = field(default_factory=dict)
	by_region: Dict[Region, float] = field(default_factory=dict)

	@property
	def overall_display(self) -> float:
		return round(self.overall, 1)


def mean_score(scores: Iterable[float], own_score: Optional[float] = None) -> float:
	"""Arithmetic mean of ``scores``.

	An empty history means the caller is the only respondent so far; the mean
	is then ``own_score``.
	"""
	values = [float(s) for s in scores]
	if not values:
		if own_score is None:
			raise ValueError("cannot average an empty score history without an own score")
		return float(own_score)
	return math.fsum(values) / len(values)


def _grouped_means(records: Sequence[ScoreRecord], key) -> Dict:
	groups: Dict = {}
	for r in records:
		bucket = key(r)
		if bucket is None:
			continue
		groups.setdefault(bucket, []).append(r.composite_score)
	return {bucket: mean_score(values) for bucket, values in groups.items()}


def community_averages(records: Iterable[ScoreRecord], own_score: Optional[float] = None) -> CommunityAverages:
	items: List[ScoreRecord] = list(records)
	return CommunityAverages(
		overall=mean_score((r.composite_score for r in items), own_score),
		respondents=max(len(items), 1 if own_score is not None else 0),
		by_age=_grouped_means(items, lambda r: r.age_range),
		by_region=_grouped_means(items, lambda r: r.region),
	)

