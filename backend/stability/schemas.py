"""Pydantic request/response models shared by the routers."""
from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from .aggregates import CommunityAverages
from .classification import Band
from .indicators import AgeRange, Demographics, Indicator, Region
from .results import Results


class DemographicsModel(BaseModel):
	age_range: Optional[AgeRange] = None
	region: Optional[Region] = None

	def to_domain(self) -> Demographics:
		return Demographics(age_range=self.age_range, region=self.region)

	@classmethod
	def from_domain(cls, demographics: Demographics) -> "DemographicsModel":
		return cls(age_range=demographics.age_range, region=demographics.region)


class IndicatorOut(BaseModel):
	id: str
	name: str
	description: str
	weight: float
	score: float
	grade: str

	@classmethod
	def from_domain(cls, ind: Indicator) -> "IndicatorOut":
		return cls(id=ind.id.value, name=ind.name, description=ind.description, weight=ind.weight, score=ind.score, grade=ind.grade)


class BandOut(BaseModel):
	index: int
	severity: int
	low: int
	high: int
	range: str
	label: str
	interpretation: str
	impact: str
	marker: str
	color: str

	@classmethod
	def from_domain(cls, band: Band) -> "BandOut":
		return cls(
			index=band.index,
			severity=band.severity,
			low=band.low,
			high=band.high,
			range=band.range_label,
			label=band.label,
			interpretation=band.interpretation,
			impact=band.impact,
			marker=band.marker,
			color=band.color,
		)


class CommunityAveragesOut(BaseModel):
	overall: float
	overall_display: float
	respondents: int
	by_age: Dict[str, float] = Field(default_factory=dict)
	by_region: Dict[str, float] = Field(default_factory=dict)

	@classmethod
	def from_domain(cls, averages: CommunityAverages) -> "CommunityAveragesOut":
		return cls(
			overall=averages.overall,
			overall_display=averages.overall_display,
			respondents=averages.respondents,
			by_age={k.value: round(v, 1) for k, v in averages.by_age.items()},
			by_region={k.value: round(v, 1) for k, v in averages.by_region.items()},
		)


class ResultsOut(BaseModel):
	composite_score: float
	composite_display: float
	label: str
	band: BandOut
	indicators: List[IndicatorOut]
	demographics: DemographicsModel
	community_averages: Optional[CommunityAveragesOut] = None
	submission_id: Optional[int] = None
	store_error: Optional[str] = None

	@classmethod
	def from_domain(cls, results: Results) -> "ResultsOut":
		averages = results.community_averages
		return cls(
			composite_score=results.composite_score,
			composite_display=round(results.composite_score, 1),
			label=results.label,
			band=BandOut.from_domain(results.band),
			indicators=[IndicatorOut.from_domain(i) for i in results.indicators],
			demographics=DemographicsModel.from_domain(results.demographics),
			community_averages=CommunityAveragesOut.from_domain(averages) if averages else None,
			submission_id=results.submission_id,
			store_error=results.store_error,
		)
