"""Instability bands for a composite score.

Low composite scores mean low instability. The partition is the same 20
point split the grade mapper uses: 0-20, 21-40, 41-60, 61-80 and 81-100,
with fractional scores assigned by the inclusive upper bound.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .grades import validate_score


@dataclass(frozen=True)
class Band:
	index: int
	low: int
	high: int
	label: str
	interpretation: str
	impact: str
	marker: str
	color: str

	@property
	def severity(self) -> int:
		return self.index

	@property
	def range_label(self) -> str:
		return f"{self.low} - {self.high}"


BANDS: Tuple[Band, ...] = (
	Band(
		index=1,
		low=0,
		high=20,
		label="Very Low Instability",
		interpretation="Stable environment with minimal risks.",
		impact="People experience predictability, trust in systems, and confidence in leadership.",
		marker="\U0001F331",
		color="#4CAF50",
	),
	Band(
		index=2,
		low=21,
		high=40,
		label="Low Instability",
		interpretation="Some risks present, but manageable.",
		impact="Most services run smoothly; occasional public concerns but little daily impact.",
		marker="\U0001F333",
		color="#8BC34A",
	),
	Band(
		index=3,
		low=41,
		high=60,
		label="Moderate Instability",
		interpretation="Noticeable risks that require attention.",
		impact="Public may feel divided or uneasy; pressure builds in specific communities or sectors.",
		marker="\U0001F32A\uFE0F",
		color="#FFC107",
	),
	Band(
		index=4,
		low=61,
		high=80,
		label="High Instability",
		interpretation="Significant risks with potential for major shifts.",
		impact="People may feel anxious, polarized, or distrustful; protests or policy backlash likely.",
		marker="\U0001F525",
		color="#FF9800",
	),
	Band(
		index=5,
		low=81,
		high=100,
		label="Extreme Instability",
		interpretation="Critical risks that could lead to severe consequences.",
		impact="Society may face unrest, fear, rapid change, or crisis-level tension and division.",
		marker="\U0001F4A5",
		color="#F44336",
	),
)


def classify(score: float) -> Band:
	value = validate_score(score)
	for band in BANDS:
		if value <= band.high:
			return band
	return BANDS[-1]


def legend() -> Tuple[Band, ...]:
	return BANDS
