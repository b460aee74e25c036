"""The finished evaluation result handed to display and report delivery."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from .aggregates import CommunityAverages
from .classification import Band
from .errors import IncompleteResult
from .indicators import Demographics, Indicator


@dataclass(frozen=True)
class Results:
	composite_score: float
	band: Band
	indicators: Tuple[Indicator, ...]
	demographics: Demographics
	community_averages: Optional[CommunityAverages] = None
	submission_id: Optional[int] = None
	# Set when the store round trip failed; the score and band are still valid
	store_error: Optional[str] = None
	created_at: Optional[datetime] = None

	@property
	def label(self) -> str:
		return self.band.label


def assemble_results(
	composite_score: Optional[float],
	band: Optional[Band],
	indicators: Tuple[Indicator, ...],
	*,
	demographics: Optional[Demographics] = None,
	community_averages: Optional[CommunityAverages] = None,
	submission_id: Optional[int] = None,
	store_error: Optional[str] = None,
) -> Results:
	if composite_score is None:
		raise IncompleteResult("composite score has not been computed")
	if band is None:
		raise IncompleteResult("classification has not been computed")
	return Results(
		composite_score=composite_score,
		band=band,
		indicators=tuple(indicators),
		demographics=demographics or Demographics(),
		community_averages=community_averages,
		submission_id=submission_id,
		store_error=store_error,
		created_at=datetime.utcnow(),
	)
