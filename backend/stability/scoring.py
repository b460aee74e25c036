"""Composite score: the weighted sum of the indicator scores."""
from __future__ import annotations

import math
from typing import Iterable, Optional, Sequence

from .errors import InvalidInput, InvalidWeights, MissingIndicator
from .grades import validate_score
from .indicators import Indicator, IndicatorId, REQUIRED_INDICATORS
from .settings import settings


STRICT = "strict"
NORMALIZE = "normalize"
WEIGHT_POLICIES = (STRICT, NORMALIZE)


def composite_score(
	indicators: Iterable[Indicator],
	*,
	required: Sequence[IndicatorId] = REQUIRED_INDICATORS,
	policy: Optional[str] = None,
	tolerance: Optional[float] = None,
) -> float:
	"""Return ``sum(score * weight)`` over ``indicators``.

	Under the ``strict`` policy the weights must sum to 1 within ``tolerance``.
	Under ``normalize`` each weight is divided by the total first, so any set
	of positive weights is accepted. Both default to the configured settings.
	"""
	policy = (policy or settings.weight_policy).lower()
	if policy not in WEIGHT_POLICIES:
		raise InvalidWeights(f"unknown weight policy '{policy}'")
	tolerance = settings.weight_tolerance if tolerance is None else tolerance

	items = list(indicators)
	seen = set()
	for ind in items:
		if ind.id in seen:
			raise InvalidInput(f"indicator '{ind.id.value}' given more than once")
		seen.add(ind.id)
		validate_score(ind.score)
		if isinstance(ind.weight, bool) or not isinstance(ind.weight, (int, float)) or math.isnan(ind.weight) or ind.weight <= 0 or ind.weight > 1:
			raise InvalidWeights(f"weight for '{ind.id.value}' must be in (0, 1], got {ind.weight!r}")
	missing = [i.value for i in required if i not in seen]
	if missing:
		raise MissingIndicator(f"missing indicator(s): {', '.join(missing)}")

	total_weight = math.fsum(ind.weight for ind in items)
	if policy == STRICT:
		if abs(total_weight - 1.0) > tolerance:
			raise InvalidWeights(f"indicator weights sum to {total_weight}, expected 1.0")
		divisor = 1.0
	else:
		divisor = total_weight

	score = math.fsum(ind.score * ind.weight for ind in items) / divisor
	# floating point noise around the ends of the scale
	return min(100.0, max(0.0, score))
