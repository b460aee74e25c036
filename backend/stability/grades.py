"""Two-way mapping between letter grades and the 0-100 score axis.

0 is the best score and 100 the worst. Each grade covers a 20 point band and
is represented on the score axis by the low bound of that band, so
``score_to_grade(grade_to_score(g)) == g`` while the reverse trip collapses a
score onto its band anchor.
"""
from __future__ import annotations

import math
from typing import Dict, List, Tuple

from .errors import InvalidInput


GRADES: List[str] = ["A", "B", "C", "D", "F"]

GRADE_BANDS: Dict[str, Tuple[int, int]] = {
	"A": (0, 20),
	"B": (21, 40),
	"C": (41, 60),
	"D": (61, 80),
	"F": (81, 100),
}

# Upper bound (inclusive) of each band; fractional scores such as 20.5 fall in the next band
_UPPER_BOUNDS: List[Tuple[float, str]] = [(20, "A"), (40, "B"), (60, "C"), (80, "D"), (100, "F")]


def validate_score(score: float) -> float:
	if isinstance(score, bool) or not isinstance(score, (int, float)):
		raise InvalidInput(f"score must be a number, got {score!r}")
	if math.isnan(score) or score < 0 or score > 100:
		raise InvalidInput(f"score must be within [0, 100], got {score!r}")
	return float(score)


def normalize_grade(grade: str) -> str:
	if not isinstance(grade, str):
		raise InvalidInput(f"grade must be one of {', '.join(GRADES)}, got {grade!r}")
	letter = grade.strip().upper()
	if letter not in GRADE_BANDS:
		raise InvalidInput(f"grade must be one of {', '.join(GRADES)}, got {grade!r}")
	return letter


def grade_band(grade: str) -> Tuple[int, int]:
	return GRADE_BANDS[normalize_grade(grade)]


def grade_to_score(grade: str) -> int:
	"""Return the anchor score (low bound of the band) for a letter grade."""
	return grade_band(grade)[0]


def score_to_grade(score: float) -> str:
	"""Return the grade whose band contains ``score``."""
	value = validate_score(score)
	for upper, letter in _UPPER_BOUNDS:
		if value <= upper:
			return letter
	# unreachable: validate_score bounds the value at 100
	return "F"
