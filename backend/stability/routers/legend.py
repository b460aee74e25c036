from typing import List

from fastapi import APIRouter

from ..classification import legend
from ..grades import GRADES, GRADE_BANDS, grade_to_score
from ..indicators import AgeRange, INDICATOR_DEFINITIONS, Region
from ..schemas import BandOut

router = APIRouter(prefix="/legend", tags=["legend"])


@router.get("/indicators")
def get_indicators():
	return [
		{"id": d.id.value, "name": d.name, "description": d.description, "weight": d.weight}
		for d in INDICATOR_DEFINITIONS
	]


@router.get("/bands", response_model=List[BandOut])
def get_bands():
	return [BandOut.from_domain(b) for b in legend()]


@router.get("/grades")
def get_grades():
	# 0 is the best score, so A sits at the bottom of the scale
	return [
		{"grade": g, "low": GRADE_BANDS[g][0], "high": GRADE_BANDS[g][1], "score": grade_to_score(g)}
		for g in GRADES
	]


@router.get("/demographics")
def get_demographics():
	return {
		"age_ranges": [a.value for a in AgeRange],
		"regions": [r.value for r in Region],
	}
