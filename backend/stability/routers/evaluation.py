from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..db import get_db
from ..errors import MissingIndicator, StabilityError
from ..indicators import parse_indicator_id
from ..logging_config import get_logger
from ..schemas import BandOut, DemographicsModel, IndicatorOut, ResultsOut
from ..session import EvaluationSession, get_session, start_session
from ..store import SurveyStore
from .common import http_error

log = get_logger(__name__)

router = APIRouter(prefix="/evaluations", tags=["evaluations"])


class StartRequest(BaseModel):
	demographics: Optional[DemographicsModel] = None


class IndicatorUpdate(BaseModel):
	# Exactly one of score (slider) or grade (letter buttons)
	score: Optional[float] = None
	grade: Optional[str] = None


class SessionOut(BaseModel):
	session_id: str
	state: str
	demographics: DemographicsModel
	indicators: List[IndicatorOut]
	results: Optional[ResultsOut] = None


class PreviewOut(BaseModel):
	composite_score: float
	band: BandOut


def get_store(db: Session = Depends(get_db)) -> SurveyStore:
	return SurveyStore(db)


def _session_or_404(session_id: str) -> EvaluationSession:
	session = get_session(session_id)
	if session is None:
		raise HTTPException(status_code=404, detail="evaluation session not found")
	return session


def _session_out(session: EvaluationSession) -> SessionOut:
	return SessionOut(
		session_id=session.session_id,
		state=session.state.value,
		demographics=DemographicsModel.from_domain(session.demographics),
		indicators=[IndicatorOut.from_domain(i) for i in session.indicators.snapshot()],
		results=ResultsOut.from_domain(session.results) if session.results else None,
	)


@router.post("", response_model=SessionOut, status_code=201)
async def create_evaluation(req: Optional[StartRequest] = None):
	demographics = req.demographics.to_domain() if req and req.demographics else None
	session = start_session(demographics)
	log.info("Started evaluation %s", session.session_id)
	return _session_out(session)


@router.get("/{session_id}", response_model=SessionOut)
async def read_evaluation(session_id: str):
	return _session_out(_session_or_404(session_id))


@router.put("/{session_id}/demographics", response_model=SessionOut)
async def update_demographics(session_id: str, req: DemographicsModel):
	session = _session_or_404(session_id)
	try:
		session.set_demographics(req.to_domain())
	except StabilityError as e:
		raise http_error(e)
	return _session_out(session)


@router.put("/{session_id}/indicators/{indicator_id}", response_model=IndicatorOut)
async def update_indicator(session_id: str, indicator_id: str, req: IndicatorUpdate):
	session = _session_or_404(session_id)
	try:
		key = parse_indicator_id(indicator_id)
	except MissingIndicator as e:
		raise HTTPException(status_code=404, detail=str(e))
	if (req.score is None) == (req.grade is None):
		raise HTTPException(status_code=422, detail="provide exactly one of score or grade")
	try:
		if req.grade is not None:
			indicator = session.set_grade(key, req.grade)
		else:
			indicator = session.set_score(key, req.score)
	except StabilityError as e:
		raise http_error(e)
	return IndicatorOut.from_domain(indicator)


@router.get("/{session_id}/preview", response_model=PreviewOut)
async def preview_evaluation(session_id: str):
	session = _session_or_404(session_id)
	try:
		score, band = session.preview()
	except StabilityError as e:
		raise http_error(e)
	return PreviewOut(composite_score=score, band=BandOut.from_domain(band))


@router.post("/{session_id}/submit", response_model=ResultsOut)
async def submit_evaluation(session_id: str, store: SurveyStore = Depends(get_store)):
	session = _session_or_404(session_id)
	try:
		results = session.submit(store)
	except StabilityError as e:
		raise http_error(e)
	return ResultsOut.from_domain(results)
