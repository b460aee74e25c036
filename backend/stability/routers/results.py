from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ..delivery import ReportDelivery, get_report_delivery
from ..errors import StabilityError
from ..logging_config import get_logger
from ..schemas import ResultsOut
from ..session import lookup_results
from ..store import SurveyStore
from .common import http_error
from .evaluation import get_store

log = get_logger(__name__)

router = APIRouter(prefix="/results", tags=["results"])


def valid_email(email: str) -> bool:
	local, sep, domain = email.partition("@")
	if not sep or not local or "@" in domain or any(c.isspace() for c in email):
		return False
	host, dot, tld = domain.rpartition(".")
	return bool(dot and host and tld)


class ReportRequest(BaseModel):
	first_name: str
	last_name: str
	email: str


@router.get("/{submission_id}", response_model=ResultsOut)
async def read_results(submission_id: int, store: SurveyStore = Depends(get_store)):
	try:
		results = lookup_results(store, submission_id)
	except StabilityError as e:
		raise http_error(e)
	if results is None:
		raise HTTPException(status_code=404, detail="submission not found")
	return ResultsOut.from_domain(results)


@router.post("/{submission_id}/report")
async def request_report(
	submission_id: int,
	req: ReportRequest,
	store: SurveyStore = Depends(get_store),
	delivery: ReportDelivery = Depends(get_report_delivery),
):
	first_name = (req.first_name or "").strip()
	last_name = (req.last_name or "").strip()
	email = (req.email or "").strip()
	if not first_name or not email:
		raise HTTPException(status_code=400, detail="first name and email are required")
	if not valid_email(email):
		raise HTTPException(status_code=400, detail="email address is not valid")
	try:
		results = lookup_results(store, submission_id)
		if results is None:
			raise HTTPException(status_code=404, detail="submission not found")
		if not store.update_contact(submission_id, first_name=first_name, last_name=last_name, email=email):
			raise HTTPException(status_code=404, detail="submission not found")
		await delivery.deliver_report(results, first_name, email)
	except StabilityError as e:
		log.warning("Report request for submission %s failed: %s", submission_id, e)
		raise http_error(e)
	return {"ok": True, "submission_id": submission_id}
