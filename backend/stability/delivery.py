"""Report delivery: render a result to PDF and email it."""
from __future__ import annotations

from typing import Callable, Optional

from .errors import DeliveryFailed
from .logging_config import get_logger
from .mailer import SendGridClient
from .report import render_report_pdf
from .results import Results

log = get_logger(__name__)


class ReportDelivery:
	def __init__(self, mailer_factory: Optional[Callable[[], SendGridClient]] = None) -> None:
		self._mailer_factory = mailer_factory or SendGridClient

	async def deliver_report(self, results: Results, recipient_name: str, recipient_email: str) -> None:
		"""Render and send the report; any failure along the way is a ``DeliveryFailed``."""
		try:
			pdf_bytes = render_report_pdf(results, recipient_name)
		except Exception as e:
			log.exception("Rendering report for submission %s failed", results.submission_id)
			raise DeliveryFailed("failed to generate the PDF report") from e

		mailer = self._mailer_factory()
		try:
			await mailer.send_report(recipient_email, recipient_name, pdf_bytes)
		finally:
			await mailer.aclose()
		log.info("Delivered report for submission %s to %s", results.submission_id, recipient_email)


def get_report_delivery() -> ReportDelivery:
	return ReportDelivery()
