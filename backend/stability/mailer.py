from __future__ import annotations
import base64
import html
import httpx
from typing import Any, Dict, Optional
from .errors import DeliveryFailed
from .logging_config import get_logger
from .settings import settings

log = get_logger(__name__)

REPORT_SUBJECT = "Your Full NBLK Stability Score Report"
REPORT_FILENAME = "stability-score-report.pdf"


def _plain_body(first_name: str) -> str:
	return (
		f"Hi {first_name},\n\n"
		"Thanks for sharing your perspective in the Stability Score Calculator.\n"
		"Based on your input, we've generated your full score summary, including:\n"
		"- Your exact score and grade\n"
		"- What it means for political stability\n"
		"- How your view compares to others by age and region\n\n"
		"Please find your detailed report attached to this email.\n\n"
		"Stay informed,\n"
		"The NBLK Team"
	)


def _html_body(first_name: str) -> str:
	# the name comes from a public form
	name = html.escape(first_name)
	return (
		'<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
		f'<h2 style="color: #228B22;">{REPORT_SUBJECT}</h2>'
		f"<p>Hi {name},</p>"
		"<p>Thanks for sharing your perspective in the Stability Score Calculator.</p>"
		"<p>Based on your input, we've generated your full score summary, including:</p>"
		"<ul>"
		"<li>Your exact score and grade</li>"
		"<li>What it means for political stability</li>"
		"<li>How your view compares to others by age and region</li>"
		"</ul>"
		"<p>Please find your detailed report attached to this email.</p>"
		"<p>Stay informed,<br>The NBLK Team</p>"
		"</div>"
	)


class SendGridClient:
	def __init__(
		self,
		api_key: Optional[str] = None,
		*,
		base_url: Optional[str] = None,
		from_email: Optional[str] = None,
		max_attempts: Optional[int] = None,
		client: Optional[httpx.AsyncClient] = None,
	) -> None:
		self.api_key = api_key or settings.sendgrid_api_key
		if not self.api_key:
			raise DeliveryFailed("SENDGRID_API_KEY is not configured")
		self.base_url = base_url or settings.sendgrid_base_url
		self.from_email = from_email or settings.sendgrid_from_email
		self.max_attempts = max(1, max_attempts or settings.delivery_max_attempts)
		self._client = client or httpx.AsyncClient(timeout=settings.delivery_timeout_seconds)

	def build_payload(self, to_email: str, first_name: str, pdf_bytes: bytes) -> Dict[str, Any]:
		return {
			"personalizations": [{"to": [{"email": to_email}], "subject": REPORT_SUBJECT}],
			"from": {"email": self.from_email},
			"content": [
				{"type": "text/plain", "value": _plain_body(first_name)},
				{"type": "text/html", "value": _html_body(first_name)},
			],
			"attachments": [
				{
					"content": base64.b64encode(pdf_bytes).decode("ascii"),
					"filename": REPORT_FILENAME,
					"type": "application/pdf",
					"disposition": "attachment",
				}
			],
		}

	async def send_report(self, to_email: str, first_name: str, pdf_bytes: bytes) -> None:
		payload = self.build_payload(to_email, first_name, pdf_bytes)
		headers = {"Authorization": f"Bearer {self.api_key}", "Content-Type": "application/json"}
		last_error: Optional[Exception] = None
		# Only transport errors are retried; an HTTP error status is final
		for attempt in range(1, self.max_attempts + 1):
			try:
				r = await self._client.post(self.base_url, headers=headers, json=payload)
				r.raise_for_status()
				log.info("Report email accepted by SendGrid for %s", to_email)
				return
			except httpx.HTTPStatusError as http_err:
				log.error("SendGrid rejected report for %s: %s %s", to_email, http_err.response.status_code, http_err.response.text)
				raise DeliveryFailed(f"SendGrid API error: {http_err.response.status_code}") from http_err
			except httpx.RequestError as net_err:
				last_error = net_err
				log.warning("SendGrid request failed (attempt %s/%s): %s", attempt, self.max_attempts, net_err)
		raise DeliveryFailed("could not reach the email service") from last_error

	async def aclose(self) -> None:
		await self._client.aclose()
