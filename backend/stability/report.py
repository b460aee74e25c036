"""Single page PDF report for a finished evaluation."""
from __future__ import annotations

from datetime import datetime
from typing import Optional, Tuple

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from .classification import classify
from .results import Results
from .settings import settings


TEXT_COLOR = (0, 0, 0)
MUTED_COLOR = (110, 116, 132)
FOOTER_COLOR = (34, 139, 34)
CHART_BORDER = (204, 204, 204)


def sanitize_for_pdf(text: str) -> str:
	# Core fonts only cover latin-1
	return text.encode("latin-1", errors="replace").decode("latin-1")


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
	value = color.lstrip("#")
	return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def report_id(results: Results, when: Optional[datetime] = None) -> str:
	when = when or results.created_at or datetime.utcnow()
	suffix = str(results.submission_id) if results.submission_id is not None else "0"
	return f"NBLK-{when.strftime('%Y%m%d')}-{suffix.zfill(3)}"


def _line(pdf: FPDF, height: float, text: str, *, size: int = 11, bold: bool = False) -> None:
	pdf.set_font("Helvetica", "B" if bold else "", size)
	pdf.cell(0, height, sanitize_for_pdf(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)


def _bar(pdf: FPDF, x: float, y: float, max_width: float, score: float, caption: str) -> None:
	width = max(score / 100 * max_width, 1)
	pdf.set_fill_color(*hex_to_rgb(classify(score).color))
	pdf.rect(x, y, width, 9, style="F")
	pdf.set_xy(x + 2, y)
	pdf.set_font("Helvetica", "B", 9)
	# white caption only when the bar is wide enough to hold it
	if width > 40:
		pdf.set_text_color(255, 255, 255)
	pdf.cell(0, 9, sanitize_for_pdf(caption))
	pdf.set_text_color(*TEXT_COLOR)


def render_report_pdf(results: Results, first_name: str, *, generated_at: Optional[datetime] = None) -> bytes:
	generated_at = generated_at or datetime.utcnow()
	band = results.band
	score = results.composite_score

	pdf = FPDF(format="A4")
	pdf.set_auto_page_break(auto=True, margin=15)
	pdf.add_page()
	pdf.set_title("Stability Evaluation Report")
	pdf.set_author(settings.report_organization)
	pdf.set_left_margin(18)
	pdf.set_text_color(*TEXT_COLOR)

	_line(pdf, 12, "Stability Evaluation Report", size=22, bold=True)
	pdf.ln(2)
	_line(pdf, 6, f"Prepared for: {first_name}")
	_line(pdf, 6, f"Date: {generated_at.strftime('%Y-%m-%d')}")
	_line(pdf, 6, f"Report ID: {report_id(results, generated_at)}")
	pdf.ln(6)

	_line(pdf, 9, "Stability Score", size=15, bold=True)
	_line(pdf, 7, f"Score: {score:.1f}/100 - {band.label} ({band.range_label})")
	pdf.set_font("Helvetica", "", 11)
	pdf.multi_cell(0, 6, sanitize_for_pdf(f"Interpretation: {band.interpretation} {band.impact}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
	pdf.ln(6)

	_line(pdf, 9, "Score Comparison", size=15, bold=True)
	chart_x, chart_y = pdf.get_x(), pdf.get_y() + 2
	chart_w, chart_h = 150.0, 30.0
	pdf.set_draw_color(*CHART_BORDER)
	pdf.rect(chart_x, chart_y, chart_w, chart_h, style="D")
	_bar(pdf, chart_x + 5, chart_y + 4, chart_w - 10, score, f"Your Score: {score:.1f}")
	averages = results.community_averages
	if averages is not None:
		_bar(pdf, chart_x + 5, chart_y + 17, chart_w - 10, averages.overall, f"Average Score: {averages.overall_display:.1f}")
	else:
		pdf.set_xy(chart_x + 5, chart_y + 17)
		pdf.set_font("Helvetica", "", 9)
		pdf.set_text_color(*MUTED_COLOR)
		pdf.cell(0, 9, "Average score unavailable")
		pdf.set_text_color(*TEXT_COLOR)
	pdf.set_xy(chart_x, chart_y + chart_h + 4)
	if averages is not None:
		_line(pdf, 6, f"Average of {averages.respondents} respondent(s): {averages.overall_display:.1f}", size=10)
	pdf.ln(4)

	_line(pdf, 9, "Your Ratings", size=15, bold=True)
	pdf.set_font("Helvetica", "B", 10)
	pdf.cell(120, 7, "Indicator", border="B")
	pdf.cell(20, 7, "Weight", border="B", align="R")
	pdf.cell(20, 7, "Score", border="B", align="R")
	pdf.cell(15, 7, "Grade", border="B", align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
	pdf.set_font("Helvetica", "", 9)
	for ind in results.indicators:
		name = ind.name.split(" - ")[0]
		pdf.cell(120, 6, sanitize_for_pdf(name))
		pdf.cell(20, 6, f"{ind.weight * 100:.0f}%", align="R")
		pdf.cell(20, 6, f"{ind.score:g}", align="R")
		pdf.cell(15, 6, ind.grade, align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
	pdf.ln(8)

	_line(pdf, 7, f"Contact Info: {settings.report_contact_email}", size=11)

	pdf.set_xy(-70, -25)
	pdf.set_font("Helvetica", "B", 12)
	pdf.set_text_color(*FOOTER_COLOR)
	pdf.cell(55, 8, sanitize_for_pdf(settings.report_organization), align="R")

	return bytes(pdf.output())
