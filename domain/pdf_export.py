"""
PDF export of a generated report.

Lays the report out on A4 pages with fpdf2: a title page followed by one block
per non-empty section. Pagination is done by hand with a vertical cursor so
headings never start at the very bottom of a page.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from fpdf import FPDF
from fpdf.enums import MethodReturnValue

from .report import SECTION_TITLES, Report

logger = logging.getLogger(__name__)

PAGE_MARGIN = 20
HEADING_SPACE = 25
BODY_LINE_HEIGHT = 8
SECTION_GAP = 10
TITLE_LINE_HEIGHT = 12
FONT_FAMILY = "Helvetica"

_LATIN1_REPLACEMENTS = {
    "\u2013": "-",
    "\u2014": " - ",
    "\u2015": " - ",
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    "\u2026": "...",
    "\u00a0": " ",
    "\u2010": "-",
    "\u2011": "-",
    "\u2012": "-",
    "\u2022": "-",
    "\u2023": "-",
    "\u25cf": "-",
    "\u2264": "<=",
    "\u2265": ">=",
}


@dataclass(slots=True)
class PdfExport:
    filename: str
    data: bytes
    page_count: int


def capitalize_title(title: str) -> str:
    """Upper-case the first character of every space-separated word."""
    return " ".join(word[:1].upper() + word[1:] for word in title.split(" "))


def report_filename(topic: str) -> str:
    slug = capitalize_title(topic).replace(" ", "_")
    return f"InsightForge_Report_{slug or 'Untitled'}.pdf"


def sanitize_for_pdf(text: str) -> str:
    """Map characters the core fonts cannot encode onto latin-1 equivalents."""
    for char, replacement in _LATIN1_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    return text.encode("latin-1", errors="replace").decode("latin-1")


def format_generated_date(value: date) -> str:
    return f"{value:%B} {value.day}, {value.year}"


class _ReportPdfWriter:
    def __init__(self) -> None:
        self.pdf = FPDF(orientation="P", unit="mm", format="A4")
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.c_margin = 0
        self.page_width = self.pdf.w
        self.page_height = self.pdf.h
        self.content_width = self.page_width - PAGE_MARGIN * 2
        self.y = float(PAGE_MARGIN)
        self.page_num = 0

    # ------------------------------------------------------------------
    # Page handling
    # ------------------------------------------------------------------
    def _add_page(self) -> None:
        self.pdf.add_page()
        self.page_num += 1
        self.y = float(PAGE_MARGIN)

    def _add_content_page(self) -> None:
        self._add_page()
        self.pdf.set_font(FONT_FAMILY, "I", 9)
        self.pdf.set_text_color(150)
        self._centered_text(f"Page {self.page_num}", self.page_height - 10)
        self.pdf.set_text_color(0)

    def _fits(self, height: float) -> bool:
        return self.y + height <= self.page_height - PAGE_MARGIN

    # ------------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------------
    def _centered_text(self, text: str, y: float) -> None:
        width = self.pdf.get_string_width(text)
        self.pdf.text((self.page_width - width) / 2, y, text)

    def _wrap(self, text: str, width: float) -> List[str]:
        return self.pdf.multi_cell(
            width,
            BODY_LINE_HEIGHT,
            text,
            dry_run=True,
            output=MethodReturnValue.LINES,
        )

    def _heading_font(self) -> None:
        self.pdf.set_font(FONT_FAMILY, "B", 16)
        self.pdf.set_text_color(49, 53, 57)

    def _body_font(self) -> None:
        self.pdf.set_font(FONT_FAMILY, "", 12)
        self.pdf.set_text_color(33, 37, 41)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def title_page(self, title: str, generated_on: date) -> None:
        self._add_page()
        pdf = self.pdf
        pdf.set_fill_color(248, 249, 250)
        pdf.rect(0, 0, self.page_width, self.page_height, style="F")

        pdf.set_font(FONT_FAMILY, "B", 28)
        pdf.set_text_color(32, 19, 32)
        title_y = self.page_height / 2 - 20
        for offset, line in enumerate(self._wrap(title, self.content_width - 20)):
            self._centered_text(line, title_y + offset * TITLE_LINE_HEIGHT)

        pdf.set_font(FONT_FAMILY, "", 14)
        pdf.set_text_color(108, 117, 125)
        self._centered_text("AI-Generated Research Report", self.page_height / 2)

        pdf.set_draw_color(222, 226, 230)
        pdf.set_line_width(0.5)
        rule_y = self.page_height / 2 + 10
        pdf.line(PAGE_MARGIN, rule_y, self.content_width + PAGE_MARGIN, rule_y)

        pdf.set_font_size(12)
        self._centered_text(
            f"Generated by InsightForge on {format_generated_date(generated_on)}",
            self.page_height - 20,
        )
        pdf.set_text_color(0)

    def section(self, title: str, body: str) -> None:
        pdf = self.pdf
        if self.page_num < 2 or not self._fits(HEADING_SPACE):
            self._add_content_page()
        self._heading_font()
        pdf.text(PAGE_MARGIN, self.y, title)
        self.y += 7

        pdf.set_draw_color(222, 226, 230)
        pdf.set_line_width(0.25)
        pdf.line(PAGE_MARGIN, self.y, self.content_width + PAGE_MARGIN, self.y)
        self.y += 8

        self._body_font()
        for line in self._wrap(body, self.content_width):
            if not self._fits(BODY_LINE_HEIGHT):
                self._add_content_page()
                self._body_font()
            pdf.text(PAGE_MARGIN, self.y, line)
            self.y += BODY_LINE_HEIGHT

        self.y += SECTION_GAP

    def output(self) -> bytes:
        return bytes(self.pdf.output())


def export_report_pdf(report: Report, topic: str, *, generated_on: Optional[date] = None) -> PdfExport:
    """Render ``report`` into an A4 document named after ``topic``."""

    title = capitalize_title(topic)
    filename = report_filename(topic)
    logger.info("Exporting report '%s' to %s", title, filename)

    writer = _ReportPdfWriter()
    writer.title_page(sanitize_for_pdf(title), generated_on or date.today())
    for name, text in report.non_empty_sections():
        writer.section(SECTION_TITLES[name], sanitize_for_pdf(text))

    data = writer.output()
    logger.info("Exported %d page(s) for '%s'.", writer.page_num, title)
    return PdfExport(filename=filename, data=data, page_count=writer.page_num)
