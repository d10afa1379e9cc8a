"""
Request handler between the UI and the report agent.

Mirrors a server action: it never raises, it returns either a report or a
message that can be shown to the user as-is.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from domain.report import Report, validate_topic

from .report_agent import ReportAgent

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Failed to generate report. Please try again."


@dataclass(slots=True)
class GenerateReportResult:
    report: Optional[Report] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.report is not None and self.error is None


def handle_generate_report(agent: ReportAgent, topic: str) -> GenerateReportResult:
    validation_error = validate_topic(topic)
    if validation_error:
        return GenerateReportResult(error=validation_error)

    try:
        report = agent.generate(topic)
    except Exception as exc:
        logger.exception("Error generating report for topic %r: %s", topic, exc)
        return GenerateReportResult(error=GENERIC_ERROR_MESSAGE)
    return GenerateReportResult(report=report)
