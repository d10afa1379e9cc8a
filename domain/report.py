"""
Report data model shared by the agent, the UI and the PDF exporter.
"""

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

TOPIC_MIN_LENGTH = 3
TOPIC_MAX_LENGTH = 100

SECTION_ORDER: List[str] = [
    "introduction",
    "history",
    "benefits",
    "challenges",
    "current_trends",
    "future_scope",
]

SECTION_TITLES: Dict[str, str] = {
    "introduction": "Introduction",
    "history": "History",
    "benefits": "Benefits",
    "challenges": "Challenges",
    "current_trends": "Current Trends",
    "future_scope": "Future Scope",
}


class Report(BaseModel):
    """The six fixed sections of a generated report."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    introduction: str = Field(description="An introduction to the topic.")
    history: str = Field(description="The history of the topic.")
    benefits: str = Field(description="The benefits of the topic.")
    challenges: str = Field(description="The challenges of the topic.")
    current_trends: str = Field(alias="currentTrends", description="The current trends of the topic.")
    future_scope: str = Field(alias="futureScope", description="The future scope of the topic.")

    def section(self, name: str) -> str:
        if name not in SECTION_TITLES:
            raise KeyError(f"Unknown report section: {name}")
        return getattr(self, name)

    def with_section(self, name: str, text: str) -> "Report":
        """Return a copy with one section replaced; the others are untouched."""
        if name not in SECTION_TITLES:
            raise KeyError(f"Unknown report section: {name}")
        return self.model_copy(update={name: text})

    def sections(self) -> List[tuple[str, str]]:
        return [(name, getattr(self, name)) for name in SECTION_ORDER]

    def non_empty_sections(self) -> List[tuple[str, str]]:
        return [(name, text) for name, text in self.sections() if text]


class GenerateReportOutput(BaseModel):
    """Envelope the model is asked to produce."""

    report: Report


class TopicForm(BaseModel):
    topic: str = Field(min_length=TOPIC_MIN_LENGTH, max_length=TOPIC_MAX_LENGTH)


def validate_topic(topic: Optional[str]) -> Optional[str]:
    """Return a user-facing error message, or None when the topic is acceptable."""

    try:
        TopicForm(topic=topic or "")
    except ValidationError as exc:
        error_type = exc.errors()[0].get("type")
        if error_type == "string_too_long":
            return f"Topic must be at most {TOPIC_MAX_LENGTH} characters long."
        return f"Topic must be at least {TOPIC_MIN_LENGTH} characters long."
    return None
