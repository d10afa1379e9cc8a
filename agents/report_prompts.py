"""
Centralized prompts used by the report agent.
"""

from __future__ import annotations


REPORT_SYSTEM_PROMPT: str = (
    "You are an AI research assistant. Your task is to generate a structured report on the given topic. "
    "Respond ONLY with a JSON object of the form "
    '{"report": {"introduction": "...", "history": "...", "benefits": "...", '
    '"challenges": "...", "currentTrends": "...", "futureScope": "..."}}. '
    "Every value must be a plain-text string; do not wrap the JSON in Markdown."
)


def report_prompt(*, topic: str) -> str:
    """Return the task prompt asking for the six report sections on ``topic``."""

    return (
        "Generate a structured report on the given topic.\n"
        "The report should include the following sections:\n\n"
        "- Introduction: An overview of the topic.\n"
        "- History: The historical background of the topic.\n"
        "- Benefits: The advantages and benefits associated with the topic.\n"
        "- Challenges: The problems and difficulties related to the topic.\n"
        "- Current Trends: The latest trends and developments in the topic.\n"
        "- Future Scope: The potential future implications and applications of the topic.\n\n"
        f"Topic: {topic}\n\n"
        "Please provide a well-structured and informative report."
    )
