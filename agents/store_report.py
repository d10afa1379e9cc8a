"""Data model for persisting generated reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(slots=True)
class StoredReport:
    """Lightweight container written to disk when the agent runs verbosely."""

    id: str
    topic: str
    report: Dict[str, str]
    generated_at: str
