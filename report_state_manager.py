"""
State models supporting in-place editing of a displayed report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, Optional

from domain.report import SECTION_ORDER, Report

logger = logging.getLogger(__name__)


class SectionMode(str, Enum):
    VIEWING = "viewing"
    EDITING = "editing"


@dataclass(slots=True)
class SectionEditState:
    """Edit mode and pending text for one report section."""

    section: str
    mode: SectionMode = SectionMode.VIEWING
    buffer: str = ""

    @property
    def is_editing(self) -> bool:
        return self.mode is SectionMode.EDITING


@dataclass
class ReportEditor:
    """
    Holds the report being displayed and an independent edit state per section.

    Saving commits the section's buffer into a new Report and passes it to
    ``on_update``; cancelling drops the buffer without touching the report.
    """

    report: Report
    on_update: Optional[Callable[[Report], None]] = None
    states: Dict[str, SectionEditState] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self._reset_states()

    def _reset_states(self) -> None:
        self.states = {name: SectionEditState(section=name) for name in SECTION_ORDER}

    def _state(self, section: str) -> SectionEditState:
        try:
            return self.states[section]
        except KeyError:
            raise KeyError(f"Unknown report section: {section}") from None

    def replace_report(self, report: Report) -> None:
        self.report = report
        self._reset_states()

    def is_editing(self, section: str) -> bool:
        return self._state(section).is_editing

    def begin_edit(self, section: str) -> None:
        state = self._state(section)
        state.mode = SectionMode.EDITING
        state.buffer = self.report.section(section)

    def update_buffer(self, section: str, text: str) -> None:
        state = self._state(section)
        if not state.is_editing:
            raise ValueError(f"Section '{section}' is not being edited.")
        state.buffer = text

    def save(self, section: str) -> Report:
        state = self._state(section)
        if not state.is_editing:
            logger.debug("Ignoring save for section '%s' that is not being edited.", section)
            return self.report
        self.report = self.report.with_section(section, state.buffer)
        state.mode = SectionMode.VIEWING
        state.buffer = ""
        if self.on_update is not None:
            self.on_update(self.report)
        return self.report

    def cancel(self, section: str) -> None:
        state = self._state(section)
        state.mode = SectionMode.VIEWING
        state.buffer = ""
