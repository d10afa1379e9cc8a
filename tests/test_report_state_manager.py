from typing import List

import pytest

from domain.report import SECTION_ORDER, Report
from report_state_manager import ReportEditor, SectionMode


def test_save_commits_only_edited_section(sample_report: Report) -> None:
    updates: List[Report] = []
    editor = ReportEditor(report=sample_report, on_update=updates.append)

    editor.begin_edit("history")
    assert editor.states["history"].buffer == sample_report.history
    editor.update_buffer("history", "A rewritten history.")
    saved = editor.save("history")

    assert saved.history == "A rewritten history."
    assert updates == [saved]
    assert editor.states["history"].mode is SectionMode.VIEWING
    for name in SECTION_ORDER:
        if name != "history":
            assert saved.section(name) == sample_report.section(name)


def test_cancel_leaves_report_unchanged(sample_report: Report) -> None:
    updates: List[Report] = []
    editor = ReportEditor(report=sample_report, on_update=updates.append)
    editor.begin_edit("benefits")
    editor.update_buffer("benefits", "discard me")
    editor.cancel("benefits")

    assert editor.report == sample_report
    assert not editor.is_editing("benefits")
    assert updates == []


def test_sections_edit_independently(sample_report: Report) -> None:
    editor = ReportEditor(report=sample_report)
    editor.begin_edit("introduction")
    editor.begin_edit("future_scope")
    editor.update_buffer("introduction", "New intro.")
    editor.update_buffer("future_scope", "New future.")
    editor.cancel("future_scope")
    report = editor.save("introduction")

    assert report.introduction == "New intro."
    assert report.future_scope == sample_report.future_scope


def test_save_without_edit_is_noop(sample_report: Report) -> None:
    updates: List[Report] = []
    editor = ReportEditor(report=sample_report, on_update=updates.append)
    assert editor.save("challenges") == sample_report
    assert updates == []


def test_update_buffer_requires_editing(sample_report: Report) -> None:
    editor = ReportEditor(report=sample_report)
    with pytest.raises(ValueError):
        editor.update_buffer("history", "text")
    with pytest.raises(KeyError):
        editor.begin_edit("summary")


def test_replace_report_resets_edit_state(sample_report: Report) -> None:
    editor = ReportEditor(report=sample_report)
    editor.begin_edit("history")
    new_report = sample_report.with_section("history", "Other history.")
    editor.replace_report(new_report)
    assert editor.report == new_report
    assert not editor.is_editing("history")
