"""
Streamlit entry point for InsightForge.

Provides a topic form on top of `ReportAgent`, renders the generated report in
editable sections, exports it to PDF and keeps the topic history and theme
preference in local storage between sessions.
"""

from __future__ import annotations

import logging
from typing import List

import streamlit as st
from dotenv import load_dotenv

from agents import ReportAgent, handle_generate_report
from domain.local_storage import HistoryStore, LocalStorage, Theme, ThemeStore
from domain.pdf_export import export_report_pdf
from domain.report import SECTION_ORDER, SECTION_TITLES, Report, validate_topic
from report_state_manager import ReportEditor

# Ensure environment variables from .env are loaded before instantiating the agent.
load_dotenv()

LOGGER = logging.getLogger(__name__)

DARK_THEME_CSS = """
<style>
.stApp { background-color: #0f1115; color: #e6e6e6; }
.stApp [data-testid="stSidebar"] { background-color: #171a21; }
.stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp label, .stApp summary { color: #e6e6e6; }
</style>
"""


@st.cache_resource(show_spinner=False)
def _get_agent() -> ReportAgent:
    """Create a singleton ReportAgent per Streamlit process."""
    return ReportAgent()


@st.cache_resource(show_spinner=False)
def _get_storage() -> LocalStorage:
    return LocalStorage()


def _init_session_state() -> None:
    """Initialize keys stored in st.session_state."""
    storage = _get_storage()
    if "history" not in st.session_state:
        history = HistoryStore(storage)
        history.load()
        st.session_state.history = history
    if "theme" not in st.session_state:
        theme = ThemeStore(storage)
        theme.load()
        st.session_state.theme = theme
    defaults = {
        "report": None,
        "editor": None,
        "topic": "",
        "topic_input": "",
        "pending_topic": None,
        "is_loading": False,
        "pdf_export": None,
        "notifications": [],
    }
    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def _notify(message: str, icon: str = "ℹ️") -> None:
    st.session_state.notifications.append((message, icon))


def _flush_notifications() -> None:
    pending: List[tuple] = st.session_state.notifications
    st.session_state.notifications = []
    for message, icon in pending:
        st.toast(message, icon=icon)


# ------------------------------------------------------------------
# Callbacks
# ------------------------------------------------------------------
def _on_report_update(report: Report) -> None:
    st.session_state.report = report
    st.session_state.pdf_export = None
    _notify("Report updated. Your changes have been saved locally.", icon="✅")


def _select_topic(topic: str) -> None:
    st.session_state.topic_input = topic
    st.session_state.pending_topic = topic


def _clear_history() -> None:
    st.session_state.history.clear()
    _notify("History cleared.")


def _toggle_theme() -> None:
    st.session_state.theme.toggle()


def _begin_edit(section: str) -> None:
    editor: ReportEditor = st.session_state.editor
    editor.begin_edit(section)
    st.session_state[f"edit_buffer_{section}"] = editor.states[section].buffer


def _save_edit(section: str) -> None:
    editor: ReportEditor = st.session_state.editor
    editor.update_buffer(section, st.session_state.get(f"edit_buffer_{section}", ""))
    editor.save(section)


def _cancel_edit(section: str) -> None:
    st.session_state.editor.cancel(section)


def _export_pdf() -> None:
    report = st.session_state.report
    if report is None:
        _notify("No report data available to export.", icon="⚠️")
        return
    try:
        export = export_report_pdf(report, st.session_state.topic)
    except Exception as exc:
        LOGGER.exception("PDF export failed: %s", exc)
        _notify(f"PDF Export Failed: {exc}", icon="⚠️")
        return
    st.session_state.pdf_export = export
    _notify(f"Export complete! {export.filename} is ready to download.", icon="✅")


# ------------------------------------------------------------------
# Generation
# ------------------------------------------------------------------
def _generate(agent: ReportAgent, topic: str) -> None:
    st.session_state.is_loading = True
    st.session_state.report = None
    st.session_state.pdf_export = None
    with st.spinner("Generating your report..."):
        result = handle_generate_report(agent, topic)
    st.session_state.is_loading = False

    if not result.ok:
        _notify(f"Error Generating Report: {result.error or 'An unknown error occurred.'}", icon="⚠️")
        return

    st.session_state.report = result.report
    st.session_state.topic = topic
    editor = st.session_state.editor
    if editor is None:
        st.session_state.editor = ReportEditor(report=result.report, on_update=_on_report_update)
    else:
        editor.replace_report(result.report)
    st.session_state.history.add(topic)


# ------------------------------------------------------------------
# Rendering
# ------------------------------------------------------------------
def _apply_theme() -> None:
    if st.session_state.theme.theme is Theme.DARK:
        st.markdown(DARK_THEME_CSS, unsafe_allow_html=True)


def _render_sidebar() -> None:
    """Render sidebar controls and the topic history."""
    with st.sidebar:
        theme = st.session_state.theme.theme
        label = "Switch to light theme" if theme is Theme.DARK else "Switch to dark theme"
        st.button(label, on_click=_toggle_theme, use_container_width=True)

        st.divider()
        st.header("Search History")
        topics = st.session_state.history.topics
        if not topics:
            st.caption("No topics searched yet.")
            return
        for index, topic in enumerate(topics):
            st.button(
                topic,
                key=f"history_{index}_{topic}",
                on_click=_select_topic,
                args=(topic,),
                use_container_width=True,
            )
        st.button("Delete History", on_click=_clear_history, type="secondary", use_container_width=True)


def _render_report() -> None:
    editor: ReportEditor = st.session_state.editor
    report: Report = st.session_state.report

    for section in SECTION_ORDER:
        with st.expander(SECTION_TITLES[section], expanded=True):
            if editor.is_editing(section):
                st.text_area(
                    SECTION_TITLES[section],
                    key=f"edit_buffer_{section}",
                    height=240,
                    label_visibility="collapsed",
                )
                cancel_col, save_col = st.columns(2)
                cancel_col.button("Cancel", key=f"cancel_{section}", on_click=_cancel_edit, args=(section,))
                save_col.button("Save", key=f"save_{section}", on_click=_save_edit, args=(section,), type="primary")
            else:
                st.markdown(report.section(section))
                st.button("Edit", key=f"edit_{section}", on_click=_begin_edit, args=(section,))

    st.divider()
    st.button("Export PDF", key="export_pdf", on_click=_export_pdf)
    export = st.session_state.pdf_export
    if export is not None:
        st.download_button(
            label=f"Download {export.filename}",
            data=export.data,
            file_name=export.filename,
            mime="application/pdf",
        )


def main() -> None:
    st.set_page_config(
        page_title="InsightForge",
        layout="wide",
    )

    _init_session_state()
    _apply_theme()

    st.title("InsightForge")
    st.caption("AI report generator: enter a topic and get a structured six-section report.")

    try:
        agent = _get_agent()
    except Exception as exc:  # pragma: no cover - defensive guard for UI
        error_message = (
            "Failed to initialize the report agent. "
            "Verify API keys in your environment and restart the app.\n\n"
            f"Details: {exc}"
        )
        LOGGER.exception("Streamlit failed to initialize ReportAgent: %s", exc)
        st.error(error_message)
        _render_sidebar()
        return

    with st.form("topic_form"):
        st.text_input(
            "Topic",
            key="topic_input",
            placeholder="Enter a topic to generate a report",
            label_visibility="collapsed",
        )
        submitted = st.form_submit_button("Generate report", type="primary")

    topic = st.session_state.pending_topic
    st.session_state.pending_topic = None
    if submitted:
        topic = st.session_state.topic_input

    if topic is not None:
        validation_error = validate_topic(topic)
        if validation_error:
            st.error(validation_error)
        else:
            _generate(agent, topic)

    _render_sidebar()
    _flush_notifications()

    if st.session_state.report is not None and not st.session_state.is_loading:
        _render_report()


if __name__ == "__main__":
    main()
