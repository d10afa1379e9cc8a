"""
Command line interface for InsightForge.

Loads API keys from environment variables (via `.env`), creates a ReportAgent,
and enters an interactive loop: each line is a topic to report on, plus a few
commands for the stored history and PDF export.
"""

import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from agents import ReportAgent, handle_generate_report
from domain.local_storage import HistoryStore, LocalStorage
from domain.pdf_export import export_report_pdf
from domain.report import SECTION_TITLES, Report

# --- Logging configuration ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

HELP_TEXT = (
    "Type a topic (3-100 characters) and press Enter to generate a report.\n"
    "Commands: 'history' lists past topics, 'clear' deletes them, "
    "'export' saves the last report as PDF, 'quit' exits.\n"
)


def format_report(report: Report) -> str:
    blocks = []
    for name, text in report.sections():
        title = SECTION_TITLES[name]
        blocks.append(f"{title}\n{'-' * len(title)}\n{text}")
    return "\n\n".join(blocks)


def main() -> None:
    """Run the command line loop for the report agent."""
    logger.info("Loading environment variables from .env file...")
    load_dotenv()

    try:
        agent = ReportAgent()
    except Exception as exc:
        logger.exception("Failed to initialize the report agent: %s", exc)
        return

    history = HistoryStore(LocalStorage())
    history.load()
    report: Optional[Report] = None
    topic = ""

    print("\nWelcome to InsightForge!\n" + HELP_TEXT)

    while True:
        try:
            line = input("> ").strip()
        except EOFError:
            logger.info("EOF received; exiting.")
            break

        if not line:
            continue
        command = line.lower()
        if command in {"quit", "exit", "q"}:
            logger.info("User requested exit.")
            break
        if command == "history":
            topics = history.topics
            print("\n".join(f"{idx}. {item}" for idx, item in enumerate(topics, start=1)) or "History is empty.")
            continue
        if command == "clear":
            history.clear()
            print("History cleared.")
            continue
        if command == "export":
            if report is None:
                print("No report data available to export.")
                continue
            try:
                export = export_report_pdf(report, topic)
                Path(export.filename).write_bytes(export.data)
                print(f"Export complete! {export.filename} has been written.")
            except Exception as exc:
                logger.exception("PDF export failed: %s", exc)
                print(f"PDF Export Failed: {exc}\n")
            continue

        logger.info("Processing topic: %s", line)
        result = handle_generate_report(agent, line)
        if not result.ok:
            print(f"Error Generating Report: {result.error}\n")
            continue
        report, topic = result.report, line
        history.add(line)
        print(f"\n{format_report(report)}\n")
        logger.info("Report delivered successfully.")

    logger.info("Session ended. Goodbye!")
    print("Goodbye!")


if __name__ == "__main__":
    main()
