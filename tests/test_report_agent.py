import json
from pathlib import Path

import pytest

from agents import ReportAgent, ReportGenerationError, handle_generate_report
from agents.actions import GENERIC_ERROR_MESSAGE
from agents.report_agent import parse_report
from domain.local_storage import HistoryStore, LocalStorage
from domain.report import SECTION_ORDER


def test_generate_returns_all_six_sections(make_agent, sample_report_json: str) -> None:
    report = make_agent(sample_report_json).generate("Quantum Computing")
    assert report.introduction
    assert all(report.section(name) for name in SECTION_ORDER)


def test_parse_report_accepts_fenced_and_bare_objects(sample_report_json: str) -> None:
    bare = json.dumps(json.loads(sample_report_json)["report"])
    fenced = f"```json\n{sample_report_json}\n```"
    assert parse_report(bare) == parse_report(fenced)


def test_parse_report_rejects_missing_section(sample_report_json: str) -> None:
    data = json.loads(sample_report_json)
    del data["report"]["futureScope"]
    with pytest.raises(ReportGenerationError):
        parse_report(json.dumps(data))


def test_parse_report_rejects_non_json() -> None:
    with pytest.raises(ReportGenerationError):
        parse_report("Here is your report about quantum computing.")


def test_generate_rejects_blank_topic(make_agent, sample_report_json: str) -> None:
    with pytest.raises(ValueError):
        make_agent(sample_report_json).generate("   ")


def test_agent_requires_api_key_without_client(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(EnvironmentError):
        ReportAgent()


def test_agent_builds_openai_client_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-dummy")
    agent = ReportAgent()
    assert agent._model_client.model_info["function_calling"] is True


def test_verbose_agent_persists_response(make_agent, sample_report_json: str, tmp_path: Path) -> None:
    agent = make_agent(sample_report_json, verbose=True, responses_dir=tmp_path)
    agent.generate("Quantum Computing")
    files = list(tmp_path.glob("*.json"))
    assert len(files) == 1
    stored = json.loads(files[0].read_text(encoding="utf-8"))
    assert stored["topic"] == "Quantum Computing"
    assert set(stored["report"]) == {"introduction", "history", "benefits", "challenges", "currentTrends", "futureScope"}


def test_handle_generate_report_surfaces_generic_error(make_agent) -> None:
    result = handle_generate_report(make_agent('{"report": {"introduction": "only one"}}'), "Quantum Computing")
    assert not result.ok
    assert result.report is None
    assert result.error == GENERIC_ERROR_MESSAGE


def test_handle_generate_report_rejects_invalid_topic(make_agent, sample_report_json: str) -> None:
    result = handle_generate_report(make_agent(sample_report_json), "ab")
    assert result.error == "Topic must be at least 3 characters long."


def test_quantum_computing_scenario_updates_history_once(
    make_agent, sample_report_json: str, tmp_path: Path
) -> None:
    agent = make_agent(sample_report_json, sample_report_json)
    history = HistoryStore(LocalStorage(tmp_path / "store.json"))

    first = handle_generate_report(agent, "Quantum Computing")
    assert first.ok and first.report.introduction
    history.add("Quantum Computing")
    assert history.topics == ["Quantum Computing"]

    second = handle_generate_report(agent, "Quantum Computing")
    assert second.ok
    history.add("Quantum Computing")
    assert len(history.topics) == 1
