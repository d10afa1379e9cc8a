import json
from typing import Callable

import pytest
from autogen_core.models import ModelInfo
from autogen_ext.models.replay import ReplayChatCompletionClient

from agents import ReportAgent
from domain.report import Report

SAMPLE_SECTIONS = {
    "introduction": "Quantum computing uses qubits to process information.",
    "history": "The field began with proposals by Feynman and Deutsch in the 1980s.",
    "benefits": "Some problems, such as factoring, can be solved dramatically faster.",
    "challenges": "Qubits decohere quickly and error correction is expensive.",
    "currentTrends": "Hardware vendors are racing to build logical qubits.",
    "futureScope": "Fault-tolerant machines could transform chemistry and cryptography.",
}

REPLAY_MODEL_INFO: ModelInfo = {
    "vision": False,
    "function_calling": True,
    "json_output": True,
    "structured_output": False,
    "family": "unknown",
}


@pytest.fixture
def sample_report() -> Report:
    return Report.model_validate(SAMPLE_SECTIONS)


@pytest.fixture
def sample_report_json() -> str:
    return json.dumps({"report": SAMPLE_SECTIONS})


@pytest.fixture
def make_agent() -> Callable[..., ReportAgent]:
    """Build a ReportAgent that answers from a fixed list of model responses."""

    def _make(*responses: str, **kwargs) -> ReportAgent:
        client = ReplayChatCompletionClient(list(responses), model_info=REPLAY_MODEL_INFO)
        return ReportAgent(model_client=client, **kwargs)

    return _make
