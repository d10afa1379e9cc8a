"""
Report Agent (OpenAI via AutoGen)

- Built on Microsoft AutoGen (agentchat/core/ext stack).
- A single AssistantAgent asked to answer with the six report sections as JSON.
- The JSON is validated with pydantic; anything short of all six sections is a failure.

Required env:
  - OPENAI_API_KEY
  - OPENAI_API_BASE_URL (optional)
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
import re
from dataclasses import asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Coroutine, Iterable, Optional
from uuid import uuid4

from autogen_agentchat.agents import AssistantAgent
from autogen_agentchat.messages import BaseChatMessage
from autogen_core import CancellationToken
from autogen_core.models import ChatCompletionClient, ModelInfo
from autogen_ext.models.openai import OpenAIChatCompletionClient
from pydantic import ValidationError

from domain.report import GenerateReportOutput, Report

from .report_prompts import REPORT_SYSTEM_PROMPT, report_prompt
from .store_report import StoredReport

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class ReportGenerationError(RuntimeError):
    """Raised when the model output cannot be turned into a complete report."""


def parse_report(text: str) -> Report:
    """Parse the model's JSON answer into a Report, accepting a bare or wrapped object."""

    cleaned = text.strip()
    fenced = _CODE_FENCE.match(cleaned)
    if fenced:
        cleaned = fenced.group(1)
    try:
        data = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise ReportGenerationError(f"Model output is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ReportGenerationError("Model output is not a JSON object.")
    try:
        if "report" in data:
            return GenerateReportOutput.model_validate(data).report
        return Report.model_validate(data)
    except ValidationError as exc:
        raise ReportGenerationError(f"Model output does not match the report schema: {exc}") from exc


class ReportAgent:
    """AutoGen agent that writes a six-section report on a topic."""

    def __init__(
        self,
        *,
        temperature: Optional[float] = None,
        openai_model_name: str = "gpt-4o-mini",
        verbose: bool = False,
        model_client: Optional[ChatCompletionClient] = None,
        responses_dir: Path = Path("responses"),
    ) -> None:
        if model_client is None:
            if not os.getenv("OPENAI_API_KEY"):
                raise EnvironmentError("OPENAI_API_KEY is not set.")
            model_client = self._build_openai_client(
                openai_model_name=openai_model_name,
                temperature=temperature,
            )

        self._verbose = verbose
        self._responses_dir = responses_dir
        self._model_client = model_client

        logger.info("Initializing report agent with model '%s'", openai_model_name)
        self._system_message = REPORT_SYSTEM_PROMPT
        self._report_agent = AssistantAgent(
            name="report_writer",
            model_client=self._model_client,
            system_message=self._system_message,
            description="Writes a structured six-section report on a topic.",
            tools=[],
            max_tool_iterations=1,
        )

    def generate(self, topic: str) -> Report:
        if not topic or not topic.strip():
            raise ValueError("Topic must be a non-empty string.")

        logger.info("Generating report for topic: %s", topic)
        self._reset_agent(self._report_agent)
        prompt = report_prompt(topic=topic)
        result = self._run_async(self._report_agent.run(task=prompt))
        text = self._extract_text(result.messages, preferred_source=self._report_agent.name)
        logger.info("Report agent raw output: %s", text)

        report = parse_report(text)
        logger.info("Report generated successfully for topic: %s", topic)
        self._persist_response(topic=topic, report=report)
        return report

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _persist_response(self, *, topic: str, report: Report) -> None:
        if not self._verbose:
            return
        stored = StoredReport(
            id=uuid4().hex,
            topic=topic,
            report=report.model_dump(by_alias=True),
            generated_at=datetime.utcnow().strftime("%Y-%m-%dT%H:%M:%SZ"),
        )
        timestamp = datetime.utcnow().strftime("%Y%m%d_%H%M%S")
        safe_topic = re.sub(r"[^a-zA-Z0-9-_ ]", "", topic).strip()[:50]
        file_path = self._responses_dir / f"{timestamp}_{safe_topic or 'report'}.json"
        try:
            self._responses_dir.mkdir(parents=True, exist_ok=True)
            file_path.write_text(json.dumps(asdict(stored), indent=2, ensure_ascii=False), encoding="utf-8")
            logger.info("Saved response to %s", file_path)
        except OSError as exc:  # pragma: no cover - filesystem issues
            logger.warning("Failed to save response %s: %s", file_path, exc)

    def _run_async(self, coro: Coroutine[Any, Any, Any]) -> Any:
        try:
            return asyncio.run(coro)
        except RuntimeError as exc:  # pragma: no cover - defensive path
            if "event loop is running" in str(exc):
                loop = asyncio.get_event_loop()
                return loop.run_until_complete(coro)
            raise

    def _reset_agent(self, agent: AssistantAgent) -> None:
        self._run_async(agent.on_reset(CancellationToken()))

    @staticmethod
    def _last_chat_message(messages: Iterable[Any], preferred_source: Optional[str] = None) -> BaseChatMessage:
        candidate: Optional[BaseChatMessage] = None
        for message in reversed(list(messages)):
            if not isinstance(message, BaseChatMessage):
                continue
            if preferred_source and getattr(message, "source", None) == preferred_source:
                return message
            if candidate is None:
                candidate = message
        if candidate:
            return candidate
        raise ReportGenerationError("Assistant did not produce a chat response.")

    def _extract_text(self, messages: Iterable[Any], preferred_source: Optional[str]) -> str:
        final_message = self._last_chat_message(messages, preferred_source=preferred_source)
        to_text = getattr(final_message, "to_text", None)
        if callable(to_text):
            return to_text().strip()
        return str(final_message).strip()

    @staticmethod
    def _build_openai_client(
        *,
        openai_model_name: str,
        temperature: Optional[float],
    ) -> ChatCompletionClient:
        model_info: ModelInfo = {
            "vision": False,
            "function_calling": True,
            "json_output": True,
            "structured_output": False,
            "family": "openai",
        }
        client_kwargs = {
            "model": openai_model_name,
            "api_key": os.environ["OPENAI_API_KEY"],
            "base_url": os.getenv("OPENAI_API_BASE_URL", "https://api.openai.com/v1"),
            "include_name_in_message": False,
            "model_info": model_info,
        }
        if temperature is not None:
            client_kwargs["temperature"] = temperature
        return OpenAIChatCompletionClient(**client_kwargs)
