"""
Agents package for the InsightForge report generator.

This package groups together the report agent and the request handler the
UI calls.  Import `ReportAgent` directly from here to simplify access:

```python
from agents import ReportAgent

agent = ReportAgent()
report = agent.generate("Quantum Computing")
```
"""

from .actions import GenerateReportResult, handle_generate_report  # noqa: F401
from .report_agent import ReportAgent, ReportGenerationError  # noqa: F401

__all__ = ["GenerateReportResult", "ReportAgent", "ReportGenerationError", "handle_generate_report"]
