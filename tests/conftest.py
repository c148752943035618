"""Shared fixtures: a scripted analysis engine in place of Gemini."""

import json

import pytest

from datamind.modules.analysis.service import AnalysisService
from datamind.observability import MetricsStore

SALES_CSV = "Month,Revenue,Region\nJan,100,North\nFeb,150,South\nMar,120,North\n"

DASHBOARD_PAYLOAD = {
    "datasetTitle": "Quarterly Sales",
    "summary": "Monthly revenue by region.",
    "charts": [
        {"id": "c1", "title": "Revenue by Month", "type": "bar", "xAxisKey": "Month", "yAxisKey": "Revenue"},
        {"id": "c2", "title": "Revenue Trend", "type": "line", "xAxisKey": "Month", "yAxisKey": "Revenue"},
    ],
}


class StubEngine:
    """Replays queued responses; an Exception instance is raised instead of returned."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts: list[str] = []

    def queue(self, *responses) -> None:
        self.responses.extend(responses)

    async def generate(self, prompt, response_schema, system_instruction=None):
        self.prompts.append(prompt)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, (dict, list)):
            return json.dumps(response)
        return response


@pytest.fixture
def engine():
    return StubEngine()


@pytest.fixture
def metrics():
    return MetricsStore()


@pytest.fixture
def service(engine, metrics):
    return AnalysisService(engine=engine, metrics=metrics)
