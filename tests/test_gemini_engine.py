"""Tests for the Gemini adapter, with the SDK client replaced by a fake."""

from types import SimpleNamespace

import pytest
from google.genai import types

from datamind.core import gemini
from datamind.core.gemini import GeminiAnalysisEngine, to_gemini_schema
from datamind.core.ids import IdGenerator
from datamind.core.schema_validator import SchemaValidator, ValidationError
from datamind.exceptions import ExternalServiceException
from datamind.modules.analysis.schemas import CHAT_RESPONSE_SCHEMA, DASHBOARD_ANALYSIS_SCHEMA


class FakeModels:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    async def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def _install(monkeypatch, models):
    client = SimpleNamespace(aio=SimpleNamespace(models=models))
    monkeypatch.setattr(gemini, "get_gemini_client", lambda: client)


def test_to_gemini_schema_nested():
    schema = to_gemini_schema(DASHBOARD_ANALYSIS_SCHEMA)

    assert schema.type == types.Type.OBJECT
    assert schema.required == ["datasetTitle", "summary", "charts"]
    charts = schema.properties["charts"]
    assert charts.type == types.Type.ARRAY
    assert charts.items.properties["type"].enum == ["bar", "line", "area", "scatter", "pie"]


def test_to_gemini_schema_nullable_object():
    schema = to_gemini_schema(CHAT_RESPONSE_SCHEMA)

    new_chart = schema.properties["newChart"]
    assert new_chart.type == types.Type.OBJECT
    assert new_chart.nullable is True
    assert new_chart.required == ["title", "type", "xAxisKey", "yAxisKey"]
    assert schema.properties["textResponse"].nullable is None


@pytest.mark.asyncio
async def test_generate_requests_json(monkeypatch):
    models = FakeModels(text='{"textResponse": "hi"}')
    _install(monkeypatch, models)

    text = await GeminiAnalysisEngine(model="test-model").generate("prompt", CHAT_RESPONSE_SCHEMA)

    assert text == '{"textResponse": "hi"}'
    call = models.calls[0]
    assert call["model"] == "test-model"
    assert call["contents"] == "prompt"
    assert call["config"].response_mime_type == "application/json"


@pytest.mark.asyncio
async def test_generate_wraps_sdk_errors(monkeypatch):
    _install(monkeypatch, FakeModels(error=RuntimeError("503 UNAVAILABLE")))

    with pytest.raises(ExternalServiceException) as exc_info:
        await GeminiAnalysisEngine(model="test-model").generate("prompt", CHAT_RESPONSE_SCHEMA)

    assert "503 UNAVAILABLE" in exc_info.value.message


@pytest.mark.asyncio
async def test_generate_none_text_is_empty(monkeypatch):
    _install(monkeypatch, FakeModels(text=None))

    assert await GeminiAnalysisEngine(model="m").generate("prompt", CHAT_RESPONSE_SCHEMA) == ""


def test_missing_api_key(monkeypatch, tmp_path):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.chdir(tmp_path)
    gemini.get_settings.cache_clear()
    gemini.reset_gemini_client()

    with pytest.raises(ExternalServiceException):
        gemini.get_gemini_client()

    gemini.get_settings.cache_clear()


def test_schema_validator_reports_paths():
    with pytest.raises(ValidationError) as exc_info:
        SchemaValidator.validate({"textResponse": 5}, CHAT_RESPONSE_SCHEMA)

    assert exc_info.value.errors[0].startswith("textResponse:")


def test_id_generator_monotonic():
    ids = IdGenerator()

    assert [ids.next("chart"), ids.next("msg"), ids.next("chart")] == ["chart-1", "msg-2", "chart-3"]
