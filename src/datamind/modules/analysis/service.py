"""
DataMind Analysis - Contract with the external analysis engine.

Two operations:
1. request_initial_analysis: dashboard title, summary and charts. Fails hard
   with AnalysisFailure; the session cannot proceed without a dashboard.
2. request_chat_turn: one conversational answer with an optional chart.
   Never raises; any failure degrades into a fixed apology text.

Schema validation happens exactly once, here: JSON decode, JSON Schema
(Draft 7), then Pydantic model construction. Downstream code trusts the
returned models.
"""

import json
import logging
import time
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from datamind.config import AnalysisSettings, get_settings
from datamind.core.gemini import AnalysisEngine, GeminiAnalysisEngine
from datamind.core.schema_validator import SchemaValidator, ValidationError
from datamind.exceptions import AnalysisFailure, ChatTurnFailure, DataMindException
from datamind.modules.agent.schemas import ChatMessage, ChatTurnResult
from datamind.modules.analysis.prompts import (
    ANALYSIS_SYSTEM_INSTRUCTION,
    build_chat_prompt,
    build_initial_analysis_prompt,
)
from datamind.modules.analysis.schemas import CHAT_RESPONSE_SCHEMA, DASHBOARD_ANALYSIS_SCHEMA
from datamind.modules.charts.schemas import ChartConfig, DashboardAnalysis
from datamind.modules.data.sampler import sample_rows
from datamind.modules.data.schemas import Dataset
from datamind.observability import MetricsStore, get_metrics_store

logger = logging.getLogger(__name__)

CHAT_FALLBACK_MESSAGE = "I'm sorry, I encountered an error analyzing your request."

FailureType = type[AnalysisFailure] | type[ChatTurnFailure]


def find_unknown_columns(charts: Sequence[ChartConfig], columns: Sequence[str]) -> list[str]:
    """
    List chart bindings that reference columns missing from the dataset.

    Unknown keys are not fatal (the renderer degrades gracefully); callers
    log them as warnings.
    """
    known = set(columns)
    warnings = []
    for chart in charts:
        for key in chart.referenced_columns():
            if key not in known:
                warnings.append(f"Chart '{chart.title}' references unknown column '{key}'")
    return warnings


class AnalysisService:
    """Builds prompts, calls the engine and validates its responses."""

    def __init__(
        self,
        engine: AnalysisEngine | None = None,
        settings: AnalysisSettings | None = None,
        metrics: MetricsStore | None = None,
    ):
        self.engine = engine or GeminiAnalysisEngine()
        self.settings = settings or get_settings().analysis
        self.metrics = metrics or get_metrics_store()

    async def _generate_validated(
        self,
        operation: str,
        prompt: str,
        schema: dict[str, Any],
        failure: FailureType,
        system_instruction: str | None = None,
    ) -> dict[str, Any]:
        """Call the engine and return the decoded, schema-valid payload."""
        started = time.perf_counter()
        try:
            try:
                text = await self.engine.generate(prompt, schema, system_instruction=system_instruction)
            except DataMindException as e:
                raise failure(e.message, details={"cause": e.code})
            except Exception as e:
                raise failure(f"engine call failed: {e}", details={"cause": type(e).__name__})

            if not text or not text.strip():
                raise failure("empty response from analysis engine")

            try:
                payload = json.loads(text)
            except json.JSONDecodeError as e:
                raise failure(f"malformed JSON: {e.msg}")

            try:
                SchemaValidator.validate(payload, schema)
            except ValidationError as e:
                raise failure("response does not match schema", details={"errors": e.errors})

            return payload
        except (AnalysisFailure, ChatTurnFailure) as e:
            self.metrics.record_call_error(operation, e.code)
            raise
        finally:
            self.metrics.record_call_latency(operation, (time.perf_counter() - started) * 1000)

    async def request_initial_analysis(self, dataset: Dataset) -> DashboardAnalysis:
        """
        Ask the engine for the initial dashboard.

        Raises:
            AnalysisFailure: engine error or timeout, empty or malformed
                response, or schema mismatch
        """
        if dataset.is_empty:
            raise AnalysisFailure("dataset is empty")

        size = self.settings.initial_sample_rows
        prompt = build_initial_analysis_prompt(dataset.columns, sample_rows(dataset, size), size)

        logger.info(f"[analysis] Requesting dashboard for {dataset.row_count} rows (sample={size})")
        payload = await self._generate_validated(
            "initial_analysis",
            prompt,
            DASHBOARD_ANALYSIS_SCHEMA,
            AnalysisFailure,
            system_instruction=ANALYSIS_SYSTEM_INSTRUCTION,
        )

        try:
            analysis = DashboardAnalysis.model_validate(payload)
        except PydanticValidationError as e:
            self.metrics.record_call_error("initial_analysis", "ANALYSIS_FAILED")
            raise AnalysisFailure("response does not match schema", details={"errors": [str(e)]})

        for warning in find_unknown_columns(analysis.charts, dataset.columns):
            logger.warning(f"[analysis] {warning}")

        logger.info(f"[analysis] Dashboard '{analysis.dataset_title}' with {len(analysis.charts)} charts")
        return analysis

    async def request_chat_turn(
        self,
        messages: Sequence[ChatMessage],
        user_message: str,
        dataset: Dataset,
    ) -> ChatTurnResult:
        """
        Answer one user message, optionally with a new chart.

        Never raises: any failure yields the fallback apology with ``failed=True``.
        """
        history_size = self.settings.chat_history_messages
        history = list(messages)[-history_size:] if history_size else []
        prompt = build_chat_prompt(
            dataset.columns,
            sample_rows(dataset, self.settings.chat_sample_rows),
            user_message,
            history=history,
        )

        try:
            payload = await self._generate_validated(
                "chat_turn", prompt, CHAT_RESPONSE_SCHEMA, ChatTurnFailure
            )
            chart = None
            if payload.get("newChart") is not None:
                try:
                    chart = ChartConfig.model_validate(payload["newChart"])
                except PydanticValidationError as e:
                    self.metrics.record_call_error("chat_turn", "CHAT_TURN_FAILED")
                    raise ChatTurnFailure("newChart does not match schema", details={"errors": [str(e)]})
        except ChatTurnFailure as e:
            logger.error(f"[chat] {e.message}")
            return ChatTurnResult(text=CHAT_FALLBACK_MESSAGE, failed=True)

        if chart is not None:
            for warning in find_unknown_columns([chart], dataset.columns):
                logger.warning(f"[chat] {warning}")

        return ChatTurnResult(text=payload["textResponse"], chart=chart)


__all__ = ["AnalysisService", "CHAT_FALLBACK_MESSAGE", "find_unknown_columns"]
