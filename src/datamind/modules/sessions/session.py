"""
DataMind Sessions - Session object.

A Session bundles everything one user works with: the ingested Dataset, the
DashboardAnalysis, the conversation and a session-scoped id generator. It is
passed around explicitly; nothing lives in module globals.

Lifecycle:
    upload --load_csv--> analyzing --success--> dashboard --reset--> upload
                             |
                             +--failure--> upload (nothing committed)
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from datamind.core.ids import IdGenerator
from datamind.exceptions import (
    ConflictException,
    IngestionFailure,
    NoDashboardException,
    NotFoundException,
)
from datamind.modules.agent.conversation import ConversationState
from datamind.modules.agent.schemas import ChatMessage, ChatTurnResult
from datamind.modules.analysis.service import AnalysisService
from datamind.modules.charts.registry import (
    append_chart,
    build_manual_chart,
    change_chart_type,
    prepend_chart,
)
from datamind.modules.charts.render import render_chart_spec
from datamind.modules.charts.schemas import ChartConfig, ChartType, DashboardAnalysis
from datamind.modules.data.parser import parse_csv
from datamind.modules.data.sample import generate_sample_csv
from datamind.modules.data.schemas import EMPTY_DATASET, Dataset

logger = logging.getLogger(__name__)


class SessionPhase(str, Enum):
    """Where the session is in the upload -> dashboard flow."""

    UPLOAD = "upload"
    ANALYZING = "analyzing"
    DASHBOARD = "dashboard"


def analysis_ready_message(title: str) -> str:
    return (
        f'I\'ve analyzed your data! Here is a dashboard summarizing "{title}". '
        "You can ask me questions about specific trends."
    )


class Session:
    """State and operations for one analysis session."""

    def __init__(self, session_id: str, analysis_service: AnalysisService):
        self.id = session_id
        self.created_at = datetime.now(timezone.utc)
        self.ids = IdGenerator()
        self.conversation = ConversationState(self.ids)
        self.dataset: Dataset = EMPTY_DATASET
        self.analysis: DashboardAnalysis | None = None
        self.phase = SessionPhase.UPLOAD
        self._service = analysis_service
        self._chart_ids: set[str] = set()

    @property
    def busy(self) -> bool:
        return self.conversation.busy

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return self.conversation.messages

    def _require_dashboard(self) -> DashboardAnalysis:
        if self.phase is not SessionPhase.DASHBOARD or self.analysis is None:
            raise NoDashboardException(self.phase.value)
        return self.analysis

    def _stamp_chart(self, chart: ChartConfig) -> ChartConfig:
        """Give ``chart`` an id that is unique within this session."""
        if not chart.id or chart.id in self._chart_ids:
            chart = chart.model_copy(update={"id": self.ids.next("chart")})
        self._chart_ids.add(chart.id)
        return chart

    def _chart_index(self, index: int) -> ChartConfig:
        analysis = self._require_dashboard()
        if not 0 <= index < len(analysis.charts):
            raise NotFoundException("chart", index)
        return analysis.charts[index]

    # -------------------------------------------------------------------------
    # Upload / Analysis
    # -------------------------------------------------------------------------

    async def load_csv(self, raw_text: str) -> DashboardAnalysis:
        """
        Ingest CSV text and build the initial dashboard.

        Nothing is committed unless the analysis succeeds.

        Raises:
            ConversationBusyException: another request is in flight
            ConflictException: a dashboard is already loaded
            IngestionFailure: no usable rows in the input
            AnalysisFailure: the engine could not produce a dashboard
        """
        if self.phase is SessionPhase.DASHBOARD:
            raise ConflictException(
                "A dashboard is already loaded; reset the session first",
                current_state=self.phase.value,
                target_state=SessionPhase.ANALYZING.value,
            )

        self.conversation.acquire()
        try:
            dataset = parse_csv(raw_text)
            if dataset.is_empty:
                logger.warning(f"[session] {self.id}: upload produced no rows")
                raise IngestionFailure()

            self.phase = SessionPhase.ANALYZING
            try:
                analysis = await self._service.request_initial_analysis(dataset)
            except Exception:
                self.phase = SessionPhase.UPLOAD
                raise

            charts = tuple(self._stamp_chart(chart) for chart in analysis.charts)
            self.dataset = dataset
            self.analysis = analysis.model_copy(update={"charts": charts})
            self.phase = SessionPhase.DASHBOARD
            self.conversation.add_message("model", analysis_ready_message(analysis.dataset_title))

            logger.info(
                f"[session] {self.id}: dashboard ready ({dataset.row_count} rows, {len(charts)} charts)"
            )
            return self.analysis
        finally:
            self.conversation.release()

    async def load_sample(self, seed: int | None = None) -> DashboardAnalysis:
        """Load the synthetic monthly business dataset."""
        return await self.load_csv(generate_sample_csv(seed=seed))

    def reset(self) -> None:
        """Return to the upload phase with a fresh conversation."""
        self.conversation.reset()
        self.dataset = EMPTY_DATASET
        self.analysis = None
        self.phase = SessionPhase.UPLOAD
        self._chart_ids.clear()
        logger.info(f"[session] {self.id}: reset")

    # -------------------------------------------------------------------------
    # Chat
    # -------------------------------------------------------------------------

    async def _respond(self, history: tuple[ChatMessage, ...], text: str) -> ChatTurnResult:
        result = await self._service.request_chat_turn(history, text, self.dataset)
        if result.chart is None or self.analysis is None:
            return result

        chart = self._stamp_chart(result.chart)
        self.analysis = prepend_chart(self.analysis, chart)
        return result.model_copy(update={"chart": chart})

    async def send_message(self, text: str) -> tuple[ChatMessage, ChatMessage]:
        """
        Submit a user message; returns the user message and the model reply.

        A chart suggested by the engine is prepended to the dashboard and
        attached to the reply.
        """
        self._require_dashboard()
        return await self.conversation.submit_user_message(text, self._respond)

    # -------------------------------------------------------------------------
    # Charts
    # -------------------------------------------------------------------------

    def add_chart(
        self,
        title: str = "",
        chart_type: ChartType = "bar",
        x_axis_key: str | None = None,
        y_axis_key: str | None = None,
        description: str = "",
    ) -> ChartConfig:
        """Append a chart from the manual chart builder."""
        analysis = self._require_dashboard()
        chart = self._stamp_chart(
            build_manual_chart(
                self.ids.next("chart"),
                self.dataset.columns,
                title=title,
                chart_type=chart_type,
                x_axis_key=x_axis_key,
                y_axis_key=y_axis_key,
                description=description,
            )
        )
        self.analysis = append_chart(analysis, chart)
        return chart

    def update_chart_type(self, index: int, chart_type: ChartType) -> ChartConfig:
        """Change the visualization type of the chart at ``index``."""
        self._chart_index(index)
        self.analysis = change_chart_type(self.analysis, index, chart_type)
        return self.analysis.charts[index]

    def chart_spec(self, index: int) -> tuple[ChartConfig, dict[str, Any]]:
        chart = self._chart_index(index)
        return chart, render_chart_spec(chart, self.dataset)


__all__ = ["Session", "SessionPhase", "analysis_ready_message"]
