"""
DataMind Sessions - Schemas.

Pydantic models for session API responses.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from datamind.modules.agent.schemas import ChatMessage
from datamind.modules.charts.schemas import DashboardAnalysis
from datamind.modules.sessions.session import Session, SessionPhase


class SessionResponse(BaseModel):
    """Everything the UI collaborator reads from a session."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    phase: SessionPhase
    busy: bool
    columns: list[str] = Field(default_factory=list)
    row_count: int = Field(default=0, alias="rowCount")
    analysis: DashboardAnalysis | None = None
    messages: list[ChatMessage] = Field(default_factory=list)
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_session(cls, session: Session) -> "SessionResponse":
        return cls(
            id=session.id,
            phase=session.phase,
            busy=session.busy,
            columns=list(session.dataset.columns),
            row_count=session.dataset.row_count,
            analysis=session.analysis,
            messages=list(session.messages),
            created_at=session.created_at,
        )


class DatasetResponse(BaseModel):
    """Parsed rows, for the chart rendering collaborator."""

    model_config = ConfigDict(populate_by_name=True)

    columns: list[str]
    rows: list[dict[str, Any]]
    row_count: int = Field(..., alias="rowCount")
