"""
DataMind Agent - Schemas.

Pydantic models for chat operations.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from datamind.modules.charts.schemas import ChartConfig


MessageRole = Literal["user", "model"]


class ChatMessage(BaseModel):
    """Single entry of the append-only conversation log."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    role: MessageRole
    content: str
    related_chart: ChartConfig | None = Field(default=None, alias="relatedChart")


class ChatTurnResult(BaseModel):
    """Outcome of one conversational turn with the analysis engine."""

    text: str
    chart: ChartConfig | None = None
    failed: bool = False


# =============================================================================
# Request / Response Schemas
# =============================================================================


class ChatRequest(BaseModel):
    """Request to send a chat message."""

    message: str = Field(..., min_length=1, max_length=4000)


class ChatResponse(BaseModel):
    """Messages appended by the turn, plus the chart added to the dashboard."""

    model_config = ConfigDict(populate_by_name=True)

    user_message: ChatMessage = Field(..., alias="userMessage")
    reply: ChatMessage
    new_chart: ChartConfig | None = Field(default=None, alias="newChart")
