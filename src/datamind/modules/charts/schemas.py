"""
DataMind Charts - Schemas.

Pydantic models for chart configurations and the dashboard they live in.
Field names travel over the wire (engine responses, API) in camelCase.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


ChartType = Literal["bar", "line", "area", "scatter", "pie"]
CHART_TYPES: tuple[str, ...] = ("bar", "line", "area", "scatter", "pie")

DEFAULT_CHART_COLOR = "#3b82f6"


# =============================================================================
# Domain Models
# =============================================================================


class ChartConfig(BaseModel):
    """Declarative description of one visualization."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: str = Field(default="", description="Opaque identifier, unique within a session")
    title: str
    description: str = ""
    type: ChartType
    x_axis_key: str = Field(..., alias="xAxisKey", description="Category axis, or label key for pie")
    y_axis_key: str = Field(..., alias="yAxisKey", description="Value axis, or size key for pie")
    series_key: str | None = Field(default=None, alias="seriesKey", description="Optional grouping column")
    color: str | None = Field(default=None, description="Hex color, e.g. #3b82f6")

    def referenced_columns(self) -> list[str]:
        keys = [self.x_axis_key, self.y_axis_key]
        if self.series_key:
            keys.append(self.series_key)
        return keys


class DashboardAnalysis(BaseModel):
    """Title, summary and ordered chart set for one dataset."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    dataset_title: str = Field(..., alias="datasetTitle")
    summary: str
    charts: tuple[ChartConfig, ...] = ()


# =============================================================================
# Request Schemas
# =============================================================================


class ChartBuildRequest(BaseModel):
    """Manual chart builder input."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    type: ChartType = "bar"
    x_axis_key: str | None = Field(default=None, alias="xAxisKey")
    y_axis_key: str | None = Field(default=None, alias="yAxisKey")
    description: str = ""


class ChartTypeUpdateRequest(BaseModel):
    """Change the visualization type of a dashboard chart in place."""

    type: ChartType


# =============================================================================
# Response Schemas
# =============================================================================


class ChartSpecResponse(BaseModel):
    """Renderable figure for a dashboard chart."""

    chart_id: str
    library: Literal["plotly"] = "plotly"
    spec: dict[str, Any]
