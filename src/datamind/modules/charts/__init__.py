"""DataMind Charts Module - chart configurations, registry and render specs."""

from datamind.modules.charts.registry import (
    append_chart,
    build_manual_chart,
    change_chart_type,
    prepend_chart,
    replace_chart_at,
)
from datamind.modules.charts.render import render_chart_spec
from datamind.modules.charts.schemas import CHART_TYPES, ChartConfig, ChartType, DashboardAnalysis

__all__ = [
    "CHART_TYPES",
    "ChartConfig",
    "ChartType",
    "DashboardAnalysis",
    "append_chart",
    "build_manual_chart",
    "change_chart_type",
    "prepend_chart",
    "render_chart_spec",
    "replace_chart_at",
]
