"""
DataMind Charts - Registry.

Copy-on-write operations over a DashboardAnalysis. Every operation returns a
new value and leaves its input untouched, so a reader holding the previous
analysis never observes a half-updated chart list.

No identity checks are made: duplicate titles or target columns are allowed.
"""

from collections.abc import Sequence

from datamind.modules.charts.schemas import (
    DEFAULT_CHART_COLOR,
    ChartConfig,
    ChartType,
    DashboardAnalysis,
)


def _with_charts(analysis: DashboardAnalysis, charts: Sequence[ChartConfig]) -> DashboardAnalysis:
    return analysis.model_copy(update={"charts": tuple(charts)})


def append_chart(analysis: DashboardAnalysis, config: ChartConfig) -> DashboardAnalysis:
    """Add ``config`` after the existing charts (manual chart builder)."""
    return _with_charts(analysis, (*analysis.charts, config))


def prepend_chart(analysis: DashboardAnalysis, config: ChartConfig) -> DashboardAnalysis:
    """Add ``config`` before the existing charts (chart suggested in chat)."""
    return _with_charts(analysis, (config, *analysis.charts))


def replace_chart_at(analysis: DashboardAnalysis, index: int, config: ChartConfig) -> DashboardAnalysis:
    """Substitute the chart at ``index``; an out-of-range index is a no-op."""
    if not 0 <= index < len(analysis.charts):
        return analysis
    charts = list(analysis.charts)
    charts[index] = config
    return _with_charts(analysis, charts)


def change_chart_type(analysis: DashboardAnalysis, index: int, chart_type: ChartType) -> DashboardAnalysis:
    """Switch the visualization type of one chart, keeping its bindings."""
    if not 0 <= index < len(analysis.charts):
        return analysis
    updated = analysis.charts[index].model_copy(update={"type": chart_type})
    return replace_chart_at(analysis, index, updated)


def build_manual_chart(
    chart_id: str,
    columns: Sequence[str],
    title: str = "",
    chart_type: ChartType = "bar",
    x_axis_key: str | None = None,
    y_axis_key: str | None = None,
    description: str = "",
) -> ChartConfig:
    """
    Build a ChartConfig from the chart builder form.

    Defaults: title "New Chart", x = first column, y = second column (or the
    first when there is only one), the default blue color.
    """
    x_default = columns[0] if columns else ""
    y_default = columns[1] if len(columns) > 1 else x_default

    return ChartConfig(
        id=chart_id,
        title=title.strip() or "New Chart",
        description=description,
        type=chart_type,
        x_axis_key=x_axis_key or x_default,
        y_axis_key=y_axis_key or y_default,
        color=DEFAULT_CHART_COLOR,
    )


__all__ = [
    "append_chart",
    "build_manual_chart",
    "change_chart_type",
    "prepend_chart",
    "replace_chart_at",
]
