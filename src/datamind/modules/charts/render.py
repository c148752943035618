"""
DataMind Charts - Plotly spec adapter for the rendering collaborator.

Translates a ChartConfig plus the session Dataset into a Plotly figure dict.
Does NOT recommend visualizations and does NOT aggregate: rows are plotted
as-is, in dataset order.

Axis keys that are not present in the rows are tolerated: the affected trace
is emitted with no points instead of raising.
"""

from typing import Any

from datamind.modules.charts.schemas import ChartConfig
from datamind.modules.data.schemas import Dataset, Row

_MARGIN = {"l": 56, "r": 24, "t": 56, "b": 56}


def _column(rows: list[Row], key: str) -> list[Any]:
    return [row.get(key) for row in rows]


def _has_key(dataset: Dataset, key: str | None) -> bool:
    return bool(key) and key in dataset.columns


def _series_groups(rows: list[Row], series_key: str) -> dict[str, list[Row]]:
    groups: dict[str, list[Row]] = {}
    for row in rows:
        groups.setdefault(str(row.get(series_key)), []).append(row)
    return groups


def render_chart_spec(config: ChartConfig, dataset: Dataset) -> dict[str, Any]:
    """Build a Plotly figure (``{"data": [...], "layout": {...}}``)."""
    rows = list(dataset.rows)
    x_key = config.x_axis_key
    y_key = config.y_axis_key
    renderable = _has_key(dataset, x_key) and _has_key(dataset, y_key)

    if config.type == "pie":
        trace: dict[str, Any] = {
            "type": "pie",
            "name": y_key,
            "labels": _column(rows, x_key) if renderable else [],
            "values": _column(rows, y_key) if renderable else [],
        }
        return {
            "data": [trace],
            "layout": {"title": {"text": config.title, "x": 0}, "margin": _MARGIN},
        }

    plotly_type = "bar" if config.type == "bar" else "scatter"

    if renderable and _has_key(dataset, config.series_key):
        groups = _series_groups(rows, config.series_key)
    else:
        groups = {y_key: rows if renderable else []}

    data: list[dict[str, Any]] = []
    for name, group_rows in groups.items():
        trace = {
            "type": plotly_type,
            "name": name,
            "x": _column(group_rows, x_key),
            "y": _column(group_rows, y_key),
        }
        if plotly_type == "scatter":
            trace["mode"] = "markers" if config.type == "scatter" else "lines"
            if config.type == "area":
                trace["fill"] = "tozeroy"
        if config.color and len(groups) == 1:
            trace["marker"] = {"color": config.color}
        data.append(trace)

    return {
        "data": data,
        "layout": {
            "title": {"text": config.title, "x": 0},
            "xaxis": {"title": x_key},
            "yaxis": {"title": y_key},
            "margin": _MARGIN,
        },
    }


__all__ = ["render_chart_spec"]
