"""
DataMind Analysis - Engine response schemas.

JSON Schemas sent to the analysis engine as the required output shape, and
used again to validate what comes back.
"""

from typing import Any

from datamind.modules.charts.schemas import CHART_TYPES

CHART_PROPERTIES: dict[str, Any] = {
    "id": {"type": "string"},
    "title": {"type": "string"},
    "description": {"type": "string"},
    "type": {"type": "string", "enum": list(CHART_TYPES)},
    "xAxisKey": {
        "type": "string",
        "description": "The key in the data to use for the X axis (or category for Pie)",
    },
    "yAxisKey": {
        "type": "string",
        "description": "The key in the data to use for the Y axis (or value for Pie)",
    },
    "seriesKey": {
        "type": "string",
        "description": "Optional key in the data used to group or color the series",
    },
    "color": {"type": "string", "description": "A hex color code for the chart"},
}

CHART_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": CHART_PROPERTIES,
    "required": ["id", "title", "type", "xAxisKey", "yAxisKey"],
}

DASHBOARD_ANALYSIS_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "datasetTitle": {"type": "string", "description": "A creative name for this dataset"},
        "summary": {"type": "string", "description": "A brief executive summary of the data content"},
        "charts": {
            "type": "array",
            "items": CHART_SCHEMA,
            "description": "A list of 4 recommended charts to visualize this data",
        },
    },
    "required": ["datasetTitle", "summary", "charts"],
}

NEW_CHART_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": CHART_PROPERTIES,
    "required": ["title", "type", "xAxisKey", "yAxisKey"],
    "description": (
        "Optional. Only provide if the user explicitly asks for a visualization "
        "or if a chart would perfectly answer the question."
    ),
}

CHAT_RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "textResponse": {"type": "string", "description": "The conversational answer to the user"},
        "newChart": {**NEW_CHART_SCHEMA, "type": ["object", "null"]},
    },
    "required": ["textResponse"],
}
