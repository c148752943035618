"""DataMind Analysis Module - contract with the external analysis engine."""

from datamind.modules.analysis.schemas import CHAT_RESPONSE_SCHEMA, DASHBOARD_ANALYSIS_SCHEMA
from datamind.modules.analysis.service import CHAT_FALLBACK_MESSAGE, AnalysisService, find_unknown_columns

__all__ = [
    "AnalysisService",
    "CHAT_FALLBACK_MESSAGE",
    "CHAT_RESPONSE_SCHEMA",
    "DASHBOARD_ANALYSIS_SCHEMA",
    "find_unknown_columns",
]
