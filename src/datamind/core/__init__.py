"""
DataMind Core - engine integration and response validation.

Components:
- gemini: AnalysisEngine interface and the Gemini Developer API adapter
- schema_validator: JSON Schema validation of engine responses
- ids: session-scoped identifier generation
"""

from datamind.core.gemini import AnalysisEngine, GeminiAnalysisEngine, get_gemini_client
from datamind.core.ids import IdGenerator

__all__ = [
    "AnalysisEngine",
    "GeminiAnalysisEngine",
    "get_gemini_client",
    "IdGenerator",
]
