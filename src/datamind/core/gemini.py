"""
DataMind Core - Gemini Developer API Integration.

The analysis engine is modelled as a narrow interface,
``generate(prompt, response_schema) -> text``, so the rest of the core never
depends on a vendor SDK. ``GeminiAnalysisEngine`` is the production adapter;
tests substitute deterministic stubs.
"""

import logging
import os
from pathlib import Path
from typing import Any, Protocol

from datamind.config import get_settings
from datamind.exceptions import ExternalServiceException

logger = logging.getLogger(__name__)

_client = None


class AnalysisEngine(Protocol):
    """External text-generation service constrained by a JSON response schema."""

    async def generate(
        self,
        prompt: str,
        response_schema: dict[str, Any],
        system_instruction: str | None = None,
    ) -> str:
        """Return the raw (JSON) response text for ``prompt``."""
        ...


def _get_api_key() -> str:
    """
    Get Gemini API key.

    Resolution order:
    1. GEMINI_API_KEY setting / environment variable
    2. API_KEY environment variable
    3. .env.local file
    """
    api_key = get_settings().gemini.api_key or os.environ.get("API_KEY")
    if api_key:
        logger.info("Using Gemini API key from environment")
        return api_key

    env_local = Path.cwd() / ".env.local"
    if env_local.exists():
        for line in env_local.read_text().strip().split("\n"):
            if line.startswith("GEMINI_API_KEY="):
                api_key = line.split("=", 1)[1].strip()
                if api_key:
                    logger.info("Using Gemini API key from .env.local")
                    return api_key

    raise ExternalServiceException(
        "Gemini API",
        "No API key found. Set the GEMINI_API_KEY environment variable.",
    )


def get_gemini_client():
    """
    Get configured Gemini client.

    Uses API key authentication (Gemini Developer API).
    """
    global _client

    if _client is not None:
        return _client

    from google import genai
    from google.genai import types

    settings = get_settings()
    api_key = _get_api_key()
    http_options = None
    if settings.gemini.timeout_ms:
        http_options = types.HttpOptions(timeout=settings.gemini.timeout_ms)
    _client = genai.Client(api_key=api_key, http_options=http_options)

    logger.info("Gemini client initialized with API key")
    return _client


def reset_gemini_client() -> None:
    """Drop the cached client (settings changed, tests)."""
    global _client
    _client = None


def to_gemini_schema(schema: dict[str, Any]):
    """Convert a JSON Schema dict into a ``google.genai.types.Schema``.

    Only the subset used by the analysis contract is supported: ``type``,
    ``description``, ``enum``, ``properties``, ``required`` and ``items``.
    A ``["object", "null"]`` style type becomes a nullable ``OBJECT``.
    """
    from google.genai import types

    schema_type = schema["type"]
    nullable = False
    if isinstance(schema_type, list):
        nullable = "null" in schema_type
        schema_type = next(t for t in schema_type if t != "null")

    kwargs: dict[str, Any] = {"type": types.Type(schema_type.upper())}
    if nullable:
        kwargs["nullable"] = True
    if "description" in schema:
        kwargs["description"] = schema["description"]
    if "enum" in schema:
        kwargs["enum"] = list(schema["enum"])
    if "properties" in schema:
        kwargs["properties"] = {
            name: to_gemini_schema(prop) for name, prop in schema["properties"].items()
        }
    if "required" in schema:
        kwargs["required"] = list(schema["required"])
    if "items" in schema:
        kwargs["items"] = to_gemini_schema(schema["items"])
    return types.Schema(**kwargs)


class GeminiAnalysisEngine:
    """AnalysisEngine backed by ``client.aio.models.generate_content``."""

    def __init__(self, model: str | None = None):
        self.model = model or get_settings().gemini.model

    async def generate(
        self,
        prompt: str,
        response_schema: dict[str, Any],
        system_instruction: str | None = None,
    ) -> str:
        from google.genai import types

        client = get_gemini_client()

        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=to_gemini_schema(response_schema),
                    system_instruction=system_instruction,
                ),
            )
        except Exception as e:
            logger.error(f"Generation failed: {e}")
            raise ExternalServiceException("Gemini", str(e))

        return response.text or ""


__all__ = [
    "AnalysisEngine",
    "GeminiAnalysisEngine",
    "get_gemini_client",
    "reset_gemini_client",
    "to_gemini_schema",
]
