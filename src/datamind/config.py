"""
DataMind Configuration Module.

Handles all application settings, feature flags, and environment configuration.
Uses pydantic-settings for validation and type safety.

Architecture: Gemini Developer API (API key) - NO Vertex AI.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FeatureFlags(BaseSettings):
    """Feature flags for enabling/disabling modules."""

    model_config = SettingsConfigDict(env_prefix="FEATURE_")

    chat: bool = True
    chart_builder: bool = True
    sample_data: bool = True

    def to_dict(self) -> dict[str, bool]:
        """Return feature flags as dictionary for health endpoint."""
        return {
            "chat": self.chat,
            "chart_builder": self.chart_builder,
            "sample_data": self.sample_data,
        }


class GeminiSettings(BaseSettings):
    """Gemini API configuration."""

    model_config = SettingsConfigDict(env_prefix="GEMINI_")

    api_key: str = Field(default="", description="Gemini API Key")
    model: str = Field(default="gemini-2.5-flash", description="Model used for analysis and chat")
    timeout_ms: int | None = Field(
        default=60_000,
        description="HTTP timeout for a single generate call, in milliseconds (None = SDK default)",
    )


class AnalysisSettings(BaseSettings):
    """Prompt sampling and upload limits."""

    model_config = SettingsConfigDict(env_prefix="ANALYSIS_")

    initial_sample_rows: int = Field(default=30, ge=1, description="Rows sent with the dashboard request")
    chat_sample_rows: int = Field(default=20, ge=1, description="Rows sent with every chat turn")
    chat_history_messages: int = Field(
        default=6,
        ge=0,
        description="Previous messages included in a chat prompt (0 disables history)",
    )
    max_upload_bytes: int = Field(default=5 * 1024 * 1024, ge=1, description="Largest accepted CSV upload")


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_env: Literal["development", "staging", "production"] = "development"
    app_debug: bool = False
    app_log_level: str = "INFO"

    # Nested settings
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    analysis: AnalysisSettings = Field(default_factory=AnalysisSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
