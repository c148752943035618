"""
DataMind - Dependency Injection.

FastAPI dependencies for settings, feature flags and sessions.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from datamind.config import FeatureFlags, Settings, get_settings
from datamind.exceptions import FeatureDisabledException
from datamind.modules.sessions.repository import InMemorySessionStore
from datamind.modules.sessions.session import Session


# =============================================================================
# Settings Dependencies
# =============================================================================


def get_features(settings: Annotated[Settings, Depends(get_settings)]) -> FeatureFlags:
    """Get feature flags from settings."""
    return settings.features


# =============================================================================
# Sessions
# =============================================================================


@lru_cache(maxsize=1)
def get_session_store() -> InMemorySessionStore:
    """Process-wide session store (overridden in tests)."""
    return InMemorySessionStore()


def get_session(
    session_id: str,
    store: Annotated[InMemorySessionStore, Depends(get_session_store)],
) -> Session:
    """Resolve the ``{session_id}`` path parameter to a Session."""
    return store.get(session_id)


# =============================================================================
# Feature Flag Guards
# =============================================================================


def require_feature(feature_name: str):
    """Create a dependency that requires a specific feature to be enabled."""

    def check_feature(features: Annotated[FeatureFlags, Depends(get_features)]) -> bool:
        if not getattr(features, feature_name, False):
            raise FeatureDisabledException(feature_name)
        return True

    return check_feature


# Specific feature guards
require_chat = Depends(require_feature("chat"))
require_chart_builder = Depends(require_feature("chart_builder"))
require_sample_data = Depends(require_feature("sample_data"))
