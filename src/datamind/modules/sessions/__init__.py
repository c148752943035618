"""DataMind Sessions Module - session state, store and lifecycle routes."""

from datamind.modules.sessions.repository import InMemorySessionStore
from datamind.modules.sessions.session import Session, SessionPhase

__all__ = ["InMemorySessionStore", "Session", "SessionPhase"]
