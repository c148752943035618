from __future__ import annotations

import logging
from collections.abc import Callable
from threading import RLock
from uuid import uuid4

from datamind.exceptions import NotFoundException
from datamind.modules.analysis.service import AnalysisService
from datamind.modules.sessions.session import Session

logger = logging.getLogger(__name__)


class InMemorySessionStore:
    """Process-local session registry.

    The lock only guards the registry dict; each Session serializes its own
    engine calls through its busy flag.
    """

    def __init__(self, service_factory: Callable[[], AnalysisService] | None = None):
        self._lock = RLock()
        self._sessions: dict[str, Session] = {}
        self._service_factory = service_factory or AnalysisService
        self._service: AnalysisService | None = None

    def _analysis_service(self) -> AnalysisService:
        with self._lock:
            if self._service is None:
                self._service = self._service_factory()
            return self._service

    def create(self) -> Session:
        session = Session(uuid4().hex, self._analysis_service())
        with self._lock:
            self._sessions[session.id] = session
        logger.info(f"[session] Created {session.id}")
        return session

    def get(self, session_id: str) -> Session:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise NotFoundException("session", session_id)
        return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is None:
                raise NotFoundException("session", session_id)
        logger.info(f"[session] Deleted {session_id}")

    def clear(self) -> None:
        with self._lock:
            self._sessions.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


__all__ = ["InMemorySessionStore"]
