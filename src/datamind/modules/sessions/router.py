"""
DataMind Sessions - Router.

API endpoints for the session lifecycle: create, upload, sample, reset.
"""

import logging

from fastapi import APIRouter, Depends, File, UploadFile

from datamind.config import Settings, get_settings
from datamind.deps import get_session, get_session_store, require_sample_data
from datamind.exceptions import IngestionFailure, ValidationException
from datamind.modules.sessions.repository import InMemorySessionStore
from datamind.modules.sessions.schemas import DatasetResponse, SessionResponse
from datamind.modules.sessions.session import Session
from datamind.schemas import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionResponse, status_code=201)
async def create_session(store: InMemorySessionStore = Depends(get_session_store)):
    """Start a new session in the upload phase."""
    return SessionResponse.from_session(store.create())


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session_state(session: Session = Depends(get_session)):
    """Phase, busy flag, dataset shape, dashboard and message log."""
    return SessionResponse.from_session(session)


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str, store: InMemorySessionStore = Depends(get_session_store)):
    """Drop a session and everything it holds."""
    store.delete(session_id)


@router.post(
    "/{session_id}/upload",
    response_model=SessionResponse,
    responses={409: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def upload_csv(
    file: UploadFile = File(..., description="CSV file to analyze"),
    session: Session = Depends(get_session),
    settings: Settings = Depends(get_settings),
):
    """
    Upload a CSV file and build the initial dashboard.

    **Flow:**
    1. Parse the file into typed rows (422 if nothing usable)
    2. Ask the analysis engine for a title, summary and charts (502 on failure)
    3. Return the session in the dashboard phase
    """
    content = await file.read()
    if len(content) > settings.analysis.max_upload_bytes:
        raise ValidationException(
            f"File too large ({len(content)} bytes, max {settings.analysis.max_upload_bytes})"
        )

    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise IngestionFailure("Could not process data. The file is not valid UTF-8 text.")

    logger.info(f"[upload] {session.id}: {file.filename} ({len(content)} bytes)")
    await session.load_csv(text)
    return SessionResponse.from_session(session)


@router.post("/{session_id}/sample", response_model=SessionResponse, dependencies=[require_sample_data])
async def load_sample_data(seed: int | None = None, session: Session = Depends(get_session)):
    """Load synthetic monthly business data (test mode)."""
    await session.load_sample(seed=seed)
    return SessionResponse.from_session(session)


@router.post("/{session_id}/reset", response_model=SessionResponse)
async def reset_session(session: Session = Depends(get_session)):
    """Discard the dataset and dashboard and start over."""
    session.reset()
    return SessionResponse.from_session(session)


@router.get("/{session_id}/data", response_model=DatasetResponse)
async def get_dataset(session: Session = Depends(get_session)):
    """Parsed rows for the chart rendering collaborator."""
    return DatasetResponse(
        columns=list(session.dataset.columns),
        rows=session.dataset.to_records(),
        row_count=session.dataset.row_count,
    )
