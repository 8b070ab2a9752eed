"""FastAPI endpoints for calculator sessions.

Routes
------
POST   /sessions               Start a session
GET    /sessions/{id}          Render a session's display
POST   /sessions/{id}/events   Send one button or key event
DELETE /sessions/{id}          End a session
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Body, HTTPException, Response
from pydantic import BaseModel

from display import Display
from keymap import InputEvent
from store import SessionNotFoundError, SessionStore, StateContractError

router = APIRouter(prefix="/sessions", tags=["sessions"])

# The store instance is injected by the app factory (see app.py).
_store: SessionStore | None = None


def set_store(store: SessionStore) -> None:
    """Inject the store instance. Called once at app startup."""
    global _store
    _store = store


def get_store() -> SessionStore:
    assert _store is not None, "Store not initialized"
    return _store


# ---------------------------------------------------------------------------
# Request and response models
# ---------------------------------------------------------------------------

EventBody = Annotated[InputEvent, Body(discriminator="kind")]


class SessionResponse(BaseModel):
    id: str
    display: Display


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Session not found: {session_id}")


def _contract_error(e: StateContractError) -> HTTPException:
    return HTTPException(status_code=500, detail=str(e))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.post("", response_model=SessionResponse, status_code=201)
def create_session() -> SessionResponse:
    """Start a session with a cleared calculator."""
    store = get_store()
    session_id = store.create()
    return SessionResponse(id=session_id, display=store.render(session_id))


@router.get("/{session_id}", response_model=Display)
def get_session(session_id: str) -> Display:
    """Render the current display of a session."""
    store = get_store()
    try:
        return store.render(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.post("/{session_id}/events", response_model=Display)
def send_event(session_id: str, event: EventBody) -> Display:
    """Dispatch a button or key event. Unrecognized input is ignored."""
    store = get_store()
    try:
        return store.press(session_id, event)
    except SessionNotFoundError:
        raise _not_found(session_id)
    except StateContractError as e:
        raise _contract_error(e) from e


@router.delete("/{session_id}", status_code=204)
def delete_session(session_id: str) -> Response:
    """End a session."""
    store = get_store()
    try:
        store.delete(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return Response(status_code=204)
