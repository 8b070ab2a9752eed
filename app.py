"""Pocket calculator HTTP front end.

Serve the default instance with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import router, set_store
from state import DEFAULT_LIMITS, Limits
from store import SessionStore

DESCRIPTION = """
Four-function calculator with one state per session.

* `POST /sessions` opens a session on a cleared display.
* `POST /sessions/{session_id}/events` takes a `button` or `key` event and
  returns the display after it.
* `GET /sessions/{session_id}` renders the current display.
* `DELETE /sessions/{session_id}` drops the session.

Unrecognized buttons and keys are ignored.
"""

TAGS = [
    {"name": "sessions", "description": "Calculator sessions and their input events."},
]


def create_app(store: SessionStore | None = None, limits: Limits | None = None) -> FastAPI:
    """Build the application around a session store.

    Tests pass their own store; otherwise one is made from ``limits``.
    """
    if store is None:
        store = SessionStore(limits or DEFAULT_LIMITS)
    set_store(store)

    app = FastAPI(
        title="Pocket Calculator API",
        description=DESCRIPTION,
        version="0.1.0",
        openapi_tags=TAGS,
    )
    app.include_router(router)
    return app


app = create_app()
