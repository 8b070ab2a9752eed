"""In-memory session store.

Each session owns one ``CalculatorState``.  All events go through the
store, which dispatches them on the session's state and enforces the state
contract after every event.
"""
from __future__ import annotations

import logging
import uuid

from contract import ValidationReport, validate_state
from display import Display, render
from engine import Engine
from keymap import ButtonPress, KeyPress, dispatch
from state import DEFAULT_LIMITS, CalculatorState, Limits

logger = logging.getLogger(__name__)


class SessionNotFoundError(Exception):
    """Raised when a session lookup fails."""

    def __init__(self, session_id: str) -> None:
        self.session_id = session_id
        super().__init__(f"Session not found: {session_id}")


class StateContractError(Exception):
    """Raised when an event leaves a state that breaks the contract."""

    def __init__(self, session_id: str, report: ValidationReport) -> None:
        self.session_id = session_id
        self.report = report
        super().__init__(f"Session {session_id}: {report.summary()}")


def _new_id() -> str:
    return uuid.uuid4().hex


class SessionStore:
    """In-memory calculator sessions."""

    def __init__(self, limits: Limits = DEFAULT_LIMITS) -> None:
        self.engine = Engine(limits)
        self._sessions: dict[str, CalculatorState] = {}

    def create(self) -> str:
        """Start a session with a fresh state and return its id."""
        session_id = _new_id()
        self._sessions[session_id] = CalculatorState()
        logger.info("session %s created", session_id)
        return session_id

    def get(self, session_id: str) -> CalculatorState:
        try:
            return self._sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def render(self, session_id: str) -> Display:
        return render(self.get(session_id), self.engine.limits)

    def press(self, session_id: str, event: ButtonPress | KeyPress) -> Display:
        """Dispatch one input event on a session and return the new display."""
        state = self.get(session_id)
        display = dispatch(self.engine, state, event)
        logger.debug("session %s: %r -> %r", session_id, event, display.result)

        report = validate_state(state)
        if not report.passed:
            raise StateContractError(session_id, report)
        return display

    def delete(self, session_id: str) -> None:
        self.get(session_id)
        del self._sessions[session_id]
        logger.info("session %s deleted", session_id)

    def count(self) -> int:
        return len(self._sessions)

    def clear(self) -> None:
        """Remove all sessions (useful for testing)."""
        self._sessions.clear()
