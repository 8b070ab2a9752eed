"""Shared fixtures for calculator tests."""
from __future__ import annotations

import pytest

from engine import Engine
from keymap import ButtonPress, KeyPress, dispatch
from state import CalculatorState
from store import SessionStore


@pytest.fixture
def engine() -> Engine:
    return Engine()


@pytest.fixture
def state() -> CalculatorState:
    return CalculatorState()


@pytest.fixture
def store() -> SessionStore:
    return SessionStore()


def press_keys(engine: Engine, state: CalculatorState, *keys: str):
    """Type each key in order and return the last rendered display."""
    display = None
    for key in keys:
        display = dispatch(engine, state, KeyPress(key=key))
    return display


def press_buttons(engine: Engine, state: CalculatorState, *actions: str):
    """Click each button in order and return the last rendered display."""
    display = None
    for action in actions:
        display = dispatch(engine, state, ButtonPress(action=action))
    return display
