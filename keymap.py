"""Input events and their mapping onto engine commands.

Two kinds of event reach the calculator: a button activation carrying an
action identifier, and a raw key press.  ``command_for`` is the pure lookup
from either to a ``Command``; ``dispatch`` runs that command against a
state and renders the result.  Input that maps to nothing is ignored.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, Field

from display import Display, render
from engine import Engine
from state import CalculatorState, Operator


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

class ButtonPress(BaseModel):
    kind: Literal["button"] = "button"
    action: str = Field(..., max_length=32)


class KeyPress(BaseModel):
    kind: Literal["key"] = "key"
    key: str = Field(..., max_length=32)


InputEvent = Union[ButtonPress, KeyPress]


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

class Action(str, Enum):
    DIGIT = "digit"
    DECIMAL = "decimal"
    OPERATOR = "operator"
    EQUALS = "equals"
    CLEAR = "clear"
    TOGGLE_SIGN = "toggle-sign"
    PERCENT = "percent"
    BACKSPACE = "backspace"


@dataclass(frozen=True)
class Command:
    action: Action
    digit: str | None = None
    operator: Operator | None = None


_DIGITS = {d: Command(Action.DIGIT, digit=d) for d in "0123456789"}
_OPERATORS = {op.value: Command(Action.OPERATOR, operator=op) for op in Operator}

BUTTON_COMMANDS: dict[str, Command] = {
    **_DIGITS,
    **_OPERATORS,
    "decimal": Command(Action.DECIMAL),
    "equals": Command(Action.EQUALS),
    "clear": Command(Action.CLEAR),
    "toggle-sign": Command(Action.TOGGLE_SIGN),
    "percent": Command(Action.PERCENT),
}

KEY_COMMANDS: dict[str, Command] = {
    **_DIGITS,
    ".": Command(Action.DECIMAL),
    "+": _OPERATORS["add"],
    "-": _OPERATORS["subtract"],
    "*": _OPERATORS["multiply"],
    "/": _OPERATORS["divide"],
    "Enter": Command(Action.EQUALS),
    "=": Command(Action.EQUALS),
    "Escape": Command(Action.CLEAR),
    "c": Command(Action.CLEAR),
    "C": Command(Action.CLEAR),
    "%": Command(Action.PERCENT),
    "Backspace": Command(Action.BACKSPACE),
}


def command_for(event: ButtonPress | KeyPress) -> Command | None:
    if isinstance(event, ButtonPress):
        return BUTTON_COMMANDS.get(event.action)
    return KEY_COMMANDS.get(event.key)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def apply(engine: Engine, state: CalculatorState, command: Command) -> None:
    """Run exactly one engine operation for ``command``."""
    action = command.action
    if action == Action.DIGIT:
        engine.input_digit(state, command.digit)
    elif action == Action.DECIMAL:
        engine.input_decimal(state)
    elif action == Action.OPERATOR:
        engine.select_operator(state, command.operator)
    elif action == Action.EQUALS:
        engine.equals(state)
    elif action == Action.CLEAR:
        engine.clear(state)
    elif action == Action.TOGGLE_SIGN:
        engine.toggle_sign(state)
    elif action == Action.PERCENT:
        engine.percent(state)
    elif action == Action.BACKSPACE:
        engine.backspace(state)


def dispatch(
    engine: Engine,
    state: CalculatorState,
    event: ButtonPress | KeyPress,
) -> Display:
    command = command_for(event)
    if command is not None:
        apply(engine, state, command)
    return render(state, engine.limits)
