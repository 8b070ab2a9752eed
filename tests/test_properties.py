"""Property-based tests using Hypothesis.

Covers digit entry limits, decimal idempotence, ``calculate`` against
native float arithmetic, formatting, and a stateful machine that drives
the engine with arbitrary events and checks the state contract after
every step.
"""
from __future__ import annotations

import math
from dataclasses import replace

import pytest
from hypothesis import assume, given, settings
from hypothesis import strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, rule

from contract import validate_state
from display import format_display
from engine import DivisionByZeroError, Engine, calculate
from keymap import BUTTON_COMMANDS, KEY_COMMANDS, ButtonPress, KeyPress, dispatch
from numtext import number_to_text, parse_number
from state import CalculatorState, Operator

ENGINE = Engine()

# ---------------------------------------------------------------------------
# Strategies
# ---------------------------------------------------------------------------

digit_st = st.sampled_from("0123456789")
nonzero_digit_st = st.sampled_from("123456789")
finite_st = st.floats(allow_nan=False, allow_infinity=False)
operator_st = st.sampled_from(list(Operator))


def entry_st(min_size: int = 1, max_size: int = 15) -> st.SearchStrategy[str]:
    """Digit strings without a leading zero."""
    return st.builds(
        lambda head, tail: head + "".join(tail),
        nonzero_digit_st,
        st.lists(digit_st, min_size=min_size - 1, max_size=max_size - 1),
    )


def _type(state: CalculatorState, text: str) -> None:
    for ch in text:
        if ch == ".":
            ENGINE.input_decimal(state)
        else:
            ENGINE.input_digit(state, ch)


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------

class TestEntryProperties:

    @given(digits=entry_st())
    def test_no_digit_dropped_up_to_limit(self, digits):
        state = CalculatorState()
        _type(state, digits)
        assert state.display_value == digits

    @given(digits=entry_st(min_size=15), extra=digit_st)
    def test_digit_past_limit_rejected(self, digits, extra):
        state = CalculatorState()
        _type(state, digits)
        before = replace(state)
        ENGINE.input_digit(state, extra)
        assert state == before

    @given(digits=entry_st(max_size=7), fraction=st.lists(digit_st, max_size=7))
    def test_decimal_idempotent(self, digits, fraction):
        once = CalculatorState()
        _type(once, digits)
        ENGINE.input_decimal(once)
        twice = replace(once)
        ENGINE.input_decimal(twice)
        assert twice == once

        _type(once, "".join(fraction))
        _type(twice, "".join(fraction))
        assert twice == once


# ---------------------------------------------------------------------------
# calculate
# ---------------------------------------------------------------------------

class TestCalculateProperties:

    @given(a=finite_st, b=finite_st)
    def test_add_matches_native(self, a, b):
        assert calculate(a, b, Operator.ADD) == a + b or math.isnan(a + b)

    @given(a=finite_st, b=finite_st)
    def test_subtract_matches_native(self, a, b):
        assert calculate(a, b, Operator.SUBTRACT) == a - b or math.isnan(a - b)

    @given(a=finite_st, b=finite_st)
    def test_multiply_matches_native(self, a, b):
        assert calculate(a, b, Operator.MULTIPLY) == a * b or math.isnan(a * b)

    @given(a=finite_st, b=finite_st)
    def test_divide_matches_native(self, a, b):
        assume(b != 0)
        assert calculate(a, b, Operator.DIVIDE) == a / b

    @given(a=finite_st)
    def test_divide_by_zero_signals(self, a):
        with pytest.raises(DivisionByZeroError):
            calculate(a, 0.0, Operator.DIVIDE)


# ---------------------------------------------------------------------------
# Typed sequences
# ---------------------------------------------------------------------------

class TestSequenceProperties:

    @given(a=entry_st(max_size=6), b=entry_st(max_size=6), op=operator_st)
    def test_typed_pair_matches_calculate(self, a, b, op):
        state = CalculatorState()
        _type(state, a)
        ENGINE.select_operator(state, op)
        _type(state, b)
        ENGINE.equals(state)

        expected = calculate(float(a), float(b), op)
        assert parse_number(state.display_value) == expected
        assert state.expression == f"{a} {op.symbol} {b} ="
        assert state.operator is None
        assert state.first_operand is None

    @given(a=entry_st(max_size=6), ops=st.lists(operator_st, min_size=1, max_size=5))
    def test_operator_swaps_never_calculate(self, a, ops):
        state = CalculatorState()
        _type(state, a)
        for op in ops:
            ENGINE.select_operator(state, op)
        assert state.display_value == a
        assert state.first_operand == float(a)
        assert state.operator == ops[-1]
        assert state.expression == f"{a} {ops[-1].symbol}"

    @given(text=entry_st())
    def test_toggle_sign_twice_restores(self, text):
        state = CalculatorState(display_value=text)
        ENGINE.toggle_sign(state)
        assert state.display_value == "-" + text
        ENGINE.toggle_sign(state)
        assert state.display_value == text

    @given(keys=st.lists(st.sampled_from(sorted(KEY_COMMANDS)), max_size=30))
    def test_clear_always_restores_defaults(self, keys):
        state = CalculatorState()
        for key in keys:
            dispatch(ENGINE, state, KeyPress(key=key))
        ENGINE.clear(state)
        assert state == CalculatorState()


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

class TestFormatProperties:

    @given(value=finite_st)
    def test_format_never_empty(self, value):
        assert format_display(value)

    @given(value=st.floats(min_value=-999_999_999_999, max_value=999_999_999_999))
    def test_plain_range_groups_integer_part(self, value):
        text = number_to_text(value)
        assume("e" not in text)
        formatted = format_display(value)
        integer_part = formatted.split(".")[0]
        assert integer_part.replace(",", "") == text.split(".")[0]

    @given(value=st.floats(min_value=1e12, max_value=1e300))
    def test_large_magnitudes_use_scientific(self, value):
        formatted = format_display(value)
        mantissa, _, exponent = formatted.partition("e")
        assert exponent.startswith("+")
        assert len(mantissa.split(".")[1]) == 4

    @given(digits=entry_st(max_size=6), fraction=st.lists(digit_st, min_size=9, max_size=14))
    def test_fraction_truncated_to_eight(self, digits, fraction):
        text = digits + "." + "".join(fraction)
        assert format_display(text).split(".")[1] == "".join(fraction[:8])


# ---------------------------------------------------------------------------
# Stateful: arbitrary event sequences keep the contract
# ---------------------------------------------------------------------------

class CalculatorMachine(RuleBasedStateMachine):

    def __init__(self) -> None:
        super().__init__()
        self.engine = Engine()
        self.state = CalculatorState()

    @rule(key=st.sampled_from(sorted(KEY_COMMANDS)))
    def press_key(self, key):
        dispatch(self.engine, self.state, KeyPress(key=key))

    @rule(action=st.sampled_from(sorted(BUTTON_COMMANDS)))
    def press_button(self, action):
        dispatch(self.engine, self.state, ButtonPress(action=action))

    @rule(junk=st.text(st.characters(max_codepoint=127), max_size=5))
    def press_junk(self, junk):
        assume(junk not in KEY_COMMANDS)
        before = replace(self.state)
        dispatch(self.engine, self.state, KeyPress(key=junk))
        assert self.state == before

    @rule()
    def equals_after_operator_is_noop(self):
        if self.state.operator is None or not self.state.waiting_for_second_operand:
            return
        before = replace(self.state)
        self.engine.equals(self.state)
        assert self.state == before

    @invariant()
    def contract_holds(self):
        report = validate_state(self.state)
        assert report.passed, report.summary()

    @invariant()
    def display_renders(self):
        assert format_display(self.state.display_value)


CalculatorMachine.TestCase.settings = settings(max_examples=200, stateful_step_count=40)
TestCalculatorMachine = CalculatorMachine.TestCase
