"""Calculator engine: the entry/operator/equals state machine.

Every operation takes the caller's ``CalculatorState`` and mutates it in
place.  Malformed input (a 16th digit, a second decimal point, text that
does not parse) is a silent no-op.  Division by zero is the only error; it
is raised by ``calculate`` and always converted into the "Error" display
inside the engine.

States are implicit in (operator, waiting_for_second_operand):

    Idle                 operator is None
    OperatorPending      operator set, waiting
    SecondOperandEntry   operator set, not waiting
    Error                display "Error", everything else reset
"""
from __future__ import annotations

from dataclasses import dataclass

from numtext import number_to_text, parse_number
from state import (
    DEFAULT_LIMITS,
    ERROR_TEXT,
    CalculatorState,
    Limits,
    Operator,
)


class DivisionByZeroError(ZeroDivisionError):
    """Raised by ``calculate`` when the divisor is zero."""

    def __init__(self, dividend: float) -> None:
        self.dividend = dividend
        super().__init__(f"division by zero: {number_to_text(dividend)} / 0")


def calculate(a: float, b: float, op: Operator | str) -> float:
    """Apply ``op`` to two operands with plain float arithmetic.

    An operator outside the four known ones returns ``b`` unchanged.
    """
    if op == Operator.ADD:
        return a + b
    if op == Operator.SUBTRACT:
        return a - b
    if op == Operator.MULTIPLY:
        return a * b
    if op == Operator.DIVIDE:
        if b == 0:
            raise DivisionByZeroError(a)
        return a / b
    return b


def _digit_count(text: str) -> int:
    return sum(ch.isdigit() for ch in text)


def _is_unparseable(text: str) -> bool:
    return parse_number(text) is None


def _enter_error(state: CalculatorState) -> None:
    state.display_value = ERROR_TEXT
    state.first_operand = None
    state.operator = None
    state.waiting_for_second_operand = False
    state.expression = ""


def _pending_expression(first: float | None, op: Operator) -> str:
    return f"{number_to_text(first)} {op.symbol}"


@dataclass(frozen=True)
class Engine:
    limits: Limits = DEFAULT_LIMITS

    # -- entry --------------------------------------------------------------

    def input_digit(self, state: CalculatorState, digit: str) -> None:
        if len(digit) != 1 or not digit.isdigit():
            return

        if state.waiting_for_second_operand:
            state.display_value = digit
            state.waiting_for_second_operand = False
            return

        if _digit_count(state.display_value) >= self.limits.max_digits:
            return

        if state.display_value == "0" or _is_unparseable(state.display_value):
            state.display_value = digit
        else:
            state.display_value += digit

    def input_decimal(self, state: CalculatorState) -> None:
        if state.waiting_for_second_operand or _is_unparseable(state.display_value):
            state.display_value = "0."
            state.waiting_for_second_operand = False
            return

        if "." not in state.display_value:
            state.display_value += "."

    # -- operators ----------------------------------------------------------

    def select_operator(self, state: CalculatorState, op: Operator) -> None:
        """Choose the next operator, evaluating a completed pair first.

        Choosing an operator right after another one only swaps it.  If the
        pending evaluation divides by zero, the engine shows "Error" and the
        new operator is dropped.
        """
        if state.operator is not None and state.waiting_for_second_operand:
            state.operator = op
            state.expression = _pending_expression(state.first_operand, op)
            return

        value = parse_number(state.display_value)

        if state.first_operand is None:
            if value is None:
                return
            state.first_operand = value
        elif state.operator is not None:
            if value is None:
                return
            try:
                result = calculate(state.first_operand, value, state.operator)
            except DivisionByZeroError:
                _enter_error(state)
                return
            state.display_value = number_to_text(result)
            state.first_operand = result

        state.waiting_for_second_operand = True
        state.operator = op
        state.expression = _pending_expression(state.first_operand, op)

    def equals(self, state: CalculatorState) -> None:
        if state.operator is None or state.waiting_for_second_operand:
            return

        second = parse_number(state.display_value)
        if second is None:
            return

        try:
            result = calculate(state.first_operand, second, state.operator)
        except DivisionByZeroError:
            state.display_value = ERROR_TEXT
            state.expression = ""
        else:
            state.expression = (
                f"{number_to_text(state.first_operand)} {state.operator.symbol} "
                f"{number_to_text(second)} ="
            )
            state.display_value = number_to_text(result)

        state.first_operand = None
        state.operator = None
        state.waiting_for_second_operand = False

    # -- editing ------------------------------------------------------------

    def clear(self, state: CalculatorState) -> None:
        state.reset()

    def toggle_sign(self, state: CalculatorState) -> None:
        if state.display_value == "0" or _is_unparseable(state.display_value):
            return
        if state.display_value.startswith("-"):
            state.display_value = state.display_value[1:]
        else:
            state.display_value = "-" + state.display_value

    def percent(self, state: CalculatorState) -> None:
        value = parse_number(state.display_value)
        if value is None:
            return
        state.display_value = number_to_text(value / 100)

    def backspace(self, state: CalculatorState) -> None:
        text = state.display_value[:-1]
        # a bare sign or a clipped word is not a numeral
        state.display_value = "0" if _is_unparseable(text) else text
