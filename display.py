"""Display formatting and rendering.

``format_display`` turns the engine's display text into what the user sees;
``render`` packages it with the expression trace into a ``Display``.
"""
from __future__ import annotations

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext

from pydantic import BaseModel

from numtext import number_to_text, parse_number
from state import DEFAULT_LIMITS, ERROR_TEXT, CalculatorState, Limits, Operator

_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


class Display(BaseModel):
    """The two text outputs plus the operator to highlight."""

    result: str
    expression: str = ""
    active_operator: Operator | None = None


def _scientific(value: float, digits: int) -> str:
    """Browser-style exponential text: ties round away from zero."""
    if math.isinf(value):
        return number_to_text(value)
    step = Decimal(1).scaleb(-digits)
    exponent = 0
    mantissa = Decimal(0).quantize(step)
    if value != 0:
        # the exact binary value can run to hundreds of digits
        with localcontext() as ctx:
            ctx.prec = 1100
            exact = Decimal(abs(value))
            exponent = exact.adjusted()
            mantissa = exact.scaleb(-exponent).quantize(step, rounding=ROUND_HALF_UP)
            if mantissa >= 10:
                exponent += 1
                mantissa = Decimal(1).quantize(step)
    sign = "-" if value < 0 else ""
    exp_sign = "+" if exponent >= 0 else "-"
    return f"{sign}{mantissa:f}e{exp_sign}{abs(exponent)}"


def format_display(value: str | float, limits: Limits = DEFAULT_LIMITS) -> str:
    """Format display text for the primary output.

    Large magnitudes switch to scientific notation.  Otherwise the integer
    part is grouped by thousands and the fraction truncated (not rounded).
    """
    text = value if isinstance(value, str) else number_to_text(value)
    if text == ERROR_TEXT:
        return text

    number = parse_number(text)
    if number is None:
        return "0"

    if abs(number) > limits.scientific_threshold:
        return _scientific(number, limits.scientific_digits)

    parts = text.split(".")
    parts[0] = _THOUSANDS.sub(",", parts[0])
    if len(parts) > 1 and len(parts[1]) > limits.max_fraction_digits:
        parts[1] = parts[1][: limits.max_fraction_digits]
    return ".".join(parts)


def render(state: CalculatorState, limits: Limits = DEFAULT_LIMITS) -> Display:
    return Display(
        result=format_display(state.display_value, limits),
        expression=state.expression,
        active_operator=state.operator,
    )
