"""Conversions between display text and floats.

The display holds text, not numbers, so two conversions are needed:

parse_number    read the leading numeric prefix of a string ("12." -> 12.0,
                "5abc" -> 5.0, "Error" -> None)
number_to_text  write a float the way a browser's ``String(x)`` does
                (579.0 -> "579", 1e21 -> "1e+21", 1e-7 -> "1e-7")
"""
from __future__ import annotations

import math
import re
from decimal import Decimal

_NUMERIC_PREFIX = re.compile(
    r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
)


def parse_number(text: str) -> float | None:
    """Parse the leading numeric prefix of ``text``.

    Returns ``None`` when no prefix parses (the NaN case).
    """
    match = _NUMERIC_PREFIX.match(text.strip())
    if match is None:
        return None
    token = match.group(0)
    if token.lstrip("+-") == "Infinity":
        return -math.inf if token.startswith("-") else math.inf
    return float(token)


def number_to_text(value: float) -> str:
    """Shortest round-trip text, laid out with browser exponent rules.

    Plain notation is used while the decimal exponent is in [-7, 21);
    outside that range the text switches to ``d.ddde+N`` form.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-Infinity" if value < 0 else "Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in digit_tuple)
    k = len(digits)
    # n is the position of the decimal point relative to the digit string
    n = k + exponent

    if k <= n <= 21:
        body = digits + "0" * (n - k)
    elif 0 < n <= 21:
        body = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        body = "0." + "0" * (-n) + digits
    else:
        e = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        body = f"{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"
    return sign + body
