"""Calculator state and configuration.

Layers
------
Operator         the four binary operators and their display symbols
Limits           entry and display limits shared by engine and formatter
CalculatorState  the single mutable record an engine operates on
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------

class Operator(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]


_SYMBOLS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "−",
    Operator.MULTIPLY: "×",
    Operator.DIVIDE: "÷",
}


ERROR_TEXT = "Error"


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Limits:
    """Entry and display limits."""

    max_digits: int = 15
    max_fraction_digits: int = 8
    scientific_threshold: float = 999_999_999_999
    scientific_digits: int = 4

    def __post_init__(self) -> None:
        if self.max_digits < 1:
            raise ValueError(f"max_digits must be >= 1, got {self.max_digits}")
        if self.max_fraction_digits < 0:
            raise ValueError(
                f"max_fraction_digits must be >= 0, got {self.max_fraction_digits}"
            )
        if self.scientific_digits < 0:
            raise ValueError(
                f"scientific_digits must be >= 0, got {self.scientific_digits}"
            )


DEFAULT_LIMITS = Limits()


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

@dataclass
class CalculatorState:
    display_value: str = "0"
    first_operand: float | None = None
    waiting_for_second_operand: bool = False
    operator: Operator | None = None
    expression: str = ""

    @property
    def is_error(self) -> bool:
        return self.display_value == ERROR_TEXT

    def reset(self) -> None:
        """Return every field to its default."""
        self.display_value = "0"
        self.first_operand = None
        self.waiting_for_second_operand = False
        self.operator = None
        self.expression = ""

