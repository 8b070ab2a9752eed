"""Calculator state invariants as executable rules.

Each rule is a named predicate over a ``CalculatorState``.  The session
store checks every rule after each event; the conformance and stateful
tests check them against hand-built and generated states.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from numtext import number_to_text, parse_number
from state import ERROR_TEXT, CalculatorState, Operator


# ---------------------------------------------------------------------------
# Rule: a named, executable predicate over a state
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Rule:
    """A named validation rule for calculator states."""

    id: str
    name: str
    description: str
    check: Callable[[CalculatorState], bool]


# ---------------------------------------------------------------------------
# Invariants
# ---------------------------------------------------------------------------

def _display_is_numeral(s: CalculatorState) -> bool:
    text = s.display_value
    return text in (ERROR_TEXT, "NaN") or parse_number(text) is not None


def _operator_is_known(s: CalculatorState) -> bool:
    return s.operator is None or isinstance(s.operator, Operator)


def _waiting_needs_operator(s: CalculatorState) -> bool:
    return not s.waiting_for_second_operand or s.operator is not None


def _operator_needs_first_operand(s: CalculatorState) -> bool:
    return s.operator is None or s.first_operand is not None


def _error_is_reset(s: CalculatorState) -> bool:
    if not s.is_error:
        return True
    return (
        s.first_operand is None
        and s.operator is None
        and not s.waiting_for_second_operand
        and s.expression == ""
    )


def _pending_expression_matches(s: CalculatorState) -> bool:
    """While an operator is pending the trace reads "<first> <symbol>"."""
    if s.operator is None:
        return True
    return s.expression == f"{number_to_text(s.first_operand)} {s.operator.symbol}"


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

STATE_RULES: list[Rule] = [
    Rule(
        id="ST-DISPLAY",
        name="display_is_numeral",
        description="Display must be numeric text, 'NaN', or the literal 'Error'",
        check=_display_is_numeral,
    ),
    Rule(
        id="ST-OPERATOR",
        name="operator_is_known",
        description="Operator must be null or one of the four operators",
        check=_operator_is_known,
    ),
    Rule(
        id="ST-WAITING",
        name="waiting_needs_operator",
        description="Waiting for a second operand requires a pending operator",
        check=_waiting_needs_operator,
    ),
    Rule(
        id="ST-FIRST",
        name="operator_needs_first_operand",
        description="A pending operator requires a first operand",
        check=_operator_needs_first_operand,
    ),
    Rule(
        id="ST-ERROR",
        name="error_is_reset",
        description="The Error display has no operand, operator or expression",
        check=_error_is_reset,
    ),
    Rule(
        id="ST-EXPR",
        name="pending_expression_matches",
        description="A pending operation's expression is '<first> <symbol>'",
        check=_pending_expression_matches,
    ),
]


@dataclass(frozen=True)
class ValidationResult:
    rule_id: str
    rule_name: str
    passed: bool
    description: str


@dataclass(frozen=True)
class ValidationReport:
    results: list[ValidationResult]

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def failures(self) -> list[ValidationResult]:
        return [r for r in self.results if not r.passed]

    def summary(self) -> str:
        total = len(self.results)
        failed = len(self.failures)
        if failed == 0:
            return f"All {total} rules passed"
        lines = [f"{failed}/{total} rules failed:"]
        for f in self.failures:
            lines.append(f"  [{f.rule_id}] {f.rule_name}: {f.description}")
        return "\n".join(lines)


def validate_state(state: CalculatorState) -> ValidationReport:
    """Run every rule against a state and return a report."""
    results = []
    for rule in STATE_RULES:
        try:
            passed = rule.check(state)
        except Exception:
            passed = False
        results.append(
            ValidationResult(
                rule_id=rule.id,
                rule_name=rule.name,
                passed=passed,
                description=rule.description,
            )
        )
    return ValidationReport(results=results)
