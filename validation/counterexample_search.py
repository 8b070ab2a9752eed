"""Counterexample search — discovers gaps in the engine or its tests.

This module runs independently of the test suite.  It searches for:

1. Contract violations: random key sequences after which some state rule
   in ``contract.STATE_RULES`` fails.
2. Evaluation mismatches: typed "a op b =" sequences whose display differs
   from ``calculate`` applied directly.
3. Entry violations: digit sequences that are dropped before the digit
   limit or accepted past it.

Run directly::

    python -m validation.counterexample_search
"""
from __future__ import annotations

import random
import sys
from dataclasses import dataclass, field

sys.path.insert(0, ".")

from contract import validate_state
from engine import DivisionByZeroError, Engine, calculate
from keymap import KEY_COMMANDS, KeyPress, dispatch
from numtext import number_to_text, parse_number
from state import DEFAULT_LIMITS, ERROR_TEXT, CalculatorState, Limits, Operator


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------

@dataclass
class Counterexample:
    category: str
    inputs: tuple
    expected: str
    actual: str
    description: str


@dataclass
class SearchReport:
    counterexamples: list[Counterexample] = field(default_factory=list)
    checks_run: int = 0

    @property
    def passed(self) -> bool:
        return len(self.counterexamples) == 0

    def summary(self) -> str:
        lines = [
            "Counterexample Search Report",
            "=" * 40,
            f"Total checks: {self.checks_run}",
            f"Counterexamples found: {len(self.counterexamples)}",
        ]
        if self.counterexamples:
            lines.append("")
            for i, cx in enumerate(self.counterexamples, 1):
                lines.append(f"  [{i}] {cx.category}")
                lines.append(f"      Inputs:   {cx.inputs}")
                lines.append(f"      Expected: {cx.expected}")
                lines.append(f"      Actual:   {cx.actual}")
                lines.append(f"      {cx.description}")
        else:
            lines.append("\nNo counterexamples found — all checks passed.")
        return "\n".join(lines)


def _type_keys(engine: Engine, state: CalculatorState, keys: list[str]) -> None:
    for key in keys:
        dispatch(engine, state, KeyPress(key=key))


_OPERATOR_KEYS = {
    Operator.ADD: "+",
    Operator.SUBTRACT: "-",
    Operator.MULTIPLY: "*",
    Operator.DIVIDE: "/",
}


# ---------------------------------------------------------------------------
# Search functions
# ---------------------------------------------------------------------------

def search_contract_violations(
    engine: Engine,
    rng: random.Random,
    walks: int = 2000,
    walk_length: int = 40,
) -> tuple[list[Counterexample], int]:
    """Check every state rule after every step of random key walks."""
    cxs: list[Counterexample] = []
    checks = 0
    keys = sorted(KEY_COMMANDS)

    for _ in range(walks):
        state = CalculatorState()
        typed: list[str] = []
        for _ in range(walk_length):
            key = rng.choice(keys)
            typed.append(key)
            dispatch(engine, state, KeyPress(key=key))
            checks += 1
            report = validate_state(state)
            if not report.passed:
                cxs.append(Counterexample(
                    category="contract_violation",
                    inputs=tuple(typed),
                    expected="all state rules pass",
                    actual=repr(state),
                    description=report.summary(),
                ))
                break

    return cxs, checks


def search_evaluation_mismatches(
    engine: Engine,
    operands: list[str],
) -> tuple[list[Counterexample], int]:
    """Type every "a op b =" and compare with ``calculate``."""
    cxs: list[Counterexample] = []
    checks = 0
    limit = engine.limits.max_digits
    operands = [o for o in operands if sum(ch.isdigit() for ch in o) <= limit]

    for a in operands:
        for b in operands:
            for op, op_key in _OPERATOR_KEYS.items():
                state = CalculatorState()
                _type_keys(engine, state, [*a, op_key, *b, "="])
                checks += 1

                try:
                    expected = number_to_text(
                        calculate(parse_number(a), parse_number(b), op)
                    )
                except DivisionByZeroError:
                    expected = ERROR_TEXT

                if state.display_value != expected:
                    cxs.append(Counterexample(
                        category="evaluation_mismatch",
                        inputs=(a, op.value, b),
                        expected=expected,
                        actual=state.display_value,
                        description="Typed evaluation differs from calculate()",
                    ))

    return cxs, checks


def search_entry_violations(
    engine: Engine,
    rng: random.Random,
    samples: int = 500,
) -> tuple[list[Counterexample], int]:
    """Digits up to the limit are all kept; the next one is rejected."""
    cxs: list[Counterexample] = []
    checks = 0
    limit = engine.limits.max_digits

    for _ in range(samples):
        digits = [rng.choice("123456789")]
        digits += [rng.choice("0123456789") for _ in range(limit)]
        state = CalculatorState()
        _type_keys(engine, state, digits)
        checks += 1

        expected = "".join(digits[:limit])
        if state.display_value != expected:
            cxs.append(Counterexample(
                category="entry_violation",
                inputs=tuple(digits),
                expected=expected,
                actual=state.display_value,
                description=f"Entry must keep exactly {limit} digits",
            ))

    return cxs, checks


# ---------------------------------------------------------------------------
# Top-level runner
# ---------------------------------------------------------------------------

OPERANDS = ["0", "1", "7", "12", "0.5", "3.25", "999999999999999"]


def run_search(limits: Limits = DEFAULT_LIMITS, seed: int = 0) -> SearchReport:
    """Run the complete counterexample search for one configuration."""
    engine = Engine(limits)
    rng = random.Random(seed)
    report = SearchReport()

    for cxs, checks in (
        search_contract_violations(engine, rng),
        search_evaluation_mismatches(engine, OPERANDS),
        search_entry_violations(engine, rng),
    ):
        report.counterexamples.extend(cxs)
        report.checks_run += checks

    return report


def main() -> None:
    """Run counterexample search across several configurations."""
    configs = [
        ("default limits", DEFAULT_LIMITS),
        ("short entry (4 digits)", Limits(max_digits=4)),
        ("two fraction digits", Limits(max_fraction_digits=2)),
    ]

    all_passed = True
    for name, limits in configs:
        print(f"\n--- Configuration: {name} ---")
        report = run_search(limits)
        print(report.summary())
        if not report.passed:
            all_passed = False

    print("\n" + "=" * 40)
    if all_passed:
        print("ALL CONFIGURATIONS PASSED")
    else:
        print("SOME CONFIGURATIONS HAD COUNTEREXAMPLES")
        sys.exit(1)


if __name__ == "__main__":
    main()
