"""
Table of user-facing parameters.

The command line parser and the configuration echo both read this table,
so the short flag, help text and display format of a parameter are kept
in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class Option:
    """One configurable parameter as seen from the command line."""

    key: str
    flag: str | None
    help: str
    type: type
    echo: bool = True

    def format_value(self, value: Any) -> str:
        """Right-aligned 8-character rendering used by the echo."""
        if value is None:
            return f"{'-':>8}"
        if self.type is int:
            return f"{int(value):8d}"
        if self.type is float:
            return f"{float(value):8.2f}"
        return f"{value!s:>8}"


OPTIONS: tuple[Option, ...] = (
    Option("n_iters", "i", "number of iterations", int),
    Option("n_agents", "n", "number of agents", int),
    Option("money_init", "m", "starting money", float),
    Option("savings_level", "s", "savings level", float),
    Option("min_consumption", "c", "min. consumption", float),
    Option("max_consumption", "C", "max. consumption", float),
    Option("max_production", "p", "max. production", float),
    Option("expected_production", "e", "expected production", float),
    Option("min_price", "r", "min. production price", float),
    Option("price_adjust", "a", "factor for adjusting price", float),
    Option("sample_size", "z", "sample size for getting cheapest producer", int),
    Option("seed", "R", "random seed", int),
    Option("poverty_line", "P", "poverty line", float),
    Option("report_steps", "t", "number of statistics rows", int),
    Option("variant", "M", "model variant (adaptive or target)", str),
    Option("init_strategy", None, "initialization strategy", str, echo=False),
    Option("sensitivity_min", None, "min. price sensitivity", float, echo=False),
    Option("sensitivity_max", None, "max. price sensitivity", float, echo=False),
)


def get_option(key: str) -> Option:
    """Look up an option by its configuration key."""
    for opt in OPTIONS:
        if opt.key == key:
            return opt
    raise KeyError(f"Unknown option '{key}'")
