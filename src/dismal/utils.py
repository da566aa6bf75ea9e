# src/dismal/utils.py
"""Numerical tolerances and random draws shared by the event internals."""

from __future__ import annotations

from numpy.random import Generator

from dismal.errors import InvariantError

# Quantities and balances below this are rounded to exactly zero.
EPS = 1.0e-6
# A consumer may overdraw by at most this much before it is fatal.
OVERDRAW_TOL = 1.0e-5
# Price floor of the adaptive variant.
PRICE_EPS = 1.0e-5


def draw_index(rng: Generator, n: int) -> int:
    """Uniform integer in ``[0, n)``; ``n <= 0`` is an invariant violation."""
    if n <= 0:
        raise InvariantError(f"Range for draw_index <= 0: {n}")
    return int(rng.integers(n))


def draw_uniform(rng: Generator, low: float, high: float) -> float:
    """Uniform real in ``[low, high)``."""
    return float(rng.uniform(low, high))
