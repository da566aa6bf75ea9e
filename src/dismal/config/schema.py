"""
Configuration dataclass for simulation parameters.

This module defines the Config dataclass, which groups all simulation
parameters in one immutable object. Config instances are created by
Simulation.init() after merging defaults, user config, and kwargs.

Design Notes
------------
- Immutable (frozen=True) to prevent accidental modification
- Memory-efficient (slots=True)
- Only derived read-only helpers - validation happens in ConfigValidator

See Also
--------
ConfigValidator : Centralized validation for configuration parameters
dismal.simulation.Simulation.init : Creates Config from merged parameters
"""

from __future__ import annotations

from dataclasses import dataclass

from dismal.logging import VerboseFlag

VARIANTS = ("adaptive", "target")
INIT_STRATEGIES = ("randomized", "uniform")

# Initialization strategy used when ``init_strategy`` is left unset
DEFAULT_INIT_STRATEGY = {"adaptive": "randomized", "target": "uniform"}


@dataclass(slots=True, frozen=True)
class Config:
    """
    Immutable configuration for a Dismal run.

    Parameters
    ----------
    n_agents : int
        Population size (fixed for the whole run).
    n_iters : int
        Number of ticks executed by ``Simulation.run()``.
    money_init : float
        Starting money of every agent.
    savings_level : float
        Balance a ``target`` agent keeps in reserve once its minimum
        consumption is covered; also its producer-eligibility threshold.
    min_consumption : float
        Units a ``target`` consumer always tries to buy per tick.
    max_consumption : float
        Consumption ceiling per tick (upper bound of the random draw for
        the ``randomized`` initialization).
    max_production : float
        Production capacity per tick.
    expected_production : float
        Unsold-stock target of the ``target`` pricing rule.
    min_price : float
        Price floor of the ``target`` variant and its starting price.
    price_adjust : float
        Global price-adjust coefficient of the ``target`` variant.
    sample_size : int
        Producers sampled (with replacement) in the cheapest-of-k search.
    variant : str
        ``"adaptive"`` or ``"target"``.
    seed : int or None
        Seed the random generator was created with (None if a Generator
        was passed in).
    poverty_line : float
        Consumption below which an agent counts as poor.
    report_steps : int
        Number of rolling statistics samples spread over ``n_iters``.
    init_strategy : str or None
        ``"randomized"`` or ``"uniform"``; None picks the variant default.
    sensitivity_min, sensitivity_max : float
        Bounds of the per-agent price sensitivity (``adaptive``).
    verbose_flags : VerboseFlag
        Diagnostic detail levels.
    log_file : str or None
        Append-only file that receives the configuration echo.

    Examples
    --------
    >>> import dismal
    >>> sim = dismal.Simulation.init(n_agents=50, seed=42)
    >>> sim.config.sample_size
    10
    """

    n_agents: int
    n_iters: int
    money_init: float
    savings_level: float
    min_consumption: float
    max_consumption: float
    max_production: float
    expected_production: float
    min_price: float
    price_adjust: float
    sample_size: int

    # Model variant
    variant: str = "adaptive"

    # Run parameters
    seed: int | None = None
    poverty_line: float = 1.0
    report_steps: int = 25

    # Initialization parameters
    init_strategy: str | None = None
    sensitivity_min: float = 0.001
    sensitivity_max: float = 0.001

    # Diagnostics
    verbose_flags: VerboseFlag = VerboseFlag.NONE
    log_file: str | None = None

    @property
    def resolved_init_strategy(self) -> str:
        """Initialization strategy after applying the variant default."""
        return self.init_strategy or DEFAULT_INIT_STRATEGY[self.variant]

    @property
    def report_stride(self) -> int:
        """Ticks between two rolling statistics samples."""
        return max(1, self.n_iters // max(1, self.report_steps))

    def verbose(self, flag: VerboseFlag) -> bool:
        """Return True if *flag* is among the active verbose flags."""
        return bool(self.verbose_flags & flag)
