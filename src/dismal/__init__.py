"""
Dismal - Closed-Economy Producer/Consumer Market Simulation
===========================================================

Dismal (after the "dismal science") simulates a closed economy of agents
that alternately produce and consume a single abstract good. Consumers
look for the cheapest offer among a small random sample of producers, pay
with money, and producers adjust their prices from their own sales alone.
The model is used to study how wealth distribution, pricing strategy and
savings rules shape poverty, price dispersion and output.

Quick Start
-----------
Basic simulation with default configuration:

>>> import dismal
>>> sim = dismal.Simulation.init(seed=42, n_iters=200)
>>> sim.run()
>>> print(f"Poverty: {sim.lifetime.poverty_pct:.1f}%")

Custom configuration via kwargs:

>>> sim = dismal.Simulation.init(
...     n_agents=500,
...     variant="target",
...     sample_size=5,
...     seed=7,
... )

Custom configuration via YAML file:

>>> sim = dismal.Simulation.init(config="my_config.yml", seed=42)

Key Concepts
------------
**Roles**
  Every agent is both a Consumer (money, consumption limits, savings) and a
  Producer (capacity, unsold stock, price). State lives in NumPy arrays
  indexed by agent id.

**Event Pipeline**
  Each tick executes: rebuild_rosters -> clear_market -> adjust_prices ->
  dump_agents -> sample_stats.

**Variants**
  ``adaptive``: everyone produces, income settles one tick late, prices
  drift from each agent's own sales history.
  ``target``: only agents at or below their savings level produce,
  consumers keep a savings buffer, prices chase a fixed production target.

**Deterministic RNG**
  A fixed seed reproduces the whole run, report output included.

Public API
----------
Simulation
    Main simulation facade.
Config, ConfigValidator
    Immutable parameters and their validation.
AgentStore, Roster, TradeBook
    Agent state, per-tick participant sets and the trade ledger.
StatsRow
    One row of the population statistics report.
InvariantError
    Raised when a model invariant breaks (fatal).
make_rng
    Create a seeded random number generator.
logging
    Logging with a DEEP_DEBUG level and verbose-flag categories.
"""

from __future__ import annotations

__version__: str = "0.3.0"

from typing import TypeAlias

import numpy as np

Rng: TypeAlias = np.random.Generator

from . import logging  # noqa: E402 (circular-safe)


def make_rng(seed: int | None = None) -> Rng:
    """Create a new random number generator.

    Parameters
    ----------
    seed : int | None
        Seed for reproducibility. If `None`, uses a random seed.

    Returns
    -------
    Rng
        A NumPy random number generator (np.random.Generator).

    Examples
    --------
    >>> import dismal
    >>> rng = dismal.make_rng(42)
    >>> rng.integers(10)  # doctest: +SKIP
    """
    return np.random.default_rng(seed)


from .agents import AgentStore, AgentView  # noqa: E402
from .config import Config, ConfigValidator  # noqa: E402
from .core import Event, Pipeline, Role, event, role  # noqa: E402
from .errors import InvariantError  # noqa: E402
from .roster import Roster  # noqa: E402
from .simulation import Simulation, SimulationPhase  # noqa: E402
from .stats import ReportKind, StatsRow  # noqa: E402
from .tradebook import TradeBook  # noqa: E402

__all__ = [
    "Simulation",
    "SimulationPhase",
    "__version__",
    # State
    "AgentStore",
    "AgentView",
    "Roster",
    "TradeBook",
    # Configuration
    "Config",
    "ConfigValidator",
    # ECS
    "Event",
    "Pipeline",
    "Role",
    "event",
    "role",
    # Reporting
    "ReportKind",
    "StatsRow",
    # Errors
    "InvariantError",
    # Utilities
    "Rng",
    "make_rng",
    "logging",
]
