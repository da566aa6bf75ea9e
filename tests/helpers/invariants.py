# tests/helpers/invariants.py
"""
High-level invariants that must hold after *every* ``Simulation.step``.
"""

from __future__ import annotations

import numpy as np

from dismal.simulation import Simulation
from dismal.utils import PRICE_EPS


def assert_basic_invariants(sim: Simulation, money_start: float) -> None:
    """
    Raise ``AssertionError`` if any fundamental invariant is violated after a
    full tick.
    """
    con, prod, cfg = sim.con, sim.prod, sim.config

    # Closed economy: money is only moved, never created or destroyed
    np.testing.assert_allclose(sim.store.total_money(), money_start, rtol=1e-9)

    # Non-negative balances and stocks
    assert (con.money >= 0.0).all()
    assert (prod.pending_income >= 0.0).all()
    assert (prod.unsold >= 0.0).all()
    assert (prod.unsold <= prod.max_production).all()

    # Price floor
    floor = PRICE_EPS if cfg.variant == "adaptive" else cfg.min_price
    assert (prod.price >= floor).all()
    assert np.isfinite(prod.price).all()

    # Consumption limits
    assert (con.consumption <= con.max_consumption + 1e-9).all()
    np.testing.assert_allclose(con.consumption.sum(), prod.sold.sum(), atol=1e-9)

    # Trade ledger consistency
    tb = sim.trades
    assert tb.size <= tb.capacity
    assert (tb.consumer_ids[: tb.size] != tb.producer_ids[: tb.size]).all()
    assert (tb.quantity[: tb.size] > 0.0).all()
    np.testing.assert_allclose(tb.volume, prod.sold.sum(), atol=1e-9)

    # Rosters only hold valid ids
    for roster in (sim.consumers, sim.producers):
        ids = roster.active()
        assert ((ids >= 0) & (ids < sim.n_agents)).all()
        assert np.unique(ids).size == ids.size
