"""Pricing event."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dismal.core.decorators import event

if TYPE_CHECKING:
    from dismal.simulation import Simulation


@event
class AdjustPrices:
    """
    Update every agent's offered price from its own sales.

    Agents never see competitors' prices; each infers market tightness from
    its own unsold stock alone.

    Rule (``adaptive``)
    -------------------
        expected = total_production / t
        step     = U(0, |expected - unsold| / max_production) × sensitivity
        step     = -step   if expected < unsold
        price    = max(price + step, 1e-5)

    Rule (``target``), for agents on this tick's producer roster
    -------------------------------------------------------------
        price = price × (1 + price_adjust × (expected_production - unsold)
                                          / max_production)
        price = max(price, min_price)

    Where:
        t: Current tick (1-based)
        sensitivity: Per-agent fixed price sensitivity
        price_adjust: Global adjustment coefficient
    """

    def execute(self, sim: Simulation) -> None:
        from dismal.events._internal.pricing import (
            adjust_prices_adaptive,
            adjust_prices_target,
        )

        if sim.config.variant == "adaptive":
            adjust_prices_adaptive(sim.prod, t=sim.t, rng=sim.rng)
        else:
            adjust_prices_target(
                sim.prod,
                price_adjust=sim.config.price_adjust,
                min_price=sim.config.min_price,
            )
