"""Market events: roster construction and the clearing loop.

Each event wraps an internal system function and carries its documentation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dismal.core.decorators import event

if TYPE_CHECKING:
    from dismal.simulation import Simulation


@event
class RebuildRosters:
    """
    Reset per-tick state and decide who produces and who consumes this tick.

    Rule
    ----
        consumption = 0, sold = 0, trade book cleared
        consumers = {i : money_i > 0}                   (in id order)

    ``adaptive``:
        producers = everyone, unsold = max_production
        money += pending_income, pending_income = 0

    Income is realized *after* consumer eligibility is decided, so an agent
    that was broke at the end of tick t only re-enters the consumer roster
    at tick t+2 (one-tick settlement delay).

    ``target``:
        producers = {i : money_i <= savings_level_i}
        unsold = max_production for producers, 0 otherwise
    """

    def execute(self, sim: Simulation) -> None:
        from dismal.events._internal.market import rebuild_rosters

        rebuild_rosters(
            sim.con,
            sim.prod,
            sim.consumers,
            sim.producers,
            sim.trades,
            variant=sim.config.variant,
        )


@event
class ClearMarket:
    """
    Match consumers with producers until one roster is empty or no trade is
    possible.

    Matching Process

    1. Draw a consumer uniformly from the consumer roster
    2. Sample ``sample_size`` producer-roster entries with replacement,
       skipping the consumer itself, and keep the cheapest (first wins ties)
    3. No producer found: stop if the consumer is the only agent left on both
       rosters, otherwise draw again
    4. Otherwise trade

    Trade Rule
    ----------
    ``adaptive``:
        qty = min(max_consumption - consumption, money / price, unsold)

    ``target``:
        evict the consumer if money < price, otherwise
        need   = max(min_consumption - consumption, 0)
        budget = min(money, need × price)
        budget += min(money - budget - savings_level,
                      (room - need) × price)        if that surplus is > 0
        qty    = min(budget / price, unsold)

    The consumer pays qty × price (its whole balance when the remainder would
    fall below 1e-6). Adaptive producers book the income as pending until the
    next tick; target producers are paid immediately. A producer leaves the
    roster when sold out; a consumer leaves when broke, when its consumption
    ceiling is reached, or (``target``) when its minimum is met and its money
    is down to its savings level.
    """

    def execute(self, sim: Simulation) -> None:
        from dismal.events._internal.market import clear_market

        clear_market(
            sim.con,
            sim.prod,
            sim.consumers,
            sim.producers,
            sim.trades,
            variant=sim.config.variant,
            sample_size=sim.config.sample_size,
            rng=sim.rng,
            t=sim.t,
        )
