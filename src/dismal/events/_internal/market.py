"""
System functions for the market phase of a tick.

This module contains the internal implementation functions for market events.
Event classes wrap these functions and provide the primary documentation.

See Also
--------
dismal.events.market : Event classes (primary documentation source)
"""

from __future__ import annotations

import numpy as np

from dismal import Rng, logging
from dismal.errors import InvariantError
from dismal.logging import ROSTERS_LOGGER, TRADES_LOGGER
from dismal.roles import Consumer, Producer
from dismal.roster import Roster
from dismal.tradebook import TradeBook
from dismal.utils import EPS, OVERDRAW_TOL, draw_index

log = logging.getLogger(__name__)
trade_log = logging.getLogger(TRADES_LOGGER)
roster_log = logging.getLogger(ROSTERS_LOGGER)


def rebuild_rosters(
    con: Consumer,
    prod: Producer,
    consumers: Roster,
    producers: Roster,
    trades: TradeBook,
    *,
    variant: str,
) -> None:
    """
    Reset per-tick state and derive this tick's producer and consumer rosters.

    See Also
    --------
    dismal.events.market.RebuildRosters : Full documentation
    """
    info_enabled = log.isEnabledFor(logging.INFO)
    if info_enabled:
        log.info("--- Rebuilding Rosters ---")

    con.consumption.fill(0.0)
    prod.sold.fill(0.0)
    trades.clear()

    # eligibility is decided before this tick's income is realized
    consumers.fill(np.flatnonzero(con.money > 0.0))

    if variant == "adaptive":
        producers.fill(np.arange(prod.max_production.size))
        prod.active.fill(True)
        prod.unsold[:] = prod.max_production

        if log.isEnabledFor(logging.DEBUG):
            log.debug(
                f"  Realizing pending income of {prod.pending_income.sum():,.4f}"
            )
        np.add(con.money, prod.pending_income, out=con.money)
        prod.pending_income.fill(0.0)
    else:
        eligible = con.money <= con.savings_level
        producers.fill(np.flatnonzero(eligible))
        prod.active[:] = eligible
        np.copyto(prod.unsold, np.where(eligible, prod.max_production, 0.0))

    if info_enabled:
        log.info(
            f"  {consumers.size} consumers, {producers.size} producers "
            f"(variant={variant})"
        )

    if log.isEnabledFor(logging.DEEP_DEBUG):
        log.deep(f"  Consumers: {consumers.active().tolist()}")
        log.deep(f"  Producers: {producers.active().tolist()}")


def find_cheapest_producer(
    consumer_id: int,
    prod: Producer,
    producers: Roster,
    *,
    sample_size: int,
    rng: Rng,
) -> int:
    """
    Cheapest-of-k search over the producer roster.

    Draws *sample_size* roster positions with replacement. Draws that land
    on *consumer_id* itself are skipped, not redrawn. Ties keep the first
    minimum seen.

    Returns
    -------
    int
        Roster position of the cheapest sampled producer, or -1 if every
        draw was the consumer itself.
    """
    best_price = np.inf
    best_pos = -1
    for _ in range(sample_size):
        pos = draw_index(rng, producers.size)
        agent_id = producers.ids[pos]
        if agent_id == consumer_id:
            continue
        price = prod.price[agent_id]
        if price < best_price:
            best_price = price
            best_pos = pos
    return best_pos


def _desired_quantity(
    c: int,
    p: int,
    con: Consumer,
    prod: Producer,
    variant: str,
) -> float:
    """Units consumer *c* buys from producer *p* before the stock cap."""
    price = prod.price[p]
    money = con.money[c]
    room = con.max_consumption[c] - con.consumption[c]

    if variant == "adaptive":
        qty = room
        if room * price > money:
            qty = money / price
        return float(qty)

    need = max(con.min_consumption[c] - con.consumption[c], 0.0)
    budget = min(money, need * price)
    surplus = money - budget - con.savings_level[c]
    if surplus > 0.0:
        budget += min(surplus, max(room - need, 0.0) * price)
    return float(budget / price)


def execute_trade(
    consumer_pos: int,
    producer_pos: int,
    con: Consumer,
    prod: Producer,
    consumers: Roster,
    producers: Roster,
    trades: TradeBook,
    *,
    variant: str,
    t: int = 0,
) -> float:
    """
    Transfer goods from one producer to one consumer and update both rosters.

    Parameters
    ----------
    consumer_pos, producer_pos : int
        Roster positions (not agent ids).

    Returns
    -------
    float
        Units transferred (0.0 if the consumer was evicted without trading).

    Raises
    ------
    InvariantError
        If the buyer and seller are the same agent, or the consumer would
        end up overdrawn by more than the tolerance.

    See Also
    --------
    dismal.events.market.ClearMarket : Full documentation
    """
    c = consumers[consumer_pos]
    p = producers[producer_pos]

    if c == p:
        raise InvariantError(
            "Agent cannot buy its own production", context={"t": t, "agent": c}
        )

    if roster_log.isEnabledFor(logging.DEEP_DEBUG):
        roster_log.deep(f"  [{t}] csmrs: {consumers.active().tolist()}")
        roster_log.deep(f"  [{t}] prdrs: {producers.active().tolist()}")

    price = float(prod.price[p])
    details_enabled = trade_log.isEnabledFor(logging.DEEP_DEBUG)

    if details_enabled:
        trade_log.deep(
            f"  [{t}] csmr {c} money {con.money[c]:.2f} csmp {con.consumption[c]:.2f}, "
            f"prdr {p} unsold {prod.unsold[p]:.2f} price {price:.3f}"
        )

    # target consumers that cannot afford a single unit leave the market
    if variant == "target" and con.money[c] < price:
        consumers.remove_at(consumer_pos)
        if details_enabled:
            trade_log.deep(f"  [{t}] evict csmr {c}: cannot afford one unit")
        return 0.0

    qty = min(_desired_quantity(c, p, con, prod, variant), float(prod.unsold[p]))

    # goods change hands
    prod.unsold[p] -= qty
    if prod.unsold[p] < EPS:
        prod.unsold[p] = 0.0
    prod.sold[p] += qty
    prod.total_production[p] += qty

    cost = qty * price
    money = float(con.money[c])
    if money - cost < -OVERDRAW_TOL:
        raise InvariantError(
            f"Consumer {c} has less money {money:.6f} than needed for "
            f"consumption {cost:.6f}",
            context={"t": t, "consumer": c, "producer": p},
        )
    if money - cost < EPS:
        # spend the residual so no money is created or destroyed by rounding
        cost = money

    if variant == "adaptive":
        prod.pending_income[p] += cost
    else:
        con.money[p] += cost
    con.money[c] = money - cost
    con.consumption[c] += qty
    con.total_consumption[c] += qty
    con.last_price[c] = price

    if qty > 0.0:
        trades.append(c, p, qty, price, cost)

    if trade_log.isEnabledFor(logging.DEBUG):
        trade_log.debug(
            f"  [{t}] csmr {c}, prdr {p}, units {qty:.2f}, cost {cost:.2f}"
        )

    if prod.unsold[p] == 0.0:
        producers.remove_at(producer_pos)
        if details_enabled:
            trade_log.deep(f"  [{t}] remove prdr {p}")

    done = (
        con.money[c] == 0.0
        or con.consumption[c] >= con.max_consumption[c] - EPS
        or (
            variant == "target"
            and con.consumption[c] >= con.min_consumption[c] - EPS
            and con.money[c] <= con.savings_level[c] + EPS
        )
    )
    if done:
        consumers.remove_at(consumer_pos)
        if details_enabled:
            trade_log.deep(f"  [{t}] remove csmr {c}")

    return qty


def clear_market(
    con: Consumer,
    prod: Producer,
    consumers: Roster,
    producers: Roster,
    trades: TradeBook,
    *,
    variant: str,
    sample_size: int,
    rng: Rng,
    t: int = 0,
) -> int:
    """
    Pair consumers with producers until one roster is empty or no trade is
    possible.

    Returns
    -------
    int
        Number of consumer draws made.

    See Also
    --------
    dismal.events.market.ClearMarket : Full documentation
    """
    info_enabled = log.isEnabledFor(logging.INFO)
    if info_enabled:
        log.info("--- Clearing Market ---")

    attempts = 0
    while consumers.size and producers.size:
        attempts += 1
        consumer_pos = draw_index(rng, consumers.size)
        consumer_id = consumers[consumer_pos]
        producer_pos = find_cheapest_producer(
            consumer_id, prod, producers, sample_size=sample_size, rng=rng
        )

        if producer_pos == -1:
            # the only participant left on both sides cannot trade with itself
            if (
                consumers.size == 1
                and producers.size == 1
                and consumers[0] == producers[0]
            ):
                if log.isEnabledFor(logging.DEBUG):
                    log.debug(f"  Agent {consumer_id} is alone in the market")
                break
            continue

        execute_trade(
            consumer_pos,
            producer_pos,
            con,
            prod,
            consumers,
            producers,
            trades,
            variant=variant,
            t=t,
        )

    if info_enabled:
        log.info(
            f"  {trades.size} trades, volume {trades.volume:,.3f}, "
            f"value {trades.value:,.3f} ({attempts} draws)"
        )
        log.info(
            f"  Left over: {consumers.size} consumers, {producers.size} producers"
        )

    return attempts
