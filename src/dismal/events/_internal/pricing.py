"""
System functions for price adjustment.

This module contains the internal implementation functions for pricing events.
Event classes wrap these functions and provide the primary documentation.

See Also
--------
dismal.events.pricing : Event classes (primary documentation source)
"""

from __future__ import annotations

import numpy as np

from dismal import Rng, logging
from dismal.roles import Producer
from dismal.utils import PRICE_EPS

log = logging.getLogger(__name__)


def adjust_prices_adaptive(prod: Producer, *, t: int, rng: Rng) -> None:
    """
    Move every price towards clearing the agent's historical sell-through.

    See Also
    --------
    dismal.events.pricing.AdjustPrices : Full documentation
    """
    info_enabled = log.isEnabledFor(logging.INFO)
    if info_enabled:
        log.info("--- Adjusting Prices (adaptive) ---")

    expected = prod.total_production / max(t, 1)
    gap = expected - prod.unsold
    # one draw per agent, in id order
    step = rng.uniform(0.0, np.abs(gap) / prod.max_production)
    step *= prod.price_sensitivity
    np.negative(step, out=step, where=gap < 0.0)

    if log.isEnabledFor(logging.DEBUG):
        n_up = int(np.count_nonzero(step > 0.0))
        n_down = int(np.count_nonzero(step < 0.0))
        log.debug(f"  {n_up} prices up, {n_down} prices down")
        if log.isEnabledFor(logging.DEEP_DEBUG):
            log.deep(f"  Expected sales: {np.round(expected, 3)}")
            log.deep(f"  Price steps: {np.round(step, 5)}")

    np.add(prod.price, step, out=prod.price)
    np.maximum(prod.price, PRICE_EPS, out=prod.price)

    if info_enabled:
        log.info(
            f"  Price range [{prod.price.min():.4f}, {prod.price.max():.4f}], "
            f"mean {prod.price.mean():.4f}"
        )


def adjust_prices_target(
    prod: Producer,
    *,
    price_adjust: float,
    min_price: float,
) -> None:
    """
    Scale the price of this tick's producers by their deviation from the
    expected production.

    See Also
    --------
    dismal.events.pricing.AdjustPrices : Full documentation
    """
    info_enabled = log.isEnabledFor(logging.INFO)
    if info_enabled:
        log.info("--- Adjusting Prices (target) ---")

    active = prod.active
    factor = 1.0 + price_adjust * (
        (prod.expected_production - prod.unsold) / prod.max_production
    )

    if log.isEnabledFor(logging.DEBUG):
        log.debug(
            f"  {int(active.sum())} active producers, "
            f"mean factor {factor[active].mean() if active.any() else 1.0:.4f}"
        )

    np.multiply(prod.price, factor, out=prod.price, where=active)
    np.maximum(prod.price, min_price, out=prod.price)

    if info_enabled:
        log.info(
            f"  Price range [{prod.price.min():.4f}, {prod.price.max():.4f}], "
            f"mean {prod.price.mean():.4f}"
        )
