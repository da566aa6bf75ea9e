"""
Population statistics.

One :class:`StatsRow` summarizes the whole population at a tick: mean,
maximum and minimum of money, price, consumption and production, plus the
share of agents consuming below the poverty line.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from dismal.typing import Float1D

if TYPE_CHECKING:
    from dismal.agents import AgentStore


class ReportKind(enum.Enum):
    """Which consumption/production figures a row is built from."""

    ROUND = "round"
    LIFETIME = "lifetime"


@dataclass(slots=True, frozen=True)
class MetricSummary:
    """Mean, maximum and minimum of one metric over all agents."""

    mean: float
    max: float
    min: float

    @classmethod
    def of(cls, values: Float1D) -> MetricSummary:
        return cls(
            mean=float(values.mean()),
            max=float(values.max()),
            min=float(values.min()),
        )


@dataclass(slots=True, frozen=True)
class StatsRow:
    """
    One row of the statistics report.

    Attributes
    ----------
    t : int
        Tick the row describes (1-based).
    kind : ReportKind
        ``ROUND`` for a snapshot of tick *t*, ``LIFETIME`` for averages
        over ticks ``1..t``.
    money, price, consumption, production : MetricSummary
        Population summaries.
    poverty_pct : float
        Percentage of agents whose consumption is strictly below the
        poverty line.
    """

    t: int
    kind: ReportKind
    money: MetricSummary
    price: MetricSummary
    consumption: MetricSummary
    production: MetricSummary
    poverty_pct: float


def compute_stats(
    store: AgentStore,
    t: int,
    kind: ReportKind,
    *,
    poverty_line: float = 1.0,
    variant: str = "adaptive",
) -> StatsRow:
    """
    Summarize the population at tick *t*.

    Parameters
    ----------
    store : AgentStore
        Agent state to summarize.
    t : int
        Number of completed ticks (1-based); lifetime figures are divided
        by it.
    kind : ReportKind
        ``ROUND`` uses this tick's consumption and sales, ``LIFETIME`` uses
        lifetime totals divided by *t*.
    poverty_line : float
        Consumption strictly below this counts as poverty.
    variant : str
        ``"adaptive"`` reports the offered price, ``"target"`` the last
        price each agent paid.

    Returns
    -------
    StatsRow
        The summary row.
    """
    con, prod = store.con, store.prod

    money = con.money + prod.pending_income
    price = prod.price if variant == "adaptive" else con.last_price

    if kind is ReportKind.LIFETIME:
        denom = max(t, 1)
        consumption = con.total_consumption / denom
        production = prod.total_production / denom
    else:
        consumption = con.consumption
        production = prod.sold

    n_poor = int(np.count_nonzero(consumption < poverty_line))

    return StatsRow(
        t=t,
        kind=kind,
        money=MetricSummary.of(money),
        price=MetricSummary.of(price),
        consumption=MetricSummary.of(consumption),
        production=MetricSummary.of(production),
        poverty_pct=n_poor * 100.0 / store.n,
    )
