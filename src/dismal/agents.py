"""
Agent store: the fixed population of a run.

Every agent is both a :class:`~dismal.roles.Consumer` and a
:class:`~dismal.roles.Producer`; the store keeps one instance of each role
whose arrays are indexed by agent id. The population never changes size.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

from dismal import logging
from dismal.errors import InvariantError
from dismal.roles import Consumer, Producer
from dismal.utils import PRICE_EPS

if TYPE_CHECKING:
    from dismal import Rng
    from dismal.config import Config

log = logging.getLogger(__name__)

_CONSUMER_FIELDS = frozenset(Consumer.__dataclass_fields__)
_PRODUCER_FIELDS = frozenset(Producer.__dataclass_fields__)


class AgentView:
    """
    Mutable handle on a single agent.

    Attribute reads and writes go straight to the role arrays, so a view
    never holds stale data.

    Examples
    --------
    >>> ag = store.get(3)
    >>> ag.money += 1.0
    >>> store.con.money[3] == ag.money
    True
    """

    __slots__ = ("_store", "id")

    def __init__(self, store: AgentStore, agent_id: int) -> None:
        object.__setattr__(self, "_store", store)
        object.__setattr__(self, "id", agent_id)

    def _role_for(self, name: str) -> Consumer | Producer:
        if name in _CONSUMER_FIELDS:
            return self._store.con
        if name in _PRODUCER_FIELDS:
            return self._store.prod
        raise AttributeError(f"Agent has no attribute '{name}'")

    def __getattr__(self, name: str) -> Any:
        return getattr(self._role_for(name), name)[self.id].item()

    def __setattr__(self, name: str, value: Any) -> None:
        if name in self.__slots__:
            raise AttributeError(f"'{name}' is read-only")
        getattr(self._role_for(name), name)[self.id] = value

    def __repr__(self) -> str:
        return (
            f"AgentView(id={self.id}, money={self.money:.3f}, "
            f"price={self.price:.3f}, unsold={self.unsold:.3f})"
        )


@dataclass(slots=True)
class AgentStore:
    """
    Column-wise storage for all agents.

    Attributes
    ----------
    con : Consumer
        Consumer role arrays.
    prod : Producer
        Producer role arrays.
    n : int
        Population size.
    """

    con: Consumer
    prod: Producer
    n: int

    @classmethod
    def create(
        cls,
        n: int,
        cfg: Config,
        rng: Rng,
        init_strategy: str | None = None,
    ) -> AgentStore:
        """
        Allocate *n* agents and seed their traits and state.

        Parameters
        ----------
        n : int
            Population size.
        cfg : Config
            Source of trait values and starting balances.
        rng : Rng
            Random generator; only the ``randomized`` strategy draws from it.
        init_strategy : {"randomized", "uniform"}, optional
            Overrides ``cfg.resolved_init_strategy``.

        Notes
        -----
        ``randomized`` draws every agent's consumption ceiling from
        ``U(max(0.5 * max_consumption, 1), max_consumption)`` and its price
        sensitivity from ``U(sensitivity_min, sensitivity_max)`` (all ceilings
        first, then all sensitivities, in id order); the starting price equals
        the starting money. ``uniform`` takes every trait from *cfg* and
        starts at ``min_price``.
        """
        if n <= 0:
            raise InvariantError(
                "Agent store needs at least one agent", context={"n": n}
            )

        strategy = init_strategy or cfg.resolved_init_strategy
        floor = PRICE_EPS if cfg.variant == "adaptive" else cfg.min_price

        if strategy == "randomized":
            hi = cfg.max_consumption
            lo = min(max(0.5 * hi, 1.0), hi)
            max_consumption = rng.uniform(lo, hi, size=n)
            price_sensitivity = rng.uniform(
                cfg.sensitivity_min, cfg.sensitivity_max, size=n
            )
            price = np.full(n, max(cfg.money_init, floor))
        elif strategy == "uniform":
            max_consumption = np.full(n, cfg.max_consumption)
            price_sensitivity = np.full(n, cfg.sensitivity_min)
            price = np.full(n, max(cfg.min_price, floor))
        else:
            raise ValueError(f"Unknown init strategy '{strategy}'")

        money = np.full(n, cfg.money_init)

        con = Consumer(
            money=money,
            max_consumption=max_consumption,
            min_consumption=np.full(n, cfg.min_consumption),
            savings_level=np.full(n, cfg.savings_level),
            consumption=np.zeros(n),
            total_consumption=np.zeros(n),
            last_price=price.copy(),
        )
        prod = Producer(
            max_production=np.full(n, cfg.max_production),
            unsold=np.zeros(n),
            sold=np.zeros(n),
            total_production=np.zeros(n),
            price=price,
            expected_production=np.full(n, cfg.expected_production),
            price_sensitivity=price_sensitivity,
            pending_income=np.zeros(n),
            active=np.zeros(n, dtype=np.bool_),
        )

        if log.isEnabledFor(logging.DEBUG):
            log.debug(
                f"  Created {n} agents ({strategy}): "
                f"max_consumption in [{max_consumption.min():.3f}, "
                f"{max_consumption.max():.3f}], starting price {price[0]:.3f}"
            )

        return cls(con=con, prod=prod, n=n)

    def get(self, agent_id: int) -> AgentView:
        """Return a mutable view of agent *agent_id*."""
        if agent_id < 0 or agent_id >= self.n:
            raise InvariantError(
                f"Agent id {agent_id} out of range", context={"n_agents": self.n}
            )
        return AgentView(self, int(agent_id))

    def total_money(self) -> float:
        """Money in the economy, pending income included."""
        return float(self.con.money.sum() + self.prod.pending_income.sum())

    def __len__(self) -> int:
        return self.n
