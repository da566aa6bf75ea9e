from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from dismal.typing import Float1D, Idx1D


@dataclass(slots=True)
class TradeBook:
    # noinspection PyUnresolvedReferences
    """
    Edge-list ledger of the trades executed in the current tick.

    One row per executed trade, stored as parallel arrays (COO format):
    consumer id, producer id, quantity, unit price and cost. The book is
    cleared at every roster rebuild, so it only ever describes one tick.

    Attributes
    ----------
    consumer_ids, producer_ids : Idx1D
        Agent ids of buyer and seller.
    quantity : Float1D
        Units transferred.
    price : Float1D
        Unit price of the producer at trade time.
    cost : Float1D
        Money transferred from consumer to producer.
    size : int
        Number of recorded trades.
    capacity : int
        Allocated rows.

    Notes
    -----
    Appends are amortized O(1): capacity doubles when exhausted.
    """

    consumer_ids: Idx1D = field(default_factory=lambda: np.empty(0, np.intp))
    producer_ids: Idx1D = field(default_factory=lambda: np.empty(0, np.intp))
    quantity: Float1D = field(default_factory=lambda: np.empty(0, np.float64))
    price: Float1D = field(default_factory=lambda: np.empty(0, np.float64))
    cost: Float1D = field(default_factory=lambda: np.empty(0, np.float64))
    size: int = 0
    capacity: int = 0

    _COLUMNS = ("consumer_ids", "producer_ids", "quantity", "price", "cost")

    def _ensure_capacity(self, extra: int) -> None:
        """
        Ensure capacity for *extra* more rows, resizing arrays if needed.
        """
        needed = self.size + extra
        if needed <= self.capacity:
            return
        new_cap = max(self.capacity * 2, needed, 128)

        for name in self._COLUMNS:
            arr = getattr(self, name)
            if arr.size != new_cap:  # only when really needed
                setattr(self, name, np.resize(arr, new_cap))

        self.capacity = new_cap

    # ------------------------------------------------------------------ #
    #   API                                                              #
    # ------------------------------------------------------------------ #
    def append(
        self,
        consumer_id: int,
        producer_id: int,
        quantity: float,
        price: float,
        cost: float,
    ) -> None:
        """Record one executed trade."""
        self._ensure_capacity(1)
        i = self.size
        self.consumer_ids[i] = consumer_id
        self.producer_ids[i] = producer_id
        self.quantity[i] = quantity
        self.price[i] = price
        self.cost[i] = cost
        self.size = i + 1

    def clear(self) -> None:
        """Forget all trades; allocated storage is kept."""
        self.size = 0

    @property
    def volume(self) -> float:
        """Units traded."""
        return float(self.quantity[: self.size].sum())

    @property
    def value(self) -> float:
        """Money that changed hands."""
        return float(self.cost[: self.size].sum())

    def spent_per_consumer(self, n_agents: int) -> Float1D:
        """Total cost paid by each agent as a consumer."""
        return np.bincount(
            self.consumer_ids[: self.size],
            weights=self.cost[: self.size],
            minlength=n_agents,
        )

    def earned_per_producer(self, n_agents: int) -> Float1D:
        """Total income received by each agent as a producer."""
        return np.bincount(
            self.producer_ids[: self.size],
            weights=self.cost[: self.size],
            minlength=n_agents,
        )

    def __len__(self) -> int:
        return self.size
