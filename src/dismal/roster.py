"""
Dense index sets of this tick's market participants.

A roster is an array of agent ids plus a size. Membership is rebuilt at
the start of each tick and only shrinks afterwards: removal swaps the last
entry into the freed slot, so order is not preserved.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from dismal.errors import InvariantError
from dismal.typing import Idx1D


@dataclass(slots=True)
class Roster:
    """
    Fixed-capacity index set with O(1) swap-with-last removal.

    Attributes
    ----------
    name : str
        Label used in log output and error context.
    ids : Idx1D
        Backing storage; only ``ids[:size]`` is meaningful.
    size : int
        Number of members.

    Examples
    --------
    >>> r = Roster.empty(4, "producers")
    >>> r.fill(np.array([0, 1, 2]))
    >>> r.remove_at(0)
    0
    >>> r.active().tolist()
    [2, 1]
    """

    name: str
    ids: Idx1D = field(default_factory=lambda: np.empty(0, np.intp))
    size: int = 0

    @classmethod
    def empty(cls, capacity: int, name: str = "roster") -> Roster:
        return cls(name=name, ids=np.empty(capacity, dtype=np.intp), size=0)

    @property
    def capacity(self) -> int:
        return int(self.ids.shape[0])

    def clear(self) -> None:
        self.size = 0

    def add(self, agent_id: int) -> None:
        """Append *agent_id*; exceeding the capacity is an invariant breach."""
        if self.size >= self.capacity:
            raise InvariantError(
                f"{self.name} roster overflow",
                context={"capacity": self.capacity, "agent": agent_id},
            )
        self.ids[self.size] = agent_id
        self.size += 1

    def fill(self, agent_ids: Idx1D) -> None:
        """Replace the membership with *agent_ids* (kept in the given order)."""
        k = int(agent_ids.shape[0])
        if k > self.capacity:
            raise InvariantError(
                f"{self.name} roster overflow",
                context={"capacity": self.capacity, "requested": k},
            )
        self.ids[:k] = agent_ids
        self.size = k

    def remove_at(self, pos: int) -> int:
        """
        Remove the member at roster position *pos* and return its agent id.

        The last member moves into *pos*.
        """
        self._check(pos)
        agent_id = int(self.ids[pos])
        self.size -= 1
        self.ids[pos] = self.ids[self.size]
        return agent_id

    def active(self) -> Idx1D:
        """View of the current members."""
        return self.ids[: self.size]

    def _check(self, pos: int) -> None:
        if pos < 0 or pos >= self.size:
            raise InvariantError(
                f"{self.name} roster position {pos} out of range",
                context={"size": self.size},
            )

    def __getitem__(self, pos: int) -> int:
        self._check(pos)
        return int(self.ids[pos])

    def __len__(self) -> int:
        return self.size

    def __repr__(self) -> str:
        members = self.active().tolist()
        return f"Roster(name={self.name!r}, size={self.size}, ids={members})"
