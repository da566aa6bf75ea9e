"""Role (Component) base class definition."""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from typing import Any, ClassVar


@dataclass(slots=True)
class Role(ABC):
    """
    Base class for all roles (components) of an agent.

    A Role is a dataclass containing NumPy arrays representing state variables
    for one aspect of agent behavior (Producer, Consumer).

    Each array index corresponds to an agent ID. With 100 agents,
    `Producer.price` is a 1D NumPy array of length 100.

    Notes
    -----
    The __init_subclass__ hook automatically:
    - Registers roles in the global registry
    - Sets name to the Role class name
    """

    name: ClassVar[str | None] = None

    def __init_subclass__(cls, name: str | None = None, **kwargs: Any) -> None:
        """
        Auto-register Role subclasses in the global registry.

        Parameters
        ----------
        name : str, optional
            Custom name for the role. If not provided, uses the class name.
        **kwargs
            Additional keyword arguments passed to parent __init_subclass__.
        """
        super(Role, cls).__init_subclass__(**kwargs)

        # @dataclass(slots=True) creates a new class and triggers this hook a
        # second time without the custom name
        if name is not None:
            cls.name = name
        elif cls.name is None:
            cls.name = cls.__name__

        from dismal.core.registry import _ROLE_REGISTRY

        _ROLE_REGISTRY[cls.name] = cls

    @property
    def size(self) -> int:
        """Number of agents (length of the first field)."""
        fields = getattr(self, "__dataclass_fields__", {})
        for field_name in fields:
            return int(getattr(self, field_name).shape[0])
        return 0

    def __repr__(self) -> str:
        """Provide informative repr showing role name and field count."""
        fields = getattr(self, "__dataclass_fields__", {})
        role_name = self.name or self.__class__.__name__
        return f"{role_name}(fields={len(fields)})"
