"""Event (System) base class definition."""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from dismal.simulation import Simulation


def _camel_to_snake(name: str) -> str:
    """Convert CamelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


@dataclass(slots=True)
class Event(ABC):
    """
    Base class for all events (systems) of a tick.

    An Event encapsulates model logic that operates on roles and mutates
    simulation state in-place. Events are executed by the Pipeline in the
    exact order specified.

    Notes
    -----
    Events are registered automatically via __init_subclass__ hook.
    The order of event execution is critical and must be explicitly
    defined in the pipeline configuration.
    """

    name: ClassVar[str] = ""

    def __init_subclass__(cls, name: str = "", **kwargs: Any) -> None:
        """
        Auto-register Event subclasses in the global registry.

        Parameters
        ----------
        name : str, optional
            Custom name for the event.
            If not provided, uses the class name converted to snake_case.
        **kwargs
            Additional keyword arguments passed to parent __init_subclass__.
        """
        super(Event, cls).__init_subclass__(**kwargs)

        if name != "":
            cls.name = name
        elif cls.name == "":
            cls.name = _camel_to_snake(cls.__name__)

        from dismal.core.registry import _EVENT_REGISTRY

        _EVENT_REGISTRY[cls.name] = cls

    def get_logger(self) -> logging.Logger:
        """
        Get logger for this event with per-event log level applied.

        Notes
        -----
        Logger name format: 'dismal.events.{event_name}'
        Per-event log levels can be configured via defaults.yml or kwargs:

        logging:
          events:
            clear_market: DEBUG
        """
        return logging.getLogger(f"dismal.events.{self.name}")

    @abstractmethod
    def execute(self, sim: Simulation) -> None:
        """
        Execute the event's logic.

        Mutates simulation state in-place.

        Parameters
        ----------
        sim : Simulation
            The simulation instance containing all state and configuration.
        """
        pass

    def __repr__(self) -> str:
        """Provide informative repr."""
        return f"{self.__class__.__name__}(name={self.name!r})"
