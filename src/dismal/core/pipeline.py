"""Event Pipeline with explicit execution order."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import yaml

from dismal.core.event import Event
from dismal.core.registry import get_event

if TYPE_CHECKING:
    from dismal.simulation import Simulation


@dataclass(slots=True)
class Pipeline:
    """
    Ordered event execution pipeline for one tick.

    Attributes
    ----------
    events : list[Event]
        Ordered list of event instances to execute.
    _event_map : dict[str, Event]
        Internal mapping from event names to instances for quick lookup.
    """

    events: list[Event] = field(default_factory=list)
    _event_map: dict[str, Event] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        """Build internal event mapping."""
        self._event_map = {event.name: event for event in self.events}

    @classmethod
    def from_event_list(cls, event_names: list[str]) -> Pipeline:
        """
        Build pipeline from ordered list of event names.

        Events are executed in the exact order provided.

        Raises
        ------
        KeyError
            If event name not found in registry.
        """
        return cls(events=[get_event(name)() for name in event_names])

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> Pipeline:
        """
        Build pipeline from YAML configuration file.

        The YAML file should have an 'events' key with a list of event
        specifications, either ``event_name`` or ``event_name x N`` to
        repeat an event N times.

        Raises
        ------
        ValueError
            If YAML format is invalid.
        KeyError
            If an event is not found in the registry.
        """
        yaml_path = Path(yaml_path)
        with open(yaml_path) as f:
            config = yaml.safe_load(f)

        if not isinstance(config, dict) or "events" not in config:
            raise ValueError(f"YAML file must have 'events' key: {yaml_path}")

        event_names: list[str] = []
        for spec in config["events"]:
            event_names.extend(cls._parse_event_spec(spec))

        return cls.from_event_list(event_names)

    @staticmethod
    def _parse_event_spec(spec: str) -> list[str]:
        """
        Parse event specification string into list of event names.

        - 'event_name' -> ['event_name']
        - 'event_name x 3' -> ['event_name', 'event_name', 'event_name']
        """
        spec = spec.strip()
        match = re.match(r"^(.+?)\s+x\s+(\d+)$", spec)
        if match:
            return [match.group(1).strip()] * int(match.group(2))
        return [spec]

    def execute(self, sim: Simulation) -> None:
        """Execute all events in pipeline order."""
        for event in self.events:
            event.execute(sim)

    def insert_after(self, after: str, event: Event | str) -> None:
        """
        Insert event after specified event.

        Raises
        ------
        ValueError
            If 'after' event not found in pipeline.
        """
        if after not in self._event_map:
            raise ValueError(f"Event '{after}' not found in pipeline")

        if isinstance(event, str):
            event = get_event(event)()

        idx = self.events.index(self._event_map[after])
        self.events.insert(idx + 1, event)
        self._event_map[event.name] = event

    def remove(self, event_name: str) -> None:
        """
        Remove event from pipeline.

        Raises
        ------
        ValueError
            If event not found in pipeline.
        """
        if event_name not in self._event_map:
            raise ValueError(f"Event '{event_name}' not found in pipeline")

        event = self._event_map.pop(event_name)
        self.events.remove(event)

    def __len__(self) -> int:
        """Return number of events in pipeline."""
        return len(self.events)

    def __repr__(self) -> str:
        """Provide informative repr."""
        return f"Pipeline(n_events={len(self.events)})"
