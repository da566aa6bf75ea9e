# src/dismal/simulation.py
from __future__ import annotations

import enum
import sys
import time
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Mapping, TextIO

# noinspection PyPackageRequirements
import yaml

# noinspection PyPackageRequirements
from numpy.random import Generator, default_rng

import dismal.events  # noqa: F401 - needed to register events
from dismal import logging
from dismal.agents import AgentStore
from dismal.config import Config
from dismal.core.default_pipeline import create_default_pipeline
from dismal.core.pipeline import Pipeline
from dismal.logging import TIMING_LOGGER, VerboseFlag
from dismal.reporting import (
    LIFETIME_LABEL,
    format_config,
    format_stats_header,
    format_stats_row,
)
from dismal.roles import Consumer, Producer
from dismal.roster import Roster
from dismal.stats import ReportKind, StatsRow, compute_stats
from dismal.tradebook import TradeBook

__all__ = ["Simulation", "SimulationPhase"]

log = logging.getLogger(__name__)
timing_log = logging.getLogger(TIMING_LOGGER)


# helpers
# ---------------------------------------------------------------------------
def _read_yaml(obj: str | Path | Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return a plain dict – {} if *obj* is None."""
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    p = Path(obj)
    with p.open("rt", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, Mapping):
        raise TypeError(f"config root must be mapping, got {type(data)!r}")
    return dict(data)


def _package_defaults() -> Dict[str, Any]:
    """Load dismal/defaults.yml"""
    txt = resources.files("dismal").joinpath("defaults.yml").read_text()
    return yaml.safe_load(txt) or {}


class SimulationPhase(enum.Enum):
    """Lifecycle of a run."""

    INITIALIZING = "initializing"
    RUNNING = "running"
    FINALIZING = "finalizing"


# Simulation
# ---------------------------------------------------------------------
@dataclass(slots=True)
class Simulation:
    """
    Facade that drives one closed economy through *n* consecutive ticks.

    One call to `run` → `start`, *n* calls to `step`, `finalize`.
    """

    # core state
    rng: Generator
    store: AgentStore
    consumers: Roster
    producers: Roster
    trades: TradeBook

    # configuration
    config: Config

    # event pipeline
    pipeline: Pipeline

    # population size and run length
    n_agents: int
    n_iters: int
    t: int  # completed ticks

    phase: SimulationPhase = SimulationPhase.INITIALIZING

    # reporting
    stats_history: list[StatsRow] = field(default_factory=list)
    lifetime: StatsRow | None = None
    elapsed: float = 0.0
    out: TextIO | None = None  # None → sys.stdout at write time
    _started_at: float = field(default=0.0, repr=False)

    @property
    def con(self) -> Consumer:
        """Consumer role of all agents."""
        return self.store.con

    @property
    def prod(self) -> Producer:
        """Producer role of all agents."""
        return self.store.prod

    # Constructor
    # ---------------------------------------------------------------------
    @classmethod
    def init(
        cls,
        config: str | Path | Mapping[str, Any] | None = None,
        **overrides: Any,  # anything here wins last
    ) -> "Simulation":
        """
        Build a Simulation.

        Order of precedence (later overrides earlier):

            1. package defaults  (dismal/defaults.yml)
            2. *config*  (Path / str / Mapping / None)
            3. explicit keyword arguments (**overrides)

        ``seed`` may also be a ready-made ``numpy.random.Generator``.

        Raises
        ------
        ValueError
            If the merged configuration is invalid.
        """
        # 1 + 2 + 3 → one merged dict
        cfg_dict: Dict[str, Any] = _package_defaults()
        cfg_dict.update(_read_yaml(config))
        cfg_dict.update(overrides)

        # Random-seed handling
        seed_val = cfg_dict.pop("seed", None)
        rng: Generator = (
            seed_val if isinstance(seed_val, Generator) else default_rng(seed_val)
        )
        if not isinstance(seed_val, Generator):
            cfg_dict["seed"] = seed_val

        # Validate configuration (centralized validation)
        from dismal.config import ConfigValidator

        ConfigValidator.validate_config(cfg_dict)

        return cls._from_params(rng=rng, **cfg_dict)

    @staticmethod
    def _configure_logging(log_config: Dict[str, Any]) -> None:
        """
        Configure logging levels for dismal loggers.

        Parameters
        ----------
        log_config : dict
            Logging configuration with keys:
            - default_level: str (e.g., 'INFO', 'DEBUG')
            - events: dict[str, str] (per-event overrides)
        """
        default_level = log_config.get("default_level", "INFO")
        logging.getLogger("dismal").setLevel(_level_of(default_level))

        # Set per-event log level overrides
        event_levels = log_config.get("events") or {}
        for event_name, level in event_levels.items():
            logger_name = f"dismal.events.{event_name}"
            logging.getLogger(logger_name).setLevel(_level_of(level))

    @classmethod
    def _from_params(cls, *, rng: Generator, **p: Any) -> "Simulation":
        verbose_flags = logging.parse_verbose_flags(p.get("verbose_flags"))

        cfg = Config(
            n_agents=p["n_agents"],
            n_iters=p["n_iters"],
            money_init=float(p["money_init"]),
            savings_level=float(p["savings_level"]),
            min_consumption=float(p["min_consumption"]),
            max_consumption=float(p["max_consumption"]),
            max_production=float(p["max_production"]),
            expected_production=float(p["expected_production"]),
            min_price=float(p["min_price"]),
            price_adjust=float(p["price_adjust"]),
            sample_size=p["sample_size"],
            variant=p.get("variant", "adaptive"),
            seed=p.get("seed"),
            poverty_line=float(p.get("poverty_line", 1.0)),
            report_steps=p.get("report_steps", 25),
            init_strategy=p.get("init_strategy"),
            sensitivity_min=float(p.get("sensitivity_min", 0.001)),
            sensitivity_max=float(p.get("sensitivity_max", 0.001)),
            verbose_flags=verbose_flags,
            log_file=p.get("log_file"),
        )

        # Configure logging (if specified); verbose flags refine it
        if "logging" in p:
            cls._configure_logging(p["logging"])
        logging.apply_verbose_flags(verbose_flags)

        store = AgentStore.create(cfg.n_agents, cfg, rng)

        # Create event pipeline (default or custom)
        pipeline_path = p.get("pipeline_path")
        if pipeline_path is not None:
            pipeline = Pipeline.from_yaml(pipeline_path)
        else:
            pipeline = create_default_pipeline()

        return cls(
            rng=rng,
            store=store,
            consumers=Roster.empty(cfg.n_agents, "consumers"),
            producers=Roster.empty(cfg.n_agents, "producers"),
            trades=TradeBook(),
            config=cfg,
            pipeline=pipeline,
            n_agents=cfg.n_agents,
            n_iters=cfg.n_iters,
            t=0,
        )

    # public API
    # ---------------------------------------------------------------------
    def emit(self, line: str) -> None:
        """Write one report line to the output stream."""
        print(line, file=self.out if self.out is not None else sys.stdout)

    def start(self) -> None:
        """
        Enter the RUNNING phase: append the configuration echo to the log
        file (if any) and print the statistics header.

        Raises
        ------
        RuntimeError
            If the simulation was already started.
        """
        if self.phase is not SimulationPhase.INITIALIZING:
            raise RuntimeError(f"Cannot start a simulation that is {self.phase.value}")

        if self.config.log_file is not None:
            with open(self.config.log_file, "a", encoding="utf-8") as fh:
                for line in format_config(self.config, comment="#"):
                    fh.write(line + "\n")

        self.emit(format_stats_header())
        self.phase = SimulationPhase.RUNNING
        self._started_at = time.perf_counter()

        log.info(
            f"Simulation started: {self.n_agents} agents, {self.n_iters} ticks, "
            f"variant={self.config.variant}"
        )

    def run(self, n_iters: int | None = None) -> StatsRow:
        """
        Start, advance *n_iters* ticks (defaults to ``config.n_iters``) and
        finalize.

        Returns
        -------
        StatsRow
            The lifetime report.
        """
        if self.phase is SimulationPhase.INITIALIZING:
            self.start()
        n = n_iters if n_iters is not None else self.n_iters
        for _ in range(int(n)):
            self.step()
        return self.finalize()

    def step(self) -> None:
        """
        Advance the economy by exactly one tick using the event pipeline.

        Starts the simulation on first use. The pipeline can be customized
        by users before calling step().

        Raises
        ------
        RuntimeError
            If the simulation has already been finalized.
        InvariantError
            If a model invariant breaks during the tick.
        """
        if self.phase is SimulationPhase.FINALIZING:
            raise RuntimeError("Cannot step a finalized simulation")
        if self.phase is SimulationPhase.INITIALIZING:
            self.start()

        self.t += 1

        # Execute pipeline
        self.pipeline.execute(self)

    def finalize(self) -> StatsRow:
        """
        Compute and print the lifetime report and enter the FINALIZING phase.

        Raises
        ------
        RuntimeError
            If called twice.
        """
        if self.phase is SimulationPhase.FINALIZING:
            raise RuntimeError("Simulation already finalized")

        self.phase = SimulationPhase.FINALIZING
        self.lifetime = compute_stats(
            self.store,
            self.t,
            ReportKind.LIFETIME,
            poverty_line=self.config.poverty_line,
            variant=self.config.variant,
        )
        self.elapsed = (
            time.perf_counter() - self._started_at if self._started_at else 0.0
        )

        self.emit(LIFETIME_LABEL)
        self.emit(format_stats_row(self.lifetime))

        if self.config.verbose(VerboseFlag.TIMERS):
            self.emit(f"Time taken {self.elapsed:.2f}")
        timing_log.info(f"{self.t} ticks in {self.elapsed:.3f}s")

        log.info(
            f"Simulation finished: poverty {self.lifetime.poverty_pct:.1f}%, "
            f"money {self.store.total_money():,.4f}"
        )
        return self.lifetime

    def get_role(self, name: str) -> Any:
        """
        Get role instance by name.

        Parameters
        ----------
        name : str
            Role name (case-insensitive): 'Consumer' or 'Producer'.

        Raises
        ------
        ValueError
            If role name not found.

        Examples
        --------
        >>> sim = Simulation.init()
        >>> prod = sim.get_role("Producer")
        >>> assert prod is sim.prod
        """
        role_map = {
            "consumer": self.con,
            "producer": self.prod,
        }

        name_lower = name.lower()
        if name_lower not in role_map:
            available = list(role_map.keys())
            raise ValueError(f"Role '{name}' not found. Available roles: {available}")

        return role_map[name_lower]

    def get_event(self, name: str) -> Any:
        """
        Get event instance from pipeline by name.

        Raises
        ------
        KeyError
            If event not found in pipeline.

        Examples
        --------
        >>> sim = Simulation.init()
        >>> pricing_event = sim.get_event("adjust_prices")
        """
        for event in self.pipeline.events:
            if event.name == name:
                return event

        available = [e.name for e in self.pipeline.events]
        raise KeyError(f"Event '{name}' not found in pipeline. Available: {available}")


def _level_of(name: str) -> int:
    """Numeric level for a level name, DEEP_DEBUG included."""
    name = name.upper()
    if name == "DEEP_DEBUG":
        return logging.DEEP_DEBUG
    return int(getattr(logging, name))
