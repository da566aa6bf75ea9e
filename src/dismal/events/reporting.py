"""Reporting events: agent dump and rolling statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

from dismal.core.decorators import event
from dismal.logging import VerboseFlag
from dismal.reporting import format_agents, format_stats_row
from dismal.stats import ReportKind, compute_stats

if TYPE_CHECKING:
    from dismal.simulation import Simulation


@event
class DumpAgents:
    """
    Print the per-agent table when the ``A`` verbose flag is set.

    Columns: id, money, unsold, consumption, price, last price paid,
    lifetime average consumption, lifetime average production.
    """

    def execute(self, sim: Simulation) -> None:
        if not sim.config.verbose(VerboseFlag.AGENTS):
            return
        for line in format_agents(sim.store, sim.t):
            sim.emit(line)
        sim.emit("")


@event
class SampleStats:
    """
    Record a statistics row every ``report_stride`` ticks.

    Rows are taken at ticks 1, 1 + stride, 1 + 2·stride, ... and appended to
    ``sim.stats_history``. They are printed only when the ``S`` verbose flag
    is set.
    """

    def execute(self, sim: Simulation) -> None:
        log = self.get_logger()
        cfg = sim.config

        if (sim.t - 1) % cfg.report_stride != 0:
            return

        row = compute_stats(
            sim.store,
            sim.t,
            ReportKind.ROUND,
            poverty_line=cfg.poverty_line,
            variant=cfg.variant,
        )
        sim.stats_history.append(row)

        log.info(
            f"  t={row.t}: poverty {row.poverty_pct:.1f}%, "
            f"mean price {row.price.mean:.4f}"
        )

        if cfg.verbose(VerboseFlag.STATS):
            sim.emit(format_stats_row(row))
