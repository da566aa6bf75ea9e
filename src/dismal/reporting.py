"""
Fixed-width text output: statistics table, agent dump and configuration echo.

All functions return strings (or lists of lines) so callers decide where the
text goes; :class:`~dismal.simulation.Simulation` writes them to its report
stream and log file.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dismal.config.options import OPTIONS
from dismal.logging import format_verbose_flags
from dismal.stats import ReportKind, StatsRow

if TYPE_CHECKING:
    from dismal.agents import AgentStore
    from dismal.config import Config

STATS_COLUMNS = (
    "av $", "mx $", "mn $",
    "av PP", "mx PP", "mn PP",
    "av C", "mx C", "mn C",
    "av P", "mx P", "mn P",
    "pvt",
)  # fmt: skip

# Decimals per column (money, price, consumption, production, poverty)
_ROUND_DECIMALS = (2, 2, 3, 3, 3, 3, 3, 3, 3, 3, 3, 3, 1)
_LIFETIME_DECIMALS = (2, 2, 2, 3, 2, 2, 2, 2, 2, 2, 2, 2, 1)

AGENT_COLUMNS = ("$$", "prod", "csmp", "price", "last p", "av C", "av P")

LIFETIME_LABEL = " LIFETIME"


def format_stats_header() -> str:
    """Column titles of the statistics table."""
    return f"{'t':>8}" + "".join(f"{c:>7}" for c in STATS_COLUMNS)


def format_stats_row(row: StatsRow) -> str:
    """One line of the statistics table."""
    values = (
        row.money.mean, row.money.max, row.money.min,
        row.price.mean, row.price.max, row.price.min,
        row.consumption.mean, row.consumption.max, row.consumption.min,
        row.production.mean, row.production.max, row.production.min,
        row.poverty_pct,
    )  # fmt: skip
    decimals = (
        _LIFETIME_DECIMALS if row.kind is ReportKind.LIFETIME else _ROUND_DECIMALS
    )
    return f"{row.t:8d}" + "".join(
        f"{v:7.{d}f}" for v, d in zip(values, decimals, strict=True)
    )


def format_agents(store: AgentStore, t: int) -> list[str]:
    """
    Per-agent table: money, unsold stock, tick consumption, price, last
    price paid and lifetime averages over *t* ticks.
    """
    con, prod = store.con, store.prod
    denom = max(t, 1)
    lines = [f"{'id':>4}" + "".join(f"{c:>8}" for c in AGENT_COLUMNS)]
    for i in range(store.n):
        values = (
            con.money[i],
            prod.unsold[i],
            con.consumption[i],
            prod.price[i],
            con.last_price[i],
            con.total_consumption[i] / denom,
            prod.total_production[i] / denom,
        )
        lines.append(f"{i:4d}" + "".join(f"{v:8.2f}" for v in values))
    return lines


def format_config(cfg: Config, comment: str = " ") -> list[str]:
    """
    Echo of the active configuration, one parameter per line.

    Parameters
    ----------
    cfg : Config
        Configuration to print.
    comment : str
        Leading character; ``"#"`` for the log file, ``" "`` on screen.
    """
    lines = []
    for opt in OPTIONS:
        if not opt.echo:
            continue
        value = getattr(cfg, opt.key)
        lines.append(
            f"{comment}  -{opt.flag} {opt.help:<50} {opt.format_value(value)}"
        )
    lines.append(f"{comment}  -v{format_verbose_flags(cfg.verbose_flags)}")
    return lines
