"""Unit tests for the fixed-width text output."""

import numpy as np

from dismal.logging import VerboseFlag
from dismal.reporting import (
    AGENT_COLUMNS,
    STATS_COLUMNS,
    format_agents,
    format_config,
    format_stats_header,
    format_stats_row,
)
from dismal.stats import MetricSummary, ReportKind, StatsRow
from tests.helpers.factories import mock_config, mock_consumer, mock_store


def _row(kind: ReportKind, t: int = 3) -> StatsRow:
    m = MetricSummary(mean=1.23456, max=2.5, min=0.125)
    return StatsRow(
        t=t,
        kind=kind,
        money=m,
        price=m,
        consumption=m,
        production=m,
        poverty_pct=12.5,
    )


def test_header_layout() -> None:
    header = format_stats_header()
    assert len(header) == 8 + 7 * len(STATS_COLUMNS)
    assert header.startswith("       t")
    assert header.endswith("    pvt")
    assert header.split() == ["t"] + [p for col in STATS_COLUMNS for p in col.split()]


def test_round_row_decimals() -> None:
    line = format_stats_row(_row(ReportKind.ROUND, t=40))
    assert len(line) == 8 + 7 * 13
    fields = line.split()
    assert fields[0] == "40"
    # money with two decimals, everything else with three, poverty with one
    assert fields[1:4] == ["1.23", "2.50", "0.12"]
    assert fields[4:7] == ["1.235", "2.500", "0.125"]
    assert fields[-1] == "12.5"


def test_lifetime_row_decimals() -> None:
    fields = format_stats_row(_row(ReportKind.LIFETIME)).split()
    assert fields[1:5] == ["1.23", "2.50", "0.12", "1.235"]
    assert fields[5:7] == ["2.50", "0.12"]
    assert fields[-1] == "12.5"


def test_format_agents() -> None:
    con = mock_consumer(
        2, money=np.array([5.0, 0.25]), total_consumption=np.array([4.0, 8.0])
    )
    lines = format_agents(mock_store(con), t=4)

    assert len(lines) == 3
    assert lines[0].split() == ["id", "$$", "prod", "csmp", "price", "last", "p",
                                "av", "C", "av", "P"]  # fmt: skip
    assert len(lines[1]) == 4 + 8 * len(AGENT_COLUMNS)
    assert lines[2].split()[:2] == ["1", "0.25"]
    # lifetime average consumption over four ticks
    assert lines[2].split()[6] == "2.00"


def test_format_config_lines() -> None:
    cfg = mock_config(seed=7, verbose_flags=VerboseFlag.STATS | VerboseFlag.TIMERS)
    lines = format_config(cfg, comment="#")

    assert lines[0] == "#  -i " + f"{'number of iterations':<50}" + f"{10:9d}"
    assert lines[-1] == "#  -vTS"
    assert all(line.startswith("#  -") for line in lines)
    assert any(line.endswith("    0.20") and "-r " in line for line in lines)
    assert any(line.endswith("adaptive") and "-M " in line for line in lines)


def test_format_config_hides_internal_options() -> None:
    lines = format_config(mock_config(), comment=" ")
    text = "\n".join(lines)
    assert "sensitivity" not in text
    assert "initialization" not in text
    assert lines[-1] == "   -v"


def test_format_config_unset_seed() -> None:
    lines = format_config(mock_config(seed=None))
    (seed_line,) = [line for line in lines if "-R " in line]
    assert seed_line.endswith("       -")
