"""Tests for the DumpAgents and SampleStats events."""

import io

from dismal.events.reporting import DumpAgents, SampleStats
from dismal.logging import VerboseFlag
from dismal.simulation import Simulation


def _sim(**kwargs) -> Simulation:
    sim = Simulation.init(n_agents=5, n_iters=10, seed=1, **kwargs)
    sim.out = io.StringIO()
    return sim


def test_dump_agents_silent_without_flag():
    sim = _sim()
    sim.t = 1
    DumpAgents().execute(sim)
    assert sim.out.getvalue() == ""


def test_dump_agents_with_flag():
    sim = _sim(verbose_flags="A")
    sim.t = 1
    DumpAgents().execute(sim)
    lines = sim.out.getvalue().splitlines()
    # header, one line per agent, blank separator
    assert len(lines) == 1 + 5 + 1
    assert lines[0].split()[0] == "id"
    assert lines[-1] == ""


def test_sample_stats_stride():
    sim = _sim(report_steps=5)  # stride 2
    assert sim.config.report_stride == 2
    for t in range(1, 11):
        sim.t = t
        SampleStats().execute(sim)
    assert [row.t for row in sim.stats_history] == [1, 3, 5, 7, 9]
    # collected but not printed without S
    assert sim.out.getvalue() == ""


def test_sample_stats_prints_with_flag():
    sim = _sim(verbose_flags=VerboseFlag.STATS.value)
    sim.t = 1
    SampleStats().execute(sim)
    (line,) = sim.out.getvalue().splitlines()
    assert line.split()[0] == "1"
    assert len(sim.stats_history) == 1
