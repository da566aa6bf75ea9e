"""Tests for the market events wired through a Simulation."""

import numpy as np

from dismal.events.market import ClearMarket, RebuildRosters


def test_rebuild_rosters_event(tiny_sim):
    tiny_sim.t = 1
    RebuildRosters().execute(tiny_sim)

    assert tiny_sim.consumers.size == tiny_sim.n_agents
    assert tiny_sim.producers.size == tiny_sim.n_agents
    np.testing.assert_array_equal(tiny_sim.prod.unsold, tiny_sim.prod.max_production)


def test_clear_market_event_moves_goods(tiny_sim):
    tiny_sim.t = 1
    money = tiny_sim.store.total_money()
    RebuildRosters().execute(tiny_sim)
    ClearMarket().execute(tiny_sim)

    assert tiny_sim.trades.size > 0
    assert tiny_sim.con.consumption.sum() > 0.0
    np.testing.assert_allclose(
        tiny_sim.con.consumption.sum(), tiny_sim.prod.sold.sum(), rtol=1e-12
    )
    np.testing.assert_allclose(tiny_sim.store.total_money(), money, rtol=1e-12)


def test_clear_market_target_pays_immediately(tiny_target_sim):
    sim = tiny_target_sim
    sim.t = 1
    RebuildRosters().execute(sim)
    ClearMarket().execute(sim)

    assert sim.prod.pending_income.sum() == 0.0
    earned = sim.trades.earned_per_producer(sim.n_agents)
    spent = sim.trades.spent_per_consumer(sim.n_agents)
    np.testing.assert_allclose(
        sim.con.money, 5.0 - spent + earned, rtol=1e-9, atol=1e-12
    )
