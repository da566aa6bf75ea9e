"""Pytest configuration and fixtures for dismal tests."""

import os

import pytest

import dismal.events  # noqa: F401 - register all events
from dismal import logging
from dismal.core.registry import clear_registry
from dismal.simulation import Simulation


@pytest.fixture
def clean_registry():
    """
    Save registry state, clear it for the test, then restore it.

    This fixture should be explicitly requested by tests that need isolation
    from the real events or from test pollution by other test modules.

    DO NOT use autouse=True, as it would interfere with integration tests
    that rely on real components being registered.
    """
    # noinspection PyProtectedMember
    from dismal.core.registry import _EVENT_REGISTRY, _ROLE_REGISTRY

    saved_roles = dict(_ROLE_REGISTRY)
    saved_events = dict(_EVENT_REGISTRY)

    clear_registry()

    yield

    _ROLE_REGISTRY.clear()
    _ROLE_REGISTRY.update(saved_roles)
    _EVENT_REGISTRY.clear()
    _EVENT_REGISTRY.update(saved_events)


@pytest.fixture
def tiny_sim(tmp_path) -> Simulation:
    """A minimal deterministic simulation for fast integration tests."""
    return Simulation.init(
        n_agents=12,
        n_iters=20,
        seed=123,
        sample_size=4,
        log_file=str(tmp_path / "updates.dat"),
    )


@pytest.fixture
def tiny_target_sim(tmp_path) -> Simulation:
    """Same as ``tiny_sim`` for the target variant."""
    return Simulation.init(
        n_agents=12,
        n_iters=20,
        seed=123,
        sample_size=4,
        variant="target",
        log_file=str(tmp_path / "updates.dat"),
    )


@pytest.fixture(autouse=True)
def mute_dismal_logs(caplog):
    # - CI coverage run: DEBUG to execute all logging for accurate coverage
    # - Everything else: ERROR for faster tests
    if os.environ.get("COVERAGE_RUN") == "true":
        level = logging.DEBUG
    else:
        level = logging.ERROR

    caplog.set_level(level, logger="dismal")
    logging.getLogger("dismal").setLevel(level)
    # verbose flags lower category loggers directly; undo that between tests
    for name in (logging.TRADES_LOGGER, logging.ROSTERS_LOGGER, logging.TIMING_LOGGER):
        logging.getLogger(name).setLevel(logging.NOTSET)
