# tests/unit/test_utils.py
import numpy as np
import pytest

from dismal import make_rng
from dismal.errors import InvariantError
from dismal.utils import EPS, OVERDRAW_TOL, PRICE_EPS, draw_index, draw_uniform
from tests.helpers.fixed_rng import FixedRNG


def test_tolerances_are_ordered() -> None:
    assert 0.0 < EPS < OVERDRAW_TOL
    assert PRICE_EPS == pytest.approx(1e-5)


def test_draw_index_in_range() -> None:
    rng = make_rng(0)
    draws = [draw_index(rng, 3) for _ in range(200)]
    assert set(draws) == {0, 1, 2}
    assert all(isinstance(d, int) for d in draws)


def test_draw_index_single_choice() -> None:
    assert draw_index(make_rng(1), 1) == 0


@pytest.mark.parametrize("n", [0, -4])
def test_draw_index_empty_range_is_fatal(n: int) -> None:
    with pytest.raises(InvariantError, match="draw_index"):
        draw_index(make_rng(0), n)


def test_draw_index_uses_integers() -> None:
    rng = FixedRNG([2, 0])
    assert draw_index(rng, 3) == 2
    assert draw_index(rng, 3) == 0
    assert rng.consumed == 2


def test_draw_uniform_matches_generator() -> None:
    a, b = make_rng(9), make_rng(9)
    value = draw_uniform(a, 0.5, 2.0)
    assert isinstance(value, float)
    assert value == b.uniform(0.5, 2.0)
    assert 0.5 <= value < 2.0


def test_draw_uniform_degenerate_interval() -> None:
    assert draw_uniform(make_rng(3), 1.25, 1.25) == 1.25


class TestInvariantError:
    def test_plain_message(self) -> None:
        err = InvariantError("boom")
        assert str(err) == "boom"
        assert err.context == {}

    def test_message_with_context(self) -> None:
        err = InvariantError("agent out of range", context={"agent": 12, "t": 3})
        assert str(err) == "agent out of range [agent=12, t=3]"
        assert err.message == "agent out of range"

    def test_is_runtime_error(self) -> None:
        with pytest.raises(RuntimeError):
            raise InvariantError("x")


def test_rng_streams_independent_of_numpy_global_state() -> None:
    np.random.seed(0)
    a = make_rng(4).integers(1000, size=5)
    np.random.seed(1)
    b = make_rng(4).integers(1000, size=5)
    np.testing.assert_array_equal(a, b)
