# tests/__init__.py

import numpy as np

from dismal.tradebook import TradeBook
from tests.helpers.factories import mock_consumer, mock_producer
from tests.helpers.invariants import assert_basic_invariants

__all__ = [
    "mock_consumer",
    "mock_producer",
    "assert_basic_invariants",
]


def create_empty_tradebook(n_init: int = 128) -> TradeBook:
    """
    Return a TradeBook pre-allocated for *n_init* rows so unit tests can
    append a handful of trades without triggering a resize.
    """
    tb = TradeBook(
        consumer_ids=np.empty(n_init, np.intp),
        producer_ids=np.empty(n_init, np.intp),
        quantity=np.empty(n_init, np.float64),
        price=np.empty(n_init, np.float64),
        cost=np.empty(n_init, np.float64),
        capacity=n_init,
        size=0,
    )
    assert tb.capacity == n_init and tb.size == 0
    return tb
