# src/dismal/roles/producer.py
from dismal.core.decorators import role
from dismal.typing import Bool1D, Float1D


@role
class Producer:
    """
    Producer role for agents.

    Represents an agent that offers up to its capacity of the good each tick
    at its own price and adjusts that price from its own sales.
    """

    max_production: Float1D
    unsold: Float1D
    sold: Float1D
    total_production: Float1D
    price: Float1D
    expected_production: Float1D
    price_sensitivity: Float1D

    # Income earned this tick, realized at the next roster rebuild (adaptive)
    pending_income: Float1D

    # Member of this tick's producer roster
    active: Bool1D
