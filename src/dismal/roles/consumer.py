# src/dismal/roles/consumer.py
from dismal.core.decorators import role
from dismal.typing import Float1D


@role
class Consumer:
    """
    Consumer role for agents.

    Represents an agent that spends money on the good offered by other agents.
    """

    money: Float1D
    max_consumption: Float1D
    min_consumption: Float1D
    savings_level: Float1D

    # Per-tick and lifetime accumulators
    consumption: Float1D
    total_consumption: Float1D
    last_price: Float1D
