"""Event classes for the Dismal tick pipeline.

Events are auto-registered via __init_subclass__ hook and can be
composed into a Pipeline for execution.

Each event module wraps a system module:
- market.py → wraps _internal/market.py
- pricing.py → wraps _internal/pricing.py
- reporting.py → agent dump and statistics sampling
"""

# Import all events to trigger auto-registration
from dismal.events.market import ClearMarket, RebuildRosters
from dismal.events.pricing import AdjustPrices
from dismal.events.reporting import DumpAgents, SampleStats

__all__ = [
    # Market events (2)
    "RebuildRosters",
    "ClearMarket",
    # Pricing events (1)
    "AdjustPrices",
    # Reporting events (2)
    "DumpAgents",
    "SampleStats",
]
