"""Agent roles."""

from dismal.roles.consumer import Consumer
from dismal.roles.producer import Producer

__all__ = [
    "Consumer",
    "Producer",
]
