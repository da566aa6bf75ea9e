"""Core ECS infrastructure for Dismal."""

from typing import Any, Callable

from dismal.core.decorators import event as event_decorator
from dismal.core.decorators import role as role_decorator
from dismal.core.event import Event
from dismal.core.pipeline import Pipeline
from dismal.core.registry import get_event, get_role, list_events, list_roles
from dismal.core.role import Role

# These override the submodule names to provide cleaner API
event: Callable[..., Any] = event_decorator
role: Callable[..., Any] = role_decorator

__all__ = [
    "Event",
    "Pipeline",
    "Role",
    "event",
    "get_event",
    "get_role",
    "list_events",
    "list_roles",
    "role",
]
