# src/dismal/core/decorators.py
"""
Decorators for simplified Role and Event definition.

Instead of:
    from dataclasses import dataclass
    from dismal.core import Role
    from dismal.typing import Float

    @dataclass(slots=True)
    class Producer(Role):
        price: Float

You can write:
    @role
    class Producer:
        price: Float

The decorator handles:
- Making the class a dataclass with slots
- Making it inherit from Role/Event (if not already)
- Auto-registration via __init_subclass__
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

T = TypeVar("T")


def _rebase(cls: type[T], base: type) -> type[T]:
    """Recreate *cls* so that it inherits only from *base*."""
    # Single inheritance keeps slots working
    namespace: dict[str, Any] = {
        "__module__": cls.__module__,
        "__qualname__": cls.__qualname__,
        "__annotations__": getattr(cls, "__annotations__", {}),
    }
    if cls.__doc__ is not None:
        namespace["__doc__"] = cls.__doc__
    for attr_name in dir(cls):
        if not attr_name.startswith("__"):
            namespace[attr_name] = getattr(cls, attr_name)
    return type(cls.__name__, (base,), namespace)


def role(
    cls: type[T] | None = None,
    *,
    name: str | None = None,
    **dataclass_kwargs: Any,
) -> type[T] | Callable[[type[T]], type[T]]:
    """Decorator to define a Role with automatic inheritance and dataclass.

    Parameters
    ----------
    cls : type | None
        The class to decorate (provided automatically when used without parens)
    name : str | None
        Optional custom name for the role. If None, uses the class name.
    **dataclass_kwargs : Any
        Additional keyword arguments to pass to @dataclass.
        By default, slots=True is set.

    Examples
    --------
    >>> @role
    ... class Inventory:
    ...     on_hand: Float
    """
    from dismal.core.role import Role

    dataclass_kwargs.setdefault("slots", True)

    def decorator(cls: type[T]) -> type[T]:
        if not issubclass(cls, Role):
            cls = _rebase(cls, Role)

        # set before @dataclass so __init_subclass__ sees it
        if name is not None:
            cls.name = name  # type: ignore[attr-defined]

        return dataclass(**dataclass_kwargs)(cls)

    if cls is None:
        return decorator
    return decorator(cls)


def event(
    cls: type[T] | None = None,
    *,
    name: str | None = None,
    **dataclass_kwargs: Any,
) -> type[T] | Callable[[type[T]], type[T]]:
    """Decorator to define an Event with automatic inheritance and dataclass.

    Parameters
    ----------
    cls : type | None
        The class to decorate (provided automatically when used without parens)
    name : str | None
        Optional custom name for the event. If None, uses class name (snake_case).
    **dataclass_kwargs : Any
        Additional keyword arguments to pass to @dataclass.
        By default, slots=True is set.

    Examples
    --------
    >>> @event
    ... class Tax:
    ...     def execute(self, sim) -> None:
    ...         sim.con.money *= 0.99
    """
    from dismal.core.event import Event

    dataclass_kwargs.setdefault("slots", True)

    def decorator(cls: type[T]) -> type[T]:
        if not issubclass(cls, Event):
            cls = _rebase(cls, Event)

        if name is not None:
            cls.name = name  # type: ignore[attr-defined]

        return dataclass(**dataclass_kwargs)(cls)

    if cls is None:
        return decorator
    return decorator(cls)
