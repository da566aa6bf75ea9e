"""Fatal model errors."""

from __future__ import annotations

from typing import Any, Mapping


class InvariantError(RuntimeError):
    """
    A model invariant was violated.

    Raised for programming errors that no configuration can cause: agent
    ids or roster positions out of range, a consumer paying more than it
    owns, an empty sampling range. These are never recovered from; the
    run is aborted and the command line exits non-zero.

    Parameters
    ----------
    message : str
        What went wrong.
    context : Mapping, optional
        Extra key/value pairs (tick, agent ids, amounts) appended to the
        message.

    Examples
    --------
    >>> err = InvariantError("agent out of range", context={"agent": 12})
    >>> str(err)
    'agent out of range [agent=12]'
    """

    def __init__(
        self, message: str, *, context: Mapping[str, Any] | None = None
    ) -> None:
        self.message = message
        self.context: dict[str, Any] = dict(context or {})
        super().__init__(message)

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} [{details}]"
