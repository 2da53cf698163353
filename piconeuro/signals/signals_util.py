"""Shared types and helpers for signals.

A signal is a plain callable: it takes a callback and returns a release function.
Errors travel through the same callback channel wrapped in :class:`Err`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

__all__ = [
    "Callback",
    "Err",
    "Release",
    "Signal",
    "clone",
    "is_error",
    "release_once",
]

Callback: TypeAlias = Callable[[Any], Any]
Release: TypeAlias = Callable[[], None]
Signal: TypeAlias = Callable[[Callback], Release]


@dataclass(frozen=True, slots=True)
class Err:
    """An error delivered in-band instead of a value.

    Attributes:
        error: the exception raised by an asynchronous transform or awaitable

    Examples:
        >>> def on_value(value):
        ...     match value:
        ...         case Err(error=exc):
        ...             print(f"failed: {exc}")
        ...         case _:
        ...             print(value)

    """

    error: BaseException


def is_error(value: Any) -> bool:
    """Return True if value is an in-band error."""
    return isinstance(value, Err)


def clone(value: Any) -> Any:
    """Produce a shallow clone of lists and dicts, return other values as they are."""
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict):
        return dict(value)
    return value


def release_once(release: Release) -> Release:
    """Wrap release so that only its first call has an effect."""
    released = False

    def release_subscription():
        nonlocal released
        if released:
            return
        released = True
        release()

    return release_subscription
