"""Source signals of PicoNeuro.

This module provides the signals every pipeline starts from:

- writable: a mutable cell paired with a setter that notifies subscribers on change
- init: guarantees a first synchronous value, optionally wrapping an upstream signal
- when: bridges a one-shot awaitable into a signal

A signal is a callable taking a callback and returning a release function. The callback
may be invoked any number of times, synchronously during the subscribe call and later
from the event loop, until the release function is called.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from piconeuro.exceptions import SignalArgumentError
from piconeuro.piconeuro_logging import create_module_logger

from .equality import not_equal
from .signals_util import Callback, Err, Release, Signal, clone, release_once

__all__ = [
    "init",
    "when",
    "writable",
    "write",
]

_logger = create_module_logger()


class _Cell:
    """Internal class holding the stored value and the subscribers of a writable."""

    __slots__ = ["subscribers", "value"]

    def __init__(self, value: Any):
        self.value = value
        # subscription token -> callback, keeps registration order
        self.subscribers: dict[object, Callback] = {}

    def subscribe(self, callback: Callback) -> Release:
        token = object()
        self.subscribers[token] = callback
        callback(self.value)

        def unsubscribe():
            self.subscribers.pop(token, None)

        return release_once(unsubscribe)

    def set(self, value: Any) -> Any:
        if not_equal(self.value, value):
            self.value = value
            # subscribers may subscribe, release or set again while being notified,
            # late subscribers wait for the next value and released ones are skipped
            for token, callback in list(self.subscribers.items()):
                if token in self.subscribers:
                    callback(value)
        return self.value


def writable(value: Any = None) -> tuple[Signal, Callable[[Any], Any]]:
    """Create a mutable cell.

    Args:
        value: the initial value of the cell

    Returns:
        a (subscribe, setter) pair. Subscribing delivers the current value immediately.
        The setter stores and broadcasts a new value if it shallow-differs from the
        stored one and returns the stored value.

    Examples:
        >>> name, set_name = writable("placeholder")
        >>> release = name(print)
        placeholder
        >>> set_name("alice")
        alice
        'alice'

    """
    cell = _Cell(value)
    return cell.subscribe, cell.set


write = writable


def init(value: Any, upstream: Signal | None = None) -> Signal:
    """Create a signal that fires an initial value synchronously.

    The initial value is shallow-cloned and fired once on subscribe, unless upstream
    fires synchronously during that subscribe call; then only the upstream value is
    delivered. All later upstream values are passed through.

    Args:
        value: placeholder delivered when upstream has nothing synchronous to offer
        upstream: optional signal to wrap

    """

    def initial_value(callback: Callback) -> Release:
        released = False
        fired = False
        release_upstream = None

        def forward(v):
            nonlocal fired
            fired = True
            if not released:
                callback(v)

        if callable(upstream):
            release_upstream = upstream(forward)

        if not fired:
            callback(clone(value))

        def release():
            nonlocal released
            released = True
            if release_upstream is not None:
                release_upstream()

        return release_once(release)

    return initial_value


def when(awaitable: Awaitable) -> Signal:
    """Create a signal that fires once when awaitable completes.

    Subscribers receive the result, or an :class:`Err` when the awaitable raised or was
    cancelled. A failure is logged once, however many subscribers receive it.

    Releasing is a no-op: the awaitable cannot be cancelled on behalf of a single
    subscriber, and a subscriber released before completion is still notified.

    Args:
        awaitable: a coroutine, task or future

    Raises:
        SignalArgumentError: if awaitable is not awaitable

    """
    if not inspect.isawaitable(awaitable):
        raise SignalArgumentError("when", f"expected an awaitable, got {awaitable!r}")

    future: asyncio.Future | None = None

    def report(done: asyncio.Future):
        if done.cancelled():
            _logger.error("when() awaitable was cancelled")
        elif (exc := done.exception()) is not None:
            _logger.error("when() failed", exc_info=exc)

    def deliver(callback: Callback, done: asyncio.Future):
        if done.cancelled():
            callback(Err(asyncio.CancelledError()))
        elif (exc := done.exception()) is not None:
            callback(Err(exc))
        else:
            callback(done.result())

    def when_resolved(callback: Callback) -> Release:
        nonlocal future
        # a coroutine can be awaited only once, all subscriptions share one future
        if future is None:
            future = asyncio.ensure_future(awaitable)
            future.add_done_callback(report)
        future.add_done_callback(functools.partial(deliver, callback))

        def release():
            pass

        return release

    return when_resolved
