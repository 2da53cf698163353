"""Transform signals: value mapping and change filtering.

- mute: maps every value through a function, which may be a coroutine function.
  Outputs are delivered in the order their inputs arrived, whatever order the
  asynchronous computations finish in.
- gate: drops values that do not differ from the last delivered one.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, Literal, TypeAlias

from piconeuro.exceptions import SignalArgumentError
from piconeuro.piconeuro_logging import create_module_logger

from .equality import not_equal, not_equal_deep
from .signals_util import Callback, Err, Release, Signal, clone, release_once

__all__ = ["gate", "mute"]

_logger = create_module_logger()

DiffCheck: TypeAlias = Callable[[Any, Any], bool]


class _OrderedDelivery:
    """Internal class delivering the outputs of one mute subscription in input order.

    Every output gets a sequence number. Completed outputs wait in the buffer until all
    lower sequence numbers have been delivered.
    """

    __slots__ = ["buffer", "callback", "delivered", "issued", "released", "tasks"]

    def __init__(self, callback: Callback):
        self.callback = callback
        self.issued = 0
        self.delivered = 0
        self.buffer: dict[int, Any] = {}
        self.tasks: set[asyncio.Future] = set()
        self.released = False

    def push_value(self, value: Any):
        """Deliver a ready output, right away unless earlier outputs are still pending."""
        if self.issued == self.delivered:
            self.issued += 1
            self.delivered += 1
            self.callback(value)
        else:
            sequence = self.issued
            self.issued += 1
            self._complete(sequence, value)

    def push_awaitable(self, awaitable: Awaitable):
        """Schedule an output that is still being computed."""
        sequence = self.issued
        self.issued += 1
        future = asyncio.ensure_future(awaitable)
        if future is not awaitable:
            # we created this task, so we are the ones to cancel it on release
            self.tasks.add(future)
        future.add_done_callback(functools.partial(self._on_done, sequence))

    def _on_done(self, sequence: int, future: asyncio.Future):
        self.tasks.discard(future)
        if future.cancelled():
            if self.released:
                return
            value = Err(asyncio.CancelledError())
        elif (exc := future.exception()) is not None:
            if self.released:
                return
            _logger.error("mute() transform failed", exc_info=exc)
            value = Err(exc)
        else:
            value = future.result()
        self._complete(sequence, value)

    def _complete(self, sequence: int, value: Any):
        if self.released:
            return
        self.buffer[sequence] = value
        while not self.released and self.delivered in self.buffer:
            value = self.buffer.pop(self.delivered)
            self.delivered += 1
            self.callback(value)

    def release(self):
        self.released = True
        self.buffer.clear()
        for task in self.tasks:
            task.cancel()
        self.tasks.clear()


def mute(upstream: Signal, transform: Callable[[Any], Any]) -> Signal:
    """Create a signal that maps every upstream value through transform.

    If transform returns an awaitable, its result is delivered once it completes and
    every earlier output has been delivered. A failing awaitable is delivered as an
    :class:`Err` at its position and logged. Slow earlier computations hold back later
    results; superseded computations are not cancelled.

    Mute does not fire placeholders, wrap it in init() when a synchronous first value is
    needed::

        peers = init([], mute(url, fetch_peers))

    Args:
        upstream: the signal to map
        transform: function (or coroutine function) applied to every value

    Raises:
        SignalArgumentError: if transform is not callable

    """
    if not callable(transform):
        raise SignalArgumentError("mute", "expected a transform function")

    def mutate(callback: Callback) -> Release:
        delivery = _OrderedDelivery(callback)

        def on_value(value):
            if delivery.released:
                return
            output = transform(value)
            if inspect.isawaitable(output):
                delivery.push_awaitable(output)
            else:
                delivery.push_value(output)

        release_upstream = upstream(on_value)

        def release():
            delivery.release()
            release_upstream()

        return release_once(release)

    return mutate


def _resolve_check(differs: Literal["deep", "shallow"] | DiffCheck) -> DiffCheck:
    if callable(differs):
        return differs
    if differs == "deep":
        return not_equal_deep
    if differs == "shallow":
        return not_equal
    raise SignalArgumentError(
        "gate", f"differs must be 'deep', 'shallow' or a function, got {differs!r}"
    )


def gate(
    upstream: Signal, differs: Literal["deep", "shallow"] | DiffCheck = "deep"
) -> Signal:
    """Create a signal that only passes values that changed.

    The first value always passes. Every later value passes if it differs from the last
    value that passed.

    Args:
        upstream: the signal to filter
        differs: "deep" (default), "shallow" or a function ``(new, previous) -> bool``
            returning True when new should pass

    Raises:
        SignalArgumentError: if differs is not a known mode or a function

    """
    check = _resolve_check(differs)

    def noise_gate(callback: Callback) -> Release:
        first = True
        released = False
        previous = None

        def on_value(value):
            nonlocal first, previous
            if released:
                return
            if first or check(value, previous):
                first = False
                previous = clone(value)
                callback(value)

        release_upstream = upstream(on_value)

        def release():
            nonlocal released
            released = True
            release_upstream()

        return release_once(release)

    return noise_gate
