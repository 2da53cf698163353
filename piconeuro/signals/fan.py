"""Fan-in and fan-out signals.

- combine_list / combine_map: join many signals into one aggregate value
- memo: share one upstream subscription between many subscribers

combine waits until every input has fired at least once, then fires the full aggregate
on every input update. memo connects upstream on its first subscriber and disconnects
when the last one releases.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Mapping
from typing import Any

from piconeuro.exceptions import EmptyCombineError, SignalArgumentError
from piconeuro.piconeuro_logging import create_module_logger

from .signals_util import Callback, Release, Signal, release_once

__all__ = ["combine_list", "combine_map", "memo"]

_logger = create_module_logger()


class _CombineState:
    """Internal class holding the slots of one combine subscription."""

    __slots__ = ["loaded", "released", "remaining", "values"]

    def __init__(self, size: int):
        self.loaded = [False] * size
        self.values: list[Any] = [None] * size
        self.remaining = size
        self.released = False

    def update(self, index: int, value: Any) -> bool:
        """Store value in slot index, return True once every slot has loaded."""
        if not self.loaded[index]:
            self.loaded[index] = True
            self.remaining -= 1
        self.values[index] = value
        return self.remaining == 0


def _validate_inputs(combinator: str, signals: list[Signal]):
    if not signals:
        raise EmptyCombineError(combinator)
    for i, signal in enumerate(signals):
        if not callable(signal):
            raise SignalArgumentError(
                combinator, f"input {i} is not a signal, got {signal!r}"
            )


def _combine(
    combinator: str, signals: list[Signal], shape: Callable[[list[Any]], Any]
) -> Signal:
    def combined(callback: Callback) -> Release:
        if not callable(callback):
            raise SignalArgumentError(combinator, "a callback function is required")

        state = _CombineState(len(signals))

        def on_value(index, value):
            if state.released:
                return
            if state.update(index, value):
                callback(shape(state.values))

        releases = [
            signal(lambda value, index=index: on_value(index, value))
            for index, signal in enumerate(signals)
        ]

        def release():
            state.released = True
            for release_input in releases:
                release_input()

        return release_once(release)

    return combined


def combine_list(*signals: Signal) -> Signal:
    """Create a signal firing the latest values of all signals as a list.

    Nothing is fired until every signal has fired once.

    Args:
        signals: the signals to join, in output order

    Raises:
        EmptyCombineError: if no signals are given
        SignalArgumentError: if an input is not callable

    """
    inputs = list(signals)
    _validate_inputs("combine_list", inputs)
    return _combine("combine_list", inputs, list)


def combine_map(signals: Mapping[str, Signal]) -> Signal:
    """Create a signal firing the latest values of all signals as a dict.

    Args:
        signals: mapping of output key to signal

    Raises:
        EmptyCombineError: if the mapping is empty
        SignalArgumentError: if a value is not callable

    """
    keys = list(signals)
    inputs = list(signals.values())
    _validate_inputs("combine_map", inputs)
    return _combine(
        "combine_map", inputs, lambda values: dict(zip(keys, values, strict=True))
    )


class _Memory:
    """Internal class holding the shared upstream connection of a memo."""

    __slots__ = ["connection", "disconnect", "subscribers", "upstream", "value"]

    def __init__(self, upstream: Signal):
        self.upstream = upstream
        self.value = None
        self.subscribers: dict[object, Callback] = {}
        self.connection: object | None = None
        self.disconnect: Release | None = None

    def subscribe(self, callback: Callback) -> Release:
        token = object()
        self.subscribers[token] = callback
        if self.connection is not None:
            # before the first upstream value this is still None
            callback(self.value)
        else:
            # marked before connecting, subscribers joining during the connect share it
            connection = self.connection = object()
            _logger.debug(f"memo connecting to {self.upstream!r}")
            self.disconnect = self.upstream(functools.partial(self._spread, connection))

        def unsubscribe():
            self.subscribers.pop(token, None)
            if not self.subscribers:
                self._reset()

        return release_once(unsubscribe)

    def _spread(self, connection: object, value: Any):
        if self.connection is not connection:
            return
        self.value = value
        for token, callback in list(self.subscribers.items()):
            if token in self.subscribers:
                callback(value)

    def _reset(self):
        disconnect = self.disconnect
        self.connection = None
        self.disconnect = None
        self.value = None
        if disconnect is not None:
            _logger.debug(f"memo disconnecting from {self.upstream!r}")
            disconnect()


def memo(upstream: Signal) -> Signal:
    """Create a signal that shares one upstream subscription between all subscribers.

    A subscriber joining an open connection immediately receives the last upstream
    value. When the last subscriber releases, upstream is released and the memory is
    cleared; the next subscriber opens a fresh upstream subscription.

    Args:
        upstream: the signal to share

    """
    memory = _Memory(upstream)
    return memory.subscribe
