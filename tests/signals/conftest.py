"""Synthetic signals used to exercise the protocol."""

import asyncio
import itertools

import pytest


class ManualSignal:
    """Signal fired by hand from a test, counting its connections and releases."""

    def __init__(self, leaky=False):
        self.callbacks = {}
        self.connections = 0
        self.releases = 0
        self.leaky = leaky  # keep firing released subscriptions
        self._ids = itertools.count()

    def __call__(self, callback):
        key = next(self._ids)
        self.callbacks[key] = callback
        self.connections += 1

        def release():
            self.releases += 1
            if not self.leaky:
                self.callbacks.pop(key, None)

        return release

    def emit(self, value):
        for callback in list(self.callbacks.values()):
            callback(value)


def make_interval(max_count=3, period=0.01):
    """Signal firing 0, 1, 2, ... every period seconds, max_count values in total."""

    def interval_signal(callback):
        loop = asyncio.get_running_loop()
        count = 0
        stopped = False
        handle = None

        def tick():
            nonlocal count, handle
            handle = None
            value = count
            count += 1
            callback(value)
            if count < max_count and not stopped:
                handle = loop.call_later(period, tick)

        handle = loop.call_later(period, tick)

        def release():
            nonlocal stopped
            stopped = True
            if handle is not None:
                handle.cancel()

        return release

    return interval_signal


def make_timeout(value, delay):
    """Signal firing value once after delay seconds."""

    def timeout_signal(callback):
        handle = asyncio.get_running_loop().call_later(delay, callback, value)
        return handle.cancel

    return timeout_signal


@pytest.fixture
def manual_signal():
    return ManualSignal


@pytest.fixture
def interval():
    return make_interval


@pytest.fixture
def timeout_signal():
    return make_timeout
