"""Debouncing of signals.

settle() buffers bursts of values and only fires the last one once upstream has been
quiet for a while.

Notes:
    settle introduces timing based nondeterminism into a pipeline. Use it only to buffer
    final outputs handed to a presentation layer, never in the middle of a pipeline.

    The timer is scheduled on the running asyncio event loop, so upstream must fire from
    within a running loop.

"""

from __future__ import annotations

import asyncio

from .signals_util import Callback, Release, Signal, release_once

__all__ = ["DEFAULT_SETTLE_DELAY", "settle"]

DEFAULT_SETTLE_DELAY = 0.01  # seconds


class _DebounceState:
    """Internal class holding the buffered value and timer of one settle subscription."""

    __slots__ = ["callback", "delay", "first", "leading", "released", "timer", "value"]

    def __init__(self, callback: Callback, delay: float, leading: bool):
        self.callback = callback
        self.delay = delay
        self.leading = leading
        self.value = None
        self.timer: asyncio.TimerHandle | None = None
        self.first = True
        self.released = False

    def capture(self, value):
        """Buffer value and restart the quiet period."""
        if self.released:
            return
        self.value = value
        if self.leading and self.first:
            self.first = False
            self.callback(value)
            if self.released:
                return
        if self.timer is not None:
            self.timer.cancel()
        self.timer = asyncio.get_running_loop().call_later(self.delay, self._flush)

    def _flush(self):
        self.timer = None
        if not self.released:
            self.callback(self.value)

    def release(self):
        self.released = True
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None


def settle(
    upstream: Signal, delay: float = DEFAULT_SETTLE_DELAY, leading: bool = False
) -> Signal:
    """Create a signal firing the last upstream value after a quiet period.

    Args:
        upstream: the signal to debounce
        delay: quiet period in seconds that has to pass without a new value
        leading: also fire the very first value immediately

    """

    def debounced(callback: Callback) -> Release:
        state = _DebounceState(callback, delay, leading)
        release_upstream = upstream(state.capture)

        def release():
            state.release()
            release_upstream()

        return release_once(release)

    return debounced
