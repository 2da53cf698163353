"""Consumption utilities bridging push delivery to pull access.

- get: synchronous snapshot of a signal
- iterate: async iterator over the values of a signal
- next_value: await the value at a given position
- until: await the first value matching a predicate
- is_sync / is_sync_strict: synchronicity diagnostics, mostly useful in tests

Every utility releases its subscription when it is done, also when it fails.
"""

from __future__ import annotations

import asyncio
from collections import deque
from collections.abc import AsyncGenerator, Callable
from typing import TYPE_CHECKING, Any

from piconeuro.exceptions import NotSyncError, SignalTimeoutError
from piconeuro.piconeuro_logging import create_module_logger, function_logger

from .signals_util import Signal

if TYPE_CHECKING:
    from .tracing import Tracer

__all__ = [
    "DEFAULT_GRACE",
    "DEFAULT_ITER_COUNT",
    "get",
    "is_sync",
    "is_sync_strict",
    "iterate",
    "next_value",
    "until",
]

DEFAULT_GRACE = 0.1  # seconds
DEFAULT_ITER_COUNT = 5

_logger = create_module_logger()


def get(signal: Signal, default: Any = None) -> Any:
    """Get the synchronous value of a signal.

    Subscribes, keeps the last value fired during the subscribe call and releases.
    Values fired later are not waited for.

    Args:
        signal: the signal to read
        default: returned when the signal fired nothing synchronously

    """
    value = default

    def capture(v):
        nonlocal value
        value = v

    signal(capture)()
    return value


async def iterate(
    signal: Signal, count: int | None = DEFAULT_ITER_COUNT
) -> AsyncGenerator[Any]:
    """Iterate asynchronously over the values of a signal.

    A slot for the next value is only opened when a value arrives and fewer than count
    values were requested, values beyond count are dropped. The subscription is released
    once count values were produced or the iteration is closed early.

    Args:
        signal: the signal to iterate over
        count: the number of values to produce, None to iterate forever

    Raises:
        ValueError: if count is smaller than 1

    Examples:
        >>> async for value in iterate(clock, 3):
        ...     print(value)

    """
    if count is not None and count < 1:
        raise ValueError(f"count must be at least 1 or None, got {count}")

    loop = asyncio.get_running_loop()
    # slots still to be awaited by the consumer, and slots still to be filled by the signal
    pending: deque[asyncio.Future] = deque()
    unfilled: deque[asyncio.Future] = deque()
    requested = 0

    def request():
        nonlocal requested
        requested += 1
        slot = loop.create_future()
        pending.append(slot)
        unfilled.append(slot)

    def on_value(value):
        if count is None or requested < count:
            request()
        if unfilled:
            unfilled.popleft().set_result(value)

    request()
    release = signal(on_value)
    try:
        while pending:
            yield await pending.popleft()
    finally:
        release()


@function_logger(__name__)
async def next_value(signal: Signal, n: int = 1, tracer: Tracer | None = None) -> Any:
    """Await a future value of a signal.

    Think of the values of a signal as a list ``["a", "b", "c"]``: n=0 returns "a",
    n=2 returns "c".

    Args:
        signal: the signal to wait on
        n: zero-based position of the value to return
        tracer: optional Tracer logging every value that passes while waiting

    """
    if tracer is not None:
        signal = tracer(signal)
    value = None
    async for value in iterate(signal, n + 1):  # noqa: B007
        pass
    return value


@function_logger(__name__)
async def until(
    signal: Signal,
    predicate: Callable[[Any], Any],
    timeout: float | None = None,
) -> Any:
    """Await the first value of a signal for which predicate is truthy.

    Args:
        signal: the signal to wait on
        predicate: function called with every value
        timeout: optional number of seconds to wait

    Raises:
        SignalTimeoutError: if timeout elapsed before a value matched

    Examples:
        >>> high_five = await until(clock, lambda t: t > 5)

    """
    loop = asyncio.get_running_loop()
    result = loop.create_future()

    def on_value(value):
        if result.done():
            return
        try:
            matched = predicate(value)
        except Exception as exc:
            result.set_exception(exc)
            return
        if matched:
            result.set_result(value)

    def expire():
        if not result.done():
            result.set_exception(SignalTimeoutError("until", timeout))

    release = signal(on_value)
    timer = None
    if timeout is not None and timeout > 0:
        timer = loop.call_later(timeout, expire)
    try:
        return await result
    finally:
        if timer is not None:
            timer.cancel()
        release()


@function_logger(__name__)
async def is_sync(signal: Signal, grace: float = DEFAULT_GRACE) -> bool:
    """Test a signal for synchronicity.

    Args:
        signal: the signal to test
        grace: number of seconds to wait for late values

    Returns:
        True if and only if the signal fired exactly one value during the subscribe call
        and nothing afterwards within the grace period

    Raises:
        SignalTimeoutError: if the signal did not fire at all during the grace period

    """
    loop = asyncio.get_running_loop()
    late = loop.create_future()
    subscribing = True
    fired = 0

    def on_value(value):
        nonlocal fired
        if subscribing:
            fired += 1
        elif not late.done():
            late.set_result(value)

    release = signal(on_value)
    subscribing = False
    try:
        done, _ = await asyncio.wait({late}, timeout=grace)
    finally:
        release()

    if not fired and not done:
        raise SignalTimeoutError("is_sync", grace)
    if done:
        _logger.debug(f"is_sync: late value {late.result()!r} after subscribe")
    return fired == 1 and not done


def is_sync_strict(signal: Signal) -> bool:
    """Synchronous version of is_sync.

    Subscribes and releases immediately.

    Returns:
        True if the signal fired during the subscribe call

    Raises:
        NotSyncError: from within the event loop, if the subscription is invoked after
            it was released

    """
    released = False
    fired = False

    def on_value(value):
        nonlocal fired
        if released:
            raise NotSyncError(value)
        fired = True

    signal(on_value)()
    released = True
    return fired
