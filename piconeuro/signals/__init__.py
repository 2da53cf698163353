"""PicoNeuro signals package: a minimal push-based reactive value protocol.

A signal is a function that takes a callback and returns a release function. The callback
may be invoked any number of times, synchronously during the subscribe call or later from
the asyncio event loop, until the release function is called. Signals are composed by
wrapping them in combinators, there is no central scheduler or dependency graph.

The package provides source signals (writable, init, when), combinators (mute, gate,
combine_list, combine_map, memo, settle), consumption utilities bridging push delivery
to pull access (get, iterate, next_value, until) and diagnostics (is_sync,
is_sync_strict, Tracer).
"""

from .consume import (
    get,
    is_sync,
    is_sync_strict,
    iterate,
    next_value,
    until,
)
from .core import init, when, writable, write
from .equality import not_equal, not_equal_deep
from .fan import combine_list, combine_map, memo
from .signals_util import Err, Signal, clone, is_error
from .temporal import settle
from .tracing import Tracer
from .transforms import gate, mute

__all__ = [
    "Err",
    "Signal",
    "Tracer",
    "clone",
    "combine_list",
    "combine_map",
    "gate",
    "get",
    "init",
    "is_error",
    "is_sync",
    "is_sync_strict",
    "iterate",
    "memo",
    "mute",
    "next_value",
    "not_equal",
    "not_equal_deep",
    "settle",
    "until",
    "when",
    "writable",
    "write",
]
