"""PicoNeuro: a functional approach to the reactive store pattern.

Signals are plain functions, so they can easily be bridged into any other framework.
"""

from piconeuro.signals import (
    Err,
    Signal,
    Tracer,
    clone,
    combine_list,
    combine_map,
    gate,
    get,
    init,
    is_error,
    is_sync,
    is_sync_strict,
    iterate,
    memo,
    mute,
    next_value,
    not_equal,
    not_equal_deep,
    settle,
    until,
    when,
    writable,
    write,
)

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

__title__ = "piconeuro"
__version__ = "0.1.0"
