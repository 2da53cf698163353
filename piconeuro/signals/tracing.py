"""Debug tracing of signals.

A Tracer wraps signals in a pass-through signal that logs every subscription, every value
crossing it and every release at DEBUG level. Counters live on the Tracer instance, so
separate tracers number their signals independently.
"""

from __future__ import annotations

import itertools
import logging

from piconeuro.piconeuro_logging import create_module_logger

from .signals_util import Callback, Release, Signal, release_once

__all__ = ["Tracer"]

_logger = create_module_logger()


class Tracer:
    """Wraps signals so that everything crossing them is logged.

    Attributes:
        name: prefix of the labels of anonymous signals
        logger: the logger the records are written to
        enabled: when False, signals are returned unwrapped

    Examples:
        >>> tracer = Tracer()
        >>> total = tracer(combine_list(a, b), "total")

    """

    def __init__(
        self,
        name: str = "trace",
        logger: logging.Logger | None = None,
        enabled: bool = True,
    ):
        """Initialize a Tracer.

        Args:
            name: prefix of the labels of anonymous signals
            logger: logger to write to, defaults to the module logger
            enabled: set to False to bypass tracing completely

        """
        self.name = name
        self.logger = logger if logger is not None else _logger
        self.enabled = enabled
        self._signal_ids = itertools.count()

    def __call__(self, signal: Signal, name: str | None = None) -> Signal:
        """Return signal wrapped in a logging pass-through signal.

        Args:
            signal: the signal to trace
            name: label used in the log records

        """
        if not self.enabled or not self.logger.isEnabledFor(logging.DEBUG):
            return signal

        signal_id = next(self._signal_ids)
        label = name if name else f"{self.name.upper()}{signal_id:02d}"
        subscription_ids = itertools.count()
        logger = self.logger

        def traced(callback: Callback) -> Release:
            prefix = f"{label}/SUB{next(subscription_ids):02d}"
            index = 0
            logger.debug(f"{prefix} >>{index:02d}>> connected")

            def log_value(value):
                nonlocal index
                logger.debug(f"{prefix} !!{index:02d}!! {value!r}")
                index += 1
                callback(value)

            release_upstream = signal(log_value)

            def release():
                release_upstream()
                logger.debug(f"{prefix} <<{index:02d}<< disconnected")

            return release_once(release)

        return traced
