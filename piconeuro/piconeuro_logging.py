"""This provides logging functionality for PicoNeuro.

It is modeled on the default `logging approach that comes with Python <https://docs.python.org/library/logging.html>`_.
Nothing is printed unless the application configures logging, for example with
:func:`log_to_stderr`.
"""

import inspect
import logging
from functools import wraps
from logging import DEBUG, ERROR, INFO

__all__ = [
    "DEBUG",
    "DEFAULT_LEVEL",
    "ERROR",
    "INFO",
    "LOGGER_NAME",
    "create_module_logger",
    "function_logger",
    "get_module_logger",
    "get_rootlogger",
    "log_to_stderr",
]

LOGGER_NAME = "PICONEURO"
DEFAULT_LEVEL = DEBUG
DEFAULT_FORMAT = "[%(levelname)s] %(name)s %(asctime)s.%(msecs)03d: %(message)s"

_module_loggers: dict[str, logging.Logger] = {}


def create_module_logger(name: str | None = None) -> logging.Logger:
    """Helper function for creating a module logger.

    Args:
        name (str): The name to be given to the logger. If the name is None, the name defaults to the name of the module.

    """
    if name is None:
        frm = inspect.stack()[1]
        name = frm.frame.f_globals["__name__"]
    logger = logging.getLogger(f"{LOGGER_NAME}.{name}")

    _module_loggers[name] = logger
    return logger


def get_module_logger(name: str) -> logging.Logger:
    """Helper function for getting the module logger.

    Args:
        name (str): The name of the module in which the method being decorated is located

    """
    try:
        logger = _module_loggers[name]
    except KeyError:
        logger = create_module_logger(name)

    return logger


def get_rootlogger() -> logging.Logger:
    """Return the root logger of the package."""
    return logging.getLogger(LOGGER_NAME)


_logger = get_module_logger(__name__)


def function_logger(name: str):
    """Decorator to log function calls.

    Args:
        name (str): The name of the module in which the function being decorated is located

    """
    logger = get_module_logger(name)

    def real_decorator(func):
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                logger.debug(f"calling {func.__name__} with {args} and {kwargs}")
                return await func(*args, **kwargs)

            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            logger.debug(f"calling {func.__name__} with {args} and {kwargs}")
            return func(*args, **kwargs)

        return wrapper

    return real_decorator


def log_to_stderr(level: int | None = None, pass_through: bool = True):
    """Turn on logging and add a handler which prints to stderr.

    Args:
        level: minimum level of the messages that will be logged
        pass_through: also pass the log records to the handlers of the python root logger

    Returns:
        the root logger of the package

    """
    if not level:
        level = DEFAULT_LEVEL

    logger = get_rootlogger()

    # avoid creation of multiple stream handlers for logging to console
    for entry in logger.handlers:
        if (isinstance(entry, logging.StreamHandler)) and (
            entry.formatter is not None and entry.formatter._fmt == DEFAULT_FORMAT
        ):
            return logger

    formatter = logging.Formatter(DEFAULT_FORMAT, datefmt="%H:%M:%S")
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = pass_through
    _logger.debug(f"logging to stderr at level {logging.getLevelName(level)}")

    return logger
