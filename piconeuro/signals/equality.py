"""Structural difference checks used for change filtering.

Both functions answer "do a and b differ?" and return as soon as a difference is found.

- not_equal: lengths/key counts plus the identity of every element or value
- not_equal_deep: same structure, recursing into elements and values

Values that are neither sequences nor dicts are leaves and are compared directly.
"""

from __future__ import annotations

from datetime import date
from typing import Any

__all__ = ["not_equal", "not_equal_deep"]

_CONTAINERS = (list, tuple, dict, set)


def _leaf_differs(a: Any, b: Any) -> bool:
    if a is b:
        return False
    # distinct containers differ by identity, structure is only looked at one level up
    if isinstance(a, _CONTAINERS) or isinstance(b, _CONTAINERS):
        return True
    # True == 1 in python, but a flag is not a number
    if isinstance(a, bool) != isinstance(b, bool):
        return True
    return bool(a != b)


def _is_sequence_pair(a: Any, b: Any) -> bool:
    return isinstance(a, (list, tuple)) and type(a) is type(b)


def not_equal(a: Any, b: Any) -> bool:
    """Shallow compare two values.

    Sequences are compared by length and by the identity of the element at each index,
    dicts by key count and the identity of the value under each key.

    Dates are compared by the instant they represent instead of by reference.
    This is a narrowing special case, prefer epoch numbers in values.

    Args:
        a: the new value
        b: the value to compare against

    Returns:
        True if a difference was detected

    """
    if _is_sequence_pair(a, b):
        return len(a) != len(b) or any(
            _leaf_differs(x, y) for x, y in zip(a, b, strict=True)
        )

    if isinstance(a, date) or isinstance(b, date):
        return not (isinstance(a, date) and isinstance(b, date)) or a != b

    if isinstance(a, dict) and isinstance(b, dict):
        return len(a) != len(b) or any(
            key not in b or _leaf_differs(value, b[key]) for key, value in a.items()
        )

    return _leaf_differs(a, b)


def not_equal_deep(a: Any, b: Any) -> bool:
    """Deep compare two values.

    Like :func:`not_equal`, but recurses into sequence elements and dict values.

    Args:
        a: the new value
        b: the value to compare against

    Returns:
        True if a difference was detected anywhere in the structure

    """
    if a is b:
        return False

    if _is_sequence_pair(a, b):
        return len(a) != len(b) or any(
            not_equal_deep(x, y) for x, y in zip(a, b, strict=True)
        )

    if isinstance(a, dict) and isinstance(b, dict):
        return len(a) != len(b) or any(
            key not in b or not_equal_deep(value, b[key]) for key, value in a.items()
        )

    return _leaf_differs(a, b)
