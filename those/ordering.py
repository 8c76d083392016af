"""
Ordering comparator used by Those.order and Those.order_desc.
"""
from __future__ import annotations

import locale
import re
from typing import Any, Callable

from .common import resolve_path

_DIGITS = re.compile(r'(\d+)')

KeyOrFn = str | Callable[[Any], Any] | None


def natural_key(text: str) -> tuple:
    """
    Collation key for case insensitive, numeric aware string ordering:
    'item2' sorts before 'item10'. Text chunks sit at even positions and
    numbers at odd positions, so two keys always compare chunk by chunk.
    """
    chunks = _DIGITS.split(text.lower())
    return tuple(int(chunk) if i % 2 else locale.strxfrm(chunk) for i, chunk in enumerate(chunks))


def greater(a, b) -> bool:
    """a > b, False for values that cannot be ordered against each other."""
    try:
        return bool(a > b)
    except TypeError:
        return False


def lower(a, b) -> bool:
    """a < b, False for values that cannot be ordered against each other."""
    try:
        return bool(a < b)
    except TypeError:
        return False


def _comparison_key(value, key: KeyOrFn):
    if callable(key):
        return key(value)
    if key:
        return resolve_path(value, key)
    return value


def compare(a, b, key: KeyOrFn = None, descending: bool = False) -> int:
    """
    Three way comparison of two elements.

    :param a: First element.
    :param b: Second element.
    :param key: A property name (dotted paths allowed), a projection callable, or
                None to compare the elements themselves.
    :param descending: Negate the result.
    :return: -1, 0 or 1.
    """
    am = _comparison_key(a, key)
    bm = _comparison_key(b, key)

    if isinstance(am, str) and isinstance(bm, str):
        am = natural_key(am)
        bm = natural_key(bm)

    # Missing properties and mixed kinds fall through as equal
    if greater(am, bm):
        result = 1
    elif lower(am, bm):
        result = -1
    else:
        result = 0

    return -result if descending else result
