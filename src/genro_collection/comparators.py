# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Comparison, sorting and search helpers used by Bag.

Sort order and sort flags:

    >>> SortOrder.DESC
    <SortOrder.DESC: 'desc'>
    >>> SortFlag.NATURAL | SortFlag.FLAG_CASE
    <SortFlag.NATURAL|FLAG_CASE: 24>

Only these flag combinations are recognized: REGULAR, NUMERIC, STRING,
STRING | FLAG_CASE, LOCALE_STRING, NATURAL, NATURAL | FLAG_CASE.
"""

from __future__ import annotations

import locale
import re
from collections.abc import Callable, Iterable
from decimal import Decimal
from enum import Enum, IntFlag
from functools import cmp_to_key
from numbers import Number, Rational
from typing import Any

from .accessor import Accessor
from .exceptions import InvalidArgument

_INT_RE = re.compile(r'[+-]?\d+')
_FLOAT_RE = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')
_DIGITS_RE = re.compile(r'(\d+)')


class SortOrder(Enum):
    """Direction of a sort."""

    ASC = 'asc'
    DESC = 'desc'


class SortFlag(IntFlag):
    """How values (or keys) are compared while sorting."""

    REGULAR = 0
    NUMERIC = 1
    STRING = 2
    LOCALE_STRING = 4
    NATURAL = 8
    FLAG_CASE = 16


def resolve_order(order: SortOrder | str) -> bool:
    """Return the `reverse` argument for sorted() matching order.

    Raises:
        InvalidArgument: If order is not a SortOrder or 'asc'/'desc'.
    """
    try:
        order = SortOrder(order)
    except ValueError:
        raise InvalidArgument(f"Unknown sort order: {order!r}") from None
    return order is SortOrder.DESC


def to_number(value: Any) -> int | float:
    """Coerce value for arithmetic: numbers as-is, numeric strings parsed, else 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, Number):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INT_RE.fullmatch(text):
            return int(text)
        if _FLOAT_RE.fullmatch(text):
            return float(text)
    return 0


def _as_decimal(number: Any) -> Any:
    if isinstance(number, (Decimal, int)):
        return number
    if isinstance(number, Rational):
        return Decimal(number.numerator) / Decimal(number.denominator)
    return Decimal(str(number))


def to_numbers(values: Iterable[Any]) -> list:
    """Coerce values with to_number, switching to Decimal if any value is a Decimal.

    Decimal does not mix with float, so floats and fractions are converted
    once a Decimal is present.
    """
    numbers = [to_number(value) for value in values]
    if any(isinstance(number, Decimal) for number in numbers):
        return [_as_decimal(number) for number in numbers]
    return numbers


def compare(a: Any, b: Any) -> int:
    """Three-way comparison: -1, 0 or 1."""
    return (a > b) - (a < b)


def _type_rank(value: Any) -> int:
    if value is None:
        return 0
    if isinstance(value, Number):
        return 1
    if isinstance(value, str):
        return 2
    if isinstance(value, bytes):
        return 3
    return 4


def compare_regular(a: Any, b: Any) -> int:
    """Default ordering for mixed values.

    Values of comparable types use their natural order. Otherwise None
    sorts first, then numbers, strings, bytes and everything else; values
    of the same rank that still cannot be compared fall back to their str().
    """
    try:
        return compare(a, b)
    except TypeError:
        rank = compare(_type_rank(a), _type_rank(b))
        return rank or compare(str(a), str(b))


def _string_key(value: Any) -> str:
    return '' if value is None else str(value)


def natural_key(value: Any) -> tuple:
    """Sort key ordering embedded numbers by value: 'img2' < 'img10'."""
    parts = _DIGITS_RE.split(_string_key(value))
    return tuple(int(part) if i % 2 else part for i, part in enumerate(parts))


def _natural_case_key(value: Any) -> tuple:
    return natural_key(_string_key(value).lower())


_SORT_KEYS = {
    SortFlag.REGULAR: cmp_to_key(compare_regular),
    SortFlag.NUMERIC: to_number,
    SortFlag.STRING: _string_key,
    SortFlag.STRING | SortFlag.FLAG_CASE: lambda v: _string_key(v).lower(),
    SortFlag.LOCALE_STRING: lambda v: locale.strxfrm(_string_key(v)),
    SortFlag.NATURAL: natural_key,
    SortFlag.NATURAL | SortFlag.FLAG_CASE: _natural_case_key,
}


def sort_key(flags: SortFlag | int = SortFlag.REGULAR) -> Callable[[Any], Any]:
    """Return the key function for sorted() matching flags.

    Raises:
        InvalidArgument: If flags is not a recognized combination.
    """
    if isinstance(flags, bool) or not isinstance(flags, int):
        raise InvalidArgument(f"Unknown sort flags: {flags!r}")
    try:
        return _SORT_KEYS[SortFlag(flags)]
    except (KeyError, ValueError):
        raise InvalidArgument(f"Unknown sort flags: {flags!r}") from None


def projected(iteratee: Callable[[Any], Any]) -> Callable[[Any, Any], int]:
    """Three-way comparator comparing iteratee(a) with iteratee(b)."""
    def comparator(a: Any, b: Any) -> int:
        return compare_regular(iteratee(a), iteratee(b))
    return comparator


def strict_equals(a: Any, b: Any) -> bool:
    """Equality without cross-type coercion.

    1 and '1' differ, 1 and True differ, 1 and 1.0 differ. Accessor
    objects (bags included) are equal only to themselves.
    """
    if a is b:
        return True
    if type(a) is not type(b) or isinstance(a, Accessor):
        return False
    return a == b


def search_range(length: int, from_index: int | None, reverse: bool = False) -> range:
    """Positions to scan for a clamped, offset-bounded search.

    A non-negative from_index is clamped to the last position. A negative
    from_index excludes that many trailing entries: the scan starts at
    max(0, length + from_index - 1). The forward scan runs to the end, the
    reverse scan back to position 0. None starts at the natural end.

    Example:
        >>> list(search_range(6, -2))
        [3, 4, 5]
        >>> list(search_range(6, None, reverse=True))
        [5, 4, 3, 2, 1, 0]
    """
    if length == 0:
        return range(0)
    if from_index is None:
        start = length - 1 if reverse else 0
    elif from_index < 0:
        start = max(0, length + from_index - 1)
    else:
        start = min(from_index, length - 1)
    if reverse:
        return range(start, -1, -1)
    return range(start, length)
