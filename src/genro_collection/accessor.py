# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Accessor module - key-based access capabilities.

A value is *accessible* when it can be read by key, and *writable* when it
can also be assigned to and deleted from by key. Three families qualify:

    - mappings (dict, OrderedDict, UserDict, any collections.abc.Mapping)
    - sequences other than text (list, tuple, ...), addressed by index
    - objects subclassing Accessor / MutableAccessor (Bags included)

Accessor classes declare at the type level whether ``__getitem__`` returns
the live nested object or a detached copy, through the ``aliases_nested``
class attribute. Path writes refuse to descend below an accessor that hands
out copies, since the write would be lost.

Example:
    >>> class Record(MutableAccessor):
    ...     def __init__(self):
    ...         self._data = {}
    ...     def __contains__(self, key):
    ...         return key in self._data
    ...     def __getitem__(self, key):
    ...         return self._data[key]
    ...     def __setitem__(self, key, value):
    ...         self._data[key] = value
    ...     def __delitem__(self, key):
    ...         del self._data[key]
    ...     def append(self, value):
    ...         self._data[next_index(self._data)] = value
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any, ClassVar

TEXT_TYPES = (str, bytes, bytearray)

_INDEX_RE = re.compile(r'0|[1-9][0-9]*')


class Accessor(ABC):
    """Read capability: membership test and lookup by key."""

    #: True when __getitem__ returns the live nested object, False for copies.
    aliases_nested: ClassVar[bool] = True

    @abstractmethod
    def __contains__(self, key: Any) -> bool:
        ...

    @abstractmethod
    def __getitem__(self, key: Any) -> Any:
        ...


class MutableAccessor(Accessor):
    """Write capability on top of Accessor."""

    @abstractmethod
    def __setitem__(self, key: Any, value: Any) -> None:
        ...

    @abstractmethod
    def __delitem__(self, key: Any) -> None:
        ...

    @abstractmethod
    def append(self, value: Any) -> None:
        """Store value at the container's natural next index."""
        ...


def is_sequence(value: Any) -> bool:
    """Return True for index-addressed containers (list, tuple, ...), not text."""
    return (isinstance(value, Sequence)
            and not isinstance(value, TEXT_TYPES)
            and not isinstance(value, (Mapping, Accessor)))


def is_accessible(value: Any) -> bool:
    """Return True if value can be read by key."""
    return isinstance(value, (Mapping, Accessor)) or is_sequence(value)


def is_writable(value: Any) -> bool:
    """Return True if value can be assigned to and deleted from by key."""
    if isinstance(value, (MutableMapping, MutableAccessor)):
        return True
    return isinstance(value, MutableSequence) and not isinstance(value, bytearray)


def aliases_nested(value: Any) -> bool:
    """Return True if reading a key from value yields the live nested object.

    Native containers always do; accessor classes declare it.
    """
    if isinstance(value, Accessor):
        return type(value).aliases_nested
    return True


def is_iterable(value: Any) -> bool:
    """Return True for iterables that hold items (everything but text)."""
    return isinstance(value, Iterable) and not isinstance(value, TEXT_TYPES)


def as_index(key: Any) -> int | None:
    """Return key as a non-negative int index, or None if it is not one.

    Strings qualify only in canonical decimal form: '0' and '12' do,
    '01', '-1' and ' 1' do not.
    """
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key if key >= 0 else None
    if isinstance(key, str) and _INDEX_RE.fullmatch(key):
        return int(key)
    return None


def resolve_key(container: Any, key: Any) -> tuple[bool, Any]:
    """Find the actual key under which container stores key.

    Mappings and accessors are probed with the literal key first, then with
    its integer form when key is a canonical decimal string. Sequences only
    accept in-range indexes.

    Returns:
        Tuple (found, actual_key).
    """
    if is_sequence(container):
        index = as_index(key)
        return (index is not None and index < len(container)), index
    if key in container:
        return True, key
    if isinstance(key, str):
        index = as_index(key)
        if index is not None and index in container:
            return True, index
    return False, key


def next_index(keys: Iterable[Any]) -> int:
    """Return the natural next index: highest non-negative int key + 1."""
    indexes = [k for k in keys if isinstance(k, int) and not isinstance(k, bool) and k >= 0]
    return max(indexes) + 1 if indexes else 0
