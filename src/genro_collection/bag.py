# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Bag module - read-only ordered collection.

A Bag wraps one insertion-ordered dict whose keys are strings or
non-negative integers. Query methods return plain values; derive methods
return a new bag of the receiver's class and never touch the receiver.

A bag whose keys are exactly 0..n-1, in order, is *indexed* (the empty bag
included); any other bag is *associative*.

Example:
    >>> bag = Bag.from_source(['b', 'c', 'a'])
    >>> bag.sort().as_list()
    ['a', 'b', 'c']
    >>> bag.map(lambda key, value: value.upper()).as_native()
    ['B', 'C', 'A']
    >>> Bag({'config': {'db': {'host': 'localhost'}}}).get_path('config/db/host')
    'localhost'

Bag itself is read-only: ``bag[key] = value`` raises ImmutableBagError.
ImmutableBag is a second name for the same class. MutableBag (mutable_bag
module) adds in-place mutation.
"""

from __future__ import annotations

import functools
import math
import random
from collections.abc import Callable, Iterable, Iterator
from functools import cmp_to_key
from typing import Any

from . import collection_utils as utils
from .accessor import Accessor, is_iterable
from .comparators import (
    SortFlag,
    SortOrder,
    projected,
    resolve_order,
    search_range,
    sort_key,
    strict_equals,
    to_numbers,
)
from .exceptions import BagLogicError, ImmutableBagError, InvalidArgument
from .path_access import get_path, has_path


def _check_scalar_values(values: Iterable[Any], operation: str) -> None:
    for value in values:
        if isinstance(value, bool) or not isinstance(value, (str, int)):
            raise BagLogicError(
                f"{operation}() requires string or integer values. Got: {type(value).__name__}"
            )


class Bag(Accessor):
    """Read-only ordered collection of key/value pairs.

    Args:
        items: A dict (copied), a list or tuple (positional keys), or None.
            Use from_source() for any other source.
    """

    def __init__(self, items: dict | list | tuple | None = None):
        if items is None:
            self._items: dict = {}
        elif isinstance(items, dict):
            self._items = dict(items)
        elif isinstance(items, (list, tuple)):
            self._items = dict(enumerate(items))
        else:
            raise InvalidArgument(
                f"Expected a dict, a list, a tuple or None. Got: {type(items).__name__}"
            )

    # -------------------- construction --------------------------------

    @classmethod
    def from_source(cls, source: Any = None) -> Bag:
        """Create a bag from any supported source.

        Accepted sources: None, a Mapping, a list or tuple, another bag, a
        SimpleNamespace or dataclass instance (its fields), any other
        non-text iterable (consumed, positional keys).

        Raises:
            InvalidArgument: For scalars, strings, bytes and opaque objects.
        """
        return cls(utils.to_items(source))

    @classmethod
    def from_recursive(cls, source: Any = None) -> Bag:
        """Create a bag from source, wrapping every nested container as a bag too.

        Strings and opaque objects are kept as they are.

        Example:
            >>> bag = Bag.from_recursive({'a': {'b': [1, 2]}})
            >>> bag.get_path('a/b')
            Bag({0: 1, 1: 2})
        """
        return cls({
            key: cls.from_recursive(value) if utils.is_structured(value) else value
            for key, value in utils.to_items(source).items()
        })

    @classmethod
    def of(cls, *values: Any) -> Bag:
        """Create an indexed bag from positional arguments."""
        return cls(list(values))

    @classmethod
    def combine(cls, keys: Iterable[Any], values: Iterable[Any]) -> Bag:
        """Create a bag pairing keys with values.

        Raises:
            InvalidArgument: If keys and values differ in length.
        """
        keys = list(utils.iter_values(keys))
        values = list(utils.iter_values(values))
        if len(keys) != len(values):
            raise InvalidArgument(
                f"combine() requires the same number of keys and values. "
                f"Got: {len(keys)} keys and {len(values)} values"
            )
        return cls(dict(zip(keys, values)))

    # -------------------- unwrapping and variants --------------------------------

    def as_dict(self) -> dict:
        """Return a shallow copy of the items as a dict."""
        return dict(self._items)

    def as_list(self) -> list:
        """Return the values as a list, keys dropped."""
        return list(self._items.values())

    def as_native(self) -> list | dict:
        """Return a list if the bag is indexed, a dict otherwise."""
        return self.as_list() if self.is_indexed() else self.as_dict()

    def as_native_deeply(self) -> list | dict:
        """Like as_native(), unwrapping nested bags, structs and containers too."""
        return utils.to_native_deeply(self)

    def copy(self) -> Bag:
        """Return a shallow copy of the same class."""
        return self.__class__(self._items)

    def mutable(self) -> Bag:
        """Return a MutableBag holding the same items."""
        from .mutable_bag import MutableBag
        return MutableBag(self._items)

    def immutable(self) -> Bag:
        """Return a read-only Bag holding the same items."""
        return Bag(self._items)

    # -------------------- queries --------------------------------

    def has(self, key: Any) -> bool:
        """Return True if key is present, even when its value is None."""
        return key in self._items

    def has_path(self, path: str) -> bool:
        """Return True if the '/'-separated path resolves. See path_access.has_path."""
        return has_path(self, path)

    def has_item(self, item: Any) -> bool:
        """Return True if some value is strictly equal to item."""
        return any(strict_equals(value, item) for value in self._items.values())

    def get(self, key: Any, default: Any = None) -> Any:
        """Return the value for key, or default if it is missing."""
        return self._items.get(key, default)

    def get_path(self, path: str, default: Any = None) -> Any:
        """Return the value at the '/'-separated path, or default.

        Example:
            >>> Bag({'items': [{'name': 'x'}]}).get_path('items/0/name')
            'x'
        """
        return get_path(self, path, default)

    def count(self) -> int:
        """Return the number of entries."""
        return len(self._items)

    def is_empty(self) -> bool:
        """Return True if the bag has no entries."""
        return not self._items

    def first(self, default: Any = None) -> Any:
        """Return the first value, or default if the bag is empty."""
        return next(iter(self._items.values()), default)

    def last(self, default: Any = None) -> Any:
        """Return the last value, or default if the bag is empty."""
        return next(reversed(self._items.values()), default)

    def join(self, separator: str = '') -> str:
        """Join the values as strings. None joins as an empty string."""
        return separator.join('' if value is None else str(value) for value in self._items.values())

    def sum(self) -> int | float:
        """Sum the values. Numeric strings are parsed, non-numeric values count as 0.

        Floats are converted to Decimal when the bag holds a Decimal.
        """
        return sum(to_numbers(self._items.values()))

    def product(self) -> int | float:
        """Multiply the values, coerced as in sum(). The empty bag gives 1."""
        return math.prod(to_numbers(self._items.values()))

    def reduce(self, callback: Callable[[Any, Any], Any], initial: Any = None) -> Any:
        """Fold the values with callback(carry, value), starting from initial."""
        return functools.reduce(callback, self._items.values(), initial)

    def is_indexed(self) -> bool:
        """Return True if the keys are exactly 0..n-1 in order."""
        return utils.keys_are_indexed(self._items)

    def is_associative(self) -> bool:
        """Return True if the bag is not indexed."""
        return not self.is_indexed()

    # -------------------- search --------------------------------

    def _search(self, match: Callable[[Any, Any], bool], from_index: int | None,
                reverse: bool) -> tuple[bool, Any, Any]:
        """Scan positions chosen by search_range. Returns (found, key, value)."""
        pairs = list(self._items.items())
        for position in search_range(len(pairs), from_index, reverse):
            key, value = pairs[position]
            if match(value, key):
                return True, key, value
        return False, None, None

    def index_of(self, item: Any, from_index: int = 0) -> Any:
        """Return the key of the first value strictly equal to item, or None.

        The scan starts at from_index, clamped to the bag. A negative
        from_index excludes that many trailing entries.

        Example:
            >>> Bag.of('a', 'b', 'c', 'a', 'b', 'c').index_of('a', -2)
            3
        """
        return self._search(lambda value, key: strict_equals(value, item), from_index, False)[1]

    def last_index_of(self, item: Any, from_index: int | None = None) -> Any:
        """Return the key of the last value strictly equal to item, or None.

        The scan runs backwards from from_index (default: the last entry).
        """
        return self._search(lambda value, key: strict_equals(value, item), from_index, True)[1]

    def find(self, predicate: Callable[[Any, Any], bool], from_index: int = 0) -> Any:
        """Return the first value for which predicate(value, key) is true, or None."""
        return self._search(predicate, from_index, False)[2]

    def find_last(self, predicate: Callable[[Any, Any], bool], from_index: int | None = None) -> Any:
        """Return the last value for which predicate(value, key) is true, or None."""
        return self._search(predicate, from_index, True)[2]

    def find_key(self, predicate: Callable[[Any, Any], bool], from_index: int = 0) -> Any:
        """Return the first key whose predicate(value, key) is true, or None."""
        return self._search(predicate, from_index, False)[1]

    def find_last_key(self, predicate: Callable[[Any, Any], bool],
                      from_index: int | None = None) -> Any:
        """Return the last key whose predicate(value, key) is true, or None."""
        return self._search(predicate, from_index, True)[1]

    # -------------------- random picks --------------------------------

    def _sample_positions(self, size: int) -> list[int]:
        count = len(self._items)
        if isinstance(size, bool) or not isinstance(size, int) or not 1 <= size <= count:
            raise InvalidArgument(
                f"Sample size must be between 1 and the number of items ({count}). Got: {size!r}"
            )
        return sorted(random.sample(range(count), size))

    def random_value(self) -> Any:
        """Return a random value.

        Raises:
            InvalidArgument: If the bag is empty.
        """
        return self.as_list()[self._sample_positions(1)[0]]

    def random_key(self) -> Any:
        """Return a random key.

        Raises:
            InvalidArgument: If the bag is empty.
        """
        return list(self._items)[self._sample_positions(1)[0]]

    def random_values(self, size: int) -> Bag:
        """Return an indexed bag of size distinct random values, in bag order.

        Raises:
            InvalidArgument: Unless 1 <= size <= count().
        """
        values = self.as_list()
        return self.__class__([values[position] for position in self._sample_positions(size)])

    def random_keys(self, size: int) -> Bag:
        """Return an indexed bag of size distinct random keys, in bag order.

        Raises:
            InvalidArgument: Unless 1 <= size <= count().
        """
        keys = list(self._items)
        return self.__class__([keys[position] for position in self._sample_positions(size)])

    # -------------------- element-wise derives --------------------------------

    def keys(self) -> Bag:
        """Return an indexed bag of the keys."""
        return self.__class__(list(self._items))

    def values(self) -> Bag:
        """Return an indexed bag of the values."""
        return self.__class__(self.as_list())

    def map(self, callback: Callable[[Any, Any], Any]) -> Bag:
        """Return a bag with the same keys and values callback(key, value)."""
        return self.__class__({key: callback(key, value) for key, value in self._items.items()})

    def map_keys(self, callback: Callable[[Any, Any], Any]) -> Bag:
        """Return a bag keyed by callback(key, value). Later duplicates win."""
        return self.__class__({callback(key, value): value for key, value in self._items.items()})

    def map_recursive(self, callback: Callable[[Any, Any], Any]) -> Bag:
        """Apply callback(value, key) to every leaf. Nested containers become dicts/lists."""
        return self.__class__(utils.map_recursive(self, callback))

    def filter(self, predicate: Callable[[Any, Any], bool]) -> Bag:
        """Keep the entries for which predicate(key, value) is true. Keys are kept."""
        return self.__class__({
            key: value for key, value in self._items.items() if predicate(key, value)
        })

    def reject(self, predicate: Callable[[Any, Any], bool]) -> Bag:
        """Drop the entries for which predicate(key, value) is true. Keys are kept."""
        return self.__class__({
            key: value for key, value in self._items.items() if not predicate(key, value)
        })

    def clean(self) -> Bag:
        """Drop falsy values. Keys are kept."""
        return self.__class__({key: value for key, value in self._items.items() if value})

    def call(self, function: Callable[..., Any], *args: Any) -> Bag:
        """Pass a native copy of the items to function and wrap its result.

        Example:
            >>> Bag.of(3, 1, 2).call(sorted).as_list()
            [1, 2, 3]
        """
        return self.from_source(function(self.as_native(), *args))

    # -------------------- replace and merge --------------------------------

    def replace(self, *iterables: Any) -> Bag:
        """Return a bag with the entries of each iterable set over these ones."""
        items = self.as_dict()
        for iterable in iterables:
            items.update(utils.to_items(iterable))
        return self.__class__(items)

    def replace_recursive(self, *iterables: Any) -> Bag:
        """Like replace(), recursing into nested associative containers.

        Indexed containers are replaced wholesale and an incoming None keeps
        an existing nested container.

        Example:
            >>> Bag({'a': {'b': 'foo'}}).replace_recursive({'a': {'c': 'bar'}}).as_native_deeply()
            {'a': {'b': 'foo', 'c': 'bar'}}
        """
        items = self.as_dict()
        for iterable in iterables:
            items = utils.replace_recursive(items, iterable)
        return self.__class__(items)

    def defaults(self, *iterables: Any) -> Bag:
        """Return a bag where the entries of iterables fill in missing keys only."""
        items = {}
        for iterable in (*iterables, self):
            items.update(utils.to_items(iterable))
        return self.__class__(items)

    def defaults_recursive(self, *iterables: Any) -> Bag:
        """Recursive defaults(): these entries replace the iterables recursively."""
        sources = (*iterables, self)
        items = utils.to_items(sources[0])
        for source in sources[1:]:
            items = utils.replace_recursive(items, source)
        return self.__class__(items)

    def merge(self, *iterables: Any) -> Bag:
        """Concatenate iterables after these items.

        Integer keys are renumbered, string keys are kept (later ones
        overwrite earlier ones).
        """
        return self.__class__(utils.merge_items(self, *iterables))

    # -------------------- slicing and grouping --------------------------------

    def _pairs(self, pairs: Iterable[tuple[Any, Any]], preserve_keys: bool) -> Bag:
        """Wrap pairs, renumbering integer keys unless preserve_keys."""
        items = dict(pairs)
        return self.__class__(items if preserve_keys else utils.merge_items(items))

    def slice(self, offset: int, length: int | None = None, preserve_keys: bool = False) -> Bag:
        """Return a run of entries.

        Args:
            offset: Start position; negative counts from the end.
            length: Number of entries; negative stops that many before the
                end; None runs to the end.
            preserve_keys: Keep integer keys instead of renumbering them.
                String keys are always kept.
        """
        pairs = list(self._items.items())
        count = len(pairs)
        start = offset if offset >= 0 else max(0, count + offset)
        if length is None:
            stop = count
        elif length >= 0:
            stop = start + length
        else:
            stop = count + length
        return self._pairs(pairs[start:stop], preserve_keys)

    def partition(self, predicate: Callable[[Any, Any], bool]) -> tuple[Bag, Bag]:
        """Split into (matching, not matching) by predicate(key, value). Keys are kept."""
        matching, rest = {}, {}
        for key, value in self._items.items():
            (matching if predicate(key, value) else rest)[key] = value
        return self.__class__(matching), self.__class__(rest)

    def column(self, column_key: Any, index_key: Any = None) -> Bag:
        """Return one column of a bag of rows, optionally keyed by another column.

        Example:
            >>> rows = Bag.of({'id': 3, 'name': 'x'}, {'id': 5, 'name': 'y'})
            >>> rows.column('name', 'id').as_dict()
            {3: 'x', 5: 'y'}
        """
        return self.__class__(utils.column(self, column_key, index_key))

    def chunk(self, size: int, preserve_keys: bool = False) -> Bag:
        """Split into an indexed bag of bags of size entries; the last one may be shorter.

        Raises:
            InvalidArgument: If size is less than 1.
        """
        if isinstance(size, bool) or not isinstance(size, int) or size < 1:
            raise InvalidArgument(f"Chunk size must be a positive integer. Got: {size!r}")
        pairs = list(self._items.items())
        chunks = []
        for start in range(0, len(pairs), size):
            part = pairs[start:start + size]
            chunks.append(self.__class__(dict(part) if preserve_keys else [v for _, v in part]))
        return self.__class__(chunks)

    def pad(self, size: int, value: Any) -> Bag:
        """Grow to abs(size) entries, padding at the end (size > 0) or start (size < 0).

        Integer keys are renumbered when padding happens.
        """
        missing = abs(size) - len(self._items)
        if missing <= 0:
            return self.copy()
        padding = [value] * missing
        if size > 0:
            return self.__class__(utils.merge_items(self, padding))
        return self.__class__(utils.merge_items(padding, self))

    # -------------------- value-shape derives --------------------------------

    def flip(self) -> Bag:
        """Swap keys and values.

        Raises:
            BagLogicError: If a value is not a string or an integer.
        """
        _check_scalar_values(self._items.values(), 'flip')
        return self.__class__({value: key for key, value in self._items.items()})

    def count_values(self) -> Bag:
        """Count the occurrences of each value.

        Raises:
            BagLogicError: If a value is not a string or an integer.
        """
        _check_scalar_values(self._items.values(), 'count_values')
        counts = {}
        for value in self._items.values():
            counts[value] = counts.get(value, 0) + 1
        return self.__class__(counts)

    def unique(self) -> Bag:
        """Drop strict duplicates, first occurrence wins.

        An indexed bag is renumbered, an associative one keeps its keys.
        """
        kept = {}
        for key, value in self._items.items():
            if not any(strict_equals(value, seen) for seen in kept.values()):
                kept[key] = value
        if self.is_indexed():
            return self.__class__(list(kept.values()))
        return self.__class__(kept)

    def flatten(self, depth: int = 1) -> Bag:
        """Flatten nested iterables into an indexed bag, up to depth levels."""
        return self.__class__(utils.flatten(self, depth))

    def reverse(self, preserve_keys: bool = False) -> Bag:
        """Reverse the order. Integer keys are renumbered unless preserve_keys."""
        return self._pairs(reversed(self._items.items()), preserve_keys)

    def shuffle(self) -> Bag:
        """Return the entries in random order.

        An indexed bag is renumbered, an associative one keeps its pairs.
        """
        pairs = list(self._items.items())
        random.shuffle(pairs)
        if self.is_indexed():
            return self.__class__([value for _, value in pairs])
        return self.__class__(dict(pairs))

    # -------------------- diff and intersect --------------------------------

    @staticmethod
    def _equality(comparator: Callable[[Any, Any], int] | None) -> Callable[[Any, Any], bool]:
        if comparator is None:
            return strict_equals
        return lambda a, b: comparator(a, b) == 0

    def _keep_values(self, iterable: Any, comparator: Callable[[Any, Any], int] | None,
                     present: bool) -> Bag:
        equal = self._equality(comparator)
        others = list(utils.to_items(iterable).values())
        return self.__class__({
            key: value for key, value in self._items.items()
            if any(equal(value, other) for other in others) is present
        })

    def _keep_keys(self, iterable: Any, comparator: Callable[[Any, Any], int] | None,
                   present: bool) -> Bag:
        equal = self._equality(comparator)
        others = list(utils.to_items(iterable))
        return self.__class__({
            key: value for key, value in self._items.items()
            if any(equal(key, other) for other in others) is present
        })

    def diff(self, iterable: Any, comparator: Callable[[Any, Any], int] | None = None) -> Bag:
        """Keep the entries whose value is not in iterable.

        Values are compared strictly, or with the three-way comparator
        (0 means equal) when given.
        """
        return self._keep_values(iterable, comparator, False)

    def diff_by(self, iterable: Any, iteratee: Callable[[Any], Any]) -> Bag:
        """Like diff(), comparing iteratee(value) on both sides."""
        return self._keep_values(iterable, projected(iteratee), False)

    def diff_keys(self, iterable: Any, comparator: Callable[[Any, Any], int] | None = None) -> Bag:
        """Keep the entries whose key is not a key of iterable."""
        return self._keep_keys(iterable, comparator, False)

    def diff_keys_by(self, iterable: Any, iteratee: Callable[[Any], Any]) -> Bag:
        return self._keep_keys(iterable, projected(iteratee), False)

    def intersect(self, iterable: Any, comparator: Callable[[Any, Any], int] | None = None) -> Bag:
        """Keep the entries whose value is also in iterable."""
        return self._keep_values(iterable, comparator, True)

    def intersect_by(self, iterable: Any, iteratee: Callable[[Any], Any]) -> Bag:
        return self._keep_values(iterable, projected(iteratee), True)

    def intersect_keys(self, iterable: Any,
                       comparator: Callable[[Any, Any], int] | None = None) -> Bag:
        """Keep the entries whose key is also a key of iterable."""
        return self._keep_keys(iterable, comparator, True)

    def intersect_keys_by(self, iterable: Any, iteratee: Callable[[Any], Any]) -> Bag:
        return self._keep_keys(iterable, projected(iteratee), True)

    @staticmethod
    def _key_set(keys: tuple) -> dict:
        if len(keys) == 1 and is_iterable(keys[0]):
            keys = tuple(utils.iter_values(keys[0]))
        return dict.fromkeys(keys)

    def pick(self, *keys: Any) -> Bag:
        """Keep only the given keys, passed as arguments or as one iterable.

        Example:
            >>> Bag({'a': 1, 'b': 2, 'c': 3}).pick('a', 'c').as_dict()
            {'a': 1, 'c': 3}
        """
        return self.intersect_keys(self._key_set(keys))

    def omit(self, *keys: Any) -> Bag:
        """Drop the given keys, passed as arguments or as one iterable."""
        return self.diff_keys(self._key_set(keys))

    # -------------------- sorting --------------------------------

    def _sorted_values(self, key: Callable[[Any], Any], reverse: bool,
                       preserve_keys: bool) -> Bag:
        pairs = sorted(self._items.items(), key=lambda pair: key(pair[1]), reverse=reverse)
        if preserve_keys:
            return self.__class__(dict(pairs))
        return self.__class__([value for _, value in pairs])

    def _sorted_keys(self, key: Callable[[Any], Any], reverse: bool) -> Bag:
        return self.__class__(dict(
            sorted(self._items.items(), key=lambda pair: key(pair[0]), reverse=reverse)
        ))

    def sort(self, order: SortOrder | str = SortOrder.ASC,
             flags: SortFlag | int = SortFlag.REGULAR, preserve_keys: bool = False) -> Bag:
        """Sort by value.

        Args:
            order: SortOrder.ASC or SortOrder.DESC.
            flags: Comparison mode (see SortFlag).
            preserve_keys: Keep the key of each value instead of renumbering.

        Raises:
            InvalidArgument: For an unknown order or flag combination.

        Example:
            >>> Bag.of('img12', 'img10', 'img2').sort(flags=SortFlag.NATURAL).as_list()
            ['img2', 'img10', 'img12']
        """
        return self._sorted_values(sort_key(flags), resolve_order(order), preserve_keys)

    def sort_by(self, iteratee: Callable[[Any], Any], order: SortOrder | str = SortOrder.ASC,
                flags: SortFlag | int = SortFlag.REGULAR, preserve_keys: bool = False) -> Bag:
        """Sort by iteratee(value)."""
        key = sort_key(flags)
        return self._sorted_values(lambda value: key(iteratee(value)), resolve_order(order),
                                   preserve_keys)

    def sort_with(self, comparator: Callable[[Any, Any], int], preserve_keys: bool = False) -> Bag:
        """Sort by value with a three-way comparator(a, b)."""
        return self._sorted_values(cmp_to_key(comparator), False, preserve_keys)

    def sort_keys(self, order: SortOrder | str = SortOrder.ASC,
                  flags: SortFlag | int = SortFlag.REGULAR) -> Bag:
        """Sort by key, keeping each pair."""
        return self._sorted_keys(sort_key(flags), resolve_order(order))

    def sort_keys_by(self, iteratee: Callable[[Any], Any], order: SortOrder | str = SortOrder.ASC,
                     flags: SortFlag | int = SortFlag.REGULAR) -> Bag:
        """Sort by iteratee(key), keeping each pair."""
        key = sort_key(flags)
        return self._sorted_keys(lambda k: key(iteratee(k)), resolve_order(order))

    def sort_keys_with(self, comparator: Callable[[Any, Any], int]) -> Bag:
        """Sort by key with a three-way comparator(a, b), keeping each pair."""
        return self._sorted_keys(cmp_to_key(comparator), False)

    # -------------------- serialization --------------------------------

    def to_json(self, indent: int | None = None) -> str:
        """Serialize to JSON. See serialization.to_json()."""
        from .serialization import to_json
        return to_json(self, indent=indent)

    @classmethod
    def from_json(cls, source: str | bytes) -> Bag:
        """Deserialize from JSON into a bag of this class. See serialization.from_json()."""
        from .serialization import from_json
        return from_json(source, bag_cls=cls)

    def to_tytx(self, transport: str = 'json') -> str | bytes:
        """Serialize to TYTX, keeping Decimal and date types. See serialization.to_tytx()."""
        from .serialization import to_tytx
        return to_tytx(self, transport=transport)

    @classmethod
    def from_tytx(cls, data: str | bytes, transport: str = 'json') -> Bag:
        """Deserialize TYTX data into a bag of this class."""
        from .serialization import from_tytx
        return from_tytx(data, transport=transport, bag_cls=cls)

    # -------------------- __getitem__, __setitem__, __delitem__ --------------------------------

    def __contains__(self, key: Any) -> bool:
        return key in self._items

    def __getitem__(self, key: Any) -> Any:
        """Return the value for key, or None if it is missing."""
        return self._items.get(key)

    def __setitem__(self, key: Any, value: Any) -> None:
        raise ImmutableBagError(
            f"Cannot set '{key}': {self.__class__.__name__} is read-only, use mutable() or MutableBag"
        )

    def __delitem__(self, key: Any) -> None:
        raise ImmutableBagError(
            f"Cannot delete '{key}': {self.__class__.__name__} is read-only, use mutable() or MutableBag"
        )

    # -------------------- __iter__, __len__, __eq__ --------------------------------

    def __iter__(self) -> Iterator[Any]:
        """Iterate over the values, in order."""
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        """Two bags are equal if they hold the same pairs in the same order.

        Bag and MutableBag instances compare equal when their items match.
        """
        if not isinstance(other, Bag):
            return False
        return list(self._items.items()) == list(other._items.items())

    def __ne__(self, other: object) -> bool:
        return not self.__eq__(other)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._items!r})"

    def __str__(self, _visited: set | None = None) -> str:
        """Return one line per entry, nested bags indented.

        Example:
            >>> print(Bag({'name': 'test', 'tags': Bag(['a'])}))
            0 - (str) name: test
            1 - (Bag) tags:
                0 - (str) 0: a
        """
        if _visited is None:
            _visited = set()
        _visited.add(id(self))
        lines = []
        for idx, (key, value) in enumerate(self._items.items()):
            if isinstance(value, Bag):
                lines.append(f"{idx} - ({value.__class__.__name__}) {key}:")
                if id(value) in _visited:
                    lines.append("    (*) already shown")
                else:
                    inner = value.__str__(_visited)
                    lines.extend(f"    {line}" for line in inner.split('\n') if line)
                continue
            type_name = 'None' if value is None else type(value).__name__
            if isinstance(value, bytes):
                value = value.decode('UTF-8', 'ignore')
            lines.append(f"{idx} - ({type_name}) {key}: {value}")
        return '\n'.join(lines)


#: Read-only bags are plain Bag instances; the name makes intent explicit.
ImmutableBag = Bag
