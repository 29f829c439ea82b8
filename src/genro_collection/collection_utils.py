# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Helpers shared by the Bag classes.

Normalization of arbitrary sources into an ordered dict, classification of
indexed vs associative containers, and the structural helpers behind
Bag.column, Bag.flatten, Bag.merge and Bag.replace_recursive.

This module never imports the Bag classes: bags are recognized with
safe_is_instance so that bag.py can import from here.
"""

from __future__ import annotations

import dataclasses
import types
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any

from genro_toolbox import safe_is_instance

from .accessor import TEXT_TYPES, Accessor, is_iterable, is_sequence, next_index, resolve_key
from .exceptions import InvalidArgument

BAG_CLASS = 'genro_collection.bag.Bag'


def is_bag(value: Any) -> bool:
    """Return True if value is a Bag or MutableBag."""
    return safe_is_instance(value, BAG_CLASS)


def is_struct(value: Any) -> bool:
    """Return True for plain record objects: SimpleNamespace or dataclass instances."""
    if isinstance(value, types.SimpleNamespace):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def struct_fields(value: Any) -> dict[str, Any]:
    """Shallow field dict of a struct (see is_struct)."""
    if isinstance(value, types.SimpleNamespace):
        return dict(vars(value))
    return {field.name: getattr(value, field.name) for field in dataclasses.fields(value)}


def is_structured(value: Any) -> bool:
    """Return True for values that Bag.from_recursive wraps as nested bags."""
    return is_struct(value) or is_iterable(value)


def iter_values(source: Any) -> Iterator[Any]:
    """Iterate the values of a bag, mapping or other iterable."""
    if isinstance(source, Mapping):
        return iter(source.values())
    return iter(source)


def to_items(source: Any) -> dict:
    """Normalize source into a new ordered dict.

    Accepts None (empty), a Bag (its items), a Mapping (shallow copy), a
    struct (its fields) or any non-text iterable (positional keys).

    Raises:
        InvalidArgument: For scalars, text and opaque objects.
    """
    if source is None:
        return {}
    if is_bag(source):
        return source.as_dict()
    if isinstance(source, Mapping):
        return dict(source)
    if is_struct(source):
        return struct_fields(source)
    if is_iterable(source):
        return dict(enumerate(source))
    raise InvalidArgument(
        f"Expected an iterable, a mapping, a struct or None. Got: {type(source).__name__}"
    )


def keys_are_indexed(keys: Iterable[Any]) -> bool:
    """Return True if keys are exactly 0..n-1 in this order."""
    return all(
        isinstance(key, int) and not isinstance(key, bool) and key == position
        for position, key in enumerate(keys)
    )


def is_indexed(value: Any) -> bool:
    """Return True if value is a zero-indexed sequential container.

    Empty containers are indexed. Non-iterables and text are neither indexed
    nor associative.
    """
    if is_bag(value):
        return value.is_indexed()
    if isinstance(value, Mapping):
        return keys_are_indexed(value)
    return is_iterable(value)


def is_associative(value: Any) -> bool:
    """Return True if value is a keyed container that is not indexed."""
    return is_iterable(value) and not is_indexed(value)


def merge_items(*sources: Any) -> dict:
    """Concatenate sources positionally.

    Integer keys are renumbered from 0 in order of appearance; string keys
    are kept, a later value overwriting an earlier one in place.
    """
    merged = {}
    position = 0
    for source in sources:
        for key, value in to_items(source).items():
            if isinstance(key, int) and not isinstance(key, bool):
                merged[position] = value
                position += 1
            else:
                merged[key] = value
    return merged


def replace_recursive(first: Any, second: Any) -> dict:
    """Replace values from second into first, recursing into mappings.

    Differs from a plain recursive update:
        - an indexed container from second replaces the value in first
          completely, it is never merged item by item
        - None from second does not replace a container in first (it does
          replace scalars)

    Nested bags in first stay bags of the same class.
    """
    merged = to_items(first)
    for key, value in to_items(second).items():
        if isinstance(value, Iterator):
            value = list(value)
        existing = merged.get(key)
        if is_associative(value) and is_iterable(existing):
            result = replace_recursive(existing, value)
            merged[key] = existing.__class__(result) if is_bag(existing) else result
        elif value is None and is_iterable(existing):
            continue
        else:
            merged[key] = value
    return merged


def map_recursive(source: Any, callback: Callable[[Any, Any], Any]) -> dict:
    """Apply callback(value, key) to every leaf of a nested structure.

    Bags and mappings become dicts, other iterables become lists.
    """
    return {key: _map_leaf(value, key, callback) for key, value in to_items(source).items()}


def _map_leaf(value: Any, key: Any, callback: Callable[[Any, Any], Any]) -> Any:
    if is_bag(value) or isinstance(value, Mapping):
        return map_recursive(value, callback)
    if is_iterable(value):
        return [_map_leaf(item, index, callback) for index, item in enumerate(value)]
    return callback(value, key)


def flatten(source: Any, depth: int = 1) -> list:
    """Flatten nested iterables into a single list, up to depth levels.

    Example:
        >>> flatten([1, [2, 3], [[4]]])
        [1, 2, 3, [4]]
    """
    result = []
    _flatten_into(result, source, depth)
    return result


def _flatten_into(result: list, source: Any, depth: int) -> None:
    for item in iter_values(source):
        if depth >= 1 and is_iterable(item):
            _flatten_into(result, item, depth - 1)
        else:
            result.append(item)


def _field(row: Any, name: Any) -> tuple[bool, Any]:
    """Read a column from a row: by key for containers, by attribute otherwise."""
    if isinstance(row, (Mapping, Accessor)) or is_sequence(row):
        found, actual = resolve_key(row, name)
        return (True, row[actual]) if found else (False, None)
    if isinstance(name, str) and not isinstance(row, TEXT_TYPES) and hasattr(row, name):
        return True, getattr(row, name)
    return False, None


def column(rows: Any, column_key: Any, index_key: Any = None) -> dict:
    """Return the values of one column from a list of rows.

    Rows may be mappings, sequences, accessors or plain objects (attribute
    access). Rows missing column_key are skipped.

    Args:
        rows: Iterable of rows.
        column_key: Column to collect, or None to collect whole rows.
        index_key: Optional column whose value becomes the result key. Rows
            without it get the next positional key.

    Example:
        >>> column([{'id': 'a', 'v': 1}, {'id': 'b', 'v': 2}], 'v', 'id')
        {'a': 1, 'b': 2}
    """
    output = {}
    for row in iter_values(rows):
        if column_key is None:
            value = row
        else:
            found, value = _field(row, column_key)
            if not found:
                continue
        key_found, key = (False, None) if index_key is None else _field(row, index_key)
        if key_found:
            output[key if isinstance(key, (str, int)) else str(key)] = value
        else:
            output[next_index(output)] = value
    return output


def to_native_deeply(value: Any) -> Any:
    """Unwrap nested bags, mappings, structs and sequences into plain data.

    Indexed bags become lists, associative bags dicts.
    """
    if is_bag(value):
        value = value.as_native()
    elif is_struct(value):
        value = struct_fields(value)
    if isinstance(value, Mapping):
        return {key: to_native_deeply(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_native_deeply(item) for item in value]
    return value
