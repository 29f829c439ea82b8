# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Bag serialization module.

This module converts bags to and from two formats:

- **JSON**: plain JSON through the standard json module. Indexed bags
  become arrays, associative bags objects.
- **TYTX**: type-preserving format from genro-tytx (Decimal, date,
  datetime and time survive the round trip), with JSON or MessagePack
  transport.

JSON object keys are always strings, so on load any key in canonical
decimal form ('0', '12', not '01') comes back as an int. Nested
containers come back as bags of the requested class.

Example:
    >>> from genro_collection import Bag
    >>> from genro_collection.serialization import to_json, from_json
    >>>
    >>> bag = Bag({'name': 'test', 'tags': ['a', 'b']})
    >>> data = to_json(bag)
    >>> from_json(data) == Bag.from_recursive(bag)
    True
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any, Literal

from .accessor import as_index
from .exceptions import InvalidArgument

if TYPE_CHECKING:
    from .bag import Bag

TYTX_TRANSPORTS = ('json', 'msgpack')

_TYTX_ROOT = 'bag'


def _restore_keys(pairs: list[tuple[str, Any]]) -> dict:
    """object_pairs_hook turning canonical decimal keys back into ints."""
    restored = {}
    for key, value in pairs:
        index = as_index(key)
        restored[key if index is None else index] = value
    return restored


def _restore_keys_deeply(value: Any) -> Any:
    if isinstance(value, dict):
        return _restore_keys([(key, _restore_keys_deeply(item)) for key, item in value.items()])
    if isinstance(value, list):
        return [_restore_keys_deeply(item) for item in value]
    return value


def _bag_class(bag_cls: type[Bag] | None) -> type[Bag]:
    if bag_cls is not None:
        return bag_cls
    from .bag import Bag
    return Bag


# ==================== JSON Serialization ====================


def to_json(bag: Bag, indent: int | None = None) -> str:
    """Serialize a bag to a JSON string.

    Nested bags, structs and containers are unwrapped first.

    Args:
        bag: The bag to serialize.
        indent: Passed to json.dumps for pretty printing.

    Raises:
        TypeError: If a value is not JSON serializable.

    Example:
        >>> to_json(Bag(['a', 'b']))
        '["a", "b"]'
    """
    return json.dumps(bag.as_native_deeply(), indent=indent)


def from_json(source: str | bytes, bag_cls: type[Bag] | None = None) -> Bag:
    """Deserialize a JSON array or object into a bag.

    Args:
        source: JSON text.
        bag_cls: Class of the returned bag and of its nested bags
            (default Bag).

    Raises:
        InvalidArgument: If the JSON document is a scalar.
        json.JSONDecodeError: If source is not valid JSON.
    """
    data = json.loads(source, object_pairs_hook=_restore_keys)
    if not isinstance(data, (dict, list)):
        raise InvalidArgument(f"Expected a JSON array or object. Got: {type(data).__name__}")
    return _bag_class(bag_cls).from_recursive(data)


# ==================== TYTX Serialization ====================


def _check_transport(transport: str) -> None:
    if transport not in TYTX_TRANSPORTS:
        raise InvalidArgument(
            f"Unknown TYTX transport: {transport!r}. Expected one of {TYTX_TRANSPORTS}"
        )


def to_tytx(bag: Bag, transport: Literal['json', 'msgpack'] = 'json') -> str | bytes:
    """Serialize a bag to TYTX format.

    Args:
        bag: The bag to serialize.
        transport: 'json' (str result) or 'msgpack' (bytes result).

    Raises:
        InvalidArgument: For an unknown transport.

    Example:
        >>> from decimal import Decimal
        >>> data = to_tytx(Bag({'price': Decimal('9.90')}))
        >>> from_tytx(data)['price']
        Decimal('9.90')
    """
    from genro_tytx import to_tytx as tytx_encode

    _check_transport(transport)
    # genro_tytx uses transport=None for JSON
    tytx_transport = None if transport == 'json' else transport
    return tytx_encode({_TYTX_ROOT: bag.as_native_deeply()}, transport=tytx_transport)


def from_tytx(
    data: str | bytes,
    transport: Literal['json', 'msgpack'] = 'json',
    bag_cls: type[Bag] | None = None,
) -> Bag:
    """Deserialize a bag from TYTX format.

    Args:
        data: Serialized data from to_tytx().
        transport: Format matching how data was serialized.
        bag_cls: Class of the returned bag and of its nested bags
            (default Bag).

    Raises:
        InvalidArgument: For an unknown transport or data not produced by
            to_tytx().
    """
    from genro_tytx import from_tytx as tytx_decode

    _check_transport(transport)
    parsed = tytx_decode(data, transport=None if transport == 'json' else transport)
    if not isinstance(parsed, dict) or _TYTX_ROOT not in parsed:
        raise InvalidArgument("TYTX data does not contain a serialized bag")
    return _bag_class(bag_cls).from_recursive(_restore_keys_deeply(parsed[_TYTX_ROOT]))
