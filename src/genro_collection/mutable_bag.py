# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""MutableBag module - Bag with in-place mutation.

MutableBag keeps every query and derive method of Bag (derives still
return new bags) and adds methods that change the bag itself. Changes are
visible to every holder of the reference.

Example:
    >>> bag = MutableBag({'items': {'foo': 'bar'}})
    >>> bag.set_path('items/colors/[]', 'red')
    >>> bag.set_path('items/colors/[]', 'blue')
    >>> bag.get_path('items/colors')
    ['red', 'blue']

MutableBag is not synchronized: do not share one across threads without
external locking.
"""

from __future__ import annotations

from typing import Any

from .accessor import MutableAccessor, next_index
from .bag import Bag
from .collection_utils import merge_items
from .comparators import strict_equals
from .path_access import remove_path, set_path


class MutableBag(Bag, MutableAccessor):
    """Bag whose items can be added, replaced and removed in place."""

    def _replace_items(self, items: dict) -> None:
        self._items.clear()
        self._items.update(items)

    # -------------------- adding --------------------------------

    def add(self, value: Any) -> None:
        """Store value at the next index: highest integer key + 1."""
        self._items[next_index(self._items)] = value

    def append(self, value: Any) -> None:
        """Same as add(). Used by set_path for the '[]' segment."""
        self.add(value)

    def prepend(self, value: Any) -> None:
        """Insert value first. Integer keys are renumbered, string keys kept."""
        self._replace_items(merge_items([value], self._items))

    def set(self, key: Any, value: Any) -> None:
        self._items[key] = value

    def set_path(self, path: str, value: Any) -> None:
        """Set value at the '/'-separated path, creating missing containers.

        Raises:
            InvalidArgument: If path is empty.
            StructuralWriteError: If the path crosses a value that cannot
                hold nested data. The bag is left unchanged.

        See path_access.set_path.
        """
        set_path(self, path, value)

    # -------------------- removing --------------------------------

    def clear(self) -> None:
        self._items.clear()

    def remove(self, key: Any, default: Any = None) -> Any:
        """Remove key and return its value, or default if it is missing."""
        return self._items.pop(key, default)

    def remove_path(self, path: str, default: Any = None) -> Any:
        """Remove the value at path and return it, or default if it is missing."""
        return remove_path(self, path, default)

    def remove_item(self, item: Any) -> None:
        """Remove the first value strictly equal to item. Nothing happens if absent."""
        for key, value in self._items.items():
            if strict_equals(value, item):
                del self._items[key]
                return

    def remove_first(self, default: Any = None) -> Any:
        """Remove and return the first value, or default if empty.

        Integer keys of the remaining entries are renumbered from 0.
        """
        if not self._items:
            return default
        first_key = next(iter(self._items))
        value = self._items.pop(first_key)
        self._replace_items(merge_items(self._items))
        return value

    def remove_last(self, default: Any = None) -> Any:
        """Remove and return the last value, or default if empty."""
        if not self._items:
            return default
        return self._items.popitem()[1]

    # -------------------- __setitem__, __delitem__ --------------------------------

    def __setitem__(self, key: Any, value: Any) -> None:
        self._items[key] = value

    def __delitem__(self, key: Any) -> None:
        """Delete key. Raises KeyError if it is missing; remove() takes a default."""
        del self._items[key]
