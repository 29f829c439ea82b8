# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Path access module - nested get/set/has/remove with '/' paths.

Paths are plain strings of keys separated by '/':

    >>> data = {'config': {'db': {'host': 'localhost'}}}
    >>> get_path(data, 'config/db/host')
    'localhost'
    >>> get_path(data, 'config/cache/size', 64)
    64

Traversal works through any accessible container (see accessor module):
dicts and other mappings, lists and other sequences, and Accessor objects,
mixed freely at any depth. Reading never raises on a missing key; the
default is returned instead.

Writing creates the missing part of the path. The segment '[]' means
"append at the natural next index" instead of a literal key:

    >>> data = {}
    >>> set_path(data, 'colors/[]', 'red')
    >>> set_path(data, 'colors/[]', 'blue')
    >>> data
    {'colors': ['red', 'blue']}

There is no escaping: keys containing '/' cannot be addressed, and '[]'
cannot be used as a literal key. Empty segments ('a//b') address the
empty-string key. A new key in an Accessor (a bag, for instance) is stored
as an int when the segment is a canonical index ('0', '12', not '01'), so
indexed bags stay indexed; plain mappings get the literal string.

set_path is all-or-nothing: the existing part of the path is validated
first, the missing part is built as a detached branch and attached with a
single assignment. A StructuralWriteError therefore leaves the container
untouched.
"""

from __future__ import annotations

import logging
from typing import Any

from .accessor import (
    Accessor,
    MutableAccessor,
    aliases_nested,
    as_index,
    is_accessible,
    is_sequence,
    is_writable,
    next_index,
    resolve_key,
)
from .exceptions import InvalidArgument, StructuralWriteError

logger = logging.getLogger(__name__)

PATH_SEPARATOR = '/'
APPEND_TOKEN = '[]'


def _split_path(container: Any, path: Any) -> list[str]:
    """Validate arguments and split path into its segments."""
    if not is_accessible(container):
        raise InvalidArgument(
            f"Expected a mapping, a sequence or an Accessor. Got: {type(container).__name__}"
        )
    if not isinstance(path, str) or not path:
        raise InvalidArgument(f"Expected a non-empty string path. Got: {path!r}")
    return path.split(PATH_SEPARATOR)


def _lookup(container: Any, key: str) -> tuple[bool, Any]:
    """Look up a single key. Returns (found, value)."""
    if not is_accessible(container):
        return False, None
    found, actual = resolve_key(container, key)
    if not found:
        return False, None
    return True, container[actual]


def _describe(container: Any, parent_key: str | None) -> str:
    if parent_key is None:
        return f"the container is a {type(container).__name__}"
    return f"'{parent_key}' is a {type(container).__name__}"


def _refuse(action: str, path: str, reason: str) -> StructuralWriteError:
    logger.debug("Refused to %s %r: %s", action, path, reason)
    return StructuralWriteError(f"Cannot {action} '{path}', because {reason}.")


def _check_writable(container: Any, path: str, parent_key: str | None) -> None:
    if is_writable(container):
        return
    if is_accessible(container):
        reason = f"{_describe(container, parent_key)} which is read-only"
    else:
        reason = f"'{parent_key}' is already set and not a writable container"
    raise _refuse('set', path, reason)


def _check_aliasing(action: str, container: Any, path: str, parent_key: str | None) -> None:
    if not aliases_nested(container):
        raise _refuse(action, path, (
            f"{_describe(container, parent_key)} which returns copies from "
            "__getitem__ (aliases_nested is False), so nested values cannot be modified"
        ))


def _append(container: Any, value: Any) -> None:
    if isinstance(container, MutableAccessor):
        container.append(value)
    elif is_sequence(container):
        container.append(value)
    else:
        container[next_index(container)] = value


def _assign(container: Any, key: str, value: Any, path: str) -> None:
    """Assign value to key in a writable container."""
    if key == APPEND_TOKEN:
        _append(container, value)
        return
    if is_sequence(container):
        index = as_index(key)
        if index is None or index > len(container):
            raise _refuse('set', path, (
                f"'{key}' is not a valid position in a list of {len(container)} items"
            ))
        if index == len(container):
            container.append(value)
        else:
            container[index] = value
        return
    found, actual = resolve_key(container, key)
    if not found:
        index = as_index(key) if isinstance(container, Accessor) else None
        actual = key if index is None else index
    container[actual] = value


def _build_branch(segments: list[str], value: Any) -> Any:
    """Build the nested containers for segments, innermost holding value."""
    for key in reversed(segments):
        value = [value] if key == APPEND_TOKEN else {key: value}
    return value


def has_path(container: Any, path: str) -> bool:
    """Return whether every segment of path resolves.

    A key holding None counts as present.

    Args:
        container: Mapping, sequence or Accessor.
        path: '/'-separated keys, e.g. 'items/0/name'.

    Raises:
        InvalidArgument: If container is not accessible or path is empty.
    """
    current = container
    for key in _split_path(container, path):
        found, current = _lookup(current, key)
        if not found:
            return False
    return True


def get_path(container: Any, path: str, default: Any = None) -> Any:
    """Return the value at path, or default as soon as a segment is missing.

    Args:
        container: Mapping, sequence or Accessor.
        path: '/'-separated keys.
        default: Value returned when the path does not resolve.

    Raises:
        InvalidArgument: If container is not accessible or path is empty.
    """
    current = container
    for key in _split_path(container, path):
        found, current = _lookup(current, key)
        if not found:
            return default
    return current


def set_path(container: Any, path: str, value: Any) -> None:
    """Set value at path, creating missing intermediate containers.

    Missing intermediates are dicts, or lists when the next segment is '[]'.
    An intermediate '[]' always appends a new container.

    Args:
        container: Writable mapping, list or MutableAccessor. Modified in place.
        path: '/'-separated keys; '[]' appends.
        value: Value to store.

    Raises:
        InvalidArgument: If container is not accessible or path is empty.
        StructuralWriteError: If the path goes through a value that is not a
            writable container, below an accessor with aliases_nested False,
            or addresses a list position past its end. Nothing is modified.
    """
    segments = _split_path(container, path)
    last = len(segments) - 1
    current = container
    parent_key = None
    for position, key in enumerate(segments):
        _check_writable(current, path, parent_key)
        if position == last:
            _assign(current, key, value, path)
            return
        _check_aliasing('set', current, path, parent_key)
        found, actual = (False, key) if key == APPEND_TOKEN else resolve_key(current, key)
        if not found:
            _assign(current, key, _build_branch(segments[position + 1:], value), path)
            logger.debug("Created branch '%s' while setting %r",
                         PATH_SEPARATOR.join(segments[:position + 1]), path)
            return
        parent_key = key
        current = current[actual]


def remove_path(container: Any, path: str, default: Any = None) -> Any:
    """Remove the value at path and return it, or default if it is missing.

    Removing a list slot shifts the following items down.

    Raises:
        InvalidArgument: If container is not accessible or path is empty.
        StructuralWriteError: If the value lives in a read-only container or
            below an accessor with aliases_nested False.
    """
    *parents, key = _split_path(container, path)
    current = container
    parent_key = None
    for segment in parents:
        found, value = _lookup(current, segment)
        if not found:
            return default
        _check_aliasing('remove', current, path, parent_key)
        parent_key = segment
        current = value
    if not is_accessible(current):
        return default
    found, actual = resolve_key(current, key)
    if not found:
        return default
    if not is_writable(current):
        raise _refuse('remove', path, f"{_describe(current, parent_key)} which is read-only")
    removed = current[actual]
    del current[actual]
    return removed
