# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for bags and path access.

Every error derives from BagException, so callers can catch the whole
family at once. The leaf classes also derive from the builtin exception
that matches their meaning (ValueError, RuntimeError, TypeError), so code
written against plain Python containers keeps working.
"""

from __future__ import annotations


class BagException(Exception):
    """Base class for all errors raised by genro_collection."""
    pass


class InvalidArgument(BagException, ValueError):
    """A caller passed a value outside the accepted input contract.

    Examples:
        - empty or non-string path
        - container that is neither a native container nor an Accessor
        - combine() with sequences of different length
        - unknown sort order or sort flags
    """
    pass


class StructuralWriteError(BagException, RuntimeError):
    """A path write cannot be honored by the structure it goes through.

    Raised when set_path/remove_path must descend through a scalar, a
    read-only container, or an accessor that does not hand out live
    references to its nested values.
    """
    pass


class BagLogicError(BagException):
    """An operation's precondition about data shape is violated."""
    pass


class ImmutableBagError(BagLogicError, TypeError):
    """Attempt to mutate a read-only Bag in place."""
    pass
