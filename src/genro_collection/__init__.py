# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""genro-collection - ordered bags and '/' path access over nested containers.

Example:
    >>> from genro_collection import MutableBag, get_path
    >>> bag = MutableBag()
    >>> bag.set_path('config/db/host', 'localhost')
    >>> get_path(bag.as_dict(), 'config/db/host')
    'localhost'
"""

from .accessor import Accessor, MutableAccessor, is_accessible, is_writable
from .bag import Bag, ImmutableBag
from .comparators import SortFlag, SortOrder
from .exceptions import (
    BagException,
    BagLogicError,
    ImmutableBagError,
    InvalidArgument,
    StructuralWriteError,
)
from .mutable_bag import MutableBag
from .path_access import get_path, has_path, remove_path, set_path

__version__ = '0.1.0'

__all__ = [
    'Accessor',
    'Bag',
    'BagException',
    'BagLogicError',
    'ImmutableBag',
    'ImmutableBagError',
    'InvalidArgument',
    'MutableAccessor',
    'MutableBag',
    'SortFlag',
    'SortOrder',
    'StructuralWriteError',
    'get_path',
    'has_path',
    'is_accessible',
    'is_writable',
    'remove_path',
    'set_path',
]
