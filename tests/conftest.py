# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pytest configuration and fixtures."""

import pytest

from genro_collection import Bag, MutableBag


@pytest.fixture(params=[Bag, MutableBag], ids=['Bag', 'MutableBag'])
def bag_cls(request):
    """Both bag classes: read-only behavior must be identical on each."""
    return request.param
