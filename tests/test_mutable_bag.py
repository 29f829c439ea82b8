# Copyright 2025 Softwell S.r.l. - Genropy Team
# Licensed under the Apache License, Version 2.0

"""Tests for MutableBag in-place mutation."""

import pytest

from genro_collection.bag import Bag
from genro_collection.exceptions import InvalidArgument, StructuralWriteError
from genro_collection.mutable_bag import MutableBag


class TestAdd:
    def test_add_to_empty(self):
        bag = MutableBag()
        bag.add('a')
        bag.add('b')
        assert bag.as_dict() == {0: 'a', 1: 'b'}

    def test_add_after_highest_int_key(self):
        bag = MutableBag({'x': 1, 5: 'five'})
        bag.add('six')
        assert bag[6] == 'six'

    def test_append_is_add(self):
        bag = MutableBag(['a'])
        bag.append('b')
        assert bag.as_list() == ['a', 'b']

    def test_prepend(self):
        bag = MutableBag({0: 'a', 'k': 'v', 1: 'b'})
        bag.prepend('z')
        assert list(bag.as_dict().items()) == [(0, 'z'), (1, 'a'), ('k', 'v'), (2, 'b')]

    def test_prepend_to_empty(self):
        bag = MutableBag()
        bag.prepend('a')
        assert bag.as_dict() == {0: 'a'}


class TestSet:
    def test_set_and_setitem(self):
        bag = MutableBag()
        bag.set('a', 1)
        bag['b'] = 2
        assert bag.as_dict() == {'a': 1, 'b': 2}

    def test_set_overwrites_in_place(self):
        bag = MutableBag({'a': 1, 'b': 2})
        bag.set('a', 3)
        assert list(bag.as_dict()) == ['a', 'b']
        assert bag['a'] == 3

    def test_mutation_is_shared_by_references(self):
        bag = MutableBag()
        alias = bag
        bag.set('a', 1)
        assert alias['a'] == 1


class TestSetPath:
    def test_set_path_scenario(self):
        bag = MutableBag({'items': {'foo': 'bar'}})
        bag.set_path('items/hello', 'world')
        bag.set_path('items/colors/[]', 'red')
        bag.set_path('items/colors/[]', 'blue')
        assert bag.get_path('items/colors') == ['red', 'blue']
        assert bag.get_path('items/hello') == 'world'
        assert bag.get_path('items/foo') == 'bar'

    def test_set_path_creates_branch(self):
        bag = MutableBag()
        bag.set_path('a/b', 1)
        assert bag.as_dict() == {'a': {'b': 1}}

    def test_set_path_append_at_root(self):
        bag = MutableBag(['a'])
        bag.set_path('[]', 'b')
        assert bag.as_list() == ['a', 'b']

    def test_set_path_through_nested_mutable_bag(self):
        bag = MutableBag.from_recursive({'a': {'b': 1}})
        bag.set_path('a/c', 2)
        assert bag['a'].as_dict() == {'b': 1, 'c': 2}

    def test_set_path_through_nested_read_only_bag(self):
        bag = MutableBag({'child': Bag({'a': 1})})
        with pytest.raises(StructuralWriteError):
            bag.set_path('child/a', 2)

    def test_set_path_through_scalar(self):
        bag = MutableBag({'a': 1})
        with pytest.raises(StructuralWriteError):
            bag.set_path('a/b', 2)
        assert bag.as_dict() == {'a': 1}

    def test_set_path_empty(self):
        with pytest.raises(InvalidArgument):
            MutableBag().set_path('', 1)

    def test_set_path_index_segment_keeps_bag_indexed(self):
        bag = MutableBag()
        bag.set_path('[]', 'a')
        bag.set_path('1', 'b')
        assert bag.as_dict() == {0: 'a', 1: 'b'}
        assert bag.is_indexed()

    def test_set_path_index_segment_then_add(self):
        bag = MutableBag()
        bag.set_path('0', 'x')
        bag.add('y')
        assert bag.as_dict() == {0: 'x', 1: 'y'}

    def test_set_path_non_canonical_index_stays_string(self):
        bag = MutableBag()
        bag.set_path('07', 'x')
        assert bag.as_dict() == {'07': 'x'}


class TestRemove:
    def test_remove(self):
        bag = MutableBag({'a': 1, 'b': 2})
        assert bag.remove('a') == 1
        assert bag.remove('a', 'gone') == 'gone'
        assert bag.as_dict() == {'b': 2}

    def test_remove_path(self):
        bag = MutableBag({'a': {'b': 1, 'c': 2}})
        assert bag.remove_path('a/b') == 1
        assert bag.remove_path('a/x', 'none') == 'none'
        assert bag.as_dict() == {'a': {'c': 2}}

    def test_remove_item_first_strict_match(self):
        bag = MutableBag(['1', 1, 1])
        bag.remove_item(1)
        assert bag.as_dict() == {0: '1', 2: 1}

    def test_remove_item_absent(self):
        bag = MutableBag([1])
        bag.remove_item(2)
        assert bag.as_list() == [1]

    def test_remove_first(self):
        bag = MutableBag({0: 'a', 'k': 'v', 1: 'b'})
        assert bag.remove_first() == 'a'
        assert bag.as_dict() == {'k': 'v', 0: 'b'}

    def test_remove_last(self):
        bag = MutableBag(['a', 'b'])
        assert bag.remove_last() == 'b'
        assert bag.as_list() == ['a']

    def test_remove_ends_on_empty(self):
        bag = MutableBag()
        assert bag.remove_first() is None
        assert bag.remove_last('empty') == 'empty'

    def test_delitem(self):
        bag = MutableBag({'a': 1})
        del bag['a']
        assert bag.is_empty()

    def test_delitem_missing_raises(self):
        bag = MutableBag({'a': 1})
        with pytest.raises(KeyError):
            del bag['missing']
        assert bag.as_dict() == {'a': 1}

    def test_clear(self):
        bag = MutableBag([1, 2])
        bag.clear()
        assert bag.is_empty()


class TestDerivesOnMutable:
    """Derive methods return new bags and leave the receiver untouched."""

    def test_derive_returns_new_mutable_bag(self):
        bag = MutableBag([3, 1, 2])
        result = bag.sort()
        assert type(result) is MutableBag
        assert bag.as_list() == [3, 1, 2]
        result.add(4)
        assert bag.count() == 3

    def test_immutable_copy_is_detached(self):
        bag = MutableBag({'a': 1})
        frozen = bag.immutable()
        bag.set('a', 2)
        assert frozen['a'] == 1
