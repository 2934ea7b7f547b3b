# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for Store and its nodes."""

import pytest

from multikey_db import (
    ExtendValueAsSubtreeError,
    InsertError,
    InsertValueOverSubtreeError,
    MultiKey,
    Store,
    SubtreeNode,
    ValueNode,
)


def k(text):
    return MultiKey.parse(text)


class TestStoreNode:
    """Tests for ValueNode and SubtreeNode."""

    def test_value_node(self):
        """Test a value node is a leaf."""
        node = ValueNode('x')
        assert node.is_leaf is True
        assert node.is_branch is False
        assert node.value == 'x'

    def test_subtree_node(self):
        """Test a subtree node is a branch."""
        node = SubtreeNode(Store())
        assert node.is_branch is True
        assert node.is_leaf is False

    def test_node_equality(self):
        """Test nodes of different kinds are never equal."""
        assert ValueNode('x') == ValueNode('x')
        assert ValueNode('x') != ValueNode('y')
        assert ValueNode('x') != SubtreeNode(Store())
        assert SubtreeNode(Store()) == SubtreeNode(Store())


class TestStoreInit:
    """Tests for Store construction."""

    def test_empty(self):
        """Test a new store is empty."""
        store = Store()
        assert len(store) == 0
        assert store.is_empty
        assert store.flatten() == []
        assert store.divider == '.'

    def test_invalid_divider(self):
        """Test divider must be a single character."""
        with pytest.raises(ValueError):
            Store(divider='::')
        with pytest.raises(ValueError):
            Store(divider='')

    def test_source_dict(self):
        """Test loading a nested dict."""
        store = Store({'a': 1, 'b': {'c': 2, 'd': {}}})
        assert store.get('a') == 1
        assert store.get('b.c') == 2
        assert store.get_node('b.d').is_branch

    def test_source_list(self):
        """Test loading (key, value) pairs."""
        store = Store([('x.y', 1), (k('x.z'), 2)])
        assert store.get('x.y') == 1
        assert store.get('x.z') == 2

    def test_source_list_conflict(self):
        """Test conflicting pairs raise an insert error."""
        with pytest.raises(InsertError):
            Store([('x', 1), ('x.y', 2)])

    def test_source_store_is_deep_copy(self):
        """Test copying another store."""
        original = Store({'a': {'b': 1}})
        copy = Store(original)
        copy.insert('a.c', 2)
        assert copy == Store({'a': {'b': 1, 'c': 2}})
        assert original.get('a.c') is None

    def test_source_invalid_type(self):
        """Test unsupported source types."""
        with pytest.raises(TypeError):
            Store(42)


class TestStoreInsert:
    """Tests for the recursive insert."""

    def test_insert_and_get(self):
        """Test a value can be read back."""
        store = Store()
        store.insert(k('work.team.git'), 'github.com/example-repo')
        assert store.get(k('work.team.git')) == 'github.com/example-repo'

    def test_insert_overwrites(self):
        """Test a second insert at the same key replaces the value."""
        store = Store()
        store.insert('a.b', 'v1')
        store.insert('a.b', 'v2')
        assert store.get('a.b') == 'v2'
        assert store.flatten() == [(k('a.b'), 'v2')]

    def test_insert_builds_nested_subtrees(self):
        """Test a deep key creates one subtree per component."""
        store = Store(key_type=int)
        store.insert(MultiKey([1, 2, 3, 4, 5]), 'value-string')
        current = store
        for component in (1, 2, 3, 4):
            assert len(current) == 1
            node = current.get_node(MultiKey([component]))
            assert node.is_branch
            current = node.store
        leaf = current.get_node(MultiKey([5]))
        assert leaf == ValueNode('value-string')

    def test_insert_value_over_subtree(self):
        """Test a value cannot shadow an existing subtree."""
        store = Store()
        store.insert('a.b', 'leaf')
        with pytest.raises(InsertValueOverSubtreeError):
            store.insert('a', 'root')
        assert store.get('a.b') == 'leaf'

    def test_extend_value_as_subtree(self):
        """Test a value cannot gain children."""
        store = Store()
        store.insert('a', 'leaf')
        with pytest.raises(ExtendValueAsSubtreeError):
            store.insert('a.b', 'child')
        assert store.get('a') == 'leaf'

    def test_extend_deep_value(self):
        """Test the check applies at any depth."""
        store = Store()
        store.insert('1.2.3.4', 'leaf')
        with pytest.raises(ExtendValueAsSubtreeError):
            store.insert('1.2.3.4.5', 'root')

    def test_failed_insert_leaves_no_subtree(self):
        """Test an insert error does not leave partial subtrees behind."""
        store = Store()
        store.insert('a', 'leaf')
        with pytest.raises(ExtendValueAsSubtreeError):
            store.insert('a.b.c', 'x')
        assert store.flatten() == [(k('a'), 'leaf')]

    def test_setitem(self):
        """Test item assignment with text keys."""
        store = Store()
        store['a.b'] = 1
        assert store['a.b'] == 1

    def test_custom_divider_text_keys(self):
        """Test text keys are split with the store's divider."""
        store = Store(divider='/')
        store.insert('a/b.c', 'x')
        assert store.get(MultiKey(['a', 'b.c'])) == 'x'

    def test_invalid_key_type(self):
        """Test keys must be MultiKey or text."""
        with pytest.raises(TypeError):
            Store().insert(['a'], 1)


class TestStoreGet:
    """Tests for lookups."""

    def setup_method(self):
        self.store = Store()
        self.store.insert('a.b.c', 'abc')
        self.store.insert('a.d', 'ad')

    def test_missing(self):
        """Test missing keys return None or the default."""
        assert self.store.get('x') is None
        assert self.store.get('a.x') is None
        assert self.store.get('x', 'default') == 'default'

    def test_subtree_reads_as_nothing(self):
        """Test a key resolving to a subtree gives no value."""
        assert self.store.get('a') is None
        assert self.store.get('a.b') is None

    def test_longer_key_through_value(self):
        """Test a key passing through a value does not resolve."""
        assert self.store.get('a.d.e') is None

    def test_getitem_raises(self):
        """Test item access raises KeyError for non-values."""
        with pytest.raises(KeyError):
            self.store['a']
        with pytest.raises(KeyError):
            self.store['missing']

    def test_contains(self):
        """Test membership for values and subtrees."""
        assert 'a' in self.store
        assert 'a.b.c' in self.store
        assert 'a.b.x' not in self.store
        assert 'a.d.e' not in self.store

    def test_get_node(self):
        """Test get_node returns the node or raises."""
        assert self.store.get_node('a.b').is_branch
        assert self.store.get_node('a.d') == ValueNode('ad')
        with pytest.raises(KeyError):
            self.store.get_node('nope')


class TestStoreRemove:
    """Tests for remove."""

    def test_remove_value(self):
        """Test removing a value returns it."""
        store = Store()
        store.insert('a.b', 'x')
        assert store.remove('a.b') == 'x'
        assert store.get('a.b') is None

    def test_remove_keeps_empty_ancestors(self):
        """Test ancestors left empty stay in the store."""
        store = Store()
        store.insert('a.b', 'x')
        store.remove('a.b')
        node = store.get_node('a')
        assert node.is_branch
        assert node.store.is_empty
        assert store.flatten() == []
        assert store.get_values('a') == []

    def test_remove_missing_leaves_store_unchanged(self):
        """Test removing a missing key changes nothing."""
        store = Store()
        store.insert('a.b', 'x')
        before = store.flatten()
        assert store.remove('a.c') is None
        assert store.remove('z') is None
        assert store.remove('a.b.c') is None
        assert store.flatten() == before

    def test_remove_subtree_is_refused(self):
        """Test a subtree is never removed."""
        store = Store()
        store.insert('a.b', 'x')
        assert store.remove('a', 'default') == 'default'
        assert store.get('a.b') == 'x'

    def test_delitem(self):
        """Test del removes values and raises otherwise."""
        store = Store()
        store.insert('a.b', 'x')
        with pytest.raises(KeyError):
            del store['a']
        del store['a.b']
        assert 'a.b' not in store
        with pytest.raises(KeyError):
            del store['a.b']

    def test_clear(self):
        """Test clear empties the store."""
        store = Store({'a': 1})
        store.clear()
        assert store.is_empty


class TestStoreTraversal:
    """Tests for flatten, get_values and walk."""

    def setup_method(self):
        self.store = Store()
        self.store.insert('b', 'B')
        self.store.insert('a.z', 'AZ')
        self.store.insert('a.m.x', 'AMX')
        self.store.insert('a.c', 'AC')

    def test_flatten_sorted_depth_first(self):
        """Test flatten order is pre-order and sorted at every level."""
        assert self.store.flatten() == [
            (k('a.c'), 'AC'),
            (k('a.m.x'), 'AMX'),
            (k('a.z'), 'AZ'),
            (k('b'), 'B'),
        ]

    def test_flatten_single(self):
        """Test flatten of one deep key."""
        store = Store()
        store.insert('work.team.git', 'github.com/example-repo')
        assert store.flatten() == [
            (MultiKey(['work', 'team', 'git']), 'github.com/example-repo'),
        ]

    def test_get_values_leaf(self):
        """Test get_values on a value gives the single pair."""
        assert self.store.get_values('a.m.x') == [(k('a.m.x'), 'AMX')]

    def test_get_values_subtree(self):
        """Test get_values on a subtree prefixes the subtree's pairs."""
        assert self.store.get_values('a') == [
            (k('a.c'), 'AC'),
            (k('a.m.x'), 'AMX'),
            (k('a.z'), 'AZ'),
        ]
        assert self.store.get_values('a.m') == [(k('a.m.x'), 'AMX')]

    def test_get_values_missing(self):
        """Test get_values on an unknown key is empty."""
        assert self.store.get_values('nope') == []
        assert self.store.get_values('a.q.r') == []
        assert self.store.get_values('b.c') == []

    def test_walk_includes_subtrees(self):
        """Test walk yields subtrees before their children."""
        keys = [str(key) for key, node in self.store.walk()]
        assert keys == ['a', 'a.c', 'a.m', 'a.m.x', 'a.z', 'b']

    def test_iter_sorted(self):
        """Test iteration over direct components."""
        assert list(self.store) == ['a', 'b']
        assert self.store.keys() == ['a', 'b']
        assert len(self.store) == 2

    def test_integer_components_sort_numerically(self):
        """Test non-text components use their own ordering."""
        store = Store(key_type=int)
        for text in ('10', '9', '1.2', '1.10'):
            store.insert(text, text)
        assert [str(key) for key, _ in store.flatten()] == ['1.2', '1.10', '9', '10']

    def test_as_dict(self):
        """Test conversion to nested dicts."""
        assert self.store.as_dict() == {
            'a': {'c': 'AC', 'm': {'x': 'AMX'}, 'z': 'AZ'},
            'b': 'B',
        }

    def test_equality(self):
        """Test stores with the same tree are equal."""
        other = Store(self.store.as_dict())
        assert other == self.store
        other.insert('b', 'changed')
        assert other != self.store
