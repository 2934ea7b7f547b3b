# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store - the recursive multi-key database.

This module provides the Store class, the core container of the
multikey-db library. A Store maps a single key component to a node; a node
is either a stored value or a nested Store, so stores compose into a tree of
any depth addressed by MultiKeys.

Key Features:
    - **Recursive storage**: Subtree nodes own nested Store instances
    - **Leaf/namespace exclusivity**: A component is either a value or a
      subtree; switching kind requires removing it first
    - **Sorted traversal**: Entries are walked in component order at every
      level, so flatten() output is stable for a given tree shape
    - **Text keys**: Dotted text ('a.b.c') is accepted wherever a MultiKey is

Example:
    Basic usage::

        store = Store()
        store.insert('work.team.git', 'github.com/example-repo')
        store.insert('work.team.wiki', 'wiki.example.com')

        store.get('work.team.git')    # 'github.com/example-repo'
        store.get('work.team')        # None, it's a subtree
        store.get_values('work.team') # both pairs, sorted by key

    Persisting::

        with open('kv.db', 'w') as fp:
            store.write_to(fp)
        with open('kv.db') as fp:
            store = Store.from_reader(fp)
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterator, TextIO, Union

from ..exceptions import ExtendValueAsSubtreeError, InsertValueOverSubtreeError
from ..key import DEFAULT_DIVIDER, MultiKey
from ..node import StoreNode, SubtreeNode, ValueNode
from .loading import load_from_dict, load_from_list, load_from_store

logger = logging.getLogger(__name__)

KeyLike = Union[MultiKey, str]


class Store:
    """A recursive mapping from key components to value or subtree nodes.

    Store provides:
    - insert(key, value): Add or overwrite a value, creating subtrees
    - get(key) / store[key]: Read a value
    - remove(key) / del store[key]: Remove a value
    - get_values(key): All (full key, value) pairs at or below key
    - flatten(): All (full key, value) pairs, depth-first in sorted order

    Attributes:
        divider: Character joining components in text keys and in the
            serialized format.
        key_type: Callable converting a text component into a key component.
        value_type: Callable converting serialized text into a value.

    Example:
        >>> store = Store()
        >>> store['a.b'] = 'x'
        >>> store['a.b']
        'x'
        >>> store.flatten()
        [(MultiKey('a', 'b'), 'x')]
    """

    __slots__ = ('_nodes', 'divider', 'key_type', 'value_type')

    def __init__(
        self,
        source: dict | list | Store | None = None,
        divider: str = DEFAULT_DIVIDER,
        key_type: Callable[[str], Any] = str,
        value_type: Callable[[str], Any] = str,
    ) -> None:
        """Initialize a Store.

        Args:
            source: Optional initial data. Can be:
                - dict: Nested dict, dict values become subtrees
                - list: List of (key, value) tuples, inserted in order
                - Store: Deep copy of another Store
            divider: Single character used to split text keys.
            key_type: Converter for key components parsed from text.
            value_type: Converter for values parsed from text.

        Raises:
            ValueError: If divider is not a single character.

        Example:
            >>> Store({'a': 1, 'b': {'c': 2}})
            >>> Store([('x.y', 1), ('x.z', 2)])
            >>> Store(other_store)  # copy
        """
        if not isinstance(divider, str) or len(divider) != 1:
            raise ValueError(f"divider must be a single character, not {divider!r}")
        self._nodes: dict[Any, StoreNode] = {}
        self.divider = divider
        self.key_type = key_type
        self.value_type = value_type

        if source is not None:
            self._load_source(source)

    def _load_source(self, source: dict | list | Store) -> None:
        """Load data from source into this Store.

        Raises:
            TypeError: If source is not dict, list, or Store.
        """
        if isinstance(source, dict):
            load_from_dict(self, source)
        elif isinstance(source, Store):
            load_from_store(self, source)
        elif isinstance(source, list):
            load_from_list(self, source)
        else:
            raise TypeError(
                f"source must be dict, list, or Store, not {type(source).__name__}"
            )

    def _new_child(self) -> Store:
        """Create an empty Store sharing this store's configuration."""
        return Store(
            divider=self.divider,
            key_type=self.key_type,
            value_type=self.value_type,
        )

    @classmethod
    def from_reader(
        cls,
        fp: TextIO,
        key_type: Callable[[str], Any] = str,
        value_type: Callable[[str], Any] = str,
    ) -> Store:
        """Build a Store from serialized text read from fp.

        See multikey_db.serializer.load for the format and errors.
        """
        from ..serializer import load
        return load(fp, key_type=key_type, value_type=value_type)

    def write_to(self, fp: TextIO, divider: str | None = None) -> None:
        """Write this Store in serialized text form to fp."""
        from ..serializer import dump
        dump(self, fp, divider=divider)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        """Return string representation showing the sorted components."""
        return f"Store({self.keys()})"

    def __len__(self) -> int:
        """Return the number of direct entries in this store."""
        return len(self._nodes)

    def __iter__(self) -> Iterator[Any]:
        """Iterate over direct components in sorted order."""
        return iter(sorted(self._nodes))

    def __eq__(self, other: object) -> bool:
        """Stores are equal when they hold the same tree of nodes."""
        if not isinstance(other, Store):
            return NotImplemented
        return self._nodes == other._nodes

    def __contains__(self, key: KeyLike) -> bool:
        """Check if key resolves to a value or a subtree."""
        return self.find_node(key) is not None

    def __getitem__(self, key: KeyLike) -> Any:
        """Get the value at key.

        Raises:
            KeyError: If key is missing or resolves to a subtree.
        """
        node = self.find_node(key)
        if node is None or not node.is_leaf:
            raise KeyError(key)
        return node.value

    def __setitem__(self, key: KeyLike, value: Any) -> None:
        """Insert value at key (see insert)."""
        self.insert(key, value)

    def __delitem__(self, key: KeyLike) -> None:
        """Remove the value at key.

        Raises:
            KeyError: If key does not hold a value.
        """
        key = self._as_key(key)
        parent_store, component = self._traverse(key)
        node = parent_store._nodes.get(component) if parent_store is not None else None
        if node is None or not node.is_leaf:
            raise KeyError(key)
        del parent_store._nodes[component]

    @property
    def is_empty(self) -> bool:
        """True if this store has no entries."""
        return not self._nodes

    # ==================== Key Utilities ====================

    def _as_key(self, key: KeyLike) -> MultiKey:
        """Convert text into a MultiKey using this store's divider and key_type."""
        if isinstance(key, MultiKey):
            return key
        if isinstance(key, str):
            return MultiKey.parse(key, self.divider, self.key_type)
        raise TypeError(f"key must be MultiKey or str, not {type(key).__name__}")

    def _traverse(self, key: MultiKey) -> tuple[Store | None, Any]:
        """Walk down to the store holding the last component of key.

        Returns:
            Tuple of (parent_store, last_component). parent_store is None
            when an intermediate component is missing or holds a value.
        """
        current: Store = self
        for component in key.components[:-1]:
            node = current._nodes.get(component)
            if node is None or not node.is_branch:
                return None, key.last
            current = node.store
        return current, key.last

    def find_node(self, key: KeyLike) -> StoreNode | None:
        """Return the node at key, or None if key does not resolve."""
        parent_store, component = self._traverse(self._as_key(key))
        if parent_store is None:
            return None
        return parent_store._nodes.get(component)

    def get_node(self, key: KeyLike) -> StoreNode:
        """Return the node at key.

        Raises:
            KeyError: If key does not resolve.
        """
        node = self.find_node(key)
        if node is None:
            raise KeyError(key)
        return node

    # ==================== Core API ====================

    def insert(self, key: KeyLike, value: Any) -> None:
        """Insert value at key, creating intermediate subtrees as needed.

        An existing value at key is overwritten.

        Args:
            key: MultiKey or text key.
            value: Value to store.

        Raises:
            InsertValueOverSubtreeError: If key holds a subtree.
            ExtendValueAsSubtreeError: If a proper prefix of key holds a value.
        """
        key = self._as_key(key)
        logger.debug("Insert, key: %r value: %r", key, value)
        self._insert(key, value, key)

    def _insert(self, key: MultiKey, value: Any, full_key: MultiKey) -> None:
        """Recursive step of insert: peel the first component off key."""
        component = key.first
        node = self._nodes.get(component)

        if not key.is_composite:
            if node is not None and node.is_branch:
                raise InsertValueOverSubtreeError(
                    f"Cannot insert a value at '{full_key.to_string(self.divider)}': "
                    f"key is a subtree"
                )
            self._nodes[component] = ValueNode(value)
            return

        if node is None:
            child = self._new_child()
            child._insert(key.tail(), value, full_key)
            self._nodes[component] = SubtreeNode(child)
        elif node.is_branch:
            node.store._insert(key.tail(), value, full_key)
        else:
            raise ExtendValueAsSubtreeError(
                f"Cannot insert '{full_key.to_string(self.divider)}': "
                f"'{component}' holds a value"
            )

    def get(self, key: KeyLike, default: Any = None) -> Any:
        """Get the value at key.

        Args:
            key: MultiKey or text key.
            default: Returned when key is missing or resolves to a subtree.

        Returns:
            The stored value, or default.
        """
        node = self.find_node(key)
        if node is None or not node.is_leaf:
            return default
        return node.value

    def remove(self, key: KeyLike, default: Any = None) -> Any:
        """Remove and return the value at key.

        Subtrees are never removed, and ancestors left empty are kept.

        Args:
            key: MultiKey or text key.
            default: Returned when key is missing or resolves to a subtree.

        Returns:
            The removed value, or default.
        """
        key = self._as_key(key)
        parent_store, component = self._traverse(key)
        if parent_store is None:
            return default
        node = parent_store._nodes.get(component)
        if node is None or not node.is_leaf:
            return default
        del parent_store._nodes[component]
        logger.debug("Removed, key: %r", key)
        return node.value

    def clear(self) -> None:
        """Remove all entries from this store."""
        self._nodes.clear()

    # ==================== Traversal ====================

    def iter_flatten(self) -> Iterator[tuple[MultiKey, Any]]:
        """Yield (full_key, value) pairs depth-first, sorted at every level."""
        for component in sorted(self._nodes):
            node = self._nodes[component]
            root = MultiKey((component,))
            if node.is_branch:
                for sub_key, value in node.store.iter_flatten():
                    yield root.append(sub_key), value
            else:
                yield root, node.value

    def flatten(self) -> list[tuple[MultiKey, Any]]:
        """Return all (full_key, value) pairs depth-first, sorted at every level."""
        return list(self.iter_flatten())

    def iter_values(self, key: KeyLike) -> Iterator[tuple[MultiKey, Any]]:
        """Yield (full_key, value) pairs at or below key.

        Yields a single pair if key holds a value, the flattened subtree
        prefixed with key if it holds a subtree, and nothing if key does not
        resolve.
        """
        key = self._as_key(key)
        node = self.find_node(key)
        if node is None:
            return
        if node.is_leaf:
            yield key, node.value
            return
        for sub_key, value in node.store.iter_flatten():
            yield key.append(sub_key), value

    def get_values(self, key: KeyLike) -> list[tuple[MultiKey, Any]]:
        """Return (full_key, value) pairs at or below key (see iter_values)."""
        return list(self.iter_values(key))

    def walk(self) -> Iterator[tuple[MultiKey, StoreNode]]:
        """Yield (full_key, node) for every node, subtrees before their children.

        Unlike flatten(), empty subtrees are visible here.

        Example:
            >>> for key, node in store.walk():
            ...     print(key, node.is_branch)
        """
        def _walk_gen(store: Store, prefix: MultiKey | None) -> Iterator[tuple[MultiKey, StoreNode]]:
            for component in sorted(store._nodes):
                node = store._nodes[component]
                key = MultiKey((component,))
                if prefix is not None:
                    key = prefix.append(key)
                yield key, node
                if node.is_branch:
                    yield from _walk_gen(node.store, key)

        return _walk_gen(self, None)

    def keys(self) -> list[Any]:
        """Return direct components in sorted order."""
        return sorted(self._nodes)

    def nodes(self) -> list[StoreNode]:
        """Return direct nodes in sorted component order."""
        return [self._nodes[c] for c in sorted(self._nodes)]

    # ==================== Conversion ====================

    def as_dict(self) -> dict[Any, Any]:
        """Convert to a plain nested dict, subtrees becoming dicts."""
        result: dict[Any, Any] = {}
        for component in sorted(self._nodes):
            node = self._nodes[component]
            if node.is_branch:
                result[component] = node.store.as_dict()
            else:
                result[component] = node.value
        return result
