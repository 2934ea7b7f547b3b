# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Functions for loading a Store from dict, list, or another Store."""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

from ..node import SubtreeNode, ValueNode

if TYPE_CHECKING:
    from .core import Store


def load_from_dict(store: Store, source: dict[Any, Any]) -> None:
    """Load a nested dict into an empty store.

    Dict keys are used as components without parsing. A dict value becomes
    a subtree (an empty dict gives an empty subtree), anything else a value.

    Example:
        >>> load_from_dict(store, {'config': {'host': 'localhost'}})
        >>> store.get('config.host')
        'localhost'
    """
    for component, value in source.items():
        if isinstance(value, dict):
            child = store._new_child()
            load_from_dict(child, value)
            store._nodes[component] = SubtreeNode(child)
        else:
            store._nodes[component] = ValueNode(value)


def load_from_list(store: Store, source: list[tuple[Any, Any]]) -> None:
    """Insert a list of (key, value) tuples in order.

    Keys may be MultiKey instances or text keys.

    Raises:
        InsertError: If two keys violate leaf/subtree exclusivity.
    """
    for item in source:
        key, value = item
        store.insert(key, value)


def load_from_store(store: Store, source: Store) -> None:
    """Deep copy the tree of source into store, keeping empty subtrees."""
    for component, node in source._nodes.items():
        if node.is_branch:
            child = store._new_child()
            load_from_store(child, node.store)
            store._nodes[component] = SubtreeNode(child)
        else:
            store._nodes[component] = ValueNode(node.value)
