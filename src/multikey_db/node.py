# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store node classes.

Every entry of a Store holds exactly one of two node kinds:

- ValueNode: a stored leaf value
- SubtreeNode: a nested Store, owned by the entry

A node never changes kind. Turning a leaf into a namespace (or the reverse)
means removing the entry and inserting a new one.
"""

from __future__ import annotations

from typing import Any, TYPE_CHECKING

if TYPE_CHECKING:
    from .store import Store


class StoreNode:
    """Base class of the two node kinds. Not instantiated directly."""

    __slots__ = ()

    @property
    def is_leaf(self) -> bool:
        """True if this node holds a value."""
        return False

    @property
    def is_branch(self) -> bool:
        """True if this node holds a nested Store."""
        return False


class ValueNode(StoreNode):
    """A leaf node holding a stored value.

    Example:
        >>> node = ValueNode('github.com/example-repo')
        >>> node.is_leaf
        True
    """

    __slots__ = ('value',)

    def __init__(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"ValueNode({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueNode):
            return NotImplemented
        return self.value == other.value

    @property
    def is_leaf(self) -> bool:
        return True


class SubtreeNode(StoreNode):
    """A branch node owning a nested Store."""

    __slots__ = ('store',)

    def __init__(self, store: Store) -> None:
        self.store = store

    def __repr__(self) -> str:
        return f"SubtreeNode({self.store!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SubtreeNode):
            return NotImplemented
        return self.store == other.store

    @property
    def is_branch(self) -> bool:
        return True
