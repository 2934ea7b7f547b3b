# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MultiKey - an ordered, non-empty sequence of key components.

A MultiKey identifies either a value or a subtree inside a Store. Text keys
like ``'work.team.git'`` are split on a divider character into components;
each component is converted with a ``component_type`` callable (``str`` by
default, but ``int`` or any type with ordering and ``str()`` works).

Example:
    >>> key = MultiKey.parse('work.team.git')
    >>> key.root()
    MultiKey('work')
    >>> key.tail()
    MultiKey('team', 'git')
    >>> key.to_string('/')
    'work/team/git'
"""

from __future__ import annotations

from functools import total_ordering
from typing import Any, Callable, Iterable, Iterator

from .exceptions import EmptyKeyError, ParseError

DEFAULT_DIVIDER = '.'


@total_ordering
class MultiKey:
    """Immutable multi-component key.

    Equality, hashing and ordering are lexicographic over the components,
    so keys can be compared and sorted like tuples.

    Example:
        >>> MultiKey(['a', 'b']) == MultiKey.parse('a.b')
        True
        >>> MultiKey(['a', 'b']) < MultiKey(['a', 'c'])
        True
    """

    __slots__ = ('_components',)

    def __init__(self, components: Iterable[Any]) -> None:
        """Initialize a MultiKey.

        Args:
            components: Iterable of components, at least one.

        Raises:
            EmptyKeyError: If components is empty.
        """
        components = tuple(components)
        if not components:
            raise EmptyKeyError()
        self._components = components

    @classmethod
    def from_components(cls, components: Iterable[Any]) -> MultiKey:
        """Build a key from already converted components."""
        return cls(components)

    @classmethod
    def parse(
        cls,
        text: str,
        divider: str = DEFAULT_DIVIDER,
        component_type: Callable[[str], Any] = str,
    ) -> MultiKey:
        """Parse text into a key by splitting on divider.

        Splitting an empty string gives a single empty component, not an
        error.

        Args:
            text: Key text, e.g. 'a.b.c'.
            divider: Single character separating components.
            component_type: Callable converting each token.

        Returns:
            The parsed MultiKey.

        Raises:
            ParseError: If a token cannot be converted.
        """
        components = []
        for token in text.split(divider):
            try:
                components.append(component_type(token))
            except (ValueError, TypeError) as e:
                raise ParseError(
                    f"Could not parse key component {token!r} of {text!r}"
                ) from e
        return cls(components)

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        return f"MultiKey({', '.join(repr(c) for c in self._components)})"

    def __str__(self) -> str:
        return self.to_string()

    def __len__(self) -> int:
        return len(self._components)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._components)

    def __getitem__(self, index: int) -> Any:
        return self._components[index]

    def __hash__(self) -> int:
        return hash(self._components)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MultiKey):
            return NotImplemented
        return self._components == other._components

    def __lt__(self, other: MultiKey) -> bool:
        if not isinstance(other, MultiKey):
            return NotImplemented
        return self._components < other._components

    def __add__(self, other: MultiKey) -> MultiKey:
        if not isinstance(other, MultiKey):
            return NotImplemented
        return self.append(other)

    # ==================== Decomposition ====================

    @property
    def components(self) -> tuple[Any, ...]:
        """The components as a tuple."""
        return self._components

    @property
    def first(self) -> Any:
        """The first component."""
        return self._components[0]

    @property
    def last(self) -> Any:
        """The last component."""
        return self._components[-1]

    @property
    def is_composite(self) -> bool:
        """True if the key has more than one component."""
        return len(self._components) > 1

    def root(self) -> MultiKey:
        """Return a one-component key holding the first component."""
        return MultiKey(self._components[:1])

    def tail(self) -> MultiKey:
        """Return the key without its first component.

        Raises:
            EmptyKeyError: If this key has a single component.
        """
        return MultiKey(self._components[1:])

    def parent(self) -> MultiKey:
        """Return the key without its last component.

        Raises:
            EmptyKeyError: If this key has a single component.
        """
        return MultiKey(self._components[:-1])

    def append(self, other: MultiKey) -> MultiKey:
        """Return a new key with other's components after this key's."""
        return MultiKey(self._components + other._components)

    def prefixes(self) -> Iterator[MultiKey]:
        """Yield growing prefixes of this key, from depth 1 to the full key.

        Each call returns a fresh generator.

        Example:
            >>> [str(k) for k in MultiKey.parse('a.b.c').prefixes()]
            ['a', 'a.b', 'a.b.c']
        """
        for depth in range(1, len(self._components) + 1):
            yield MultiKey(self._components[:depth])

    # ==================== Conversion ====================

    def to_string(self, divider: str = DEFAULT_DIVIDER) -> str:
        """Join the text form of the components with divider."""
        return divider.join(str(c) for c in self._components)
