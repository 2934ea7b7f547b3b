# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MultiKey DB exceptions."""

from __future__ import annotations


class MultiKeyDBError(Exception):
    """Base exception for MultiKey DB errors."""

    pass


class KeyComponentError(MultiKeyDBError):
    """Base exception for errors building a MultiKey or parsing text."""

    pass


class EmptyKeyError(KeyComponentError):
    """Raised when a key with zero components would be created."""

    def __init__(self, message: str = "Input key had a size of 0") -> None:
        super().__init__(message)


class ParseError(KeyComponentError):
    """Raised when a key component or a value cannot be converted from text."""

    pass


class InsertError(MultiKeyDBError):
    """Base exception for leaf/subtree exclusivity violations on insert."""

    pass


class InsertValueOverSubtreeError(InsertError):
    """Raised when a value is inserted at a key that holds a subtree."""

    pass


class ExtendValueAsSubtreeError(InsertError):
    """Raised when a longer key would extend a key that holds a value."""

    pass


class CorruptFileError(MultiKeyDBError):
    """Raised when serialized text has a bad header or a line without a tab."""

    pass


class StorageIOError(MultiKeyDBError):
    """Raised when the underlying stream or file fails.

    The original ``OSError`` is kept as ``__cause__``.
    """

    pass
