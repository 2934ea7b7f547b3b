# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""MultiKey DB - A small embedded hierarchical key-value store.

Keys are sequences of components ('work.team.git'); the components form a
path through a tree of nested stores whose leaves are the stored values.
Stores are saved as a plain line-oriented text file.
"""

import logging

__version__ = "0.1.0"

from .exceptions import (
    CorruptFileError,
    EmptyKeyError,
    ExtendValueAsSubtreeError,
    InsertError,
    InsertValueOverSubtreeError,
    KeyComponentError,
    MultiKeyDBError,
    ParseError,
    StorageIOError,
)
from .key import DEFAULT_DIVIDER, MultiKey
from .node import StoreNode, SubtreeNode, ValueNode
from .serializer import dump, dumps, load, load_file, loads, save_file
from .store import Store

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "MultiKey",
    "Store",
    "StoreNode",
    "ValueNode",
    "SubtreeNode",
    "DEFAULT_DIVIDER",
    # Serialization
    "dump",
    "dumps",
    "load",
    "loads",
    "load_file",
    "save_file",
    # Exceptions
    "MultiKeyDBError",
    "KeyComponentError",
    "EmptyKeyError",
    "ParseError",
    "InsertError",
    "InsertValueOverSubtreeError",
    "ExtendValueAsSubtreeError",
    "CorruptFileError",
    "StorageIOError",
]
