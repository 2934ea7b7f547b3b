# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""User-facing commands shared by the command line and the interactive prompt.

Each command works on a Store and writes its output to a text stream.
Store errors propagate to the caller, which decides whether to report and
continue or to stop.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

from .key import DEFAULT_DIVIDER, MultiKey
from .serializer import dump
from .store import Store

_MISSING = object()


def add(store: Store, key: MultiKey, value: Any) -> None:
    """Insert value at key."""
    store.insert(key, value)


def get(
    store: Store,
    key: MultiKey,
    out: TextIO | None = None,
    divider: str = DEFAULT_DIVIDER,
) -> int:
    """Print every (key, value) pair at or below key.

    Returns:
        Number of pairs printed.
    """
    out = out or sys.stdout
    count = 0
    for full_key, value in store.iter_values(key):
        out.write(f"{full_key.to_string(divider)}:\t{value}\n")
        count += 1
    out.flush()
    return count


def remove(store: Store, key: MultiKey, out: TextIO | None = None) -> Any:
    """Remove the value at key, printing it if something was removed."""
    out = out or sys.stdout
    value = store.remove(key, _MISSING)
    if value is _MISSING:
        return None
    out.write(f"Removed: {value}\n")
    out.flush()
    return value


def print_store(store: Store, out: TextIO | None = None) -> None:
    """Write the whole store in its serialized form."""
    dump(store, out or sys.stdout)
