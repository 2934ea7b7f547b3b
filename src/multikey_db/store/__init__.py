# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Store package - the recursive multi-key database.

The package is organized into:
- core: Main Store class with insert, lookup, removal and traversal
- loading: Functions for loading data from dict, list, or Store sources

Example:
    >>> from multikey_db import Store
    >>> store = Store()
    >>> store.insert('config.name', 'MyApp')
    >>> store['config.name']
    'MyApp'
"""

from .core import Store

__all__ = ["Store"]
