"""Stores: ordered sources of property entries.

Usage:
    from propstack.stores import MapStore, contribute, lookup

    store = MapStore(entries={"db.host": "localhost"})
    lookup(store, "db.host")
"""

from propstack.stores.models import (
    BaseStore,
    EnvironmentStore,
    FileStore,
    MapStore,
    OverrideStore,
    Store,
    StoreKind,
    SystemPropertiesStore,
)
from propstack.stores.operations import contribute, defined_keys, describe, lookup

__all__ = [
    "BaseStore",
    "EnvironmentStore",
    "FileStore",
    "MapStore",
    "OverrideStore",
    "Store",
    "StoreKind",
    "SystemPropertiesStore",
    "contribute",
    "defined_keys",
    "describe",
    "lookup",
]
