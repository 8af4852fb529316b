"""The store capability: point lookup, bulk contribution and description.

Environment and system-property stores only ever override keys that a
map or file store already defines (the store's ``base_keys``).
"""

from typing import assert_never

from propstack.escaping import EscapingCodec
from propstack.observability.logging import get_logger
from propstack.stores.models import (
    EnvironmentStore,
    FileStore,
    MapStore,
    Store,
    StoreKind,
    SystemPropertiesStore,
)

logger = get_logger(__name__)


def lookup(store: Store, key: str) -> str | None:
    """Return the value this store provides for key, or None."""
    match store:
        case MapStore() | FileStore():
            return store.entries.get(key)
        case EnvironmentStore():
            if key not in store.base_keys:
                return None
            if not _casing_allowed(store, key):
                return None
            codec = EscapingCodec(store.escaping)
            return store.environ.get(store.prefix + codec.encode(key))
        case SystemPropertiesStore():
            if key not in store.base_keys:
                return None
            return store.properties.get(store.prefix + key)
        case _:
            assert_never(store)


def contribute(store: Store, accumulator: dict[str, str]) -> None:
    """Merge this store's visible entries into accumulator, overwriting."""
    match store:
        case MapStore() | FileStore():
            accumulator.update(store.entries)
        case EnvironmentStore():
            _contribute_environment(store, accumulator)
        case SystemPropertiesStore():
            for name, value in store.properties.items():
                if not name.startswith(store.prefix):
                    continue
                key = name[len(store.prefix) :]
                if key in store.base_keys:
                    accumulator[key] = value
        case _:
            assert_never(store)


def _contribute_environment(store: EnvironmentStore, accumulator: dict[str, str]) -> None:
    codec = EscapingCodec(store.escaping)
    alias_by_lowercase = {alias.lower(): alias for alias in store.casing_aliases}

    for name, value in store.environ.items():
        if not name.startswith(store.prefix):
            continue
        stripped = name[len(store.prefix) :]

        if store.escaping and stripped in accumulator:
            logger.warning(
                "environment_variable_name_collision",
                variable=stripped,
                use_instead=store.prefix + codec.encode(stripped),
            )

        candidate = codec.decode(stripped)
        key = alias_by_lowercase.get(candidate, candidate)
        if not _casing_allowed(store, key):
            continue
        if key in store.base_keys:
            accumulator[key] = value


def _casing_allowed(store: EnvironmentStore, key: str) -> bool:
    # Keys with uppercase letters need an explicit alias.
    return key == key.lower() or key in store.casing_aliases


def describe(store: Store) -> str:
    """Human-readable origin of a store, used in diagnostics."""
    match store:
        case MapStore():
            return "Values" if store.kind == StoreKind.VALUES else "Map"
        case FileStore():
            if store.kind == StoreKind.CLASSPATH:
                return f"Classpath resource '{store.location}'"
            return f"File '{store.location}'"
        case EnvironmentStore():
            if not store.prefix:
                return "Environment-variables"
            return f"Environment-variables '{store.prefix}*'"
        case SystemPropertiesStore():
            if not store.prefix:
                return "System-properties"
            return f"System-properties '{store.prefix}*'"
        case _:
            assert_never(store)


def defined_keys(store: Store) -> frozenset[str]:
    """Keys a base store contributes; override stores contribute none."""
    match store:
        case MapStore() | FileStore():
            return frozenset(store.entries)
        case EnvironmentStore() | SystemPropertiesStore():
            return frozenset()
        case _:
            assert_never(store)
