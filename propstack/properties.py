"""Store-based application properties.

Stores are registered on a builder from lowest to highest priority. At
build time the stores are folded in that order into one effective
mapping, so the last registered store wins for any key several stores
define. The mapping is computed once and never re-resolved.

Usage:
    from propstack import ApplicationProperties

    properties = (
        ApplicationProperties.builder()
        .map({"db.host": "localhost", "db.port": "5432"})
        .filesystem_properties_file("local.properties")
        .enable_environment_variables("APP_")
        .expected_properties("db.host", "db.port")
        .build()
    )
    host = properties.get("db.host")
"""

from collections.abc import Iterable, Iterator, Mapping, Sequence
from pathlib import Path
from types import MappingProxyType
from typing import Self

from pydantic import BaseModel, ConfigDict

from propstack.observability.logging import get_logger
from propstack.snapshot import ProcessSnapshot
from propstack.stores import (
    EnvironmentStore,
    FileStore,
    MapStore,
    Store,
    StoreKind,
    SystemPropertiesStore,
    contribute,
    defined_keys,
    describe,
    lookup,
)
from propstack.stores.files import read_classpath_properties, read_filesystem_properties
from propstack.validation import validate_properties

logger = get_logger(__name__)


class Source(BaseModel):
    """A store that defines a key, for tracing where a value came from."""

    model_config = ConfigDict(frozen=True)

    store: Store
    key: str

    @property
    def origin(self) -> str:
        return describe(self.store)

    @property
    def value(self) -> str | None:
        return lookup(self.store, self.key)

    def __str__(self) -> str:
        return f"{self.origin}: {self.key}={self.value}"


class ApplicationProperties(Mapping[str, str]):
    """Immutable effective properties resolved from an ordered store list."""

    def __init__(self, stores: Sequence[Store]) -> None:
        self._stores: tuple[Store, ...] = tuple(stores)
        self._effective: Mapping[str, str] = MappingProxyType(self._resolve())

    @classmethod
    def builder(cls, snapshot: ProcessSnapshot | None = None) -> "ApplicationPropertiesBuilder":
        return ApplicationPropertiesBuilder(snapshot)

    def _resolve(self) -> dict[str, str]:
        effective: dict[str, str] = {}
        for store in self._stores:
            contribute(store, effective)
        logger.debug(
            "properties_folded",
            stores=[describe(store) for store in self._stores],
            keys=len(effective),
        )
        return effective

    @property
    def stores(self) -> tuple[Store, ...]:
        """Registered stores, lowest priority first."""
        return self._stores

    def map(self) -> Mapping[str, str]:
        """Read-only view of the effective properties."""
        return self._effective

    def get(self, name: str, default: str | None = None) -> str | None:
        return self._effective.get(name, default)

    def sources_of(self, name: str) -> list[Source]:
        """Every store defining name, in registration order.

        Environment stores are asked for the escaped name of the key only,
        so a variable with a non-canonical name (``APP_db_host``) can set
        the effective value without being listed here.
        """
        return [
            Source(store=store, key=name)
            for store in self._stores
            if lookup(store, name) is not None
        ]

    def __getitem__(self, name: str) -> str:
        return self._effective[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._effective)

    def __len__(self) -> int:
        return len(self._effective)

    def __repr__(self) -> str:
        return f"ApplicationProperties(stores={[describe(s) for s in self._stores]})"


class ValueBuilder:
    """Collects individual values into one store registered on end()."""

    def __init__(self, parent: "ApplicationPropertiesBuilder") -> None:
        self._parent = parent
        self._values: dict[str, str] = {}

    def put(self, name: str, value: str) -> Self:
        self._values[name] = value
        return self

    def end(self) -> "ApplicationPropertiesBuilder":
        return self._parent._register(MapStore(kind=StoreKind.VALUES, entries=self._values))


class ApplicationPropertiesBuilder:
    """Registers stores in priority order, lowest first, then builds.

    File-backed stores are read as soon as they are registered.
    """

    def __init__(self, snapshot: ProcessSnapshot | None = None) -> None:
        self._snapshot = snapshot if snapshot is not None else ProcessSnapshot.capture()
        self._stores: list[Store] = []
        self._expected: dict[str, None] = {}
        self._casing_aliases: dict[str, None] = {}

    def _register(self, store: Store) -> Self:
        logger.debug("store_registered", store=describe(store), priority=len(self._stores))
        self._stores.append(store)
        return self

    def map(self, mapping: Mapping[str, str]) -> Self:
        return self._register(MapStore(entries=dict(mapping)))

    def values(self) -> ValueBuilder:
        return ValueBuilder(self)

    def classpath_properties_file(self, package: str, resource: str) -> Self:
        """Register a property file packaged as a resource of package.

        Raises:
            SourceLoadError: If the resource cannot be read
        """
        location = f"{package.replace('.', '/')}/{resource}"
        origin = describe(FileStore(kind=StoreKind.CLASSPATH, location=location))
        entries = read_classpath_properties(package, resource, origin)
        return self._register(
            FileStore(kind=StoreKind.CLASSPATH, location=location, entries=entries)
        )

    def filesystem_properties_file(self, path: str | Path) -> Self:
        """Register a property file on the filesystem.

        Raises:
            SourceLoadError: If the file cannot be read
        """
        location = str(path)
        origin = describe(FileStore(kind=StoreKind.FILESYSTEM, location=location))
        entries = read_filesystem_properties(path, origin)
        return self._register(
            FileStore(kind=StoreKind.FILESYSTEM, location=location, entries=entries)
        )

    def enable_environment_variables(self, prefix: str = "") -> Self:
        return self._register(
            EnvironmentStore(prefix=prefix, escaping=True, environ=self._snapshot.environ)
        )

    def enable_environment_variables_without_escaping(self, prefix: str = "") -> Self:
        return self._register(
            EnvironmentStore(prefix=prefix, escaping=False, environ=self._snapshot.environ)
        )

    def enable_system_properties(self, prefix: str = "") -> Self:
        return self._register(
            SystemPropertiesStore(
                prefix=prefix, properties=self._snapshot.system_properties
            )
        )

    def alias_as_lowercase(self, name: str) -> Self:
        """Allow a mixed-case key to be overridden from the environment."""
        self._casing_aliases[name] = None
        return self

    def expected_properties(self, *names: str | Iterable[str]) -> Self:
        """Declare keys that must resolve to a non-empty value."""
        for name in names:
            if isinstance(name, str):
                self._expected[name] = None
            else:
                self._expected.update(dict.fromkeys(name))
        return self

    def build(self) -> ApplicationProperties:
        """Resolve and validate the registered stores.

        Raises:
            MissingPropertiesError: If expected properties are not loaded
            BlankPropertiesError: If expected properties are empty
        """
        base_keys = frozenset().union(*(defined_keys(store) for store in self._stores))
        casing_aliases = frozenset(self._casing_aliases)

        stores: list[Store] = []
        for store in self._stores:
            match store:
                case EnvironmentStore():
                    store = store.model_copy(
                        update={"base_keys": base_keys, "casing_aliases": casing_aliases}
                    )
                case SystemPropertiesStore():
                    store = store.model_copy(update={"base_keys": base_keys})
            stores.append(store)

        properties = ApplicationProperties(stores)
        validate_properties(properties.map(), list(self._expected))
        return properties
