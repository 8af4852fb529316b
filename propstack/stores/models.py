"""Store variants taking part in property resolution.

Each variant is a frozen model tagged with a ``kind``. The set of
variants is closed: ``Store`` is the discriminated union of all of them
and the operations in ``propstack.stores.operations`` match over it.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Literal

from pydantic import AfterValidator, BaseModel, ConfigDict, Field


class StoreKind(str, Enum):
    """Tag identifying a store variant."""

    MAP = "map"
    VALUES = "values"
    CLASSPATH = "classpath"
    FILESYSTEM = "filesystem"
    ENVIRONMENT = "environment"
    SYSTEM_PROPERTIES = "system_properties"


def _read_only(value: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(value))


def empty_map() -> Mapping[str, str]:
    return MappingProxyType({})


# Validated copy behind a read-only proxy; in-place mutation raises TypeError
ReadOnlyMap = Annotated[Mapping[str, str], AfterValidator(_read_only)]


class _FrozenStore(BaseModel):
    model_config = ConfigDict(frozen=True)

    def __hash__(self) -> int:
        return hash((
            type(self),
            *(
                frozenset(value.items()) if isinstance(value, Mapping) else value
                for value in self.__dict__.values()
            ),
        ))


class MapStore(_FrozenStore):
    """Caller-supplied entries, all visible unconditionally."""

    kind: Literal[StoreKind.MAP, StoreKind.VALUES] = StoreKind.MAP
    entries: ReadOnlyMap = Field(default_factory=empty_map)


class FileStore(_FrozenStore):
    """Entries parsed from a property file at registration time."""

    kind: Literal[StoreKind.CLASSPATH, StoreKind.FILESYSTEM]
    location: str = Field(..., description="File path or package/resource path")
    entries: ReadOnlyMap = Field(default_factory=empty_map)


class EnvironmentStore(_FrozenStore):
    """Environment variables that may override base properties."""

    kind: Literal[StoreKind.ENVIRONMENT] = StoreKind.ENVIRONMENT
    prefix: str = ""
    escaping: bool = True
    environ: ReadOnlyMap = Field(default_factory=empty_map)
    base_keys: frozenset[str] = Field(
        default_factory=frozenset,
        description="Keys this store is allowed to override",
    )
    casing_aliases: frozenset[str] = Field(
        default_factory=frozenset,
        description="Mixed-case keys eligible for override",
    )


class SystemPropertiesStore(_FrozenStore):
    """System properties that may override base properties."""

    kind: Literal[StoreKind.SYSTEM_PROPERTIES] = StoreKind.SYSTEM_PROPERTIES
    prefix: str = ""
    properties: ReadOnlyMap = Field(default_factory=empty_map)
    base_keys: frozenset[str] = Field(default_factory=frozenset)


Store = Annotated[
    MapStore | FileStore | EnvironmentStore | SystemPropertiesStore,
    Field(discriminator="kind"),
]

BaseStore = MapStore | FileStore
OverrideStore = EnvironmentStore | SystemPropertiesStore
