"""Unit tests for store lookup, contribution and description."""

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from propstack.stores import (
    EnvironmentStore,
    FileStore,
    MapStore,
    StoreKind,
    SystemPropertiesStore,
    contribute,
    defined_keys,
    describe,
    lookup,
)


class TestMapStore:
    """Tests for map stores."""

    def test_lookup_returns_entry(self) -> None:
        """Defined keys are returned."""
        store = MapStore(entries={"db.host": "localhost"})
        assert lookup(store, "db.host") == "localhost"

    def test_lookup_missing_returns_none(self) -> None:
        """Undefined keys return None."""
        store = MapStore(entries={"db.host": "localhost"})
        assert lookup(store, "db.port") is None

    def test_contribute_overwrites(self) -> None:
        """Contributed entries replace existing values."""
        accumulator = {"db.host": "old", "db.port": "5432"}
        contribute(MapStore(entries={"db.host": "new"}), accumulator)
        assert accumulator == {"db.host": "new", "db.port": "5432"}

    def test_describe(self) -> None:
        """Map and values stores have distinct descriptions."""
        assert describe(MapStore()) == "Map"
        assert describe(MapStore(kind=StoreKind.VALUES)) == "Values"

    def test_defined_keys(self) -> None:
        """Base stores report their keys."""
        store = MapStore(entries={"a": "1", "b": "2"})
        assert defined_keys(store) == frozenset({"a", "b"})

    def test_store_is_frozen(self) -> None:
        """Stores cannot be reassigned after construction."""
        store = MapStore(entries={"a": "1"})
        with pytest.raises(ValidationError):
            store.entries = {}  # type: ignore[misc]

    def test_entries_reject_item_assignment(self) -> None:
        """Entries cannot be changed in place after construction."""
        store = MapStore(entries={"a": "1"})
        with pytest.raises(TypeError):
            store.entries["a"] = "changed"  # type: ignore[index]
        assert lookup(store, "a") == "1"

    def test_entries_copied_from_input(self) -> None:
        """Changing the caller's dict does not reach the store."""
        entries = {"a": "1"}
        store = MapStore(entries=entries)
        entries["a"] = "changed"
        assert lookup(store, "a") == "1"

    def test_equal_stores_hash_equal(self) -> None:
        """Stores with equal content are equal and hashable."""
        first = MapStore(entries={"a": "1"})
        second = MapStore(entries={"a": "1"})
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second, MapStore(entries={"a": "2"})}) == 2


class TestFileStore:
    """Tests for file stores."""

    def test_lookup_and_contribute(self) -> None:
        """File entries are visible unconditionally."""
        store = FileStore(
            kind=StoreKind.FILESYSTEM,
            location="/etc/app.properties",
            entries={"db.host": "filehost"},
        )
        accumulator: dict[str, str] = {}
        contribute(store, accumulator)
        assert lookup(store, "db.host") == "filehost"
        assert accumulator == {"db.host": "filehost"}

    def test_describe(self) -> None:
        """Filesystem and classpath stores name their location."""
        filesystem = FileStore(kind=StoreKind.FILESYSTEM, location="conf/app.properties")
        classpath = FileStore(kind=StoreKind.CLASSPATH, location="myapp/app.properties")
        assert describe(filesystem) == "File 'conf/app.properties'"
        assert describe(classpath) == "Classpath resource 'myapp/app.properties'"


class TestEnvironmentStore:
    """Tests for environment stores."""

    def test_overrides_base_key(self) -> None:
        """Escaped variables override keys in the base set."""
        store = EnvironmentStore(
            prefix="APP_",
            environ={"APP_DB_HOST": "prod"},
            base_keys=frozenset({"db.host"}),
        )
        accumulator = {"db.host": "localhost"}
        contribute(store, accumulator)
        assert accumulator == {"db.host": "prod"}
        assert lookup(store, "db.host") == "prod"

    def test_never_introduces_new_key(self) -> None:
        """Variables for keys outside the base set are ignored."""
        store = EnvironmentStore(
            prefix="APP_",
            environ={"APP_DB_HOST": "prod"},
            base_keys=frozenset({"db.port"}),
        )
        accumulator: dict[str, str] = {}
        contribute(store, accumulator)
        assert accumulator == {}
        assert lookup(store, "db.host") is None

    def test_prefix_filters_variables(self) -> None:
        """Only variables with the prefix participate."""
        store = EnvironmentStore(
            prefix="APP_",
            environ={"OTHER_DB_HOST": "other", "DB_HOST": "bare"},
            base_keys=frozenset({"db.host"}),
        )
        accumulator = {"db.host": "localhost"}
        contribute(store, accumulator)
        assert accumulator == {"db.host": "localhost"}

    def test_without_escaping_uses_literal_names(self) -> None:
        """Without escaping, stripped names are used verbatim."""
        store = EnvironmentStore(
            escaping=False,
            environ={"db.host": "literal", "DB_HOST": "escaped"},
            base_keys=frozenset({"db.host"}),
        )
        accumulator = {"db.host": "localhost"}
        contribute(store, accumulator)
        assert accumulator == {"db.host": "literal"}
        assert lookup(store, "db.host") == "literal"

    def test_mixed_case_key_skipped_without_alias(self) -> None:
        """Keys with uppercase letters are not overridden unless aliased."""
        store = EnvironmentStore(
            environ={"DB_HOST": "prod", "db.Host": "literal"},
            base_keys=frozenset({"db.Host"}),
        )
        accumulator = {"db.Host": "localhost"}
        contribute(store, accumulator)
        assert accumulator == {"db.Host": "localhost"}
        assert lookup(store, "db.Host") is None

    def test_mixed_case_key_overridden_with_alias(self) -> None:
        """An aliased mixed-case key is overridden by its escaped name."""
        store = EnvironmentStore(
            environ={"DB_HOST": "prod"},
            base_keys=frozenset({"db.Host"}),
            casing_aliases=frozenset({"db.Host"}),
        )
        accumulator = {"db.Host": "localhost"}
        contribute(store, accumulator)
        assert accumulator == {"db.Host": "prod"}
        assert lookup(store, "db.Host") == "prod"

    def test_literal_name_collision_warns(self) -> None:
        """A variable named like an existing key logs a warning and still applies."""
        store = EnvironmentStore(
            environ={"db.host": "literal"},
            base_keys=frozenset({"db.host"}),
        )
        accumulator = {"db.host": "localhost"}
        with capture_logs() as logs:
            contribute(store, accumulator)

        warnings = [log for log in logs if log["log_level"] == "warning"]
        assert len(warnings) == 1
        assert warnings[0]["event"] == "environment_variable_name_collision"
        assert warnings[0]["variable"] == "db.host"
        assert warnings[0]["use_instead"] == "DB_HOST"
        assert accumulator == {"db.host": "literal"}

    def test_describe(self) -> None:
        """Description mentions the prefix when there is one."""
        assert describe(EnvironmentStore()) == "Environment-variables"
        assert describe(EnvironmentStore(prefix="APP_")) == "Environment-variables 'APP_*'"

    def test_defined_keys_empty(self) -> None:
        """Environment stores never contribute base keys."""
        store = EnvironmentStore(environ={"DB_HOST": "prod"})
        assert defined_keys(store) == frozenset()


class TestSystemPropertiesStore:
    """Tests for system property stores."""

    def test_overrides_base_key(self) -> None:
        """System properties override keys in the base set."""
        store = SystemPropertiesStore(
            properties={"db.host": "sysprop"},
            base_keys=frozenset({"db.host"}),
        )
        accumulator = {"db.host": "localhost"}
        contribute(store, accumulator)
        assert accumulator == {"db.host": "sysprop"}
        assert lookup(store, "db.host") == "sysprop"

    def test_never_introduces_new_key(self) -> None:
        """System properties outside the base set are ignored."""
        store = SystemPropertiesStore(properties={"other": "x"})
        accumulator: dict[str, str] = {}
        contribute(store, accumulator)
        assert accumulator == {}
        assert lookup(store, "other") is None

    def test_prefix_is_stripped(self) -> None:
        """The prefix is stripped before matching base keys."""
        store = SystemPropertiesStore(
            prefix="app.",
            properties={"app.db.host": "sysprop", "db.host": "unprefixed"},
            base_keys=frozenset({"db.host"}),
        )
        accumulator = {"db.host": "localhost"}
        contribute(store, accumulator)
        assert accumulator == {"db.host": "sysprop"}
        assert lookup(store, "db.host") == "sysprop"

    def test_describe(self) -> None:
        """Description mentions the prefix when there is one."""
        assert describe(SystemPropertiesStore()) == "System-properties"
        assert describe(SystemPropertiesStore(prefix="app.")) == "System-properties 'app.*'"

    def test_properties_reject_item_assignment(self) -> None:
        """System properties cannot be changed in place."""
        store = SystemPropertiesStore(properties={"db.host": "sysprop"})
        with pytest.raises(TypeError):
            store.properties["db.host"] = "changed"  # type: ignore[index]
