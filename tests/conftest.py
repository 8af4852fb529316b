"""Shared test fixtures for the propstack test suite."""

from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog

from propstack.snapshot import ProcessSnapshot


@pytest.fixture
def snapshot_factory() -> Callable[..., ProcessSnapshot]:
    """Factory fixture for deterministic process snapshots.

    Usage:
        def test_something(snapshot_factory):
            snapshot = snapshot_factory(environ={"APP_DB_HOST": "prod"})
    """

    def _create_snapshot(
        environ: dict[str, str] | None = None,
        system_properties: dict[str, str] | None = None,
    ) -> ProcessSnapshot:
        return ProcessSnapshot(
            environ=environ or {},
            system_properties=system_properties or {},
        )

    return _create_snapshot


@pytest.fixture
def empty_snapshot(snapshot_factory: Callable[..., ProcessSnapshot]) -> ProcessSnapshot:
    """Snapshot with no environment variables or system properties."""
    return snapshot_factory()


@pytest.fixture
def properties_file(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory fixture to create property files in a temporary directory.

    Usage:
        def test_something(properties_file):
            path = properties_file("app.properties", "db.host=localhost")
    """

    def _create_file(filename: str, content: str) -> Path:
        path = tmp_path / filename
        path.write_text(content)
        return path

    return _create_file


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test."""
    from propstack.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def reset_logging() -> Generator[None, None, None]:
    """Restore default structlog configuration after each test."""
    yield
    structlog.reset_defaults()
