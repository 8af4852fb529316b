"""Property file loading for file-backed stores.

TOML files are flattened into dotted keys. Any other file is read as
``key=value`` lines with python-dotenv. Both paths produce a flat
``dict[str, str]``; the resolution engine never sees file syntax.
"""

import io
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from dotenv import dotenv_values

from propstack.exceptions import SourceLoadError


def load_toml(text: str) -> dict[str, Any]:
    """Parse TOML text into a nested dictionary.

    Raises:
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    return tomllib.loads(text)


def flatten(data: dict[str, Any], prefix: str = "") -> dict[str, str]:
    """Flatten nested tables into dotted keys with string values.

    Args:
        data: Nested dictionary, typically parsed TOML
        prefix: Key prefix for the current nesting level

    Returns:
        Flat dictionary of property key to string value
    """
    result: dict[str, str] = {}

    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, dict):
            result.update(flatten(value, f"{full_key}."))
        else:
            result[full_key] = _to_property_value(value)

    return result


def _to_property_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, list):
        return ",".join(_to_property_value(item) for item in value)
    return str(value)


def parse_properties(text: str, name: str) -> dict[str, str]:
    """Parse property file text, choosing the syntax by file name suffix."""
    if name.endswith(".toml"):
        return flatten(load_toml(text))

    values = dotenv_values(stream=io.StringIO(text), interpolate=False)
    return {key: value if value is not None else "" for key, value in values.items()}


def read_filesystem_properties(path: str | Path, origin: str) -> dict[str, str]:
    """Read a property file from the filesystem.

    Raises:
        SourceLoadError: If the file is missing, unreadable or malformed
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise SourceLoadError(origin, "file not found")

    try:
        text = file_path.read_text(encoding="utf-8")
        return parse_properties(text, file_path.name)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise SourceLoadError(origin, str(e)) from e


def read_classpath_properties(package: str, resource: str, origin: str) -> dict[str, str]:
    """Read a property file packaged as a resource of an importable package.

    Raises:
        SourceLoadError: If the package or resource is missing, or malformed
    """
    try:
        traversable = resources.files(package).joinpath(resource)
    except (ModuleNotFoundError, TypeError) as e:
        raise SourceLoadError(origin, str(e)) from e

    if not traversable.is_file():
        raise SourceLoadError(origin, "resource not found")

    try:
        text = traversable.read_text(encoding="utf-8")
        return parse_properties(text, resource)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        raise SourceLoadError(origin, str(e)) from e
