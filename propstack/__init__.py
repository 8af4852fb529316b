"""Layered application properties.

Resolves configuration from maps, property files, environment variables
and system properties into one immutable mapping, and explains which
stores define each key.

Usage:
    from propstack import ApplicationProperties

    properties = (
        ApplicationProperties.builder()
        .map({"db.host": "localhost"})
        .enable_environment_variables("APP_")
        .build()
    )
"""

from propstack.escaping import EscapingCodec, escape, unescape
from propstack.exceptions import (
    BlankPropertiesError,
    MissingPropertiesError,
    PropertyValidationError,
    PropstackError,
    ProviderNotFoundError,
    SourceLoadError,
)
from propstack.properties import (
    ApplicationProperties,
    ApplicationPropertiesBuilder,
    Source,
    ValueBuilder,
)
from propstack.providers import ProviderFactory, ProviderRegistry
from propstack.snapshot import ProcessSnapshot

__all__ = [
    "ApplicationProperties",
    "ApplicationPropertiesBuilder",
    "BlankPropertiesError",
    "EscapingCodec",
    "MissingPropertiesError",
    "ProcessSnapshot",
    "PropertyValidationError",
    "PropstackError",
    "ProviderFactory",
    "ProviderNotFoundError",
    "ProviderRegistry",
    "SourceLoadError",
    "Source",
    "ValueBuilder",
    "escape",
    "unescape",
]
