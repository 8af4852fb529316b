"""Exception hierarchy for property resolution.

All errors inherit from PropstackError, which carries a human-readable
message. Every fatal condition is raised while the properties are being
built, so a caller never receives a partially resolved instance.
"""


class PropstackError(Exception):
    """Base exception for all property resolution errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class SourceLoadError(PropstackError):
    """Raised when a declared property file cannot be located, read or parsed."""

    def __init__(self, origin: str, reason: str) -> None:
        self.origin = origin
        self.reason = reason
        super().__init__(f"Unable to load properties from {origin}: {reason}")


class PropertyValidationError(PropstackError):
    """Base exception for expected-property checks.

    Subclasses carry every offending key at once.
    """

    def __init__(self, message: str, keys: list[str]) -> None:
        self.keys = keys
        super().__init__(f"{message} {keys}")


class MissingPropertiesError(PropertyValidationError):
    """Raised when expected properties are not loaded by any store."""

    def __init__(self, keys: list[str]) -> None:
        super().__init__("Expected properties is not loaded", keys)


class BlankPropertiesError(PropertyValidationError):
    """Raised when expected properties resolve to an empty value."""

    def __init__(self, keys: list[str]) -> None:
        super().__init__("Expected properties is defined without value", keys)


class ProviderNotFoundError(PropstackError):
    """Raised when no registered provider factory matches a name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(
            f"No provider found for alias or class name: {name}. "
            f"Available: {available}"
        )
