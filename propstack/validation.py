"""Checks resolved properties against the set of expected keys."""

from collections.abc import Collection, Mapping

from propstack.exceptions import BlankPropertiesError, MissingPropertiesError
from propstack.observability.logging import get_logger, obfuscate_properties

logger = get_logger(__name__)


def validate_properties(properties: Mapping[str, str], expected: Collection[str]) -> None:
    """Validate resolved properties against expected keys.

    Does nothing when no keys are expected. Every missing key is reported
    in a single error, as is every blank key. Loaded keys that are not
    expected only produce a warning.

    Args:
        properties: Effective properties, never modified
        expected: Keys that must be present with a non-empty value

    Raises:
        MissingPropertiesError: If expected keys are not loaded
        BlankPropertiesError: If expected keys resolve to ""
    """
    if not expected:
        return

    logger.info(
        "properties_resolved",
        properties=obfuscate_properties(properties),
    )

    missing = [key for key in expected if key not in properties]
    if missing:
        logger.error("expected_properties_missing", keys=missing)
        raise MissingPropertiesError(missing)

    blank = [key for key in expected if not properties[key]]
    if blank:
        logger.error("expected_properties_blank", keys=blank)
        raise BlankPropertiesError(blank)

    extra = [key for key in properties if key not in expected]
    if extra:
        logger.warning("unexpected_properties", keys=extra)
