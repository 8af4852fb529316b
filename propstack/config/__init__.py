"""Library settings for propstack.

Usage:
    from propstack.config import get_settings

    settings = get_settings()
    level = settings.log_level
"""

from functools import lru_cache

from propstack.config.settings import PropstackSettings


@lru_cache(maxsize=1)
def get_settings() -> PropstackSettings:
    """Get the singleton settings instance.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload settings.
    """
    return PropstackSettings()


def reload_settings() -> PropstackSettings:
    """Clear the settings cache and reload settings.

    Returns:
        Fresh PropstackSettings instance
    """
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "PropstackSettings"]
