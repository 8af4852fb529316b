"""Registry of provider factories configured from resolved properties.

Factories are registered explicitly at startup; nothing is discovered
by scanning modules. A factory can be looked up by its alias or by the
name of either the factory class or the class it provides.
"""

from collections.abc import Mapping
from typing import Any, Generic, Protocol, TypeVar

from propstack.exceptions import ProviderNotFoundError
from propstack.observability.logging import get_logger

logger = get_logger(__name__)

P = TypeVar("P", covariant=True)


class ProviderFactory(Protocol[P]):
    """Creates a provider from resolved application properties."""

    alias: str
    provider_class: type

    def create(self, properties: Mapping[str, str]) -> P: ...


def _qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _names_of(factory: ProviderFactory[Any]) -> set[str]:
    factory_class = type(factory)
    return {
        factory.alias,
        factory_class.__name__,
        _qualified_name(factory_class),
        factory.provider_class.__name__,
        _qualified_name(factory.provider_class),
    }


class ProviderRegistry(Generic[P]):
    """Factories for one kind of provider, in registration order.

    When several factories answer to the same name, the first one
    registered is returned.
    """

    def __init__(self, factories: list[ProviderFactory[P]] | None = None) -> None:
        self._factories: list[ProviderFactory[P]] = []
        for factory in factories or []:
            self.register(factory)

    def register(self, factory: ProviderFactory[P]) -> None:
        """Register a provider factory.

        Args:
            factory: Factory with an alias and a provider class
        """
        logger.debug(
            "provider_factory_registered",
            alias=factory.alias,
            provider_class=_qualified_name(factory.provider_class),
        )
        self._factories.append(factory)

    def factory_of(self, name: str) -> ProviderFactory[P]:
        """Find the factory answering to an alias or class name.

        Raises:
            ProviderNotFoundError: If no registered factory matches
        """
        for factory in self._factories:
            if name in _names_of(factory):
                return factory
        raise ProviderNotFoundError(name, self.available_aliases)

    def configure(self, properties: Mapping[str, str], name: str) -> P:
        """Create a provider using the factory answering to name.

        Args:
            properties: Resolved application properties
            name: Alias or class name of the factory or its provider

        Returns:
            The created provider

        Raises:
            ProviderNotFoundError: If no registered factory matches
        """
        factory = self.factory_of(name)
        logger.info("provider_configured", name=name, alias=factory.alias)
        return factory.create(properties)

    @property
    def available_aliases(self) -> list[str]:
        """Aliases of all registered factories."""
        return [factory.alias for factory in self._factories]
