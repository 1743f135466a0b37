"""Dependency injection for the carpool API.

``PROVIDERS`` lists every provider the container is built from. Concrete
providers are used as they are. A mockable base (one with subclasses) is
resolved to its production or mock subclass by ``get_provider``.
"""

from typing import Type

from carpool.util.di.application import ProdApplicationProvider
from carpool.util.di.base import Component, ProviderBase
from carpool.util.di.core import ProdConfigProvider
from carpool.util.di.domain import ProdDomainProvider
from carpool.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdRealtimeProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # The hub is process-local; there is nothing to mock
    ProdRealtimeProvider,
    # Postgres in production, InMemoryStore in tests
    PersistenceProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the provider class to instantiate for ``base``.

    Raises:
        ValueError: If a mockable base has no subclass of the requested kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__}")


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "ProdRealtimeProvider",
    "PersistenceProvider",
    "ProdPersistenceProvider",
]
