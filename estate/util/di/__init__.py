"""Dishka providers and implementation selection.

Every entry in ``PROVIDERS`` is either a concrete provider, used as-is,
or a component base whose subclasses are a production and a mock
implementation.
"""

from typing import Type

from estate.util.di.application import ProdApplicationProvider
from estate.util.di.base import Component, ProviderBase
from estate.util.di.core import ProdConfigProvider
from estate.util.di.domain import ProdDomainProvider
from estate.util.di.infrastructure import (
    FederatedAggregatorProvider,
    GoogleProvider,
    NotificationProvider,
    PersistenceProvider,
    ProdGoogleProvider,
    ProdNotificationProvider,
    ProdPersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    GoogleProvider,
    NotificationProvider,
    PersistenceProvider,
    FederatedAggregatorProvider,
]


def mockable_components() -> set[str]:
    """Names of the components that have a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__mock_component__ and base.__subclasses__()
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a ``PROVIDERS`` entry to the class to instantiate.

    Raises:
        ValueError: If the component has no implementation of the requested kind
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
    "PROVIDERS",
    "ProviderBase",
    "get_provider",
    "mockable_components",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "FederatedAggregatorProvider",
    "GoogleProvider",
    "NotificationProvider",
    "PersistenceProvider",
    "ProdGoogleProvider",
    "ProdNotificationProvider",
    "ProdPersistenceProvider",
]
