"""Provider registry for the board container."""

from typing import Type

from board.util.di.application import ProdApplicationProvider
from board.util.di.base import Component, ProviderBase
from board.util.di.core import ProdConfigProvider
from board.util.di.domain import ProdDomainProvider
from board.util.di.events import ProdEventProvider
from board.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdPushProvider,
    PushProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdEventProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable for tests
    PersistenceProvider,
    PushProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a registered provider to the class the container should build.

    A provider with no subclasses is concrete. A swappable component picks
    the subclass whose __is_mock__ matches use_mock.

    Raises:
        ValueError: If the component has no subclass of the requested kind
    """
    variants = base.__subclasses__()
    if not variants:
        return base

    for variant in variants:
        if getattr(variant, "__is_mock__", False) == use_mock:
            return variant

    component = getattr(base, "__mock_component__", base.__name__)
    raise ValueError(
        f"{component} has no {'mock' if use_mock else 'production'} provider"
    )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "ProdConfigProvider",
    "ProdEventProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "PersistenceProvider",
    "PushProvider",
    "ProdPersistenceProvider",
    "ProdPushProvider",
]
