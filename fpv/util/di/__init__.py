"""Dependency injection wiring.

Every provider the app needs is listed in PROVIDERS. Firebase and
persistence are swappable components: each has a production and a mock
subclass, and `get_provider` picks one.
"""

from typing import Type

from fpv.util.di.application import ProdApplicationProvider
from fpv.util.di.base import Component, ProviderBase
from fpv.util.di.core import ProdConfigProvider
from fpv.util.di.domain import ProdDomainProvider
from fpv.util.di.infrastructure import (
    FirebaseProvider,
    PersistenceProvider,
    ProdFirebaseProvider,
    ProdPersistenceProvider,
)
from fpv.util.error import DependencyInjectionError

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    # Swappable in tests
    FirebaseProvider,
    PersistenceProvider,
]


def is_component(base: Type[ProviderBase]) -> bool:
    """A component is a provider base with mock/prod implementations."""
    return (
        getattr(base, "__mock_component__", None) is not None
        and bool(base.__subclasses__())
    )


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry to the class that should be instantiated.

    Plain providers resolve to themselves. Components resolve to the
    subclass whose `__is_mock__` matches `use_mock`.

    Raises:
        DependencyInjectionError: If the component lacks that implementation
    """
    if not is_component(base):
        return base

    for candidate in base.__subclasses__():
        if getattr(candidate, "__is_mock__", False) == use_mock:
            return candidate

    kind = "mock" if use_mock else "production"
    raise DependencyInjectionError(
        f"No {kind} implementation for {base.__mock_component__}"
    )


def components() -> set[str]:
    """Names of every swappable component."""
    return {base.__mock_component__ for base in PROVIDERS if is_component(base)}


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "components",
    "get_provider",
    "is_component",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdApplicationProvider",
    "FirebaseProvider",
    "PersistenceProvider",
    "ProdFirebaseProvider",
    "ProdPersistenceProvider",
]
