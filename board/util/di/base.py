"""Provider base class and the names of swappable components."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a production and a mock provider
Component = Literal["persistence", "push"]


class ProviderBase(Provider):
    """Base for every provider in PROVIDERS.

    A provider that declares `__mock_component__` has two subclasses, one
    with `__is_mock__ = True` used by tests and one used in production.
    Providers without a component are always concrete.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
