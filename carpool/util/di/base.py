"""Base class for dishka providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components tests can swap for in-memory implementations
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Provider carrying mock-selection metadata.

    A base provider that declares ``__mock_component__`` has one production
    and one mock subclass; ``__is_mock__`` tells them apart.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
