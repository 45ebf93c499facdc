"""Provider base shared by every DI provider."""

from typing import ClassVar, Literal

from dishka import Provider

# Components that tests can swap for in-memory or recording fakes
Component = Literal["google", "notification", "persistence"]


class ProviderBase(Provider):
    """Dishka provider tagged with mock-selection metadata.

    A component base sets ``__mock_component__``; its production and mock
    subclasses set ``__is_mock__``. Concrete providers leave both unset.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
