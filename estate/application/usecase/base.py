"""Use case base class."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """One operation of the identity API: a validated request in, a response out.

    Failures are raised as domain errors; routes map them to HTTP statuses.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT: ...
