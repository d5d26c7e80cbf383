"""Use case base class."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

RequestT = TypeVar("RequestT")
ResponseT = TypeVar("ResponseT")


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """A single application action run inside one request scope."""

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT: ...
