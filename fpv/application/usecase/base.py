"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base for use cases that change posts on behalf of a signed-in user.

    A use case takes one request model, drives the domain services and
    returns one response model.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
