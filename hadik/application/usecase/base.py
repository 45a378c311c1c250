"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """One admission operation.

    Use cases check the acting member's role, orchestrate domain services and
    return a response model. Admission outcomes are returned, not raised.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
