from abc import ABC, abstractmethod
from typing import Generic, TypeVar

T_Input = TypeVar("T_Input")
T_Output = TypeVar("T_Output")


class BaseWorkflow(ABC, Generic[T_Input, T_Output]):
    """Abstract base for deterministic workflow pipelines."""

    @abstractmethod
    async def execute(self, input_data: T_Input) -> T_Output:
        """Run the full workflow for one request."""
