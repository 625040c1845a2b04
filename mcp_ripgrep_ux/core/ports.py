"""
Ports - Interfaces for external dependencies

These define HOW the core interacts with the outside world,
but NOT the implementation details.
"""
from abc import ABC, abstractmethod
from typing import AsyncIterator, Sequence

from .domain import RunnerEvent, RunnerState


class ProcessRunner(ABC):
    """Port for owning one external search process at a time"""

    @property
    @abstractmethod
    def state(self) -> RunnerState:
        """Current lifecycle state of the owned process"""
        pass

    @abstractmethod
    async def start(self, executable: str, args: Sequence[str]) -> None:
        """Stop any running process, then launch a new one.

        Raises LaunchError if the executable cannot be found or spawned.
        """
        pass

    @abstractmethod
    async def stop(self) -> None:
        """Terminate, then kill after the grace period. No-op when idle."""
        pass

    @abstractmethod
    def events(self) -> AsyncIterator[RunnerEvent]:
        """Iterate output chunks of the current process, ending after ProcessExited"""
        pass


class ExecutableLocator(ABC):
    """Port for resolving the search tool executable"""

    @abstractmethod
    def locate(self) -> str:
        """Return a path or command name for the search tool"""
        pass
