"""Interface for fetching issue counts from the task manager."""

from __future__ import annotations

from abc import ABC, abstractmethod


class CountRepositoryInterface(ABC):
    """Executes a JQL query and returns how many issues match it."""

    @abstractmethod
    async def fetch_approximate_count(self, jql: str) -> int:
        """Get the approximate number of issues matching ``jql``.

        Args:
            jql: Complete JQL query string

        Returns:
            A non-negative count; implementations degrade to 0 instead of raising
            on upstream failures.
        """
        pass

    async def close(self) -> None:
        """Release any connection held by the repository."""
        return None
