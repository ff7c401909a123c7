"""Interface for the defect summary use case."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence

from defect_dashboard.entities.api_schemas.defect_summary import (
    DaySummaryResponse,
    DefectSummaryResponse,
    DueSummaryResponse,
)


class DefectSummaryInterface(ABC):
    """Interface for aggregating defect counts for the dashboard."""

    @abstractmethod
    async def summarize(
        self,
        statuses: Sequence[str],
        type_filter: str,
        time_clause: Optional[str] = None,
        extra_jql: Optional[str] = None,
    ) -> DefectSummaryResponse:
        """Count issues per status.

        Args:
            statuses: Status names to count; at least one
            type_filter: Issue type filter (All, Bug or Task)
            time_clause: Trusted time window clause ANDed verbatim
            extra_jql: Free-form clause ANDed in parentheses

        Returns:
            Per-status counts and their total
        """
        pass

    @abstractmethod
    async def summarize_by_day_window(
        self,
        days: int,
        type_filter: str,
        reference: Optional[datetime] = None,
    ) -> DaySummaryResponse:
        """Count created / transitioned issues per day over a trailing window.

        Args:
            days: Number of days in the window
            type_filter: Issue type filter (All, Bug or Task)
            reference: Instant inside the newest day, defaults to now

        Returns:
            One summary per day, oldest first
        """
        pass

    @abstractmethod
    async def summarize_due_dates(self, type_filter: str) -> DueSummaryResponse:
        """Count open issues by due date and assignee focus metrics."""
        pass
