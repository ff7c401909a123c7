"""API schema models for defect summary endpoints."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class StatusCountResult(BaseModel):
    """Count of issues in one status.

    Args:
        status: Jira status name
        count: Approximate number of issues in this status
    """
    status: str = Field(description="Jira status name")
    count: int = Field(ge=0, description="Approximate number of issues in this status")


class DefectSummaryResponse(BaseModel):
    """Response model for the defect query endpoints.

    Args:
        summary: Count per requested status
        total: Sum of all per-status counts
    """
    summary: Dict[str, int] = Field(description="Count per requested status")
    total: int = Field(description="Sum of all per-status counts")


class DaySummary(BaseModel):
    """Trend point for one calendar day.

    Args:
        date: ISO timestamp of the local midnight starting the day
        todo: Issues created that day and still in To Do
        in_progress: Issues moved to In Progress that day
        done: Issues moved to Done that day
    """
    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(description="ISO timestamp of the local midnight starting the day")
    todo: int = Field(default=0, description="Issues created that day and still in To Do")
    in_progress: int = Field(default=0, alias="inProgress", description="Issues moved to In Progress that day")
    done: int = Field(default=0, description="Issues moved to Done that day")


class DaySummaryResponse(BaseModel):
    """Response model for the trend endpoint.

    Args:
        days: One entry per day, oldest first
    """
    days: List[DaySummary] = Field(description="One entry per day, oldest first")


class DueSummaryResponse(BaseModel):
    """Response model for the due date / assignee focus table."""
    model_config = ConfigDict(populate_by_name=True)

    done_today_total: int = Field(alias="doneTodayTotal", description="Issues moved to Done since start of day")
    empty_due_date_total: int = Field(alias="emptyDueDateTotal", description="Open issues without a due date")
    today_due_date_total: int = Field(alias="todayDueDateTotal", description="Open issues due now")
    delayed_due_date_total: int = Field(alias="delayedDueDateTotal", description="Open issues past their due date")
    assignee_empty_total: int = Field(alias="assigneeEmptyTotal", description="Open issues without an assignee")


class ChartPieRow(BaseModel):
    """One slice of the status pie chart."""
    status: str
    amount: int
    fill: str


class ChartResponse(BaseModel):
    rows: List[ChartPieRow]
    total: int


class SearchLinkResponse(BaseModel):
    """Jira search deep link for a dashboard row."""
    jql: str
    url: str
