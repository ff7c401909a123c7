"""API schema models package."""

__all__ = [
    "ChartPieRow",
    "ChartResponse",
    "DaySummary",
    "DaySummaryResponse",
    "DefectSummaryResponse",
    "DueSummaryResponse",
    "SearchLinkResponse",
    "StatusCountResult",
]

from defect_dashboard.entities.api_schemas.defect_summary import (
    ChartPieRow,
    ChartResponse,
    DaySummary,
    DaySummaryResponse,
    DefectSummaryResponse,
    DueSummaryResponse,
    SearchLinkResponse,
    StatusCountResult,
)
