"""Defect summary API endpoint."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Query, status as http_status
from fastapi.responses import JSONResponse

from defect_dashboard import LOGGER
from defect_dashboard.entities.api_schemas.defect_summary import (
    ChartResponse,
    DaySummaryResponse,
    DefectSummaryResponse,
    DueSummaryResponse,
    SearchLinkResponse,
)
from defect_dashboard.entities.constants import (
    DEFECT_STATUS_ORDER,
    TREND_WINDOW_DAYS,
    TypeFilter,
)
from defect_dashboard.frameworks.api.base_endpoint import ServiceAPIEndpointBluePrint
from defect_dashboard.use_cases.defect_summary.defect_summary_use_case import DefectSummaryUseCase
from defect_dashboard.utils.exceptions import CustomException

ERROR_RESPONSES = {
    http_status.HTTP_400_BAD_REQUEST: {"description": "Invalid request"},
    http_status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Internal error"},
}


def requested_statuses(status: Optional[List[str]], statuses: Optional[str]) -> List[str]:
    """Repeated ``status`` parameters win over the comma separated ``statuses``.

    Names are stripped and blank ones dropped on both paths.
    """
    names = status if status else (statuses.split(",") if statuses else [])
    return [name.strip() for name in names if name and name.strip()]


def error_response(error: Exception, context: str) -> JSONResponse:
    if isinstance(error, CustomException):
        LOGGER.warning(f"{context}: {error}")
        return JSONResponse(status_code=error.status_code, content=error.message)
    LOGGER.error(f"Unexpected error in {context}: {str(error)}", exc_info=True)
    return JSONResponse(
        status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(error) or "Internal Server Error"},
    )


class DefectEndpoint(ServiceAPIEndpointBluePrint):
    """API endpoint for defect counts."""

    def __init__(self, defect_summary_use_case: DefectSummaryUseCase):
        """Initialize the endpoint.

        Args:
            defect_summary_use_case: Use case aggregating the counts
        """
        self.defect_summary_use_case = defect_summary_use_case

    def create_rest_api_route(self) -> APIRouter:
        """Create and configure the API router for defect operations.

        Returns:
            Configured APIRouter for defect endpoints
        """
        api_route = APIRouter(
            prefix="/defect",
            tags=["Defects"]
        )

        @api_route.get(
            "/query",
            summary="Count defects per status",
            description="Counts issues per requested status, optionally narrowed by a time clause and a JQL fragment",
            response_model=DefectSummaryResponse,
            responses=ERROR_RESPONSES,
        )
        async def query_defects(
            status: Optional[List[str]] = Query(None, description="Status name, repeatable"),
            statuses: Optional[str] = Query(None, description="Comma separated status names"),
            type_filter: str = Query(TypeFilter.ALL.value, alias="type", description="All, Bug or Task"),
            time_clause: Optional[str] = Query(None, alias="time", description="Time clause, e.g. created >= startOfDay()"),
            jql: Optional[str] = Query(None, description="Extra JQL clause, e.g. duedate is EMPTY"),
        ):
            try:
                LOGGER.debug(f"Defect query status={status} statuses={statuses} type={type_filter} time={time_clause} jql={jql}")
                return await self.defect_summary_use_case.summarize(
                    requested_statuses(status, statuses),
                    type_filter,
                    time_clause=time_clause,
                    extra_jql=jql,
                )
            except Exception as e:
                return error_response(e, "defect query")

        @api_route.get(
            "/today",
            summary="Count defects per status without extra filters",
            response_model=DefectSummaryResponse,
            responses=ERROR_RESPONSES,
        )
        async def today_defects(
            status: Optional[List[str]] = Query(None, description="Status name, repeatable"),
            statuses: Optional[str] = Query(None, description="Comma separated status names"),
            type_filter: str = Query(TypeFilter.BUG.value, alias="type", description="All, Bug or Task"),
        ):
            try:
                return await self.defect_summary_use_case.summarize(
                    requested_statuses(status, statuses),
                    type_filter,
                )
            except Exception as e:
                return error_response(e, "defect today")

        @api_route.get(
            "/summary-7-days",
            summary="Daily created / transitioned defects",
            description="One entry per calendar day, oldest first",
            response_model=DaySummaryResponse,
            responses=ERROR_RESPONSES,
        )
        async def summary_7_days(
            type_filter: str = Query(TypeFilter.ALL.value, alias="type", description="All, Bug or Task"),
            days: int = Query(TREND_WINDOW_DAYS, ge=1, le=31, description="Number of days in the window"),
        ):
            try:
                return await self.defect_summary_use_case.summarize_by_day_window(days, type_filter)
            except Exception as e:
                return error_response(e, "7-day defect summary")

        @api_route.get(
            "/due-summary",
            summary="Due date and assignee focus metrics",
            response_model=DueSummaryResponse,
            responses=ERROR_RESPONSES,
        )
        async def due_summary(
            type_filter: str = Query(TypeFilter.ALL.value, alias="type", description="All, Bug or Task"),
        ):
            try:
                return await self.defect_summary_use_case.summarize_due_dates(type_filter)
            except Exception as e:
                return error_response(e, "due date summary")

        @api_route.get(
            "/chart",
            summary="Status pie chart rows",
            response_model=ChartResponse,
            responses=ERROR_RESPONSES,
        )
        async def chart(
            type_filter: str = Query(TypeFilter.ALL.value, alias="type", description="All, Bug or Task"),
        ):
            try:
                summary = await self.defect_summary_use_case.summarize(list(DEFECT_STATUS_ORDER), type_filter)
                return self.defect_summary_use_case.chart_rows(summary)
            except Exception as e:
                return error_response(e, "defect chart")

        @api_route.get(
            "/search-url",
            summary="Jira search link for a dashboard row",
            response_model=SearchLinkResponse,
            responses=ERROR_RESPONSES,
        )
        async def search_url(
            type_filter: str = Query(TypeFilter.ALL.value, alias="type", description="All, Bug or Task"),
            status: Optional[str] = Query(None, description="Status name; all open statuses when omitted"),
            jql: Optional[str] = Query(None, description="Extra JQL clause"),
        ):
            try:
                return self.defect_summary_use_case.search_link(type_filter, status=status, extra_jql=jql)
            except Exception as e:
                return error_response(e, "search url")

        return api_route
