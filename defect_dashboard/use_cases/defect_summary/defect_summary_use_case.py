"""Use case for aggregating defect counts for the dashboard."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple

from defect_dashboard import LOGGER
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
from defect_dashboard.entities.constants import (
    DEFAULT_CHART_COLOR,
    DEFECT_STATUS_ORDER,
    EXCLUDED_STATUSES_FOR_CHART,
    STATUS_TO_COLOR_MAP,
    TREND_STATUS_KEYS,
    TREND_WINDOW_DAYS,
    DefectStatus,
    TypeFilter,
)
from defect_dashboard.entities.jql import (
    JqlQuery,
    base_jql,
    escape_literal,
    jira_search_url,
    normalize_type_filter,
    validate_raw_fragment,
    with_extra_clauses,
)
from defect_dashboard.settings.jira_settings import JiraConnectionSettings
from defect_dashboard.use_cases.interfaces.count_repository_interface import (
    CountRepositoryInterface,
)
from defect_dashboard.use_cases.interfaces.defect_summary_interface import (
    DefectSummaryInterface,
)
from defect_dashboard.utils import fallbacks
from defect_dashboard.utils.date_window import DayWindow, local_midnight_iso, trailing_days
from defect_dashboard.utils.exceptions import ConfigurationError, InvalidInputError
from defect_dashboard.utils.fallbacks import FallbackMonitor

DONE_TODAY_JQL = f"status CHANGED TO {escape_literal(DefectStatus.DONE.value)} AFTER startOfDay()"
EMPTY_DUE_DATE_JQL = "duedate is EMPTY"
TODAY_DUE_DATE_JQL = "duedate = now()"
DELAYED_DUE_DATE_JQL = "duedate < now()"
EMPTY_ASSIGNEE_JQL = "assignee = EMPTY"


class DefectSummaryUseCase(DefectSummaryInterface):
    """Fans out one count query per status (and per day) and folds the results."""

    def __init__(
        self,
        count_repository: CountRepositoryInterface,
        settings: JiraConnectionSettings,
        monitor: Optional[FallbackMonitor] = None,
    ):
        """Initialize the use case.

        Args:
            count_repository: Repository executing the count queries
            settings: Jira settings (project key, raw JQL policy, base url for links)
            monitor: Fallback hook for type filter and count degradations
        """
        self.count_repository = count_repository
        self.settings = settings
        self.monitor = monitor or fallbacks.FALLBACK_MONITOR

    async def summarize(
        self,
        statuses: Sequence[str],
        type_filter: str,
        time_clause: Optional[str] = None,
        extra_jql: Optional[str] = None,
    ) -> DefectSummaryResponse:
        statuses = [str(status) for status in statuses]
        if not statuses:
            raise InvalidInputError("Query must include at least one status")
        if any(not status.strip() for status in statuses):
            # a blank name would drop the status clause and count the whole project
            raise InvalidInputError("Status names must not be blank")
        time_clause = self._accept_fragment(time_clause, scoped=False)
        extra_jql = self._accept_fragment(extra_jql)
        return await self._summarize(
            statuses,
            type_filter,
            clauses=(time_clause,),
            user_clauses=(extra_jql,),
        )

    async def summarize_by_day_window(
        self,
        days: int = TREND_WINDOW_DAYS,
        type_filter: str = TypeFilter.ALL.value,
        reference: Optional[datetime] = None,
    ) -> DaySummaryResponse:
        windows = trailing_days(days, reference)
        resolved = normalize_type_filter(type_filter, self.monitor)
        LOGGER.debug(f"Building {len(windows)}-day trend for type={resolved.value}")
        summaries = await asyncio.gather(
            *(self._summarize_day(window, resolved) for window in windows)
        )
        return DaySummaryResponse(days=list(summaries))

    async def summarize_due_dates(self, type_filter: str) -> DueSummaryResponse:
        resolved = normalize_type_filter(type_filter, self.monitor)
        open_statuses = list(DEFECT_STATUS_ORDER)
        done_today, empty_due, due_today, delayed, no_assignee = await asyncio.gather(
            self._summarize([DefectStatus.DONE.value], resolved, user_clauses=(DONE_TODAY_JQL,)),
            self._summarize(open_statuses, resolved, user_clauses=(EMPTY_DUE_DATE_JQL,)),
            self._summarize(open_statuses, resolved, user_clauses=(TODAY_DUE_DATE_JQL,)),
            self._summarize(open_statuses, resolved, user_clauses=(DELAYED_DUE_DATE_JQL,)),
            self._summarize(open_statuses, resolved, user_clauses=(EMPTY_ASSIGNEE_JQL,)),
        )
        return DueSummaryResponse(
            done_today_total=done_today.total,
            empty_due_date_total=empty_due.total,
            today_due_date_total=due_today.total,
            delayed_due_date_total=delayed.total,
            assignee_empty_total=no_assignee.total,
        )

    def chart_rows(self, summary: DefectSummaryResponse) -> ChartResponse:
        """Pie chart slices for a summary, without the completed statuses."""
        rows = [
            ChartPieRow(
                status=status,
                amount=amount,
                fill=STATUS_TO_COLOR_MAP.get(status, DEFAULT_CHART_COLOR),
            )
            for status, amount in summary.summary.items()
            if status not in EXCLUDED_STATUSES_FOR_CHART
        ]
        return ChartResponse(rows=rows, total=sum(row.amount for row in rows))

    def search_link(
        self,
        type_filter: str,
        status: Optional[str] = None,
        extra_jql: Optional[str] = None,
    ) -> SearchLinkResponse:
        """Jira search link behind a dashboard table row.

        Without a status the link covers every status in the default order.
        """
        credentials = self.settings.require_credentials()
        query = self._base(type_filter, status)
        if not status:
            query = query.where_user(
                " OR ".join(f"status = {escape_literal(name)}" for name in DEFECT_STATUS_ORDER)
            )
        query = with_extra_clauses(query, user_clauses=(self._accept_fragment(extra_jql),))
        jql = query.render()
        return SearchLinkResponse(jql=jql, url=jira_search_url(credentials.base_url, jql))

    def _base(self, type_filter, status: Optional[str] = None) -> JqlQuery:
        return base_jql(
            type_filter,
            status,
            project_key=self.settings.project_key,
            monitor=self.monitor,
        )

    def _accept_fragment(self, fragment: Optional[str], scoped: bool = True) -> Optional[str]:
        """Check a caller supplied fragment.

        ``scoped=False`` marks a fragment ANDed without parentheses, which
        must not carry a top-level ``OR``.
        """
        if fragment is None or not fragment.strip():
            return None
        if not self.settings.allow_raw_jql:
            raise InvalidInputError("Free-form JQL fragments are disabled")
        return validate_raw_fragment(fragment, allow_top_level_or=scoped)

    async def _summarize(
        self,
        statuses: Sequence[str],
        type_filter,
        clauses: Iterable[Optional[str]] = (),
        user_clauses: Iterable[Optional[str]] = (),
    ) -> DefectSummaryResponse:
        resolved = normalize_type_filter(type_filter, self.monitor)
        clauses, user_clauses = tuple(clauses), tuple(user_clauses)
        queries = [
            (status, with_extra_clauses(self._base(resolved, status), clauses, user_clauses))
            for status in statuses
        ]
        results = await self._count_all(queries)
        return self._fold(results)

    async def _summarize_day(self, window: DayWindow, type_filter: TypeFilter) -> DaySummary:
        queries = [(status, self._trend_query(type_filter, status, window)) for status in TREND_STATUS_KEYS]
        results = await self._count_all(queries)
        counts = {TREND_STATUS_KEYS[result.status]: result.count for result in results}
        return DaySummary(date=local_midnight_iso(window.day), **counts)

    def _trend_query(self, type_filter: TypeFilter, status: str, window: DayWindow) -> JqlQuery:
        start, end = escape_literal(window.start), escape_literal(window.end)
        if status == DefectStatus.TO_DO.value:
            # still open: counted by creation date
            return self._base(type_filter, status).where(f"created >= {start}").where(f"created < {end}")
        return self._base(type_filter).where(
            f"status CHANGED TO {escape_literal(status)} AFTER {start} BEFORE {end}"
        )

    async def _count_all(self, queries: List[Tuple[str, JqlQuery]]) -> List[StatusCountResult]:
        return list(await asyncio.gather(*(self._count(status, query) for status, query in queries)))

    async def _count(self, status: str, query: JqlQuery) -> StatusCountResult:
        jql = query.render()
        try:
            count = await self.count_repository.fetch_approximate_count(jql)
        except ConfigurationError:
            raise
        except Exception as e:
            LOGGER.error(f"Count query failed for status {status!r}: {e!r}")
            self.monitor.record(fallbacks.COUNT, "count query raised, using 0", status=status, error=repr(e))
            count = 0
        return StatusCountResult(status=status, count=max(int(count or 0), 0))

    @staticmethod
    def _fold(results: Iterable[StatusCountResult]) -> DefectSummaryResponse:
        summary = {}
        total = 0
        for result in results:
            summary[result.status] = result.count
            total += result.count
        return DefectSummaryResponse(summary=summary, total=total)
