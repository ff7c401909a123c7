"""Unit tests for DefectEndpoint."""

import unittest
from unittest.mock import AsyncMock, MagicMock

from fastapi import FastAPI
from fastapi.testclient import TestClient

from defect_dashboard.entities.api_schemas.defect_summary import (
    ChartPieRow,
    ChartResponse,
    DaySummary,
    DaySummaryResponse,
    DefectSummaryResponse,
    DueSummaryResponse,
    SearchLinkResponse,
)
from defect_dashboard.entities.constants import DEFECT_STATUS_ORDER
from defect_dashboard.frameworks.api.endpoints.defect import DefectEndpoint, requested_statuses
from defect_dashboard.use_cases.defect_summary.defect_summary_use_case import DefectSummaryUseCase
from defect_dashboard.utils.exceptions import ConfigurationError, InvalidInputError


class TestRequestedStatuses(unittest.TestCase):
    """Test suite for requested_statuses."""

    def test_repeated_parameter_wins(self):
        self.assertEqual(requested_statuses(["Done"], "To Do,Blocked"), ["Done"])

    def test_comma_separated_values_are_trimmed(self):
        self.assertEqual(requested_statuses(None, " To Do , ,Blocked"), ["To Do", "Blocked"])

    def test_nothing_requested(self):
        self.assertEqual(requested_statuses(None, None), [])

    def test_blank_repeated_status_is_dropped(self):
        self.assertEqual(requested_statuses([""], None), [])
        self.assertEqual(requested_statuses(["  ", " Done "], None), ["Done"])


class TestDefectEndpoint(unittest.TestCase):
    """Test suite for DefectEndpoint."""

    def setUp(self):
        """Set up test fixtures."""
        self.use_case = MagicMock(spec=DefectSummaryUseCase)
        self.use_case.summarize = AsyncMock(
            return_value=DefectSummaryResponse(summary={"To Do": 2, "Done": 7}, total=9)
        )
        self.use_case.summarize_by_day_window = AsyncMock()
        self.use_case.summarize_due_dates = AsyncMock()

        self.endpoint = DefectEndpoint(defect_summary_use_case=self.use_case)

        self.app = FastAPI()
        self.app.include_router(self.endpoint.create_rest_api_route())
        self.client = TestClient(self.app)

    def test_create_rest_api_route(self):
        router = self.endpoint.create_rest_api_route()

        self.assertEqual(router.prefix, "/defect")
        self.assertEqual(router.tags, ["Defects"])

    def test_query_with_repeated_status(self):
        response = self.client.get(
            "/defect/query",
            params=[("status", "To Do"), ("status", "Done"), ("type", "Bug"), ("time", "created >= -1d")],
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"summary": {"To Do": 2, "Done": 7}, "total": 9})
        self.use_case.summarize.assert_awaited_once_with(
            ["To Do", "Done"], "Bug", time_clause="created >= -1d", extra_jql=None
        )

    def test_query_with_comma_separated_statuses_defaults_to_all(self):
        response = self.client.get("/defect/query", params={"statuses": "To Do,Done", "jql": "duedate is EMPTY"})

        self.assertEqual(response.status_code, 200)
        self.use_case.summarize.assert_awaited_once_with(
            ["To Do", "Done"], "All", time_clause=None, extra_jql="duedate is EMPTY"
        )

    def test_query_without_status_is_bad_request(self):
        self.use_case.summarize.side_effect = InvalidInputError("Query must include at least one status")

        response = self.client.get("/defect/query")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Query must include at least one status"})

    def test_blank_status_parameter_reaches_use_case_as_empty(self):
        self.use_case.summarize.side_effect = InvalidInputError("Query must include at least one status")

        response = self.client.get("/defect/query?status=&type=Bug")

        self.assertEqual(response.status_code, 400)
        self.use_case.summarize.assert_awaited_once_with([], "Bug", time_clause=None, extra_jql=None)

    def test_missing_configuration_is_server_error(self):
        self.use_case.summarize.side_effect = ConfigurationError("Missing required JIRA_* environment variables")

        response = self.client.get("/defect/query", params={"status": "To Do"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Missing required JIRA_* environment variables"})

    def test_unexpected_error_is_server_error(self):
        self.use_case.summarize.side_effect = RuntimeError("boom")

        response = self.client.get("/defect/today", params={"status": "To Do"})

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "boom"})

    def test_today_defaults_to_bug(self):
        response = self.client.get("/defect/today", params={"status": "Blocked"})

        self.assertEqual(response.status_code, 200)
        self.use_case.summarize.assert_awaited_once_with(["Blocked"], "Bug")

    def test_summary_7_days_uses_camel_case_keys(self):
        self.use_case.summarize_by_day_window.return_value = DaySummaryResponse(
            days=[DaySummary(date="2024-03-10T00:00:00+00:00", todo=1, in_progress=2, done=3)]
        )

        response = self.client.get("/defect/summary-7-days", params={"type": "Task"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"days": [{"date": "2024-03-10T00:00:00+00:00", "todo": 1, "inProgress": 2, "done": 3}]},
        )
        self.use_case.summarize_by_day_window.assert_awaited_once_with(7, "Task")

    def test_summary_7_days_rejects_empty_window(self):
        response = self.client.get("/defect/summary-7-days", params={"days": 0})

        self.assertEqual(response.status_code, 422)
        self.use_case.summarize_by_day_window.assert_not_awaited()

    def test_due_summary(self):
        self.use_case.summarize_due_dates.return_value = DueSummaryResponse(
            done_today_total=1,
            empty_due_date_total=2,
            today_due_date_total=3,
            delayed_due_date_total=4,
            assignee_empty_total=5,
        )

        response = self.client.get("/defect/due-summary", params={"type": "Bug"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {
                "doneTodayTotal": 1,
                "emptyDueDateTotal": 2,
                "todayDueDateTotal": 3,
                "delayedDueDateTotal": 4,
                "assigneeEmptyTotal": 5,
            },
        )

    def test_chart_counts_open_statuses(self):
        self.use_case.chart_rows = MagicMock(
            return_value=ChartResponse(
                rows=[ChartPieRow(status="To Do", amount=2, fill="var(--chart-5)")],
                total=2,
            )
        )

        response = self.client.get("/defect/chart")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["total"], 2)
        self.use_case.summarize.assert_awaited_once_with(list(DEFECT_STATUS_ORDER), "All")
        self.use_case.chart_rows.assert_called_once()

    def test_search_url(self):
        self.use_case.search_link = MagicMock(
            return_value=SearchLinkResponse(
                jql='project = "S2SWFE" AND type = Bug AND status = "To Do"',
                url="https://example.atlassian.net/issues/?jql=project",
            )
        )

        response = self.client.get("/defect/search-url", params={"type": "Bug", "status": "To Do"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["url"], "https://example.atlassian.net/issues/?jql=project")
        self.use_case.search_link.assert_called_once_with("Bug", status="To Do", extra_jql=None)


if __name__ == "__main__":
    unittest.main()
