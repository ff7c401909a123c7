"""Integration tests for the defect API, wired through the container with a stubbed Jira."""

import json
import re
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from fastapi.testclient import TestClient

from defect_dashboard.app_container import setup_container
from defect_dashboard.config_dependency_injection import configure_container
from defect_dashboard.frameworks.api.api_endpoint import APIEndpoint, APIEndpointConfig
from defect_dashboard.frameworks.api.registry import SubServiceEndpoints
from defect_dashboard.settings.jira_settings import JiraConnectionSettings
from defect_dashboard.use_cases.interfaces.count_repository_interface import (
    CountRepositoryInterface,
)
from defect_dashboard.utils.fallbacks import COUNT, FALLBACK_MONITOR

BASE_URL = "https://example.atlassian.net"
COUNT_URL = f"{BASE_URL}/rest/api/3/search/approximate-count"
STATUS_PATTERN = re.compile(r'status = "([^"]+)"')


def build_client(**settings_overrides) -> TestClient:
    values = {
        "base_url": BASE_URL,
        "email": "dev@example.com",
        "api_token": "secret-token",
        "_env_file": None,
    }
    values.update(settings_overrides)
    container = setup_container(
        configure_container(
            jira_settings=JiraConnectionSettings(**values),
            api_settings=APIEndpointConfig(_env_file=None),
        )
    )
    endpoint = APIEndpoint(
        config=container[APIEndpointConfig],
        sub_service_endpoints=container[SubServiceEndpoints],
        on_shutdown=container[CountRepositoryInterface].close,
    )
    return TestClient(endpoint.rest_application)


def fake_response(status: int = 200, body: str = "") -> MagicMock:
    response = AsyncMock()
    response.status = status
    response.text = AsyncMock(return_value=body)
    context = MagicMock()
    context.__aenter__.return_value = response
    context.__aexit__.return_value = False
    return context


class TestDefectAPI(unittest.TestCase):
    """Integration tests for the defect API."""

    def setUp(self):
        FALLBACK_MONITOR.reset()
        self.sent_jql = []

    def count_by_status(self, counts):
        """Fake Jira answering each count query from ``counts`` keyed by status."""
        def post(url, **kwargs):
            self.assertEqual(url, COUNT_URL)
            jql = kwargs["json"]["jql"]
            self.sent_jql.append(jql)
            match = STATUS_PATTERN.search(jql)
            status = match.group(1) if match else ""
            return fake_response(200, json.dumps({"count": counts.get(status, 0)}))

        return post

    def test_query_counts_each_status(self):
        with patch("aiohttp.ClientSession.post", side_effect=self.count_by_status({"To Do": 2, "Done": 7})):
            with build_client() as client:
                response = client.get("/api/defect/query?status=To%20Do&status=Done&type=Bug")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"summary": {"To Do": 2, "Done": 7}, "total": 9})
        self.assertIn('project = "S2SWFE" AND type = Bug AND status = "To Do"', self.sent_jql)
        self.assertIn('project = "S2SWFE" AND type = Bug AND status = "Done"', self.sent_jql)

    def test_one_failing_status_degrades_to_zero(self):
        def post(url, **kwargs):
            if '"Blocked"' in kwargs["json"]["jql"]:
                return fake_response(502, "<html>Bad gateway</html>")
            return fake_response(200, '{"count": 5}')

        with patch("aiohttp.ClientSession.post", side_effect=post):
            with build_client() as client:
                response = client.get("/api/defect/query", params={"statuses": "To Do,Blocked"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"summary": {"To Do": 5, "Blocked": 0}, "total": 5})
        self.assertEqual(FALLBACK_MONITOR.total(COUNT), 1)

    def test_query_without_status_is_bad_request(self):
        with patch("aiohttp.ClientSession.post") as mock_post:
            with build_client() as client:
                response = client.get("/api/defect/query", params={"type": "Bug"})

        mock_post.assert_not_called()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Query must include at least one status"})

    def test_blank_status_is_bad_request(self):
        with patch("aiohttp.ClientSession.post") as mock_post:
            with build_client() as client:
                response = client.get("/api/defect/query?status=&type=Bug")

        mock_post.assert_not_called()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Query must include at least one status"})

    def test_unparenthesized_or_in_time_is_bad_request(self):
        with patch("aiohttp.ClientSession.post") as mock_post:
            with build_client() as client:
                response = client.get(
                    "/api/defect/query",
                    params={"status": "To Do", "time": "created >= -1d OR project = OTHER"},
                )

        mock_post.assert_not_called()
        self.assertEqual(response.status_code, 400)

    def test_missing_credentials_is_server_error(self):
        with patch("aiohttp.ClientSession.post") as mock_post:
            with build_client(api_token=None) as client:
                response = client.get("/api/defect/today", params={"status": "To Do"})

        mock_post.assert_not_called()
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Missing required JIRA_* environment variables"})

    def test_due_summary(self):
        with patch("aiohttp.ClientSession.post", side_effect=lambda url, **kwargs: fake_response(200, '{"count": 1}')):
            with build_client() as client:
                response = client.get("/api/defect/due-summary", params={"type": "Bug"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {
                "doneTodayTotal": 1,
                "emptyDueDateTotal": 5,
                "todayDueDateTotal": 5,
                "delayedDueDateTotal": 5,
                "assigneeEmptyTotal": 5,
            },
        )

    def test_summary_7_days(self):
        with patch("aiohttp.ClientSession.post", side_effect=self.count_by_status({"To Do": 1})):
            with build_client() as client:
                response = client.get("/api/defect/summary-7-days")

        self.assertEqual(response.status_code, 200)
        days = response.json()["days"]
        self.assertEqual(len(days), 7)
        self.assertEqual(days, sorted(days, key=lambda day: day["date"]))
        self.assertEqual({day["todo"] for day in days}, {1})
        self.assertEqual({day["inProgress"] for day in days}, {0})
        self.assertEqual(len(self.sent_jql), 21)

    def test_chart(self):
        counts = {"To Do": 3, "In Progress": 1, "Blocked": 0, "Ready to test": 2, "Reviewing": 0}
        with patch("aiohttp.ClientSession.post", side_effect=self.count_by_status(counts)):
            with build_client() as client:
                response = client.get("/api/defect/chart", params={"type": "All"})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual([row["status"] for row in data["rows"]], list(counts))
        self.assertEqual(data["total"], 6)

    def test_search_url(self):
        with build_client() as client:
            response = client.get("/api/defect/search-url", params={"type": "Task", "status": "Blocked"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["jql"], 'project = "S2SWFE" AND type = Task AND status = "Blocked"')
        self.assertTrue(response.json()["url"].startswith(f"{BASE_URL}/issues/?jql="))

    def test_health_and_docs_redirect(self):
        with build_client() as client:
            health = client.get("/api/health/ping")
            root = client.get("/", follow_redirects=False)

        self.assertEqual(health.json(), {"ping": "pong"})
        self.assertEqual(root.status_code, 307)
        self.assertEqual(root.headers["location"], "/api/docs")


if __name__ == "__main__":
    unittest.main()
