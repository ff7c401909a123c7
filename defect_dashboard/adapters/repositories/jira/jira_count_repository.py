"""Jira approximate count repository.

This module talks to Jira Cloud's ``search/approximate-count`` endpoint.
The endpoint is approximate by design, so every upstream problem is turned
into a count of zero instead of an error.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Optional

import aiohttp

from defect_dashboard import LOGGER
from defect_dashboard.settings.jira_settings import JiraConnectionSettings
from defect_dashboard.use_cases.interfaces.count_repository_interface import (
    CountRepositoryInterface,
)
from defect_dashboard.utils import fallbacks
from defect_dashboard.utils.fallbacks import FallbackMonitor

APPROXIMATE_COUNT_PATH = "/rest/api/3/search/approximate-count"


def parse_count(body: Optional[str]) -> Optional[int]:
    """Extract ``count`` from a response body.

    Returns:
        The count, or None when the body is empty, is not a JSON object or
        carries no usable non-negative number.
    """
    if not body:
        return None
    try:
        data: Any = json.loads(body)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    count = data.get("count")
    if isinstance(count, bool) or not isinstance(count, (int, float)):
        return None
    if count < 0:
        return None
    return int(count)


class JiraApproximateCountRepository(CountRepositoryInterface):
    """Repository for counting issues on a Jira Cloud instance."""

    def __init__(
        self,
        settings: JiraConnectionSettings,
        monitor: Optional[FallbackMonitor] = None,
    ):
        """Initialize the repository.

        Args:
            settings: Jira connection settings; credentials are checked on every call.
            monitor: Fallback hook notified whenever a count degrades to 0.
        """
        self.settings = settings
        self.monitor = monitor or fallbacks.FALLBACK_MONITOR
        self._session: Optional[aiohttp.ClientSession] = None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.request_timeout),
            )
        return self._session

    async def fetch_approximate_count(self, jql: str) -> int:
        """Get the approximate number of issues matching ``jql``.

        Raises:
            ConfigurationError: If Jira credentials are not configured.
        """
        credentials = self.settings.require_credentials()
        url = f"{credentials.base_url}{APPROXIMATE_COUNT_PATH}"
        auth = aiohttp.BasicAuth(credentials.email, credentials.api_token)

        try:
            async with self._get_session().post(
                url,
                json={"jql": jql},
                headers={
                    "Authorization": auth.encode(),
                    "Accept": "application/json",
                    "Content-Type": "application/json",
                },
            ) as response:
                body = await response.text()
                if response.status >= 400:
                    LOGGER.warning(f"Jira approximate count returned HTTP {response.status} for JQL: {jql}")
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            LOGGER.error(f"Error fetching Jira approximate count: {e!r}")
            self.monitor.record(fallbacks.COUNT, "request failed, using 0", jql=jql, error=repr(e))
            return 0

        count = parse_count(body)
        if count is None:
            self.monitor.record(fallbacks.COUNT, "unusable response body, using 0", jql=jql, body=body[:200])
            return 0

        LOGGER.debug(f"Approximate count {count} for JQL: {jql}")
        return count

    async def close(self) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
            LOGGER.info("Closed Jira HTTP session")
        self._session = None
