from __future__ import annotations

from defect_dashboard import DEFAULT_PATH
from defect_dashboard.settings.jira_settings import JiraConnectionSettings, JiraCredentials

JIRA_SETTINGS = JiraConnectionSettings(_env_file=f"{DEFAULT_PATH}/.env")

__all__ = ["JIRA_SETTINGS", "JiraConnectionSettings", "JiraCredentials"]
