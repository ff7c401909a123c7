from __future__ import annotations

from typing import NamedTuple, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from defect_dashboard.utils.exceptions import ConfigurationError


class JiraCredentials(NamedTuple):
    base_url: str
    email: str
    api_token: str


class JiraConnectionSettings(BaseSettings):
    base_url: Optional[str] = Field(
        default=None,
        description="Jira base url (e.g., https://your-domain.atlassian.net)",
    )
    email: Optional[str] = Field(default=None, description="Jira account email")
    api_token: Optional[str] = Field(default=None, description="Jira API token")
    project_key: str = Field(default="S2SWFE", description="Jira project the dashboard reports on")
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Total timeout in seconds for a single count request",
    )
    allow_raw_jql: bool = Field(
        default=True,
        description="Accept free-form time/jql fragments on the query endpoint",
    )

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="jira_", extra="ignore"
    )

    def require_credentials(self) -> JiraCredentials:
        """Return the connection credentials, failing fast when any is missing.

        Raises:
            ConfigurationError: If the base url, email or API token is not configured.
        """
        if not self.base_url or not self.email or not self.api_token:
            raise ConfigurationError("Missing required JIRA_* environment variables")
        return JiraCredentials(
            base_url=self.base_url.rstrip("/"),
            email=self.email,
            api_token=self.api_token,
        )
