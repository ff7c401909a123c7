from defect_dashboard.adapters.repositories.jira.jira_count_repository import (
    JiraApproximateCountRepository,
)

__all__ = ["JiraApproximateCountRepository"]
