"""Dependency injection configuration for the defect dashboard."""

from __future__ import annotations

from typing import Optional

from lagom import Container, Singleton

from defect_dashboard import LOGGER
from defect_dashboard.adapters.repositories.jira.jira_count_repository import (
    JiraApproximateCountRepository,
)
from defect_dashboard.frameworks.api.api_endpoint import APIEndpointConfig
from defect_dashboard.frameworks.api.endpoints import DefectEndpoint, HealthCheckEndpoint
from defect_dashboard.frameworks.api.registry import SubServiceEndpoints
from defect_dashboard.settings.jira_settings import JiraConnectionSettings
from defect_dashboard.use_cases.defect_summary.defect_summary_use_case import DefectSummaryUseCase
from defect_dashboard.use_cases.interfaces.count_repository_interface import (
    CountRepositoryInterface,
)
from defect_dashboard.utils.fallbacks import FALLBACK_MONITOR, FallbackMonitor


def configure_container(
    jira_settings: Optional[JiraConnectionSettings] = None,
    api_settings: Optional[APIEndpointConfig] = None,
) -> Container:
    """Create the container with settings, adapters and use cases.

    Args:
        jira_settings: Jira settings; read from the environment / ``.env`` when omitted
        api_settings: API server settings; read from the environment when omitted

    Returns:
        Configured container
    """
    container = Container()

    if jira_settings is None:
        from defect_dashboard.settings import JIRA_SETTINGS

        jira_settings = JIRA_SETTINGS

    container[JiraConnectionSettings] = jira_settings
    container[APIEndpointConfig] = api_settings or APIEndpointConfig()
    container[FallbackMonitor] = FALLBACK_MONITOR

    container[CountRepositoryInterface] = Singleton(
        lambda c: JiraApproximateCountRepository(
            settings=c[JiraConnectionSettings],
            monitor=c[FallbackMonitor],
        )
    )

    container[DefectSummaryUseCase] = Singleton(
        lambda c: DefectSummaryUseCase(
            count_repository=c[CountRepositoryInterface],
            settings=c[JiraConnectionSettings],
            monitor=c[FallbackMonitor],
        )
    )

    container[DefectEndpoint] = Singleton(
        lambda c: DefectEndpoint(c[DefectSummaryUseCase])
    )
    container[HealthCheckEndpoint] = Singleton(
        lambda c: HealthCheckEndpoint(c[FallbackMonitor])
    )
    container[SubServiceEndpoints] = Singleton(SubServiceEndpoints)

    LOGGER.info(f"Container configured for Jira project {jira_settings.project_key}")
    return container
