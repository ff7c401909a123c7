"""Application container for the defect dashboard."""

from lagom import Container

from defect_dashboard import LOGGER
from defect_dashboard.config_dependency_injection import configure_container
from defect_dashboard.frameworks.api.endpoints import DefectEndpoint, HealthCheckEndpoint
from defect_dashboard.frameworks.api.registry import SubServiceEndpoints
from defect_dashboard.settings.jira_settings import JiraConnectionSettings
from defect_dashboard.use_cases.interfaces.count_repository_interface import (
    CountRepositoryInterface,
)


# Global container instance
_container = None


def get_container() -> Container:
    """Get the global container instance.

    Returns:
        The configured container
    """
    global _container
    if _container is None:
        _container = setup_container()
    return _container


def setup_container(container: Container = None) -> Container:
    """Set up the container and register the API endpoints.

    Args:
        container: Base container, built from the environment when omitted

    Returns:
        Fully configured container
    """
    container = container or configure_container()

    registry = container[SubServiceEndpoints]
    registry.register(container[HealthCheckEndpoint])
    registry.register(container[DefectEndpoint])

    return container


def startup() -> None:
    """Run startup tasks for the application."""
    LOGGER.info("Starting defect dashboard application")

    container = get_container()
    settings = container[JiraConnectionSettings]
    if not (settings.base_url and settings.email and settings.api_token):
        LOGGER.warning("Jira credentials are incomplete; defect queries will fail until JIRA_* is set")
    repository = container[CountRepositoryInterface]
    LOGGER.info(f"Initialized {type(repository).__name__}")


async def shutdown() -> None:
    """Run shutdown tasks for the application."""
    LOGGER.info("Shutting down defect dashboard application")

    container = get_container()
    try:
        await container[CountRepositoryInterface].close()
    except Exception as e:
        LOGGER.error(f"Error during shutdown: {str(e)}")
