"""API endpoints package."""

__all__ = [
    "DefectEndpoint",
    "HealthCheckEndpoint",
]

from defect_dashboard.frameworks.api.endpoints.defect import DefectEndpoint
from defect_dashboard.frameworks.api.endpoints.health_check import HealthCheckEndpoint
