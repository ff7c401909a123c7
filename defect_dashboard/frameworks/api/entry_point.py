"""FastAPI application entry point."""

from __future__ import annotations

from fastapi import FastAPI

from defect_dashboard.app_container import get_container, shutdown, startup
from defect_dashboard.frameworks.api.api_endpoint import APIEndpoint, APIEndpointConfig
from defect_dashboard.frameworks.api.registry import SubServiceEndpoints


def create_api_endpoint() -> APIEndpoint:
    """Build the API endpoint from the application container."""
    container = get_container()
    return APIEndpoint(
        config=container[APIEndpointConfig],
        sub_service_endpoints=container[SubServiceEndpoints],
        on_startup=startup,
        on_shutdown=shutdown,
    )


def create_app() -> FastAPI:
    return create_api_endpoint().rest_application
