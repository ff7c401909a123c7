"""Health check endpoint for API service."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter

from defect_dashboard import __version__
from defect_dashboard.frameworks.api.base_endpoint import ServiceAPIEndpointBluePrint
from defect_dashboard.utils.fallbacks import FALLBACK_MONITOR, FallbackMonitor


class HealthCheckEndpoint(ServiceAPIEndpointBluePrint):
    """Health check endpoint for API service status monitoring."""

    def __init__(self, monitor: FallbackMonitor = FALLBACK_MONITOR):
        """Initialize the health check endpoint.

        Args:
            monitor: Fallback hook whose counters are reported with the status
        """
        self.start_time = datetime.now()
        self.monitor = monitor

    def create_rest_api_route(self) -> APIRouter:
        """Create and configure the API router for health checks.

        Returns:
            Configured APIRouter for health check endpoints
        """
        api_route = APIRouter(
            prefix="/health",
            tags=["Health"]
        )

        @api_route.get(
            "/",
            summary="Health check endpoint",
            description="Returns the current status of the API service and its fallback counters"
        )
        async def health_check():
            uptime = datetime.now() - self.start_time
            days = uptime.days
            hours, remainder = divmod(uptime.seconds, 3600)
            minutes, seconds = divmod(remainder, 60)

            return {
                "status": "ok",
                "version": __version__,
                "uptime": f"{days}d {hours}h {minutes}m {seconds}s",
                "timestamp": datetime.now().isoformat(),
                "fallbacks": self.monitor.snapshot(),
            }

        @api_route.get(
            "/ping",
            summary="Simple ping endpoint",
            description="Returns a simple pong response to verify the service is running"
        )
        async def ping():
            return {"ping": "pong"}

        return api_route
