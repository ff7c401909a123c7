"""Registry of the routers served by the dashboard API."""

from __future__ import annotations

from typing import Dict, List

from fastapi import FastAPI

from defect_dashboard import LOGGER
from defect_dashboard.frameworks.api.base_endpoint import ServiceAPIEndpointBluePrint


class SubServiceEndpoints:
    """Endpoints keyed by class, mounted in registration order.

    Registering a second endpoint of the same class replaces the first, so
    setting up a container twice never mounts a router twice.
    """

    def __init__(self):
        self._endpoints: Dict[type, ServiceAPIEndpointBluePrint] = {}

    @property
    def endpoints(self) -> List[ServiceAPIEndpointBluePrint]:
        return list(self._endpoints.values())

    def register(self, endpoint: ServiceAPIEndpointBluePrint) -> None:
        kind = type(endpoint)
        if kind in self._endpoints:
            LOGGER.warning(f"Replacing registered endpoint: {kind.__name__}")
        else:
            LOGGER.info(f"Registering endpoint: {kind.__name__}")
        self._endpoints[kind] = endpoint

    def mount(self, app: FastAPI, prefix: str) -> None:
        """Include every endpoint's router in ``app`` under ``prefix``."""
        for endpoint in self.endpoints:
            LOGGER.info(f"Mounting endpoint: {type(endpoint).__name__} at {prefix}")
            app.include_router(endpoint.create_rest_api_route(), prefix=prefix)
