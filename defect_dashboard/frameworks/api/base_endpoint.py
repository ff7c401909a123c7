"""Base blueprint for API endpoints."""

from __future__ import annotations

from abc import ABC, abstractmethod

from fastapi import APIRouter


class ServiceAPIEndpointBluePrint(ABC):
    """Blueprint for API endpoints.

    Every endpoint owns an ``APIRouter`` built by :meth:`create_rest_api_route`
    and registered with the application through ``SubServiceEndpoints``.
    """

    @abstractmethod
    def create_rest_api_route(self) -> APIRouter:
        """Create and return a configured APIRouter with route handlers.

        Returns:
            APIRouter with all endpoint routes properly configured
        """
        pass
