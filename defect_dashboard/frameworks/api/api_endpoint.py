"""API Endpoint class for the FastAPI application."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic_settings import BaseSettings, SettingsConfigDict

from defect_dashboard import LOGGER
from defect_dashboard.frameworks.api.configs.fastapi_doc import (
    api_prefix,
    fastapi_information,
    fastapi_tags_metadata,
)
from defect_dashboard.frameworks.api.registry import SubServiceEndpoints
from defect_dashboard.utils.exceptions import CustomException


class APIEndpointConfig(BaseSettings):
    """Configuration settings for the API endpoint.

    Attributes:
        information: Information about the API
        tags_metadata: Tags metadata for OpenAPI
        api_version_prefix: Prefix every endpoint router is mounted under
        allow_origins: CORS allowed origins
        enable_docs: Whether to enable API documentation redirects
        host: Interface to bind the server to
        port: Port to run the server on
    """

    information: dict = fastapi_information
    tags_metadata: list = fastapi_tags_metadata
    api_version_prefix: str = api_prefix
    allow_origins: list = ["*"]
    enable_docs: bool = True
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="api_", extra="ignore"
    )


class APIEndpoint:
    """Main API endpoint class that configures and runs the FastAPI application."""

    def __init__(
        self,
        config: APIEndpointConfig,
        sub_service_endpoints: SubServiceEndpoints,
        on_startup: Optional[Callable[[], None]] = None,
        on_shutdown: Optional[Callable[[], Awaitable[None]]] = None,
    ) -> None:
        """Initialize the API endpoint.

        Args:
            config: API endpoint configuration
            sub_service_endpoints: Registry of endpoint services
            on_startup: Called when the application starts
            on_shutdown: Awaited when the application stops
        """
        self.config = config
        self.logger = LOGGER
        self.sub_service_endpoints = sub_service_endpoints
        self.on_startup = on_startup
        self.on_shutdown = on_shutdown

        self.rest_api_app = self._create_rest_api_app()
        self._create_rest_api_route()
        self._register_sub_service_endpoints()

        self.rest_application = self.rest_api_app

    def _create_rest_api_app(self) -> FastAPI:
        """Create and configure the FastAPI application.

        Returns:
            Configured FastAPI application
        """
        @asynccontextmanager
        async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
            self.logger.info("Starting API server...")
            if self.on_startup is not None:
                self.on_startup()
            yield
            self.logger.info("Shutting down API server...")
            if self.on_shutdown is not None:
                await self.on_shutdown()

        app = FastAPI(
            **self.config.information,
            openapi_tags=self.config.tags_metadata,
            lifespan=lifespan,
        )

        app.add_middleware(
            CORSMiddleware,
            allow_origins=self.config.allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        @app.exception_handler(RequestValidationError)
        async def validation_exception_handler(request: Request, exc: RequestValidationError):
            errors = [
                f"{error['loc'][-1]}: {error['msg']}" if error.get("loc") else error.get("msg", "")
                for error in exc.errors()
            ]
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={
                    "error": "validation_error",
                    "errors": errors,
                },
            )

        @app.exception_handler(CustomException)
        async def custom_exception_handler(request: Request, exc: CustomException):
            return JSONResponse(
                status_code=exc.status_code,
                content=exc.message,
                headers=exc.headers,
            )

        @app.exception_handler(Exception)
        async def unexpected_exception_handler(request: Request, exc: Exception):
            self.logger.error(f"Unhandled error on {request.url.path}: {str(exc)}", exc_info=True)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Internal Server Error"},
            )

        return app

    def _register_sub_service_endpoints(self) -> None:
        """Register all endpoint services with the FastAPI application."""
        self.sub_service_endpoints.mount(self.rest_api_app, self.config.api_version_prefix)

    def _create_rest_api_route(self) -> None:
        """Create the base API routes."""
        if self.config.enable_docs:
            @self.rest_api_app.get(
                "/",
                tags=["Main"],
                name="Root",
                responses={status.HTTP_200_OK: {"description": "Success"}},
            )
            async def root(request: Request):
                """Redirect to the API documentation."""
                return RedirectResponse(url=f"{self.config.api_version_prefix}/docs")

    def run(self, host: Optional[str] = None, port: Optional[int] = None, log_level: str = "info") -> None:
        """Run the FastAPI application with Uvicorn."""
        uvicorn.run(
            self.rest_application,
            host=host or self.config.host,
            port=port or self.config.port,
            log_level=log_level,
        )
