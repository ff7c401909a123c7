"""FastAPI configuration settings."""

from __future__ import annotations

from typing import Any, Dict, List

from defect_dashboard import __version__

# API prefix
api_prefix: str = "/api"

# FastAPI information dictionary
fastapi_information: Dict[str, Any] = {
    "title": "Defect Dashboard API",
    "description": "Defect counts from Jira for the dashboard charts and tables",
    "version": __version__,
    "openapi_url": f"{api_prefix}/openapi.json",
    "docs_url": f"{api_prefix}/docs",
    "redoc_url": f"{api_prefix}/redoc",
}

# FastAPI tags metadata for API documentation
fastapi_tags_metadata: List[Dict[str, str]] = [
    {
        "name": "Main",
        "description": "Main API endpoints and navigation",
    },
    {
        "name": "Defects",
        "description": "Defect counts by status, 7-day trend and due date focus metrics",
    },
    {
        "name": "Health",
        "description": "Health check endpoints for monitoring service status",
    },
]
