"""Run the defect dashboard API server."""

import argparse

import uvicorn

from defect_dashboard import LOGGER
from defect_dashboard.frameworks.api.entry_point import create_api_endpoint


def parse_arguments():
    """Parse command line arguments.

    Returns:
        Parsed command-line arguments
    """
    parser = argparse.ArgumentParser(description="Run the defect dashboard API server")
    parser.add_argument(
        "--host", default=None, help="Host to bind the server to"
    )
    parser.add_argument(
        "--port", type=int, default=None, help="Port to bind the server to"
    )
    parser.add_argument(
        "--reload", action="store_true", help="Enable auto-reload for development"
    )
    parser.add_argument(
        "--log-level", default="info",
        choices=["debug", "info", "warning", "error", "critical"],
        help="Logging level"
    )

    return parser.parse_args()


def main():
    """Run the FastAPI server."""
    args = parse_arguments()
    endpoint = create_api_endpoint()
    host = args.host or endpoint.config.host
    port = args.port or endpoint.config.port

    LOGGER.info(f"Starting API server on {host}:{port}")

    if args.reload:
        uvicorn.run(
            "defect_dashboard.frameworks.api.entry_point:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            log_level=args.log_level,
        )
    else:
        endpoint.run(host=host, port=port, log_level=args.log_level)


if __name__ == "__main__":
    main()
