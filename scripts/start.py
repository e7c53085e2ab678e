"""Startup script for the Execution Mapper API.

Reads host, port and worker count from the application settings and
starts uvicorn with them.

Usage:
    python scripts/start.py
"""

import sys

import uvicorn

sys.path.insert(0, ".")

from api.config import get_settings  # noqa: E402


def main() -> None:
    """Main entry point."""
    settings = get_settings()

    print(
        f"Starting API server on {settings.api_host}:{settings.api_port} "
        f"with {settings.api_workers} worker(s)..."
    )

    uvicorn.run(
        "api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        workers=settings.api_workers,
        proxy_headers=True,
        forwarded_allow_ips="*",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
