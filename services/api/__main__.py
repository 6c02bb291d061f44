"""
API Service Entry Point

Allows execution via: python -m services.api

Configures logging from settings and serves the application with uvicorn.
"""

import logging
import sys

import uvicorn

from services.api.app import create_app
from utils.config import settings
from utils.logging import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point for the API service."""
    setup_logging(level=settings.LOG_LEVEL, format_type=settings.LOG_FORMAT)

    try:
        uvicorn.run(
            create_app(settings),
            host=settings.API_HOST,
            port=settings.API_PORT,
            log_config=None,
        )
    except Exception as e:
        logger.error("API service failed: %s", str(e), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
