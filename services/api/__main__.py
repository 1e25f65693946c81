"""
API Service Entry Point

Allows execution via: python -m services.api

Configures logging, builds the application and serves it with uvicorn on
settings.API_HOST:settings.PORT.
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

    logger.info(
        "Starting %s: host=%s, port=%d, environment=%s",
        settings.APP_NAME, settings.API_HOST, settings.PORT, settings.ENVIRONMENT,
    )

    try:
        uvicorn.run(create_app(), host=settings.API_HOST, port=settings.PORT, log_config=None)
    except Exception as e:
        logger.error("API service failed", extra={"error": str(e)}, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
