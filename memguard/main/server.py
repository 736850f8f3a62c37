"""
Server Entry Point - Main Layer

Starts uvicorn with the host and port from the service settings. Like
app.py this is an application entry point and belongs to the Main layer.
"""

import uvicorn

from memguard.main.config import get_settings
from memguard.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging with basic settings first
configure_logging()

logger = get_logger(__name__)


def main():
    """Main entry point for the HTTP server."""

    settings = get_settings()
    update_logging_from_settings(settings)

    logger.info(
        "server.starting",
        host=settings.service.host,
        port=settings.service.port,
        environment=settings.environment.value,
    )

    uvicorn.run(
        "memguard.main.app:app",
        host=settings.service.host,
        port=settings.service.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
