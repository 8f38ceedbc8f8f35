"""
Run the API with uvicorn: `python -m invoice_api`.
"""

import logging

import uvicorn

from invoice_api.core.config import get_settings
from invoice_api.shared.logging import configure_logging

logger = logging.getLogger("invoice_api")


def main() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level)
    logger.info("Server starting on port %d", settings.port)
    logger.info("Environment: %s", settings.app_mode)
    logger.info("Health check: http://localhost:%d/health", settings.port)
    uvicorn.run(
        "invoice_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=False,
    )


if __name__ == "__main__":
    main()
