"""
Logging Configuration
====================

Centralized logging setup using loguru.

Modules keep logging through ``logging.getLogger(__name__)``; this module
routes those records into loguru, which renders structured JSON in
production and colorful lines in development.
"""

import logging
import sys

from loguru import logger

from urbanliving.core.config import Settings


class InterceptHandler(logging.Handler):
    """
    Redirect standard logging to Loguru.
    """

    def emit(self, record: logging.LogRecord) -> None:
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where originated the logged message
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def setup_logging(settings: Settings) -> None:
    """
    Configure logging based on environment.
    """
    # Remove default handlers
    logging.root.handlers = []
    logger.remove()

    if settings.is_production:
        # JSON logs for production (log shipper friendly)
        logger.add(
            sys.stderr,
            format="{message}",
            serialize=True,
            level="INFO",
            backtrace=False,
            diagnose=False,
        )
    else:
        logger.add(
            sys.stderr,
            format=(
                "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
                "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
            ),
            level="DEBUG" if settings.DEBUG else "INFO",
            colorize=True,
        )

    # Intercept standard library logs (our modules, uvicorn, sqlalchemy)
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ["uvicorn", "uvicorn.error", "uvicorn.access", "fastapi", "sqlalchemy"]:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False


# Export simplified logger for use in scripts
log = logger
