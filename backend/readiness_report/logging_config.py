"""
Centralized logging configuration.

Every module grabs its own logger with logging.getLogger(__name__);
this module only decides where those records go and how they look.
setup_logging() is called once from the FastAPI lifespan.
"""

import logging
import sys
from typing import Optional

from readiness_report.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty libraries that would drown out the request flow at INFO
_QUIET_LOGGERS = ("asyncio", "httpx", "httpcore", "playwright")


def setup_logging(log_level: Optional[str] = None) -> logging.Logger:
    """Configure the root logger for the whole application.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
                   Defaults to settings.LOG_LEVEL.

    Returns:
        The configured root logger.
    """
    if log_level is None:
        log_level = settings.LOG_LEVEL
    level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Calling twice (e.g. uvicorn --reload) must not duplicate output
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root_logger.addHandler(handler)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger
