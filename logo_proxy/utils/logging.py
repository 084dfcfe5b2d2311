import sys
from typing import Optional

from loguru import logger

from logo_proxy.core.config import settings

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def setup_logging(level: Optional[str] = None):
    """
    Configure loguru sinks for the proxy.

    Lookups are logged to stdout. In production, resolution logs also go to a
    daily file and upstream failures to a separate error file so dropped token
    lists can be audited.
    """
    level = (level or settings.log_level).upper()

    logger.remove()

    logger.add(
        sys.stdout,
        format=LOG_FORMAT,
        level=level,
        colorize=True,
    )

    if settings.is_production:
        logger.add(
            "logs/logo_proxy_{time:YYYY-MM-DD}.log",
            format=LOG_FORMAT,
            level="INFO",
            rotation="00:00",
            retention="30 days",
            compression="zip",
        )
        logger.add(
            "logs/upstream_errors.log",
            format=LOG_FORMAT,
            level="WARNING",
            rotation="100 MB",
            retention="30 days",
            compression="zip",
        )

    logger.info(f"Logging configured at {level} level")


# Configure logging on import
setup_logging()
