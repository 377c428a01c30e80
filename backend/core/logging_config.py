"""
Loguru logging configuration.

- Coloured console logs in development, JSON lines everywhere else
- Rotating file sink (skipped for the test environment)
- Correlation ID attached to every record
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from core.correlation import get_correlation_id

if TYPE_CHECKING:
    from loguru import Record

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[correlation_id]}</cyan> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level>"
)


def correlation_filter(record: "Record") -> bool:
    """
    Add correlation ID to log record.

    Args:
        record: Loguru log record.

    Returns:
        Always True (filter never drops messages).
    """
    record["extra"]["correlation_id"] = get_correlation_id() or "-"
    return True


def configure_logging(environment: str = "development", log_dir: str = "logs") -> None:
    """
    Configure Loguru for the application.

    Args:
        environment: "development" for console output, anything else for JSON.
        log_dir: Directory for the rotating application log file.
    """
    logger.remove()

    is_dev = environment == "development"

    logger.add(
        sys.stderr,
        format=LOG_FORMAT if is_dev else "{message}",
        level="DEBUG" if is_dev else "INFO",
        filter=correlation_filter,
        colorize=is_dev,
        serialize=not is_dev,
    )

    if environment == "test":
        return

    Path(log_dir).mkdir(parents=True, exist_ok=True)
    logger.add(
        f"{log_dir}/citizen_pulse.log",
        format=LOG_FORMAT if is_dev else "{message}",
        level="INFO",
        filter=correlation_filter,
        rotation="10 MB",
        retention="7 days",
        serialize=not is_dev,
    )
