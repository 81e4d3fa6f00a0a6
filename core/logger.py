"""
Service logger setup

Configures a named logger from LoggingConfig. Library modules keep using
``logging.getLogger(__name__)``; applications call setup_service_logger once
at startup.
"""
import logging
import sys
from typing import Optional

from .config import LoggingConfig, get_settings
from .config.logging_config import HTTP_LOGGERS


def setup_service_logger(
    service_name: str,
    config: Optional[LoggingConfig] = None,
    level: Optional[str] = None,
) -> logging.Logger:
    """
    Configure and return the logger for a service

    Args:
        service_name: Logger name (e.g. "storefront" to cover every package module)
        config: Logging configuration (defaults to global settings)
        level: Override log level

    Returns:
        Configured logger
    """
    config = config or get_settings().logging
    logger = logging.getLogger(service_name)
    logger.setLevel((level or config.log_level).upper())

    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(config.http_log_level.upper())

    # Avoid stacking handlers when called more than once
    if logger.handlers:
        return logger

    formatter = logging.Formatter(config.log_format, datefmt=config.date_format)

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger


__all__ = ["setup_service_logger"]
