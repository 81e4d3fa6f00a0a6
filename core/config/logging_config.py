#!/usr/bin/env python3
"""Logging configuration

Levels for storefront loggers plus a separate level for the HTTP stack
(httpx/httpcore), which logs every request at INFO.
"""
import os
from dataclasses import dataclass

HTTP_LOGGERS = ("httpx", "httpcore")


def _bool(val: str) -> bool:
    return val.lower() == "true"


@dataclass
class LoggingConfig:
    """Logging configuration"""
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    log_file: str = ""
    enable_console: bool = True
    http_log_level: str = "WARNING"
    service_name: str = "storefront"

    @classmethod
    def from_env(cls) -> 'LoggingConfig':
        """Load logging config from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if env == "development" else "INFO"),
            log_format=os.getenv("LOG_FORMAT", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            date_format=os.getenv("LOG_DATE_FORMAT", "%Y-%m-%d %H:%M:%S"),
            log_file=os.getenv("LOG_FILE", ""),
            enable_console=_bool(os.getenv("LOG_CONSOLE", "true")),
            http_log_level=os.getenv("HTTP_LOG_LEVEL", "WARNING"),
            service_name=os.getenv("SERVICE_NAME", "storefront"),
        )
