#!/usr/bin/env python3
"""
Core Module for the storefront client

Shared infrastructure for all storefront services.

COMPONENTS:
    - config/: dataclass configuration loaded from the environment
    - logger.py: service logger setup
    - service_client_base.py: httpx base client for the storefront API
    - exceptions.py: HTTP client errors

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger("checkout_service")
"""

__version__ = "1.0.0"
