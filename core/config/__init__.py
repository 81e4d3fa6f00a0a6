#!/usr/bin/env python3
"""Modular configuration system for the storefront core

Configuration hierarchy:
- service_config: storefront API and reverse-geocoding endpoints
- geofence_config: delivery service area
- logging_config: Logging configuration
- storefront_config: aggregate plus client-local session settings

Values come from the process environment first, then from the env file for
ENV under deployment/environments/ (or STOREFRONT_ENV_FILE when set).
"""
import os
from pathlib import Path

from dotenv import load_dotenv

from .geofence_config import GeofenceConfig
from .logging_config import LoggingConfig
from .service_config import ApiConfig, GeoConfig
from .storefront_config import SessionConfig, StorefrontConfig

PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILES = {
    "development": "dev.env",
    "dev": "dev.env",
    "testing": "test.env",
    "test": "test.env",
    "staging": "staging.env",
    "production": "production.env",
}


def resolve_env_file(env: str) -> Path:
    """Env file for an environment name; unknown names use dev.env"""
    override = os.getenv("STOREFRONT_ENV_FILE")
    if override:
        return Path(override)
    return PROJECT_ROOT / "deployment" / "environments" / ENV_FILES.get(env, "dev.env")


env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
load_dotenv(resolve_env_file(env), override=False)

# Create global settings instance
settings = StorefrontConfig.from_env()

def get_settings() -> StorefrontConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> StorefrontConfig:
    """Reload settings from environment"""
    global settings
    settings = StorefrontConfig.from_env()
    return settings

__all__ = [
    # Main config
    'StorefrontConfig',
    'get_settings',
    'reload_settings',
    'resolve_env_file',
    'settings',
    # Sub-configs
    'ApiConfig',
    'GeoConfig',
    'GeofenceConfig',
    'LoggingConfig',
    'SessionConfig',
]
