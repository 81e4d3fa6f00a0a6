#!/usr/bin/env python3
"""Storefront main configuration

Combines all sub-configs for the storefront client core.
"""
import os
from dataclasses import dataclass, field

from .geofence_config import GeofenceConfig
from .logging_config import LoggingConfig
from .service_config import ApiConfig, GeoConfig


@dataclass
class SessionConfig:
    """Client-local session state"""
    cart_snapshot_path: str = ".storefront/cart.json"

    @classmethod
    def from_env(cls) -> 'SessionConfig':
        return cls(cart_snapshot_path=os.getenv("CART_SNAPSHOT_PATH", ".storefront/cart.json"))


@dataclass
class StorefrontConfig:
    """Storefront client configuration"""
    environment: str = "development"
    api: ApiConfig = field(default_factory=ApiConfig)
    geo: GeoConfig = field(default_factory=GeoConfig)
    geofence: GeofenceConfig = field(default_factory=GeofenceConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> 'StorefrontConfig':
        """Load complete configuration from environment"""
        return cls(
            environment=os.getenv("ENV") or os.getenv("ENVIRONMENT", "development"),
            api=ApiConfig.from_env(),
            geo=GeoConfig.from_env(),
            geofence=GeofenceConfig.from_env(),
            session=SessionConfig.from_env(),
            logging=LoggingConfig.from_env(),
        )
